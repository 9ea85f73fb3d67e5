"""Logging for Alex.

Uses Python's standard logging library.
- INFO/WARNING/ERROR always go to /tmp/alex-{epoch}.log
- DEBUG messages only appear when debug mode is enabled (--debug)
- Each process creates a new log file with epoch timestamp

Usage:
    from alex.core import debug as log

    log.debug("Low-level detail - only with --debug")
    log.info("Normal operation info - always logged")
    log.warning("Something unexpected - always logged")
"""

import logging
import os
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import Any

_epoch_timestamp = int(time.time())
LOG_FILE = Path(tempfile.gettempdir()) / f"alex-{_epoch_timestamp}.log"

_logger = logging.getLogger("alex")

_debug_enabled = False

_initialized = False


def _init_logging() -> None:
    """Initialize basic logging (INFO level) to the log file."""
    global _initialized
    if _initialized:
        return

    _initialized = True

    _logger.setLevel(logging.INFO)

    # Handler accepts all, logger filters
    file_handler = logging.FileHandler(LOG_FILE, mode="a", delay=True)
    file_handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(formatter)
    _logger.addHandler(file_handler)

    # Keep session logs out of the host's root logger
    _logger.propagate = False


def enable_debug() -> None:
    """Enable debug-level logging (more verbose output)."""
    global _debug_enabled

    _init_logging()

    _debug_enabled = True
    _logger.setLevel(logging.DEBUG)

    _logger.info("=" * 60)
    _logger.info(f"Alex Debug Session Started at {datetime.now()}")
    _logger.info(f"PID: {os.getpid()}")
    _logger.info("=" * 60)


_init_logging()


def get_log_file() -> Path:
    """Get the current process's log file path."""
    return LOG_FILE


def debug(message: str, *args: Any, **kwargs: Any) -> None:
    """Log a debug message (only appears when debug mode is enabled)."""
    _logger.debug(message, *args, **kwargs)


def info(message: str, *args: Any, **kwargs: Any) -> None:
    """Log an info message (always logged to file)."""
    _logger.info(message, *args, **kwargs)


def warning(message: str, *args: Any, **kwargs: Any) -> None:
    """Log a warning message (always logged to file)."""
    _logger.warning(message, *args, **kwargs)


def log_session_start(depth: int, receiver: Any = None) -> None:
    """Log a session start (INFO level, receiver at DEBUG)."""
    _logger.info(f"SESSION START (depth={depth})")

    if _debug_enabled and receiver is not None:
        _logger.debug(f"  Receiver: {type(receiver).__name__}")


def log_session_exit(depth: int, reason: str) -> None:
    """Log a session exit."""
    _logger.info(f"SESSION EXIT (depth={depth}, reason={reason})")


def log_evaluation(source: str, ok: bool, output: str) -> None:
    """Log an evaluated unit (INFO level, source and result at DEBUG)."""
    status = "OK" if ok else "ERROR"
    _logger.info(f"EVAL: {status} ({len(source)} chars)")

    if _debug_enabled:
        preview = source if len(source) <= 500 else source[:500] + "..."
        _logger.debug(f"  Source: {preview}")
        if len(output) > 500:
            _logger.debug(f"  Result: {output[:500]}...")
        else:
            _logger.debug(f"  Result: {output}")


def log_trial_error(exc: BaseException) -> None:
    """Log an error swallowed during a trial execution (DEBUG level)."""
    _logger.debug(f"TRIAL: swallowed {type(exc).__name__}: {exc}")


def log_error(context: str, exc: BaseException) -> None:
    """Log an error with context (always logged)."""
    _logger.error(f"ERROR in {context}: {type(exc).__name__}: {exc}")
