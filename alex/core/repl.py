"""Interactive session loop for Alex."""

import os
from typing import Any, Callable, List, Mapping, Optional, TextIO

from rich.console import Console

from alex.config.settings import ReplConfig, Settings

from . import debug as log
from .accumulator import InputAccumulator
from .context import Context
from .evaluator import CompletenessChecker, EvaluationResult, Engine, Evaluator, PythonEngine
from .helpers import HelperRegistry

EXIT_COMMAND = "exit"
CLEAR_COMMAND = "cls"


class _ExitRequested(Exception):
    """Raised by the reader when the exit sentinel is typed."""


class Session:
    """
    Read-evaluate-print loop over a captured context.

    ``start`` blocks until ``exit`` (or end of input) is read. Starting a
    session from code evaluated inside another one nests: ``depth`` counts
    the active loops and ``running`` stays true until the outermost exits.
    """

    _instance: Optional["Session"] = None
    # Started sessions, innermost last
    _active: List["Session"] = []

    def __init__(
        self,
        config: Optional[ReplConfig] = None,
        helpers: Optional[Mapping[str, Callable[..., Any]]] = None,
        engine: Optional[Engine] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        """
        Initialize session.

        Args:
            config: Prompt, indentation and completeness settings
            helpers: Fallback callables available while running
            engine: Evaluator backend (default: the Python interpreter)
            stdin: Stream to read lines from (default: the terminal)
            stdout: Stream results go to (default: ``sys.stdout`` at print time)
        """
        self.config = config or ReplConfig()
        self.helpers = helpers if isinstance(helpers, HelperRegistry) else HelperRegistry(helpers)
        self.engine = engine or PythonEngine()
        self.stdin = stdin
        self.console = Console(file=stdout, soft_wrap=True, highlight=False)
        self.depth = 0

        self.sink = open(self.config.discard_path or os.devnull, "w")
        self.checker = CompletenessChecker(self.engine, self.sink, self.config.completeness)
        self.evaluator = Evaluator(self.engine, self.helpers, lambda: self.running)

    @classmethod
    def instance(cls) -> "Session":
        """The process-wide default session, created on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def current(cls) -> Optional["Session"]:
        """The innermost session currently running, default or not."""
        return cls._active[-1] if cls._active else None

    @classmethod
    def configure(
        cls,
        settings: Settings,
        helpers: Optional[Mapping[str, Callable[..., Any]]] = None,
        **kwargs: Any,
    ) -> "Session":
        """Replace the default session with one built from ``settings``."""
        if cls._instance is not None:
            if cls._instance.running:
                raise RuntimeError("Cannot reconfigure while a session is running")
            cls._instance.close()
        if helpers is None and settings.helpers.module:
            helpers = HelperRegistry.from_module(settings.helpers.module)
        cls._instance = cls(settings.repl, helpers, **kwargs)
        return cls._instance

    @property
    def running(self) -> bool:
        return self.depth > 0

    @property
    def prompt(self) -> str:
        return self.config.input_prompt

    def new_accumulator(self) -> InputAccumulator:
        return InputAccumulator(
            indent_step=self.config.indent_spaces,
            indent_first_tokens=self.config.indent_first_tokens,
            indent_last_tokens=self.config.indent_last_tokens,
            indent_suffixes=self.config.indent_suffixes,
        )

    def start(self, context: Context) -> None:
        """Run the loop in ``context`` until ``exit``."""
        self.depth += 1
        Session._active.append(self)
        log.log_session_start(self.depth, context.receiver)
        reason = EXIT_COMMAND
        try:
            while True:
                try:
                    source = self.read_unit()
                except _ExitRequested:
                    break
                except EOFError:
                    reason = "eof"
                    self.console.print()
                    break
                except KeyboardInterrupt:
                    self.console.print("^C", markup=False, emoji=False)
                    continue

                if not source.strip():
                    continue

                result = self.evaluator.evaluate(source, context)
                log.log_evaluation(source, result.ok, result.render())
                self.print_result(result)
        finally:
            log.log_session_exit(self.depth, reason)
            Session._active.pop()
            self.depth -= 1

    def read_unit(self) -> str:
        """
        Read lines until they form a complete unit.

        Raises:
            _ExitRequested: The exit sentinel was typed
            EOFError: Input ended
        """
        accumulator = self.new_accumulator()
        continuation = ""
        while True:
            line = self.read_line(self.prompt + continuation)
            command = line.strip()
            if command == EXIT_COMMAND:
                raise _ExitRequested()
            if command == CLEAR_COMMAND:
                self.console.clear()
                continuation = accumulator.current_indent()
                continue

            accumulator.append(line)
            if self.checker.is_complete(accumulator.source):
                return accumulator.source
            continuation = accumulator.current_indent()

    def read_line(self, prompt: str) -> str:
        """Print ``prompt`` and read one raw line (terminator kept)."""
        if self.stdin is None:
            return self.console.input(prompt, markup=False, emoji=False) + "\n"
        line = self.console.input(prompt, markup=False, emoji=False, stream=self.stdin)
        if not line:
            raise EOFError()
        return line

    def print_result(self, result: EvaluationResult) -> None:
        self.console.print(result.render(), markup=False, emoji=False)

    def close(self) -> None:
        """Release the discard sink."""
        if not self.sink.closed:
            self.sink.close()
