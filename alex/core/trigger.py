"""Host-facing entry points for starting sessions."""

import functools
from typing import Any, Callable, Optional, Protocol

from . import debug as log
from .context import Context
from .repl import Session


class InputSource(Protocol):
    """The host's input device, polled once per tick."""

    def trigger(self, key: Any) -> bool:
        """True on the tick ``key`` was activated (edge triggered)."""


class SessionTrigger:
    """Starts a session when the host asks, or when the start key fires."""

    def __init__(
        self,
        session: Optional[Session] = None,
        input_source: Optional[InputSource] = None,
        start_key: Any = None,
    ):
        self._session = session
        self.input_source = input_source
        self.start_key = start_key if start_key is not None else self.session.config.start_key

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else Session.instance()

    def trigger_start(self, context: Context) -> None:
        """Run a session in ``context``; returns when it exits."""
        self.session.start(context)

    def poll(self, context: Context) -> bool:
        """
        Check the start key and run a session if it fired.

        Returns:
            True if a session ran
        """
        if self.input_source is None or not self.input_source.trigger(self.start_key):
            return False
        log.info(f"Start key {self.start_key!r} triggered a session")
        self.trigger_start(context)
        return True


def install_trigger(host_cls: type, trigger: SessionTrigger, method: str = "update") -> Callable:
    """
    Hook a session trigger into a host class's per-tick method.

    The original method runs first; the trigger is then polled with a
    context bound to the instance.

    Returns:
        The original method, for uninstalling
    """
    original = getattr(host_cls, method)

    @functools.wraps(original)
    def update(self, *args, **kwargs):
        result = original(self, *args, **kwargs)
        trigger.poll(Context.for_object(self))
        return result

    setattr(host_cls, method, update)
    return original
