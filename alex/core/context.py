"""Execution contexts captured from live host code."""

import builtins
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, MutableMapping, Optional

RECEIVER_NAME = "self"


@dataclass
class Context:
    """
    Bindings visible at one point of a running program.

    ``locals`` is the mapping evaluated code reads and writes. For a frame
    captured on Python 3.13+ it is the frame's write-through proxy; on older
    interpreters it is a snapshot, so assignments persist for the lifetime of
    the context but do not reach the frame itself.
    """

    globals: Dict[str, Any]
    locals: MutableMapping[str, Any] = field(default_factory=dict)
    receiver: Optional[Any] = None

    @classmethod
    def for_object(cls, obj: Any) -> "Context":
        """Context that evaluates "as if inside" ``obj``: ``self`` is bound to it."""
        module = sys.modules.get(type(obj).__module__)
        if module is None or module is builtins:
            module_globals = {"__builtins__": builtins}
        else:
            module_globals = vars(module)
        return cls(globals=module_globals, locals={RECEIVER_NAME: obj}, receiver=obj)

    @classmethod
    def scratch(cls) -> "Context":
        """Empty throwaway context."""
        return cls(globals={"__name__": "__alex__", "__builtins__": builtins})


def capture(depth: int = 1) -> Context:
    """
    Capture the bindings of a caller's frame.

    Args:
        depth: How many frames above the caller of ``capture`` to look.
            ``1`` is the function that called ``capture``.

    Returns:
        Context over that frame's globals and locals
    """
    frame = sys._getframe(depth)
    try:
        frame_locals = frame.f_locals
        receiver = frame_locals.get(RECEIVER_NAME)
        return Context(globals=frame.f_globals, locals=frame_locals, receiver=receiver)
    finally:
        del frame
