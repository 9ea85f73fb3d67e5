"""
Alex: pause a running program and poke at it.

Call ``alex()`` anywhere to open an interactive session over the caller's
local variables, globals and ``self``. Type Python; results print as
``=> value``. Type ``exit`` to resume the program, ``cls`` to clear the
screen.
"""

from typing import Any

__version__ = "1.0.0"

from alex.core import Context, HelperDispatch, HelperRegistry, Session, SessionTrigger, capture
from alex.core.evaluator import PythonEngine
from alex.ui import cls


def alex() -> None:
    """Start the default session in the caller's frame."""
    Session.instance().start(capture(depth=2))


def ie(obj: Any, source: str) -> Any:
    """Evaluate ``source`` as if inside ``obj`` (``self`` is bound to it)."""
    context = Context.for_object(obj)
    return PythonEngine().execute(source, context.globals, context.locals)


__all__ = [
    "__version__",
    "alex",
    "capture",
    "cls",
    "ie",
    "Context",
    "HelperDispatch",
    "HelperRegistry",
    "Session",
    "SessionTrigger",
]
