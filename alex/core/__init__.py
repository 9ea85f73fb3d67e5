"""Core modules for the session loop and its collaborators."""

from .accumulator import InputAccumulator
from .context import Context, capture
from .evaluator import CompletenessChecker, EvaluationResult, Evaluator, PythonEngine
from .helpers import HelperDispatch, HelperNamespace, HelperRegistry
from .repl import Session
from .trigger import SessionTrigger, install_trigger
from . import debug

__all__ = [
    "InputAccumulator",
    "Context",
    "capture",
    "CompletenessChecker",
    "EvaluationResult",
    "Evaluator",
    "PythonEngine",
    "HelperDispatch",
    "HelperNamespace",
    "HelperRegistry",
    "Session",
    "SessionTrigger",
    "install_trigger",
    "debug",
]
