"""Completeness checking and evaluation of session input."""

import codeop
import sys
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generator, Mapping, MutableMapping, Optional, Protocol, TextIO, Tuple
from types import CodeType

from . import debug as log
from .context import Context
from .helpers import HelperNamespace

FILENAME = "<alex>"


class Engine(Protocol):
    """An embeddable evaluator: compiles and runs source in given namespaces."""

    def check(self, source: str) -> None:
        """Raise ``SyntaxError`` unless ``source`` is one complete unit."""

    def execute(
        self, source: str, global_vars: Dict[str, Any], local_vars: MutableMapping[str, Any]
    ) -> Any:
        """Run ``source`` and return its value."""


class PythonEngine:
    """The running interpreter, via ``compile``/``eval``/``exec``."""

    def __init__(self, filename: str = FILENAME):
        self.filename = filename

    def compile(self, source: str) -> Tuple[CodeType, bool]:
        """
        Compile a unit, as an expression when it is one.

        Returns:
            Code object and whether it was compiled in ``eval`` mode
        """
        try:
            return compile(source, self.filename, "eval"), True
        except SyntaxError:
            return compile(source, self.filename, "exec"), False

    def check(self, source: str) -> None:
        """
        Interactive-console rules: a compound statement stays open until a
        blank line closes it.
        """
        if codeop.compile_command(source, self.filename, "single") is None:
            raise SyntaxError("incomplete input")

    def execute(
        self, source: str, global_vars: Dict[str, Any], local_vars: MutableMapping[str, Any]
    ) -> Any:
        code, is_expression = self.compile(source)
        if is_expression:
            return eval(code, global_vars, local_vars)
        exec(code, global_vars, local_vars)
        return None


@dataclass
class EvaluationResult:
    """Outcome of one evaluation: a value or an error message."""

    value: Any = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "EvaluationResult":
        name = type(exc).__name__
        return cls(error=str(exc) or name, error_type=name)

    def render(self) -> str:
        """The line the session prints for this result."""
        if self.ok:
            return f"=> {self.value!r}"
        return f"Error: {self.error}"


@contextmanager
def suppress_output(sink: TextIO) -> Generator[None, None, None]:
    """Send ``sys.stdout`` and ``sys.stderr`` to ``sink`` for the block."""
    with redirect_stdout(sink), redirect_stderr(sink):
        try:
            yield
        finally:
            sink.flush()


class CompletenessChecker:
    """
    Decides whether buffered input forms one complete unit.

    The engine's ``check`` decides first. In ``trial`` mode a candidate it
    accepts is then really executed, in a scratch context with output
    discarded, so its non-output side effects happen once here and again
    when the unit is evaluated. ``compile`` mode stops after the check.
    """

    def __init__(self, engine: Engine, sink: TextIO, mode: str = "trial"):
        self.engine = engine
        self.sink = sink
        self.mode = mode

    def is_complete(self, source: str) -> bool:
        try:
            self.engine.check(source)
            if self.mode == "trial":
                scratch = Context.scratch()
                with suppress_output(self.sink):
                    self.engine.execute(source, scratch.globals, scratch.locals)
        except SyntaxError:
            return False
        except (Exception, SystemExit) as e:
            log.log_trial_error(e)
        return True


class Evaluator:
    """Runs complete units inside a captured context."""

    def __init__(
        self,
        engine: Engine,
        helpers: Optional[Mapping[str, Callable[..., Any]]] = None,
        is_active: Callable[[], bool] = lambda: False,
    ):
        self.engine = engine
        self.helpers = helpers or {}
        self.is_active = is_active

    def namespace(self, context: Context) -> HelperNamespace:
        return HelperNamespace(context.locals, context.globals, self.helpers, self.is_active)

    def evaluate(self, source: str, context: Context) -> EvaluationResult:
        """
        Evaluate ``source`` with output visible.

        Never raises: errors, including ``SystemExit`` and
        ``KeyboardInterrupt``, come back as an error result.
        """
        try:
            value = self.engine.execute(source, context.globals, self.namespace(context))
        except (Exception, SystemExit, KeyboardInterrupt) as e:
            log.log_error("evaluation", e)
            result = EvaluationResult.from_exception(e)
        else:
            result = EvaluationResult(value=value)
        finally:
            sys.stdout.flush()
        return result
