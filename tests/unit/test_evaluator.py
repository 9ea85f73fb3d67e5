"""
Unit tests for completeness checking and evaluation.
"""

import io
import sys

import pytest

from alex.core import debug
from alex.core.context import Context
from alex.core.evaluator import (
    CompletenessChecker,
    EvaluationResult,
    Evaluator,
    PythonEngine,
    suppress_output,
)

from conftest import CountingEngine


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def checker(sink) -> CompletenessChecker:
    return CompletenessChecker(PythonEngine(), sink)


@pytest.fixture
def context() -> Context:
    namespace = {"__builtins__": __builtins__}
    return Context(globals=namespace, locals={})


class TestPythonEngine:
    """Tests for the interpreter-backed engine."""

    def test_expression_returns_value(self):
        assert PythonEngine().execute("1+1", {}, {}) == 2

    def test_statement_returns_none(self):
        local_vars = {}
        assert PythonEngine().execute("x = 5", {}, local_vars) is None
        assert local_vars["x"] == 5

    def test_incomplete_source_raises_syntax_error(self):
        with pytest.raises(SyntaxError):
            PythonEngine().check("if True:")


class TestCompletenessChecker:
    """Tests for trial-execution completeness."""

    def test_incomplete_block(self, checker):
        assert checker.is_complete("if True:") is False

    def test_unclosed_bracket(self, checker):
        assert checker.is_complete("[1,\n2,") is False

    def test_complete_expression(self, checker):
        assert checker.is_complete("1+1") is True

    def test_complete_block(self, checker):
        assert checker.is_complete("if True:\n    x = 1\n") is True

    def test_block_body_stays_open_until_blank_line(self, checker):
        assert checker.is_complete("def f():\n    a = 1") is False
        assert checker.is_complete("def f():\n    a = 1\n    return a + 1") is False
        assert checker.is_complete("def f():\n    a = 1\n    return a + 1\n") is True

    def test_else_branch_keeps_block_open(self, checker):
        assert checker.is_complete("if True:\n    x = 1") is False
        assert checker.is_complete("if True:\n    x = 1\nelse:") is False
        assert checker.is_complete("if True:\n    x = 1\nelse:\n    x = 2\n") is True

    def test_runtime_error_counts_as_complete(self, checker):
        assert checker.is_complete("1/0") is True
        assert checker.is_complete("undefined_name") is True

    def test_system_exit_counts_as_complete(self, checker):
        assert checker.is_complete("raise SystemExit(3)") is True

    def test_output_goes_to_sink(self, checker, sink, capsys):
        checker.is_complete("print('leak')")

        assert capsys.readouterr().out == ""
        assert "leak" in sink.getvalue()

    def test_stdout_restored_after_error(self, checker):
        original = sys.stdout
        checker.is_complete("print('x'); 1/0")

        assert sys.stdout is original

    def test_trial_runs_in_scratch_namespace(self, sink):
        engine = CountingEngine()
        checker = CompletenessChecker(engine, sink)

        checker.is_complete("y = 1")

        assert engine.checked == ["y = 1"]
        assert engine.executed == ["y = 1"]

    def test_trial_skips_open_blocks(self, sink):
        engine = CountingEngine()
        checker = CompletenessChecker(engine, sink)

        assert checker.is_complete("def f():\n    a = 1") is False
        assert engine.executed == []

    def test_compile_mode_does_not_execute(self, sink):
        engine = CountingEngine()
        checker = CompletenessChecker(engine, sink, mode="compile")

        assert checker.is_complete("print('x')") is True
        assert checker.is_complete("def f():") is False
        assert engine.executed == []
        assert engine.checked == ["print('x')", "def f():"]


class TestSuppressOutput:
    """Tests for the output redirection context manager."""

    def test_restores_on_exception(self, sink):
        original_out, original_err = sys.stdout, sys.stderr
        with pytest.raises(ValueError):
            with suppress_output(sink):
                print("hidden")
                raise ValueError("boom")

        assert sys.stdout is original_out
        assert sys.stderr is original_err
        assert "hidden" in sink.getvalue()


class TestEvaluator:
    """Tests for evaluation in a context."""

    def test_value(self, context):
        result = Evaluator(PythonEngine()).evaluate("1+1", context)

        assert result.ok
        assert result.value == 2
        assert result.render() == "=> 2"

    def test_repr_rendering(self, context):
        result = Evaluator(PythonEngine()).evaluate("'a'", context)

        assert result.render() == "=> 'a'"

    def test_error_is_returned_not_raised(self, context):
        result = Evaluator(PythonEngine()).evaluate("1/0", context)

        assert not result.ok
        assert result.error_type == "ZeroDivisionError"
        assert result.render() == "Error: division by zero"

    def test_error_is_logged_with_its_type(self, context, monkeypatch):
        logged = []
        monkeypatch.setattr(debug, "log_error", lambda where, exc: logged.append((where, type(exc).__name__)))

        Evaluator(PythonEngine()).evaluate("1/0", context)

        assert logged == [("evaluation", "ZeroDivisionError")]

    def test_system_exit_is_contained(self, context):
        result = Evaluator(PythonEngine()).evaluate("raise SystemExit", context)

        assert result.render() == "Error: SystemExit"

    def test_assignments_land_in_context(self, context):
        evaluator = Evaluator(PythonEngine())
        evaluator.evaluate("x = 41", context)

        assert context.locals["x"] == 41
        assert evaluator.evaluate("x + 1", context).value == 42

    def test_helpers_only_when_active(self, context):
        active = {"value": False}
        evaluator = Evaluator(PythonEngine(), {"actor": lambda n: f"actor-{n}"}, lambda: active["value"])

        assert evaluator.evaluate("actor(0)", context).error_type == "NameError"
        active["value"] = True
        assert evaluator.evaluate("actor(0)", context).value == "actor-0"


class TestEvaluationResult:
    """Tests for result construction."""

    def test_exception_without_message(self):
        result = EvaluationResult.from_exception(KeyError())

        assert result.error == "KeyError"

    def test_message_without_type_prefix(self):
        result = EvaluationResult.from_exception(ValueError("bad gold"))

        assert result.error == "bad gold"
        assert result.error_type == "ValueError"
        assert result.render() == "Error: bad gold"
