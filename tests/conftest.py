"""Shared fixtures for Alex tests."""

import io
from typing import Any, Dict, List, MutableMapping, Optional

import pytest

from alex.config.settings import ReplConfig
from alex.core.accumulator import InputAccumulator
from alex.core.evaluator import PythonEngine
from alex.core.repl import Session


class RecordingSession(Session):
    """Session that remembers every prompt it printed."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.prompts: List[str] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return super().read_line(prompt)


class CountingEngine(PythonEngine):
    """Python engine that counts how often it executes and checks."""

    def __init__(self) -> None:
        super().__init__()
        self.executed: List[str] = []
        self.checked: List[str] = []

    def check(self, source: str) -> None:
        self.checked.append(source)
        super().check(source)

    def execute(self, source: str, global_vars: Dict[str, Any], local_vars: MutableMapping[str, Any]) -> Any:
        self.executed.append(source)
        return super().execute(source, global_vars, local_vars)


class BlockEngine:
    """
    Stand-in for an evaluator of an ``end``-delimited language.

    A unit is complete when its openers and ``end`` lines balance; executing
    it returns the number of lines.
    """

    def __init__(self) -> None:
        self.executed: List[str] = []

    def check(self, source: str) -> None:
        accumulator = InputAccumulator(indent_step=1)
        depth = 0
        for line in source.split("\n"):
            if accumulator.increases_indent(line):
                depth += 1
            elif accumulator.decreases_indent(line):
                depth -= 1
        if depth != 0:
            raise SyntaxError("unexpected end-of-input")

    def execute(self, source: str, global_vars: Dict[str, Any], local_vars: MutableMapping[str, Any]) -> Any:
        self.check(source)
        self.executed.append(source)
        return len(source.split("\n"))


def feed(*lines: str) -> io.StringIO:
    return io.StringIO("".join(line + "\n" for line in lines))


def result_lines(output: str, prompt: str = "alex: ") -> List[str]:
    """Output lines with the (unechoed) prompts stripped."""
    lines = []
    for line in output.splitlines():
        while line.startswith(prompt):
            line = line[len(prompt):].lstrip(" ")
        lines.append(line)
    return [line for line in lines if line]


@pytest.fixture(autouse=True)
def reset_default_session():
    """Each test starts without a process-wide default session."""
    Session._instance = None
    Session._active.clear()
    yield
    if Session._instance is not None:
        Session._instance.close()
    Session._instance = None
    Session._active.clear()


@pytest.fixture
def make_session():
    """Build sessions over in-memory streams and close them afterwards."""
    sessions: List[Session] = []

    def _make(
        *lines: str,
        config: Optional[ReplConfig] = None,
        helpers: Optional[Dict[str, Any]] = None,
        engine: Any = None,
    ) -> RecordingSession:
        session = RecordingSession(
            config=config,
            helpers=helpers,
            engine=engine,
            stdin=feed(*lines),
            stdout=io.StringIO(),
        )
        sessions.append(session)
        return session

    yield _make

    for session in sessions:
        session.close()


def output_of(session: Session) -> str:
    return session.console.file.getvalue()
