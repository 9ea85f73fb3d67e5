"""Multi-line input buffering with indentation tracking."""

import re
from typing import Iterable, List, Optional

from . import debug as log

DEFAULT_INDENT_FIRST = ("def", "class", "module", "while", "until", "begin", "if", "unless")
DEFAULT_INDENT_LAST = ("do",)
DEDENT_TOKEN = "end"

_LAST_TOKEN = re.compile(r"\w+\Z")


def first_token(line: str) -> Optional[str]:
    """First whitespace-delimited token of ``line``."""
    parts = line.split(None, 1)
    return parts[0] if parts else None


def last_token(line: str) -> Optional[str]:
    """Trailing run of word characters, ignoring only the line terminator."""
    match = _LAST_TOKEN.search(line.rstrip("\r\n"))
    return match.group(0) if match else None


class InputAccumulator:
    """
    Buffers the lines of one unit of input and tracks its nesting.

    The indent is cosmetic: it is shown in front of continuation lines and
    never becomes part of ``source``.
    """

    def __init__(
        self,
        indent_step: int = 2,
        indent_first_tokens: Iterable[str] = DEFAULT_INDENT_FIRST,
        indent_last_tokens: Iterable[str] = DEFAULT_INDENT_LAST,
        indent_suffixes: Iterable[str] = (),
    ):
        self.indent_step = indent_step
        self.indent_first_tokens = frozenset(indent_first_tokens)
        self.indent_last_tokens = frozenset(indent_last_tokens)
        self.indent_suffixes = tuple(indent_suffixes)
        self.lines: List[str] = []
        self.level = 0
        self.underflows = 0

    @property
    def source(self) -> str:
        """The buffered lines joined into one unit."""
        return "\n".join(self.lines)

    @property
    def empty(self) -> bool:
        return not self.lines

    def current_indent(self) -> str:
        return " " * self.level

    def append(self, line: str) -> None:
        """Buffer a raw input line and update the indent level."""
        self.lines.append(line.rstrip("\r\n"))

        if self.increases_indent(line):
            self.level += self.indent_step
        elif self.decreases_indent(line):
            if self.level < self.indent_step:
                self.underflows += 1
                log.warning(f"Unmatched {DEDENT_TOKEN!r}: indent level clamped at 0")
                self.level = 0
            else:
                self.level -= self.indent_step

    def increases_indent(self, line: str) -> bool:
        token = first_token(line)
        if token is not None and token in self.indent_first_tokens:
            return True
        token = last_token(line)
        if token is not None and token in self.indent_last_tokens:
            return True
        if not self.indent_suffixes:
            return False
        return line.rstrip().endswith(self.indent_suffixes)

    def decreases_indent(self, line: str) -> bool:
        return last_token(line) == DEDENT_TOKEN

    def reset(self) -> None:
        self.lines = []
        self.level = 0
