#!/usr/bin/env python3
# readcommand/interface/parser.py
from __future__ import annotations

"""
Shell-style command tokenizer.

Responsibilities:
- Split a (possibly multi-line) command string into arguments.
- Honor single quotes, double quotes and backslash escapes.
- Report whether the command was left open for another line of input.

The parser is a pure function over the whole accumulated buffer. Multi-line
input is handled by re-parsing the complete buffer after every new line, never
by resuming a previous scan.
"""

import enum
from dataclasses import dataclass

QUOTE_CHARS = ("'", '"')
ESCAPE_CHAR = "\\"
# Characters that terminate an unquoted, unescaped argument
SEPARATOR_CHARS = (" ", "\n")


class OpenReason(enum.Enum):
    """Why, if at all, a command needs another line of input."""

    NONE = "none"
    ESCAPE = "escape"
    QUOTE = "quote"


@dataclass(frozen=True, slots=True)
class Argument:
    """
    One parsed argument.

    Attributes:
        text: Content with quotes and escapes removed.
        start_index: Offset in the parsed string where the argument began, or
            None for a zero-width argument that was never started.
        quote_char: The quote the argument opened with, if any.
    """

    text: str = ""
    start_index: int | None = None
    quote_char: str | None = None

    @property
    def is_vestigial(self) -> bool:
        """Empty and unquoted: produced by whitespace only."""
        return self.text == "" and self.quote_char is None


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing a command string."""

    arguments: tuple[Argument, ...]
    open_reason: OpenReason
    text: str

    @property
    def is_open(self) -> bool:
        return self.open_reason is not OpenReason.NONE

    @property
    def last_argument(self) -> Argument:
        # parse() always pushes a final argument
        return self.arguments[-1]

    def values(self) -> list[str]:
        """Argument texts for a completed command, whitespace artifacts dropped."""
        return [arg.text for arg in self.arguments if not arg.is_vestigial]


class _Accumulator:
    """Mutable builder for the argument currently being scanned."""

    __slots__ = ("chars", "start_index", "quote_char")

    def __init__(self) -> None:
        self.chars: list[str] = []
        self.start_index: int | None = None
        self.quote_char: str | None = None

    def begin(self, index: int, quote_char: str | None = None) -> None:
        # Only the first contributing character marks the start
        if self.start_index is None:
            self.start_index = index
            self.quote_char = quote_char

    def build(self) -> Argument:
        return Argument("".join(self.chars), self.start_index, self.quote_char)


def parse(text: str) -> ParseResult:
    """
    Parse `text` as a shell-like command.

    Rules (highest precedence first):
        - a character following a backslash is taken verbatim; an escaped
          newline is dropped (line continuation)
        - a backslash starts an escape, inside quotes too
        - inside quotes, only the matching quote is special and closes it
        - unquoted space or newline ends the current argument
        - an unquoted quote character opens a quoted section
        - anything else is part of the current argument

    The argument in progress at the end of input is always included, so the
    result holds at least one (possibly empty) argument.
    """
    arguments: list[Argument] = []
    current = _Accumulator()
    quote: str | None = None
    escape_next = False

    for index, char in enumerate(text):
        if escape_next:
            if char != "\n":
                current.begin(index - 1)
                current.chars.append(char)
            escape_next = False
        elif char == ESCAPE_CHAR:
            escape_next = True
        elif quote is not None:
            if char == quote:
                quote = None
            else:
                current.chars.append(char)
        elif char in SEPARATOR_CHARS:
            arguments.append(current.build())
            current = _Accumulator()
        elif char in QUOTE_CHARS:
            current.begin(index, char)
            quote = char
        else:
            current.begin(index)
            current.chars.append(char)

    arguments.append(current.build())

    if escape_next:
        reason = OpenReason.ESCAPE
    elif quote is not None:
        reason = OpenReason.QUOTE
    else:
        reason = OpenReason.NONE

    return ParseResult(tuple(arguments), reason, text)


def tokenize(command_line: str) -> list[str]:
    """Split a complete command line into argument strings."""
    return parse(command_line).values()
