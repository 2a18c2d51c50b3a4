#!/usr/bin/env python3
# readcommand/__init__.py
from __future__ import annotations
"""
Interactive, multi-line, shell-style command reader.

Typical use:

    import readcommand

    def on_command(command):
        print(command.args)

    readcommand.loop(on_command)
"""

from readcommand.interface import (
    Argument,
    Command,
    CommandHistory,
    CommandInterrupted,
    CompletionContext,
    OpenReason,
    ParseResult,
    format_replacements,
    loop,
    make_cli,
    parse,
    read,
    resolve_context,
    tokenize,
)

__version__ = "0.3.0"

__all__ = [
    "Argument",
    "Command",
    "CommandHistory",
    "CommandInterrupted",
    "CompletionContext",
    "OpenReason",
    "ParseResult",
    "format_replacements",
    "loop",
    "make_cli",
    "parse",
    "read",
    "resolve_context",
    "tokenize",
]
