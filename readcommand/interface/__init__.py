#!/usr/bin/env python3
# readcommand/interface/__init__.py
from __future__ import annotations

"""
Package for interactive command reading.

Provides:
- Shell-style tokenizer with multi-line continuation status.
- Completion helpers that map a partial command to the argument being typed.
- Command history navigation.
- CLI frontends (prompt_toolkit / readline / plain).
- The read/loop drivers that glue lines into commands.
"""


# Parser FIRST (everything else depends on it)
from .parser import Argument, OpenReason, ParseResult, parse, tokenize

# Completion
from .completion import (
    AutocompleteCallback,
    CompletionContext,
    complete,
    format_replacements,
    render_replacement,
    resolve_context,
)

# History
from .history import CommandHistory, load_history, save_history

# CLI frontends (after completion is available)
from .cli import (
    BaseCLI,
    PromptToolkitCLI,
    ReadlineCLI,
    PlainCLI,
    FRONTENDS,
    make_cli,
)

# Reader
from .reader import Command, CommandInterrupted, read, loop

__all__ = [
    # parser
    "Argument",
    "OpenReason",
    "ParseResult",
    "parse",
    "tokenize",
    # completion
    "AutocompleteCallback",
    "CompletionContext",
    "complete",
    "format_replacements",
    "render_replacement",
    "resolve_context",
    # history
    "CommandHistory",
    "load_history",
    "save_history",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "PlainCLI",
    "FRONTENDS",
    "make_cli",
    # reader
    "Command",
    "CommandInterrupted",
    "read",
    "loop",
]
