#!/usr/bin/env python3
# readcommand/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

This module maps a partially typed (possibly multi-line) command back to the
argument under the cursor:
- resolve_context: decide whether completion is possible and collect the
  arguments to hand to a user completion callback.
- format_replacements: turn the callback's candidates into editable text and
  compute which part of the current line they replace.
- complete: both steps around a completion callback, for frontends.

All functions take the committed buffer (previous lines of the command,
newline-terminated) and the fragment on the current line explicitly.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from readcommand.interface.parser import Argument, OpenReason, ParseResult, parse

logger = logging.getLogger(__name__)

DEFAULT_QUOTE = '"'

# Receives the argument texts, returns literal candidates (or None for none)
AutocompleteCallback = Callable[[list[str]], Optional[Iterable[str]]]


@dataclass(frozen=True, slots=True)
class CompletionContext:
    """
    Result of resolving a completion request.

    Attributes:
        aborted: True when no completion should be offered at the cursor.
        arguments: Argument texts for the completion callback. The last entry
            is the argument being completed; an empty last entry means a new
            argument is being started.
    """

    aborted: bool = False
    arguments: tuple[str, ...] = ()


ABORTED = CompletionContext(aborted=True)


def _parse_for_completion(full_text: str) -> tuple[ParseResult, Argument]:
    """
    Parse the full command and return it with its last argument.

    A last argument that was never started (trailing whitespace, empty input)
    is positioned at the end of the text, where the cursor is.
    """
    parsed = parse(full_text)
    last_arg = parsed.last_argument
    if last_arg.start_index is None:
        last_arg = dataclasses.replace(last_arg, start_index=len(full_text))
    return parsed, last_arg


def _filter_arguments(arguments: tuple[Argument, ...]) -> list[Argument]:
    """
    Drop empty unquoted arguments except the last one.

    `--log-level` and `--log-level ` (trailing space) differ only in that
    final empty argument, which tells the callback whether a key or its value
    is being completed.
    """
    last_index = len(arguments) - 1
    kept = [arg for index, arg in enumerate(arguments)
            if index == last_index or not arg.is_vestigial]
    if len(kept) == 1 and kept[0].is_vestigial:
        return []
    return kept


def _distance_from_last_newline(text: str, index: int) -> int:
    """Column of `index` on its line within `text`."""
    newline_index = text.rfind("\n", 0, index)
    if newline_index == -1:
        return index
    return index - newline_index - 1


def resolve_context(committed: str | None, fragment: str | None) -> CompletionContext:
    """Determine whether to complete and which arguments the callback receives."""
    committed = committed or ""
    fragment = fragment or ""
    full_text = committed + fragment
    parsed, last_arg = _parse_for_completion(full_text)

    if parsed.open_reason is OpenReason.ESCAPE:
        logger.debug("Completion aborted: input ends with an escape")
        return ABORTED
    if "\n" in full_text[last_arg.start_index:]:
        # The argument began on a line that was already accepted
        logger.debug("Completion aborted: argument spans a committed line")
        return ABORTED

    # The last argument may have been repositioned; use the copy
    arguments = parsed.arguments[:-1] + (last_arg,)
    return CompletionContext(
        arguments=tuple(arg.text for arg in _filter_arguments(arguments)))


def render_replacement(candidate: str, quote_char: str | None) -> str:
    """Quote a candidate when needed and append the argument separator."""
    if quote_char or " " in candidate or "\n" in candidate:
        quote = quote_char or DEFAULT_QUOTE
        candidate = f"{quote}{candidate}{quote}"
    return f"{candidate} "


def format_replacements(
    committed: str | None,
    fragment: str | None,
    candidates: Iterable[str] | None,
) -> tuple[list[str], str]:
    """
    Render completion candidates for the current line.

    Returns (rendered_candidates, to_replace) where `to_replace` is the tail of
    `fragment` starting at the column where the argument being completed began.
    """
    candidates = list(candidates or ())
    fragment = fragment or ""
    if not candidates:
        return [], fragment

    full_text = (committed or "") + fragment
    _, last_arg = _parse_for_completion(full_text)

    distance = _distance_from_last_newline(full_text, last_arg.start_index)
    to_replace = fragment[distance:]

    rendered = [render_replacement(candidate, last_arg.quote_char)
                for candidate in candidates]
    return rendered, to_replace


def complete(
    committed: str | None,
    fragment: str | None,
    autocomplete: AutocompleteCallback | None,
) -> tuple[list[str], str]:
    """
    Run a full completion request for a frontend.

    Resolves the context, asks `autocomplete` for candidates and renders them.
    A failing callback is logged and offers nothing, so line editing goes on.
    """
    fragment = fragment or ""
    if autocomplete is None:
        return [], fragment

    context = resolve_context(committed, fragment)
    if context.aborted:
        return [], fragment

    try:
        candidates = autocomplete(list(context.arguments))
    except Exception as exc:  # noqa: BLE001
        logger.error("Autocomplete callback failed: %s: %s",
                     type(exc).__name__, exc)
        return [], fragment

    return format_replacements(committed, fragment, candidates)
