#!/usr/bin/env python3
# readcommand/interface/reader.py
from __future__ import annotations

"""
Multi-line command reading.

Reading protocol:
  1) Ask the frontend for a line (PS1 on the first line, PS2 afterwards).
  2) Parse committed buffer + line as a whole.
  3) Open (trailing escape or unbalanced quote): commit `text + "\\n"` and
     read another line. Closed: deliver the command.
"""

import contextlib
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from readcommand.interface.cli import BaseCLI, make_cli
from readcommand.interface.completion import AutocompleteCallback
from readcommand.interface.history import CommandHistory
from readcommand.interface.parser import parse

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "> "

PromptSource = Union[str, Callable[[], str], None]


class CommandInterrupted(Exception):
    """The user pressed Ctrl+C while a command was being read."""

    code = "SIGINT"

    def __init__(self, message: str = "User pressed CTRL+C") -> None:
        super().__init__(message)


@dataclass(slots=True)
class Command:
    """
    A complete command.

    Attributes:
        args: Parsed arguments; whitespace artifacts are dropped while explicit
            empty strings ('' or "") are kept.
        text: Raw command text as typed, including embedded newlines.
    """

    args: list[str] = field(default_factory=list)
    text: str = ""


def _resolve_prompt(source: PromptSource) -> str:
    if callable(source):
        return source()
    if isinstance(source, str):
        return source
    return DEFAULT_PROMPT


def _managed(cli: Optional[BaseCLI], preference: str = "auto"):
    """Return (cli, context); only frontends created here are set up and torn down."""
    if cli is not None:
        return cli, contextlib.nullcontext(cli)
    created = make_cli(preference)
    return created, created


def read(
    cli: Optional[BaseCLI] = None,
    *,
    ps1: PromptSource = DEFAULT_PROMPT,
    ps2: PromptSource = DEFAULT_PROMPT,
    history: Optional[list[str]] = None,
    autocomplete: Optional[AutocompleteCallback] = None,
) -> Command:
    """
    Read a single, possibly multi-line, command.

    Raises:
        CommandInterrupted: the user pressed Ctrl+C.
        EOFError: the input ended.
    """
    cli, context = _managed(cli)
    first_prompt = _resolve_prompt(ps1)
    next_prompt = _resolve_prompt(ps2)
    navigation = CommandHistory(history)

    with context:
        committed = ""
        on_first_line = True
        while True:
            try:
                line = cli.get_line(
                    first_prompt if on_first_line else next_prompt,
                    committed=committed,
                    history=navigation if on_first_line else None,
                    autocomplete=autocomplete,
                )
            except KeyboardInterrupt as exc:
                raise CommandInterrupted() from exc

            result = parse(committed + line)
            if not result.is_open:
                return Command(args=result.values(), text=result.text)

            logger.debug("Command open (%s), reading another line",
                         result.open_reason.value)
            committed = result.text + "\n"
            on_first_line = False


def loop(
    on_command: Callable[[Command], Optional[bool]],
    *,
    cli: Optional[BaseCLI] = None,
    ps1: PromptSource = DEFAULT_PROMPT,
    ps2: PromptSource = DEFAULT_PROMPT,
    history: Optional[list[str]] = None,
    autocomplete: Optional[AutocompleteCallback] = None,
    on_interrupt: Optional[Callable[[CommandInterrupted], Optional[bool]]] = None,
    frontend: str = "auto",
) -> list[str]:
    """
    Read commands until told to stop.

    The loop ends when `on_command` or `on_interrupt` returns False, or when
    input ends. Prompts given as callables are re-evaluated for every command.
    Without `on_interrupt`, Ctrl+C propagates as CommandInterrupted.

    Returns the history list, extended with the first line of every
    non-empty command.
    """
    history = [] if history is None else history
    cli, context = _managed(cli, frontend)

    with context:
        while True:
            try:
                command = read(cli, ps1=_resolve_prompt(ps1), ps2=_resolve_prompt(ps2),
                               history=history, autocomplete=autocomplete)
            except CommandInterrupted as exc:
                if on_interrupt is None:
                    raise
                if on_interrupt(exc) is False:
                    break
                continue
            except EOFError:
                logger.debug("End of input, leaving command loop")
                break

            if command.text:
                history.append(command.text.split("\n", 1)[0])

            if on_command(command) is False:
                break

    return history
