#!/usr/bin/env python3
# readcommand/__main__.py
from __future__ import annotations

"""
Demo command loop: `python -m readcommand`.

Reads commands until Ctrl+D (or Ctrl+C twice) and prints the parsed arguments
as JSON. Settings come from readcommand.config.
"""

import argparse
import json
import logging
import sys
from typing import Iterable, Optional

from readcommand.config import ReaderConfig, load_config
from readcommand.interface import (
    Command,
    CommandInterrupted,
    load_history,
    loop,
    make_cli,
    save_history,
)
from readcommand.ui import colorize, init_logger, print_line

logger = logging.getLogger("readcommand")

# Sample completions keyed by the last argument typed
DEMO_COMPLETIONS: dict[str, list[str]] = {
    "options": ["optionsfirst", "optionssecond", "optionsthird"],
    "complete": ["completeiswhatidid"],
}


def demo_autocomplete(args: list[str]) -> Optional[Iterable[str]]:
    """Offer sample candidates when the last argument is a known keyword."""
    if not args:
        return None
    return DEMO_COMPLETIONS.get(args[-1])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readcommand",
        description="Read shell-style commands and print their arguments.")
    parser.add_argument("--demo-completion", action="store_true",
                        help="complete 'options' and 'complete' with sample values")
    parser.add_argument("--history", nargs="*", default=[], metavar="ENTRY",
                        help="seed the command history")
    parser.add_argument("--frontend", default=None,
                        help="override FRONTEND (auto, prompt_toolkit, readline, plain)")
    return parser


def _prompt(config: ReaderConfig, text: str) -> str:
    return colorize(text, config.prompt_color) if config.prompt_color else text


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = load_config()
        cli = make_cli(args.frontend or config.frontend)
    except ValueError as exc:
        print_line(colorize(f"[ ERROR ] Invalid configuration: {exc}", "red"),
                   file=sys.stderr)
        return 2

    init_logger("readcommand", level=config.log_level or logging.WARNING,
                logfile=config.log_file_path)

    history = load_history(config.history_file_path, config.history_size)
    history.extend(args.history)
    interrupts = 0

    def on_command(command: Command) -> None:
        nonlocal interrupts
        interrupts = 0
        print_line(f"args: {json.dumps(command.args)}")
        print_line(f"text: {json.dumps(command.text)}")

    def on_interrupt(exc: CommandInterrupted) -> bool:
        nonlocal interrupts
        interrupts += 1
        if interrupts > 1:
            return False
        print_line("Press ^C again to exit.")
        return True

    autocomplete = demo_autocomplete if (
        args.demo_completion and config.enable_completion) else None

    with cli:
        loop(on_command, cli=cli,
             ps1=_prompt(config, config.ps1), ps2=_prompt(config, config.ps2),
             history=history, autocomplete=autocomplete, on_interrupt=on_interrupt)

    save_history(config.history_file_path, history, config.history_size)
    return 0


if __name__ == "__main__":
    sys.exit(main())
