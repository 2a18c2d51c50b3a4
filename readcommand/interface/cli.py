#!/usr/bin/env python3
# readcommand/interface/cli.py
from __future__ import annotations

"""
Interactive line frontends.

Each frontend reads ONE physical line. The reader (reader.py) glues lines into
commands and tells the frontend, per line, which buffer has been committed
already, whether history navigation applies and which completion callback to
use.

Selection order:
    1) prompt_toolkit (tab completion + up/down history)
    2) readline / pyreadline3 (tab completion + history)
    3) plain input (last resort)
"""

import logging
from typing import Any, Optional

from readcommand.interface.completion import AutocompleteCallback, complete
from readcommand.interface.history import CommandHistory
from readcommand.ui import readline_safe

logger = logging.getLogger(__name__)

FRONTENDS: tuple[str, ...] = ("auto", "prompt_toolkit", "readline", "plain")


class BaseCLI:
    """
    Base interface for CLI frontends.

    Subclasses implement get_line(); setup() and teardown() are optional.
    Context manager support guarantees teardown.
    """

    def setup(self) -> None:
        ...

    def get_line(
        self,
        prompt: str,
        *,
        committed: str = "",
        history: Optional[CommandHistory] = None,
        autocomplete: Optional[AutocompleteCallback] = None,
    ) -> str:
        """
        Read one line (without its terminator).

        Args:
            prompt: Text shown before the input.
            committed: Earlier lines of the command being read, newline-terminated.
            history: Navigable history, given only on the first line of a command.
            autocomplete: Completion callback, if completion is enabled.
        """
        raise NotImplementedError

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Frontend teardown failed: %s", exc)


# ===== Preferred: prompt_toolkit =====

def build_completer(committed: str, autocomplete: Optional[AutocompleteCallback]) -> Any:
    """Create a prompt_toolkit completer for a line following `committed`."""
    from prompt_toolkit.completion import Completer, Completion

    class _CommandCompleter(Completer):
        def get_completions(self, document, complete_event):
            replacements, to_replace = complete(
                committed, document.text_before_cursor, autocomplete)
            for replacement in replacements:
                # replace exactly the argument being completed
                yield Completion(replacement, start_position=-len(to_replace))

    return _CommandCompleter()


def build_history_bindings(history: CommandHistory) -> Any:
    """Key bindings that swap the line for history entries on up/down."""
    from prompt_toolkit.document import Document
    from prompt_toolkit.filters import has_completions
    from prompt_toolkit.key_binding import KeyBindings

    kb = KeyBindings()

    def _replace(buffer, text: Optional[str]) -> None:
        if text is None:
            return
        buffer.document = Document(text, cursor_position=len(text))

    # An open completion menu keeps the arrows for itself
    @kb.add("up", filter=~has_completions)
    def _(event):
        _replace(event.app.current_buffer, history.prev())

    @kb.add("down", filter=~has_completions)
    def _(event):
        _replace(event.app.current_buffer, history.next())

    return kb


class PromptToolkitCLI(BaseCLI):
    """Rich line editor with tab completion and history navigation."""

    def __init__(self) -> None:
        from prompt_toolkit import prompt
        from prompt_toolkit.formatted_text import ANSI as ANSIText

        self._prompt = prompt
        self._ansi_text = ANSIText

    def get_line(
        self,
        prompt: str,
        *,
        committed: str = "",
        history: Optional[CommandHistory] = None,
        autocomplete: Optional[AutocompleteCallback] = None,
    ) -> str:
        options: dict[str, Any] = {"complete_while_typing": False}
        if autocomplete is not None:
            options["completer"] = build_completer(committed, autocomplete)
        if history is not None:
            options["key_bindings"] = build_history_bindings(history)
        return self._prompt(self._ansi_text(prompt), **options)


# ===== Fallback: readline / pyreadline3 =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(self) -> None:
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self._saved_delims: Optional[str] = None

    def setup(self) -> None:
        # The whole line is the completion text; argument boundaries are ours
        try:
            self._saved_delims = self.readline.get_completer_delims()  # type: ignore
            self.readline.set_completer_delims("")  # type: ignore
            self.readline.parse_and_bind("tab: complete")  # type: ignore
        except Exception as exc:  # noqa: BLE001
            logger.debug("readline setup incomplete: %s", exc)

    def _load_history(self, history: Optional[CommandHistory]) -> None:
        # Continuation lines get no history, first lines get the command list
        self.readline.clear_history()  # type: ignore
        for entry in (history.entries if history is not None else ()):
            self.readline.add_history(entry)  # type: ignore

    def get_line(
        self,
        prompt: str,
        *,
        committed: str = "",
        history: Optional[CommandHistory] = None,
        autocomplete: Optional[AutocompleteCallback] = None,
    ) -> str:
        self._load_history(history)
        matches: list[str] = []

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            if state_index == 0:
                replacements, to_replace = complete(
                    committed, text_fragment, autocomplete)
                head = text_fragment[:len(text_fragment) - len(to_replace)]
                # readline appends the separator itself on a unique match
                matches[:] = [head + r[:-1] for r in replacements]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(  # type: ignore
            _complete if autocomplete is not None else None)
        return input(readline_safe(prompt))

    def teardown(self) -> None:
        self.readline.set_completer(None)  # type: ignore
        # readline state is process-wide; hand the host its delimiters back
        if self._saved_delims is not None:
            self.readline.set_completer_delims(self._saved_delims)  # type: ignore
            self._saved_delims = None


# ===== Last resort: plain input =====
class PlainCLI(BaseCLI):
    """No completion, no history."""

    def get_line(
        self,
        prompt: str,
        *,
        committed: str = "",
        history: Optional[CommandHistory] = None,
        autocomplete: Optional[AutocompleteCallback] = None,
    ) -> str:
        return input(prompt)


def make_cli(preference: str = "auto") -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.

    `preference` names a frontend from FRONTENDS; an unavailable choice falls
    through to the next one in the selection order.
    """
    if preference not in FRONTENDS:
        raise ValueError(
            f"Unknown frontend {preference!r}; expected one of {FRONTENDS}")

    if preference in ("auto", "prompt_toolkit"):
        try:
            return PromptToolkitCLI()
        except Exception as exc:  # noqa: BLE001
            logger.debug("prompt_toolkit unavailable: %s", exc)
    if preference in ("auto", "prompt_toolkit", "readline"):
        try:
            return ReadlineCLI()
        except Exception as exc:  # noqa: BLE001
            logger.debug("readline unavailable: %s", exc)
    return PlainCLI()
