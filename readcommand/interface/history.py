#!/usr/bin/env python3
# readcommand/interface/history.py
from __future__ import annotations

"""
Command history navigation and persistence.

CommandHistory walks a list of previous commands the way up/down arrows do in
a shell: `prev()` moves to older entries and `next()` back toward the empty
line being edited.
"""

import logging
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


class CommandHistory:
    """Cursor over a list of previous commands, newest last."""

    def __init__(self, entries: Sequence[str] | None = None) -> None:
        self._entries: list[str] = list(entries or [])
        # -1 means "not navigating" (the fresh, empty line)
        self._index = -1

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def prev(self) -> str | None:
        """Return the next older entry, or None when already at the oldest."""
        if self._index == len(self._entries) - 1:
            return None
        self._index += 1
        return self._entries[len(self._entries) - self._index - 1]

    def next(self) -> str | None:
        """
        Return the next newer entry.

        Leaving the newest entry yields "" (the empty line); None is returned
        when there is nothing to move to.
        """
        if self._index == -1:
            return None
        self._index -= 1
        if self._index == -1:
            return ""
        return self._entries[len(self._entries) - self._index - 1]

    def reset(self) -> None:
        self._index = -1


def _trim(entries: Sequence[str], limit: int) -> list[str]:
    return list(entries[-limit:]) if limit > 0 else list(entries)


def load_history(path: Path | None, limit: int = 0) -> list[str]:
    """Read history entries (one per line). Missing files yield an empty list."""
    if path is None:
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("Could not read history file %s: %s", path, exc)
        return []
    return _trim([line for line in text.splitlines() if line], limit)


def save_history(path: Path | None, entries: Sequence[str], limit: int = 0) -> None:
    """Write the newest `limit` entries (all when 0) to `path`."""
    if path is None:
        return
    kept = _trim([entry for entry in entries if entry], limit)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{entry}\n" for entry in kept), encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not write history file %s: %s", path, exc)
