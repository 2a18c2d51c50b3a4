#!/usr/bin/env python3
"""
Shared pytest fixtures for readcommand tests.
"""

import pytest

from readcommand.interface import BaseCLI


class ScriptedCLI(BaseCLI):
    """Frontend that replays scripted lines and records every request."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.calls = []
        self.setup_count = 0
        self.teardown_count = 0

    def setup(self):
        self.setup_count += 1

    def teardown(self):
        self.teardown_count += 1

    def get_line(self, prompt, *, committed="", history=None, autocomplete=None):
        self.calls.append({
            "prompt": prompt,
            "committed": committed,
            "history": history,
            "autocomplete": autocomplete,
        })
        if not self.lines:
            raise EOFError
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line


@pytest.fixture
def scripted_cli():
    """Factory for a ScriptedCLI fed with the given lines."""
    return ScriptedCLI
