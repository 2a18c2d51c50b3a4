"""
Tests for the demo command loop entry point.
"""

import json
import os
import logging

import pytest

from readcommand.__main__ import demo_autocomplete, main


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Isolated CWD and environment with the plain frontend."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("READCOMMAND_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("READCOMMAND_FRONTEND", "plain")
    monkeypatch.setenv("READCOMMAND_HISTORY_FILE_PATH", str(tmp_path / "history"))
    yield tmp_path
    logger = logging.getLogger("readcommand")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True


def _feed(monkeypatch, lines):
    pending = list(lines)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        if not pending:
            raise EOFError
        item = pending.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    monkeypatch.setattr("builtins.input", fake_input)
    return prompts


def test_prints_parsed_arguments(workspace, monkeypatch, capsys):
    _feed(monkeypatch, ['echo "hello world" \\', "again"])
    assert main([]) == 0
    out = capsys.readouterr().out
    assert f"args: {json.dumps(['echo', 'hello world', 'again'])}" in out
    assert (workspace / "history").read_text(encoding="utf-8") == 'echo "hello world" \\\n'


def test_seeds_and_extends_history(workspace, monkeypatch):
    (workspace / "history").write_text("old\n", encoding="utf-8")
    _feed(monkeypatch, ["new"])
    assert main(["--history", "seeded"]) == 0
    assert (workspace / "history").read_text(encoding="utf-8") == "old\nseeded\nnew\n"


def test_second_interrupt_exits(workspace, monkeypatch, capsys):
    _feed(monkeypatch, [KeyboardInterrupt(), KeyboardInterrupt(), "never read"])
    assert main([]) == 0
    assert "Press ^C again to exit." in capsys.readouterr().out


def test_custom_prompts(workspace, monkeypatch):
    monkeypatch.setenv("READCOMMAND_PS1", "$ ")
    monkeypatch.setenv("READCOMMAND_PS2", ". ")
    prompts = _feed(monkeypatch, ["a 'b", "c'"])
    main([])
    assert prompts[:2] == ["$ ", ". "]


def test_invalid_configuration(workspace, monkeypatch, capsys):
    monkeypatch.setenv("READCOMMAND_HISTORY_SIZE", "-5")
    assert main([]) == 2
    assert "HISTORY_SIZE" in capsys.readouterr().err


def test_demo_autocomplete():
    assert demo_autocomplete([]) is None
    assert demo_autocomplete(["show", "options"]) == [
        "optionsfirst", "optionssecond", "optionsthird"]
    assert demo_autocomplete(["complete"]) == ["completeiswhatidid"]
    assert demo_autocomplete(["other"]) is None
