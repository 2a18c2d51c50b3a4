"""
Tests for reading single and looping multi-line commands through a scripted frontend.
"""

import pytest

from readcommand.interface import CommandHistory, CommandInterrupted, loop, read


def test_reads_single_line_command(scripted_cli):
    cli = scripted_cli(["curl https://www.google.ca --insecure"])
    command = read(cli)
    assert command.args == ["curl", "https://www.google.ca", "--insecure"]
    assert command.text == "curl https://www.google.ca --insecure"
    assert cli.calls[0]["prompt"] == "> "
    assert cli.calls[0]["committed"] == ""


def test_escaped_newline_spans_lines(scripted_cli):
    cli = scripted_cli(["firstline \\", "secondline"])
    command = read(cli)
    assert command.args == ["firstline", "secondline"]
    assert command.text == "firstline \\\nsecondline"
    assert cli.calls[1]["committed"] == "firstline \\\n"


def test_open_double_quote_consumes_lines(scripted_cli):
    cli = scripted_cli([
        'this line is "constrained by',
        "a double-'",
        'and now we finish" it',
    ])
    command = read(cli)
    assert command.args == [
        "this", "line", "is", "constrained by\na double-'\nand now we finish", "it"]
    assert command.text == 'this line is "constrained by\na double-\'\nand now we finish" it'
    assert len(cli.calls) == 3


def test_open_single_quote_consumes_lines(scripted_cli):
    cli = scripted_cli([
        "this line is 'constrained by",
        "a single-\\'",
        "and now we finish' it",
    ])
    command = read(cli)
    assert command.args[3] == "constrained by\na single-'\nand now we finish"
    assert command.text == "this line is 'constrained by\na single-\\'\nand now we finish' it"


def test_custom_prompts(scripted_cli):
    """Test that PS1 is used for the first line and PS2 afterwards."""
    cli = scripted_cli(["firstline \\", "secondline"])
    read(cli, ps1="ps1", ps2=lambda: "ps2")
    assert [call["prompt"] for call in cli.calls] == ["ps1", "ps2"]


def test_history_only_on_first_line(scripted_cli):
    cli = scripted_cli(["a \\", "b"])
    read(cli, history=["old"])
    first, second = cli.calls
    assert isinstance(first["history"], CommandHistory)
    assert first["history"].entries == ["old"]
    assert second["history"] is None


def test_autocomplete_is_forwarded(scripted_cli):
    def autocomplete(args):
        return []

    cli = scripted_cli(["x"])
    read(cli, autocomplete=autocomplete)
    assert cli.calls[0]["autocomplete"] is autocomplete


def test_interrupt_raises_command_interrupted(scripted_cli):
    cli = scripted_cli([KeyboardInterrupt()])
    with pytest.raises(CommandInterrupted) as info:
        read(cli)
    assert info.value.code == "SIGINT"


def test_end_of_input_propagates(scripted_cli):
    with pytest.raises(EOFError):
        read(scripted_cli(["open 'quote"]))


def test_given_cli_is_not_set_up(scripted_cli):
    cli = scripted_cli(["x"])
    read(cli)
    assert cli.setup_count == 0
    assert cli.teardown_count == 0


def test_loop_reads_series_of_commands(scripted_cli):
    cli = scripted_cli(["one", "two", "three"])
    received = []
    history = loop(lambda command: received.append(command.args), cli=cli)
    assert received == [["one"], ["two"], ["three"]]
    assert history == ["one", "two", "three"]


def test_loop_stops_when_callback_returns_false(scripted_cli):
    cli = scripted_cli(["one", "two"])
    received = []

    def on_command(command):
        received.append(command.args)
        return False

    loop(on_command, cli=cli)
    assert received == [["one"]]


def test_loop_records_first_line_of_multi_line_commands(scripted_cli):
    cli = scripted_cli(["echo 'a", "b'", ""])
    history = loop(lambda command: None, cli=cli, history=["earlier"])
    assert history == ["earlier", "echo 'a"]


def test_loop_passes_growing_history(scripted_cli):
    cli = scripted_cli(["one", "two"])
    loop(lambda command: None, cli=cli)
    assert cli.calls[0]["history"].entries == []
    assert cli.calls[1]["history"].entries == ["one"]


def test_loop_interrupt_handler(scripted_cli):
    cli = scripted_cli([KeyboardInterrupt(), "one", KeyboardInterrupt(), "never"])
    received = []
    interrupts = []

    def on_interrupt(exc):
        interrupts.append(exc)
        return len(interrupts) < 2

    loop(lambda command: received.append(command.args), cli=cli, on_interrupt=on_interrupt)
    assert received == [["one"]]
    assert len(interrupts) == 2


def test_loop_without_interrupt_handler_raises(scripted_cli):
    with pytest.raises(CommandInterrupted):
        loop(lambda command: None, cli=scripted_cli([KeyboardInterrupt()]))


def test_loop_re_evaluates_prompt_callables(scripted_cli):
    counter = iter(range(10))
    cli = scripted_cli(["a", "b"])
    loop(lambda command: None, cli=cli, ps1=lambda: f"[{next(counter)}]> ")
    assert [call["prompt"] for call in cli.calls[:2]] == ["[0]> ", "[1]> "]
