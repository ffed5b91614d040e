# tests/core/test_parser.py
from sitesmith_shell.core.parser import parse_command_line, split_command


def test_parse_simple_command():
    """Test een enkelvoudig commando zonder argumenten."""
    assert parse_command_line("catalog") == ("catalog", [])


def test_parse_command_with_arguments():
    assert parse_command_line("site load ./my-site --css style.css") == (
        "site", ["load", "./my-site", "--css", "style.css"]
    )


def test_parse_quoted_path():
    assert parse_command_line('site save "my site"') == ("site", ["save", "my site"])


def test_chat_commands_keep_raw_text():
    """Bij 'edit' en 'prompt' blijven aanhalingstekens en apostroffen behouden."""
    assert parse_command_line('edit change the hero text to "Hi There"') == (
        "edit", ['change the hero text to "Hi There"']
    )
    assert parse_command_line("prompt make the channel's button red") == (
        "prompt", ["make the channel's button red"]
    )
    assert parse_command_line("edit") == ("edit", [])


def test_unbalanced_quotes_fall_back_to_split():
    assert parse_command_line("make the channel's button red") == (
        "make", ["the", "channel's", "button", "red"]
    )


def test_blank_input():
    assert parse_command_line("") is None
    assert parse_command_line("   ") is None


def test_split_command():
    assert split_command("  edit   make it red ") == ("edit", "make it red")
    assert split_command("quit") == ("quit", "")
