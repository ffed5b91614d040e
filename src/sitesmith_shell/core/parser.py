# src/sitesmith_shell/core/parser.py
from __future__ import annotations

import shlex
from typing import List, Optional, Tuple

# Commands whose argument is free chat text; they receive the raw remainder of
# the line so quotes and apostrophes survive.
RAW_TEXT_COMMANDS = {"edit", "prompt"}


def split_command(line: str) -> Tuple[str, str]:
    """Splits a line into (first word, raw remainder)."""
    s = (line or "").strip()
    if not s:
        return "", ""
    parts = s.split(None, 1)
    return parts[0], (parts[1] if len(parts) > 1 else "")


def parse_command_line(line: str) -> Optional[Tuple[str, List[str]]]:
    """
    Parses user input into (command_name, args).

    Args:
        line (str): The raw input string from the shell.

    Returns:
        Optional[Tuple[str, List[str]]]: None for blank input.
    """
    name, rest = split_command(line)
    if not name:
        return None

    if name in RAW_TEXT_COMMANDS:
        return name, [rest] if rest else []

    try:
        # shlex handles quoted paths and values
        tokens = shlex.split(line.strip(), posix=True)
    except ValueError:
        # Unbalanced quotes, e.g. free text with an apostrophe
        tokens = line.split()

    if not tokens:
        return None
    return tokens[0], tokens[1:]
