# src/sitesmith_shell/core/core.py
from __future__ import annotations

import inspect
import logging
from typing import Callable, Dict, Optional

from sitesmith_shell.core.command_registry import CommandRegistry
from sitesmith_shell.core.context.shell_context import ShellContext
from sitesmith_shell.core.parser import parse_command_line

logger = logging.getLogger(__name__)

QUIT_CODE = 130
# Lines that do not start with a known command are chat messages
CHAT_COMMAND = "edit"


def call_handler(handler: Callable[..., int], args, ctx: ShellContext, stdin: Optional[str] = None) -> int:
    if len(inspect.signature(handler).parameters) >= 3:
        return int(handler(args, ctx, stdin))
    return int(handler(args, ctx))


def execute_line(line: str, ctx: ShellContext, registry: Optional[Dict[str, Callable[..., int]]] = None) -> int:
    """
    Executes one line of shell input and returns the handler's exit code.

    Unknown first words are not an error: the whole line is sent to the
    chat command as an edit request.
    """
    registry = CommandRegistry if registry is None else registry
    parsed = parse_command_line(line)
    if parsed is None:
        return 0

    name, args = parsed
    handler = registry.get(name)
    if handler is None:
        handler = registry.get(CHAT_COMMAND)
        if handler is None:
            print(f"command not found: {name}")
            return 127
        args = [line.strip()]

    try:
        return call_handler(handler, args, ctx)
    except Exception as e:
        logger.error("Command '%s' failed: %s", name, e, exc_info=True)
        print(f"❌ Error: {e}")
        return 1


__all__ = ["execute_line", "parse_command_line", "QUIT_CODE"]
