# src/sitesmith_shell/core/handlers/core/cls_handler.py
import os
import platform
from typing import List, Optional

from sitesmith_shell.core.context.shell_context import ShellContext


def handle_cls(_args: List[str], _ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """
    Clear the terminal screen (like `cls` on Windows or `clear` on Unix).
    """
    command = "cls" if "windows" in platform.system().lower() else "clear"
    os.system(command)
    return 0
