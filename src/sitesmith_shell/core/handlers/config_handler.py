# src/sitesmith_shell/core/handlers/config_handler.py
import json
import logging
from typing import Any, Dict, List, Optional

from sitesmith_shell.core.context.shell_context import ShellContext
from sitesmith_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

config_help_text = """
CONFIGURATION:
  config list                Show the current configuration as JSON.
  config set <key> <value>   Set a config value for the session
                             (e.g., editor.confidence_threshold 0.5).
  config reset               Reload the configuration from settings.json.
""".strip()

COMMAND_HIERARCHY: Dict[str, Optional[Dict[str, Any]]] = {
    "config": {"list": None, "set": None, "reset": None},
}


def handle_config(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """Handles the 'config' command for viewing and modifying session configuration."""
    if not args:
        print(config_help_text)
        return 1

    command = args[0]

    if command == "list":
        print(json.dumps(config_manager.get_all(), indent=2))
        return 0

    if command == "set":
        if len(args) < 3:
            print("Usage: config set <key> <value>")
            return 1
        key_path = args[1]
        value = " ".join(args[2:])

        if not config_manager.set_nested(key_path, value):
            print(f"❌ Error: Failed to set config value for key '{key_path}'.")
            return 1

        if key_path.startswith("editor."):
            # Thresholds are read when the pipeline is built
            ctx.controller = ctx.build_controller()
        new_value = config_manager.get_nested(key_path)
        print(f"✅ Config updated: {key_path} = {new_value} (type: {type(new_value).__name__})")
        return 0

    if command == "reset":
        config_manager.reset()
        ctx.controller = ctx.build_controller()
        print("✅ Configuration has been reset to the values from settings.json.")
        return 0

    print(f"Unknown command: 'config {command}'.")
    return 1
