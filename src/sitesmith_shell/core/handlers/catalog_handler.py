# src/sitesmith_shell/core/handlers/catalog_handler.py
import json
from typing import List, Optional

from sitesmith_shell.core.context.shell_context import ShellContext

catalog_help_text = """
INSPECTION:
  catalog [--json]    Lists the editable components of the loaded site.
  tokens              Shows the design tokens (colors, fonts, spacing) as JSON.
  preview <id>        Prints the current markup of one component.
""".strip()


def handle_catalog(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    if ctx.project is None:
        print("No site is currently loaded. Use 'site load <path>' first.")
        return 1

    catalog = ctx.catalog()
    if args and args[0] == "--json":
        print(json.dumps([entry.model_dump() for entry in catalog], indent=2))
        return 0

    if not catalog:
        print("No components found in the loaded page.")
        return 0

    print(f"\n{'ID':<24} | {'Type':<11} | {'Tag':<8} | {'Selector':<40}")
    print("-" * 92)
    for entry in catalog:
        print(f"{entry.component_id:<24} | {entry.semantic_type:<11} | {entry.tag:<8} | {entry.dom_selector_hint:<40}")
    print()
    return 0


def handle_tokens(_args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    if ctx.project is None:
        print("No site is currently loaded. Use 'site load <path>' first.")
        return 1
    print(ctx.project.get_tokens().model_dump_json(indent=2))
    return 0
