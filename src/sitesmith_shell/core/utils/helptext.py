# src/sitesmith_shell/core/utils/helptext.py
from sitesmith_shell.core.command_registry import COMMAND_HELP_TEXTS

HEADER_HELP_TEXT = """
🛠️  SiteSmith Shell - Help

Edit a generated website by describing the change in plain words.
Any line that does not start with a command is treated as an edit request:

  SiteSmith>> make the subscribe button bigger and red

---
GENERAL
---
  help                Show this help text.
  quit                Exit the shell.
  cls                 Clear the screen.
""".strip()


def get_help_text() -> str:
    """
    Assembles the full help text from the header and the help fragments
    discovered in the command handlers.
    """
    parts = [HEADER_HELP_TEXT]
    for command_name in sorted(COMMAND_HELP_TEXTS):
        parts.append(COMMAND_HELP_TEXTS[command_name])
    return "\n\n".join(parts)
