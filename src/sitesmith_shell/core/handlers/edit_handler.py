# src/sitesmith_shell/core/handlers/edit_handler.py
import logging
from typing import List, Optional

from editor.managers.project_file_manager import INDEX_FILE
from editor.model import EditOutcome
from editor.services.edit_apply_service import edit_apply_service
from editor.services.prompt_service import prompt_service
from sitesmith_shell.core.context.shell_context import ShellContext

logger = logging.getLogger(__name__)

edit_help_text = """
EDITING:
  edit <request>      Applies one change described in plain words, e.g.
                        edit make the subscribe button bigger and red
                        edit change text of the hero to "Welcome to My Channel"
                      Lines that do not start with a command are edits too.
  prompt <request>    Prints the targeted AI editing prompt for a request
                      without changing the page.
  changelog           Lists the changes committed to the loaded site.
""".strip()


def _require_site(ctx: ShellContext) -> bool:
    if ctx.project is None:
        print("No site is currently loaded. Use 'site load <path>' first.")
        return False
    return True


def _print_failure(outcome: EditOutcome) -> None:
    print(f"❌ {outcome.error or 'The edit could not be applied.'} [{outcome.reason}]")
    for suggestion in outcome.suggestions:
        print(f"   - {suggestion}")


def handle_edit(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """Runs one editing turn against the loaded page and commits it on success."""
    if not _require_site(ctx):
        return 1
    user_text = " ".join(args)

    project = ctx.project
    project.save_chat_message("user", user_text)
    outcome = ctx.controller.run_turn(
        user_text,
        project.get_content(INDEX_FILE),
        catalog=project.get_catalog(),
        tokens=project.get_tokens(),
        channel=ctx.channel,
    )

    if not outcome.success:
        _print_failure(outcome)
        if outcome.prompt:
            print("\nThe request needs a model-driven edit. Targeted prompt:\n")
            print(outcome.prompt)
        project.save_chat_message(
            "assistant", outcome.error or "",
            {"state": outcome.state, "reason": outcome.reason},
        )
        return 1

    project.commit_document(outcome.document)
    project.append_change(outcome.change_log_entry)
    ctx.dirty = True

    intent = outcome.intent
    reply = f"Updated {intent.target_component_id}: {outcome.change_summary}"
    project.save_chat_message(
        "assistant", reply,
        {
            "state": outcome.state,
            "component_id": intent.target_component_id,
            "action": intent.action,
            "confidence": intent.confidence,
        },
    )
    print(f"✅ {reply} (confidence {round(intent.confidence * 100)}%)")
    return 0


def handle_prompt(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """Parses a request and prints the targeted prompt without touching the page."""
    if not _require_site(ctx):
        return 1
    user_text = " ".join(args)
    html = ctx.project.get_content(INDEX_FILE)

    parsed = ctx.controller.parser.parse(user_text, ctx.project.get_catalog(), ctx.project.get_tokens())
    if not parsed.success:
        print(f"❌ {parsed.error} [{parsed.reason}]")
        for suggestion in parsed.suggestions:
            print(f"   - {suggestion}")
        return 1

    print(prompt_service.generate_targeted_prompt(parsed.intent, ctx.channel, html, user_request=user_text))
    return 0


def handle_preview(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    if not _require_site(ctx):
        return 1
    if not args:
        print("Usage: preview <component_id>")
        return 1

    fragment = edit_apply_service.extract_component(ctx.project.get_content(INDEX_FILE), args[0])
    if fragment is None:
        print(f'❌ Component with ID "{args[0]}" not found')
        return 1
    print(fragment)
    return 0


def handle_changelog(_args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    if not _require_site(ctx):
        return 1
    entries = ctx.project.get_changelog_entries()
    if not entries:
        print("No changes recorded yet.")
        return 0
    for line in entries:
        print(line)
    return 0
