# src/sitesmith_shell/core/handlers/site_handler.py
import argparse
import logging
from typing import Any, Dict, List, Optional

from editor.managers.project_file_manager import INDEX_FILE, ProjectFileManager
from editor.model import ChannelData
from sitesmith_shell.core.context.shell_context import ShellContext
from sitesmith_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

# --- HELP TEXT AND HIERARCHY ---
site_help_text = """
SITE MANAGEMENT:
  site load <path> [--css <file>] [--js <file>] [--channel <title> <subscribers> <videos>]
                      Loads a generated site. <path> is a project directory
                      or a single HTML file.
  site save <dir>     Writes all project files (page, component map, tokens,
                      chat history, changelog) into <dir>.
  site status         Shows the loaded site, its files and component count.
  site show [<file>]  Prints a project file (default: index.html).
""".strip()

COMMAND_HIERARCHY: Dict[str, Optional[Dict[str, Any]]] = {
    "site": {"load": None, "save": None, "status": None, "show": None},
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="site", add_help=False)
    sub = parser.add_subparsers(dest="command")

    load = sub.add_parser("load", add_help=False)
    load.add_argument("path")
    load.add_argument("--css")
    load.add_argument("--js")
    load.add_argument("--channel", nargs=3, metavar=("TITLE", "SUBSCRIBERS", "VIDEOS"))

    save = sub.add_parser("save", add_help=False)
    save.add_argument("dir")

    sub.add_parser("status", add_help=False)

    show = sub.add_parser("show", add_help=False)
    show.add_argument("file", nargs="?", default=INDEX_FILE)
    return parser


def _read_optional(path_str: Optional[str]) -> str:
    if not path_str:
        return ""
    return PathUtils.resolve_user_path(path_str).read_text(encoding="utf-8")


def _handle_load(args: argparse.Namespace, ctx: ShellContext) -> int:
    path = PathUtils.resolve_user_path(args.path)
    if not path.exists():
        print(f"❌ Error: '{args.path}' does not exist.")
        return 1

    try:
        if path.is_dir():
            project = ProjectFileManager.load_from_dir(path)
            if project.get_file(INDEX_FILE) is None:
                print(f"❌ Error: No {INDEX_FILE} found in '{path}'.")
                return 1
        else:
            project = ProjectFileManager(path.stem)
            project.initialize_project(
                path.read_text(encoding="utf-8"),
                css=_read_optional(args.css),
                js=_read_optional(args.js),
            )
    except OSError as e:
        logger.error("Failed to load site from %s: %s", path, e, exc_info=True)
        print(f"❌ Error: Could not read site files: {e}")
        return 1

    ctx.set_project(project)
    if args.channel:
        title, subscribers, videos = args.channel
        ctx.channel = ChannelData(title=title, subscriber_count=subscribers, video_count=videos)

    print(
        f"✅ Site '{project.project_id}' loaded with {len(project.get_all_files())} files "
        f"and {len(ctx.catalog())} components."
    )
    return 0


def _handle_save(args: argparse.Namespace, ctx: ShellContext) -> int:
    directory = PathUtils.resolve_user_path(args.dir)
    try:
        count = ctx.project.save_to_dir(directory)
    except OSError as e:
        logger.error("Failed to save site to %s: %s", directory, e, exc_info=True)
        print(f"❌ Error: Could not write site files: {e}")
        return 1
    ctx.dirty = False
    print(f"✅ Saved {count} files to {directory}")
    return 0


def _handle_status(_args: argparse.Namespace, ctx: ShellContext) -> int:
    project = ctx.project
    print(f"--- Status for Site: {project.project_id} ---")
    print(f"  {'components':<20} = {len(ctx.catalog())}")
    print(f"  {'changes':<20} = {len(project.get_changelog_entries())}")
    print(f"  {'unsaved edits':<20} = {'yes' if ctx.dirty else 'no'}")
    if ctx.channel:
        print(f"  {'channel':<20} = {ctx.channel.title}")
    for project_file in project.get_all_files():
        print(f"  {project_file.name:<20} {project_file.type:<5} {len(project_file.content):>8} chars")
    return 0


def _handle_show(args: argparse.Namespace, ctx: ShellContext) -> int:
    project_file = ctx.project.get_file(args.file)
    if project_file is None:
        known = ", ".join(f.name for f in ctx.project.get_all_files())
        print(f"❌ Error: No file '{args.file}' in site. Known files: {known}")
        return 1
    print(project_file.content)
    return 0


HANDLERS = {
    "load": _handle_load,
    "save": _handle_save,
    "status": _handle_status,
    "show": _handle_show,
}


def handle_site(args: List[str], ctx: ShellContext, _stdin: Optional[str] = None) -> int:
    """Handles the 'site' command: loading, saving and inspecting the edited site."""
    if not args:
        print(site_help_text)
        return 1

    try:
        parsed = _build_parser().parse_args(args)
    except SystemExit:
        print(f"❌ Invalid arguments for 'site {args[0]}'. See 'help'.")
        return 1

    handler = HANDLERS.get(parsed.command)
    if handler is None:
        print(f"Unknown command: 'site {args[0]}'.")
        return 1

    if parsed.command != "load" and ctx.project is None:
        print("No site is currently loaded. Use 'site load <path>' first.")
        return 1

    return handler(parsed, ctx)
