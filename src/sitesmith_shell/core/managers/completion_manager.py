import logging
from typing import Any, Dict, Iterable

from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import History

from sitesmith_shell.core.context.shell_context import ShellContext

logger = logging.getLogger(__name__)

# Commands whose first argument is a component id of the loaded site
COMPONENT_ARG_COMMANDS = {"preview"}


class CompletionManager:
    """
    Manages logic for generating command completion suggestions: main commands,
    subcommands, and component ids of the loaded site.
    """

    def __init__(
        self,
        shell_context: ShellContext,
        history: History,
        command_hierarchy: Dict[str, Any]
    ):
        self.ctx = shell_context
        self.history = history
        self.command_hierarchy = command_hierarchy

    def generate_completions(self, document: Document) -> Iterable[Completion]:
        text_before_cursor = document.text_before_cursor

        if text_before_cursor.endswith('!h'):
            yield from self._get_history_completions()
            return

        words = text_before_cursor.lstrip().split()
        word_before_cursor = document.get_word_before_cursor(WORD=True)
        ends_with_space = text_before_cursor.endswith(" ")

        is_completing_first_word = len(words) == 0 or (len(words) == 1 and not ends_with_space)
        is_completing_second_word = (
            (len(words) == 1 and ends_with_space) or
            (len(words) == 2 and not ends_with_space)
        )

        if is_completing_first_word:
            yield from self._get_main_command_completions(word_before_cursor)
            return

        if not is_completing_second_word:
            return

        main_command = words[0]
        partial = "" if ends_with_space else words[1]

        if main_command in COMPONENT_ARG_COMMANDS:
            yield from self._get_component_completions(partial)
            return

        hierarchy_entry = self.command_hierarchy.get(main_command)
        if isinstance(hierarchy_entry, dict):
            yield from self._get_sub_command_completions(hierarchy_entry.keys(), partial)

    # --- Helper methods for different completion types ---

    def _get_main_command_completions(self, word_before_cursor: str) -> Iterable[Completion]:
        for command_name in sorted(self.command_hierarchy.keys()):
            if command_name.startswith(word_before_cursor):
                yield Completion(
                    command_name,
                    start_position=-len(word_before_cursor),
                    display_meta="Main Command"
                )

    def _get_sub_command_completions(self, subcommands: Iterable[str], partial: str) -> Iterable[Completion]:
        for sub in sorted(subcommands):
            if sub.startswith(partial):
                yield Completion(sub, start_position=-len(partial), display_meta="Subcommand")

    def _get_component_completions(self, partial: str) -> Iterable[Completion]:
        for component_id in sorted(self.ctx.component_ids()):
            if component_id.startswith(partial):
                yield Completion(component_id, start_position=-len(partial), display_meta="Component")

    def _get_history_completions(self) -> Iterable[Completion]:
        """Yields unique history entries, most recent first, replacing the '!h' trigger."""
        seen = set()
        for entry in self.history.get_strings()[::-1]:
            if entry in seen:
                continue
            seen.add(entry)
            yield Completion(entry, start_position=-2, display_meta="History")
