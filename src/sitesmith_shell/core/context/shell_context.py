# src/sitesmith_shell/core/context/shell_context.py
import logging
from typing import Any, List, Optional

from editor.controllers.edit_controller import EditController
from editor.managers.project_file_manager import ProjectFileManager
from editor.model import ChannelData, ComponentCatalogEntry
from sitesmith_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)


class ShellContext:
    """
    Holds the state of one shell session: the loaded site and the editing
    pipeline configured from settings.json.

    The shell is the single writer of the loaded site; edits are applied one
    turn at a time.
    """

    def __init__(self):
        self.project: Optional[ProjectFileManager] = None
        self.channel: Optional[ChannelData] = None
        self.prompt_session: Optional[Any] = None
        # True while the loaded site has committed edits that were not saved to disk
        self.dirty = False
        self.controller = self.build_controller()

    @staticmethod
    def build_controller() -> EditController:
        """Creates the edit pipeline with the thresholds from the current configuration."""
        settings = config_manager.get_editor_settings()
        return EditController(
            confidence_threshold=settings.confidence_threshold,
            keyword_threshold=settings.keyword_threshold,
            drift_tolerance=settings.drift_tolerance,
            source_file=settings.source_file,
        )

    def set_project(self, project: Optional[ProjectFileManager]) -> None:
        self.project = project
        self.dirty = False
        if project:
            logger.info("Active site set to '%s'.", project.project_id)

    def component_ids(self) -> List[str]:
        """Ids of the loaded site's components, for completion and listings."""
        if not self.project:
            return []
        return [entry.component_id for entry in self.catalog()]

    def catalog(self) -> List[ComponentCatalogEntry]:
        return self.project.get_catalog() if self.project else []

    def __repr__(self) -> str:
        active = self.project.project_id if self.project else "None"
        return f"<ShellContext active_site={active}>"
