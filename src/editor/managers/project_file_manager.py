# src/editor/managers/project_file_manager.py
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from editor.dom.catalog_builder import ComponentCatalogBuilder
from editor.model import ChangeLogEntry, ComponentCatalogEntry, DesignTokenSet
from editor.services.token_extract_service import TokenExtractService

logger = logging.getLogger(__name__)

FileType = Literal["html", "css", "js", "json", "md"]

INDEX_FILE = "index.html"
STYLE_FILE = "style.css"
SCRIPT_FILE = "script.js"
COMPONENT_MAP_FILE = "componentMap.json"
DESIGN_FILE = "design.json"
CHAT_HISTORY_FILE = "chatHistory.json"
CHANGELOG_FILE = "changelog.md"
README_FILE = "README.md"

CHANGELOG_HEADER = "# Project Changelog"

README_TEMPLATE = """# AI-Powered Website Editor

## Project Structure
- `index.html` - Main website page
- `style.css` - Global styles and design system
- `script.js` - Interactive functionality
- `componentMap.json` - Maps all editable components
- `design.json` - Design tokens (colors, fonts, spacing)
- `chatHistory.json` - Conversation history with AI
- `changelog.md` - Log of all changes made

## Example Commands
- "Make the subscribe button larger and red"
- "Change the header background to blue"
- "Update the hero title text to 'Welcome to My Channel'"
- "Add a highlight effect to the navigation menu"
"""


class ProjectFile(BaseModel):
    name: str
    type: FileType = "html"
    content: str = ""
    last_modified: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatHistoryEntry(BaseModel):
    id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    role: Literal["user", "assistant"]
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


def get_file_type(file_name: str) -> FileType:
    """Derives the project file type from the extension; unknown types count as html."""
    extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    return extension if extension in ("html", "css", "js", "json", "md") else "html"


class ProjectFileManager:
    """
    Holds the files of one generated site in memory, together with the derived
    component map, design tokens, chat history and changelog.

    The stored index.html only changes through commit_document(); edits are
    computed elsewhere and committed explicitly.
    """

    def __init__(self, project_id: str = "default"):
        self.project_id = project_id
        self.files: Dict[str, ProjectFile] = {}
        self.catalog_builder = ComponentCatalogBuilder()
        self.token_extractor = TokenExtractService()

    # --- INIT ---

    def initialize_project(self, html: str, css: str = "", js: str = "") -> None:
        """Stores the main files and derives every companion file."""
        self.save_file(INDEX_FILE, html)
        self.save_file(STYLE_FILE, css)
        self.save_file(SCRIPT_FILE, js)

        self.create_component_map(html)
        self.extract_design_tokens(css or None)
        self.save_file(CHAT_HISTORY_FILE, json.dumps([], indent=2))
        self.save_file(CHANGELOG_FILE, f"{CHANGELOG_HEADER}\n\nThis file tracks all changes made to the project.\n")
        self.save_file(README_FILE, README_TEMPLATE)
        logger.info("Initialized project '%s' with %d files.", self.project_id, len(self.files))

    # --- COMPONENT MAP & TOKENS ---

    def create_component_map(self, html: Optional[str] = None) -> List[ComponentCatalogEntry]:
        """(Re)builds the catalog of the given or stored page and saves componentMap.json."""
        html = self.get_content(INDEX_FILE) if html is None else html
        catalog = self.catalog_builder.build_catalog(html, source_file=INDEX_FILE)
        component_map = {entry.component_id: entry.model_dump() for entry in catalog}
        self.save_file(COMPONENT_MAP_FILE, json.dumps(component_map, indent=2))
        return catalog

    def get_catalog(self) -> List[ComponentCatalogEntry]:
        """Loads the catalog from componentMap.json, rebuilding it if the file is missing or broken."""
        raw = self.get_content(COMPONENT_MAP_FILE)
        if raw:
            try:
                return [ComponentCatalogEntry(**data) for data in json.loads(raw).values()]
            except (json.JSONDecodeError, TypeError, ValueError, AttributeError) as e:
                logger.warning("componentMap.json is unreadable (%s); rebuilding.", e)
        return self.create_component_map()

    def extract_design_tokens(self, css: Optional[str] = None) -> DesignTokenSet:
        """
        Extracts tokens from the stylesheet, or from the page's inline <style>
        blocks when no stylesheet content exists, and saves design.json.
        """
        css = self.get_content(STYLE_FILE) if css is None else css
        if css and css.strip():
            tokens = self.token_extractor.extract_tokens(css)
        else:
            tokens = self.token_extractor.extract_tokens_from_html(self.get_content(INDEX_FILE))
        self.save_file(DESIGN_FILE, tokens.model_dump_json(indent=2))
        return tokens

    def get_tokens(self) -> DesignTokenSet:
        raw = self.get_content(DESIGN_FILE)
        if raw:
            try:
                return DesignTokenSet.model_validate_json(raw)
            except ValueError as e:
                logger.warning("design.json is unreadable (%s); re-extracting.", e)
        return self.extract_design_tokens()

    # --- COMMIT ---

    def commit_document(self, html: str) -> List[ComponentCatalogEntry]:
        """Replaces index.html and rebuilds the component map so it is never stale."""
        self.save_file(INDEX_FILE, html)
        return self.create_component_map(html)

    # --- CHANGELOG ---

    def log_change(self, component_id: str, action: str, details: str, user_request: str = "") -> ChangeLogEntry:
        entry = ChangeLogEntry(
            action=action, component_id=component_id, user_request=user_request, details=details,
        )
        self.append_change(entry)
        return entry

    def append_change(self, entry: ChangeLogEntry) -> None:
        """Appends one line to changelog.md. Existing lines are never rewritten."""
        lines = self._load_changelog()
        lines.append(entry.to_line())
        self.save_file(CHANGELOG_FILE, "\n".join(lines) + "\n")

    def _load_changelog(self) -> List[str]:
        content = self.get_content(CHANGELOG_FILE)
        if not content:
            return [CHANGELOG_HEADER]
        return [line for line in content.split("\n") if line.strip()]

    def get_changelog_entries(self) -> List[str]:
        return [line for line in self._load_changelog() if line.startswith("- [")]

    # --- CHAT HISTORY ---

    def save_chat_message(self, role: str, content: str, metadata: Optional[Dict[str, Any]] = None) -> ChatHistoryEntry:
        history = self.load_chat_history()
        entry = ChatHistoryEntry(
            id=str(len(history) + 1), role=role, content=content, metadata=metadata or {},
        )
        history.append(entry)
        payload = [e.model_dump(mode="json") for e in history]
        self.save_file(CHAT_HISTORY_FILE, json.dumps(payload, indent=2))
        return entry

    def load_chat_history(self) -> List[ChatHistoryEntry]:
        raw = self.get_content(CHAT_HISTORY_FILE)
        if not raw:
            return []
        try:
            return [ChatHistoryEntry(**item) for item in json.loads(raw)]
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.error("Failed to parse chat history: %s", e)
            return []

    # --- FILES ---

    def save_file(self, file_name: str, content: str) -> ProjectFile:
        project_file = ProjectFile(name=file_name, type=get_file_type(file_name), content=content or "")
        self.files[file_name] = project_file
        return project_file

    def get_file(self, file_name: str) -> Optional[ProjectFile]:
        return self.files.get(file_name)

    def get_content(self, file_name: str) -> str:
        project_file = self.files.get(file_name)
        return project_file.content if project_file else ""

    def get_all_files(self) -> List[ProjectFile]:
        return list(self.files.values())

    def export_project(self) -> Dict[str, str]:
        return {name: f.content for name, f in self.files.items()}

    def import_project(self, files: Dict[str, str]) -> None:
        """
        Loads raw file contents. Missing companion files are derived from
        index.html so an imported site is immediately editable.
        """
        for file_name, content in files.items():
            self.save_file(file_name, content)

        if INDEX_FILE in self.files:
            if COMPONENT_MAP_FILE not in self.files:
                self.create_component_map()
            if DESIGN_FILE not in self.files:
                self.extract_design_tokens()
        if CHANGELOG_FILE not in self.files:
            self.save_file(CHANGELOG_FILE, f"{CHANGELOG_HEADER}\n")

    # --- DISK ---

    def save_to_dir(self, directory: Path) -> int:
        """Writes every project file into the directory. Returns the number of files written."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        for name, project_file in self.files.items():
            (directory / name).write_text(project_file.content, encoding="utf-8")
        logger.info("Saved %d files of project '%s' to %s", len(self.files), self.project_id, directory)
        return len(self.files)

    @classmethod
    def load_from_dir(cls, directory: Path, project_id: Optional[str] = None) -> "ProjectFileManager":
        directory = Path(directory)
        manager = cls(project_id or directory.name)
        files = {
            path.name: path.read_text(encoding="utf-8")
            for path in sorted(directory.iterdir())
            if path.is_file() and "." in path.name and get_file_type(path.name) == path.suffix.lstrip(".").lower()
        }
        manager.import_project(files)
        return manager
