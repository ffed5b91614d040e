# src/editor/model.py
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

SemanticType = Literal["header", "hero", "navigation", "video", "footer", "button", "content", "unknown"]
EditAction = Literal["style_update", "content_update", "structure_update", "add_component", "remove_component"]
PreservationScope = Literal["minimal", "component", "section"]

# --- Reason codes returned with every failed result ---
INPUT_EMPTY = "INPUT_EMPTY"
TARGET_NOT_RESOLVED = "TARGET_NOT_RESOLVED"
LOW_CONFIDENCE = "LOW_CONFIDENCE"
ELEMENT_NOT_FOUND = "ELEMENT_NOT_FOUND"
MALFORMED_DOCUMENT = "MALFORMED_DOCUMENT"
STRUCTURAL_DRIFT = "STRUCTURAL_DRIFT"
NO_DIRECT_EDIT = "NO_DIRECT_EDIT"


class ComponentCatalogEntry(BaseModel):
    """
    A single addressable component of a generated page.

    Derived from the document each time the catalog is built; never stored on its own.
    """
    component_id: str
    semantic_type: SemanticType = "content"
    source_file: str = "index.html"
    tag: str = ""
    css_classes: List[str] = Field(default_factory=list)
    dom_selector_hint: str = ""

    @field_validator('css_classes', mode='before')
    @classmethod
    def dedupe_classes(cls, v):
        """Keeps the first occurrence of every class, preserving order."""
        if isinstance(v, str):
            v = v.split()
        return list(dict.fromkeys(v or []))


class DesignTokenSet(BaseModel):
    """Normalized design tokens of a site, used to resolve symbolic colour names."""
    primary_color: str = "#ff0000"
    secondary_color: str = "#666666"
    font_family: str = "Arial, sans-serif"
    font_size_base: str = "16px"
    spacing: str = "16px"
    border_radius: str = "4px"

    def color_map(self) -> Dict[str, str]:
        return {
            "red": self.primary_color or "#ff0000",
            "blue": "#0066cc",
            "green": "#00cc66",
            "yellow": "#ffcc00",
            "purple": "#6600cc",
            "orange": "#ff6600",
        }

    def resolve_color(self, value: str) -> str:
        """Maps a symbolic colour word onto a concrete value; unknown values pass through."""
        return self.color_map().get(value.lower(), value)


class EditUpdates(BaseModel):
    add_class: Optional[str] = None
    remove_class: Optional[str] = None
    style: Dict[str, str] = Field(default_factory=dict)
    content: Optional[str] = None
    attributes: Dict[str, str] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.add_class or self.remove_class or self.style
                    or self.content is not None or self.attributes)


class EditIntent(BaseModel):
    """
    The structured reading of one user instruction.
    Transient parameter object for the EditApplyService.
    """
    target_component_id: str
    target_component_type: SemanticType = "unknown"
    source_file: str = "index.html"
    action: EditAction = "style_update"
    updates: EditUpdates = Field(default_factory=EditUpdates)
    preservation_scope: PreservationScope = "minimal"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class ParseResult(BaseModel):
    success: bool
    intent: Optional[EditIntent] = None
    reason: Optional[str] = None  # e.g., 'INPUT_EMPTY', 'TARGET_NOT_RESOLVED'
    error: Optional[str] = None
    suggestions: List[str] = Field(default_factory=list)


class EditResult(BaseModel):
    success: bool
    modified_fragment: Optional[str] = None
    change_summary: Optional[str] = None
    error: Optional[str] = None
    reason: Optional[str] = None


class ValidationResult(BaseModel):
    valid: bool
    reason: Optional[str] = None  # 'MALFORMED_DOCUMENT' or 'STRUCTURAL_DRIFT'
    message: str = ""
    original_count: int = 0
    modified_count: int = 0


class ChangeLogEntry(BaseModel):
    """
    One line of the append-only project changelog.
    """
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    action: str
    component_id: str
    user_request: str = ""
    details: str = ""

    def to_line(self) -> str:
        """Renders the entry in the changelog.md line format."""
        return f'- [{self.timestamp.date().isoformat()}] {self.action} component "{self.component_id}": {self.details}'


class ChannelData(BaseModel):
    """The subset of YouTube channel data that edit prompts must preserve."""
    title: str = ""
    subscriber_count: int = 0
    video_count: int = 0

    @field_validator('subscriber_count', 'video_count', mode='before')
    @classmethod
    def parse_count(cls, v):
        """The YouTube API reports counts as strings."""
        if v in (None, ""):
            return 0
        try:
            return int(v)
        except (TypeError, ValueError):
            return 0


class EditOutcome(BaseModel):
    """Terminal state of one editing turn, as returned by the EditController."""
    success: bool
    state: str  # 'ParseFailed', 'Parsed', 'ApplyFailed', 'ValidationFailed' or 'Committed'
    reason: Optional[str] = None
    error: Optional[str] = None
    suggestions: List[str] = Field(default_factory=list)
    intent: Optional[EditIntent] = None
    fragment: Optional[str] = None
    change_summary: Optional[str] = None
    document: Optional[str] = None
    change_log_entry: Optional[ChangeLogEntry] = None
    prompt: Optional[str] = None
