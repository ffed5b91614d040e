# src/editor/services/intent_parse_service.py
import logging
import re
from typing import Iterable, List, Optional, Tuple

from editor.model import (
    ComponentCatalogEntry,
    DesignTokenSet,
    EditIntent,
    EditUpdates,
    ParseResult,
    INPUT_EMPTY,
    LOW_CONFIDENCE,
    TARGET_NOT_RESOLVED,
)
from editor.utils.keyword_tables import (
    ACTION_KEYWORDS,
    COMPONENT_KEYWORDS,
    CSS_COLOR_NAMES,
    DEFAULT_ACTION,
    DETAIL_KEYWORDS,
    FALLBACK_COMPONENT_IDS,
    HIGHLIGHT_CLASS,
    PRESERVATION_KEYWORDS,
    SIZE_DOWN_CLASS,
    SIZE_DOWN_FONT,
    SIZE_DOWN_WORDS,
    SIZE_UP_CLASS,
    SIZE_UP_FONT,
    SIZE_UP_WORDS,
    as_dict,
)

logger = logging.getLogger(__name__)

CONFIDENCE_THRESHOLD = 0.3
KEYWORD_THRESHOLD = 0.2
BASE_CONFIDENCE = 0.5

_COLOR_RE = re.compile(
    r'(?:color|background)(?:-color)?'
    r'(?:\s+(?:to|of|into|as))?[\s:=]*'
    r'(#[0-9a-f]{6}\b|#[0-9a-f]{3}\b|rgba?\([^)]*\)|[a-z]+)',
    re.IGNORECASE,
)
_TEXT_RE = re.compile(r'(?:text|content)[^"\']*["\']([^"\']+)["\']', re.IGNORECASE)
_REMOVE_HIGHLIGHT_RE = re.compile(r'remove\s+(?:the\s+)?highlight')
_DETAIL_RE = re.compile("|".join(DETAIL_KEYWORDS))

EMPTY_SUGGESTIONS = [
    "Try describing what you want to change, like 'make the button bigger' or 'change header color'",
]
TARGET_SUGGESTIONS = [
    "Be more specific about which component to modify",
    "Try mentioning: header, button, footer, video section, or navigation",
    "Or name a component by its id, e.g. 'make cta-btn bigger'",
]
LOW_CONFIDENCE_SUGGESTIONS = [
    "Be more specific about what you want to change",
    "Example: 'Change the subscribe button to be larger and red'",
]

# (component id, semantic type, source file)
Target = Tuple[str, str, str]


class IntentParseService:
    """
    Turns a free-text instruction into an EditIntent against a component catalog.

    Stateless: thresholds are fixed at construction, everything else is per call.
    """

    def __init__(
            self,
            confidence_threshold: float = CONFIDENCE_THRESHOLD,
            keyword_threshold: float = KEYWORD_THRESHOLD,
            base_confidence: float = BASE_CONFIDENCE,
    ):
        self.confidence_threshold = confidence_threshold
        self.keyword_threshold = keyword_threshold
        self.base_confidence = base_confidence

    def parse(
            self,
            user_text: str,
            catalog: Iterable[ComponentCatalogEntry],
            tokens: Optional[DesignTokenSet] = None,
    ) -> ParseResult:
        """
        Parses one user instruction.

        Args:
            user_text (str): Raw chat input.
            catalog (Iterable[ComponentCatalogEntry]): Catalog of the current document,
                                                       in builder order.
            tokens (Optional[DesignTokenSet]): Tokens for symbolic colour resolution.

        Returns:
            ParseResult: success with a populated intent, or a reason and suggestions.
        """
        raw = (user_text or "").strip()
        chat = raw.lower()
        tokens = tokens or DesignTokenSet()
        catalog = list(catalog or [])

        if not chat:
            return ParseResult(
                success=False, reason=INPUT_EMPTY, error="Empty request",
                suggestions=list(EMPTY_SUGGESTIONS),
            )

        target = self.identify_target(chat, catalog)
        if target is None:
            logger.debug("No target component resolved for %r", chat)
            return ParseResult(
                success=False, reason=TARGET_NOT_RESOLVED,
                error="Could not identify target component",
                suggestions=list(TARGET_SUGGESTIONS),
            )
        target_id, target_type, source_file = target

        action, action_matched = self.determine_action(chat)
        updates = self.extract_updates(chat, raw, action, tokens)
        confidence = self.calculate_confidence(chat, target_id, action_matched)

        logger.debug(
            "Resolved target=%s type=%s action=%s confidence=%.2f",
            target_id, target_type, action, confidence,
        )

        if confidence < self.confidence_threshold:
            return ParseResult(
                success=False, reason=LOW_CONFIDENCE,
                error="Low confidence in parsing request",
                suggestions=list(LOW_CONFIDENCE_SUGGESTIONS),
            )

        intent = EditIntent(
            target_component_id=target_id,
            target_component_type=target_type,
            source_file=source_file,
            action=action,
            updates=updates,
            preservation_scope=self.determine_preservation_scope(chat),
            confidence=confidence,
        )
        return ParseResult(success=True, intent=intent)

    # --- TARGET ---

    def identify_target(self, chat: str, catalog: List[ComponentCatalogEntry]) -> Optional[Target]:
        """
        A literal component id in the input always wins (catalog order).
        Otherwise the semantic type with the best keyword fraction above the
        threshold is resolved to a component id.
        """
        for entry in catalog:
            component_id = entry.component_id.lower()
            if component_id and component_id in chat:
                return entry.component_id, entry.semantic_type, entry.source_file

        best_type: Optional[str] = None
        best_score = 0.0
        for semantic_type, keywords in COMPONENT_KEYWORDS:
            matches = [kw for kw in keywords if kw in chat]
            score = len(matches) / len(keywords)
            if score > best_score and score > self.keyword_threshold:
                best_score = score
                best_type = semantic_type

        if best_type is None:
            return None

        component_id, source_file = self.find_component_by_type(best_type, catalog)
        return component_id, best_type, source_file

    @staticmethod
    def find_component_by_type(semantic_type: str, catalog: List[ComponentCatalogEntry]) -> Tuple[str, str]:
        for entry in catalog:
            if entry.semantic_type == semantic_type or semantic_type in entry.component_id:
                return entry.component_id, entry.source_file

        fallback = as_dict(FALLBACK_COMPONENT_IDS).get(semantic_type, f"{semantic_type}-component")
        return fallback, "index.html"

    # --- ACTION ---

    @staticmethod
    def determine_action(chat: str) -> Tuple[str, bool]:
        """Returns (action, whether an action keyword literally matched)."""
        for action, keywords in ACTION_KEYWORDS:
            if any(kw in chat for kw in keywords):
                return action, True
        return DEFAULT_ACTION, False

    # --- UPDATES ---

    def extract_updates(self, chat: str, raw: str, action: str, tokens: DesignTokenSet) -> EditUpdates:
        """
        Best-effort extraction of structured updates.

        Check order is the tie-break: 'smaller' overrides 'bigger', highlight
        overrides a size class.
        """
        updates = EditUpdates()

        if action == "style_update":
            color = self._extract_color(chat, tokens)
            if color:
                prop, value = color
                updates.style[prop] = value

        if any(word in chat for word in SIZE_UP_WORDS):
            updates.add_class = SIZE_UP_CLASS
            updates.style["font-size"] = SIZE_UP_FONT
        if any(word in chat for word in SIZE_DOWN_WORDS):
            updates.add_class = SIZE_DOWN_CLASS
            updates.style["font-size"] = SIZE_DOWN_FONT

        if action == "content_update":
            # Matched on the raw input so the literal keeps its case.
            text_match = _TEXT_RE.search(raw)
            if text_match:
                updates.content = text_match.group(1)

        if _REMOVE_HIGHLIGHT_RE.search(chat):
            updates.remove_class = HIGHLIGHT_CLASS
        elif "highlight" in chat:
            updates.add_class = HIGHLIGHT_CLASS

        return updates

    @staticmethod
    def _is_color_value(value: str, tokens: DesignTokenSet) -> bool:
        return (
            value.startswith("#") or value.startswith("rgb")
            or value in tokens.color_map() or value in CSS_COLOR_NAMES
        )

    def _extract_color(self, chat: str, tokens: DesignTokenSet) -> Optional[Tuple[str, str]]:
        for match in _COLOR_RE.finditer(chat):
            value = match.group(1)
            if not self._is_color_value(value, tokens):
                continue
            before = chat[:match.start()].rstrip()
            is_background = match.group(0).startswith("background") or before.endswith("background")
            prop = "background-color" if is_background else "color"
            return prop, tokens.resolve_color(value)

        # Bare colour word, e.g. "make the button bigger and red"
        prop = "background-color" if "background" in chat else "color"
        for word in re.findall(r'[a-z]+', chat):
            if word in tokens.color_map() or word in CSS_COLOR_NAMES:
                return prop, tokens.resolve_color(word)
        return None

    # --- SCOPE & CONFIDENCE ---

    @staticmethod
    def determine_preservation_scope(chat: str) -> str:
        for scope, keywords in PRESERVATION_KEYWORDS:
            if any(kw in chat for kw in keywords):
                return scope
        return "minimal"

    def calculate_confidence(self, chat: str, target_id: str, action_matched: bool) -> float:
        confidence = self.base_confidence

        # Explicit component mention
        if target_id and target_id.lower() in chat:
            confidence += 0.3
        if action_matched:
            confidence += 0.2
        if _DETAIL_RE.search(chat):
            confidence += 0.1

        return round(min(confidence, 1.0), 4)


intent_parse_service = IntentParseService()
