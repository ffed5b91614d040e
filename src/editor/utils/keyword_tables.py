# src/editor/utils/keyword_tables.py
"""
Ordered keyword tables used by the catalog builder and the intent parser.

Tuples of tuples, not dicts: iteration order is the tie-break order.
"""

# Keyword lists per semantic type, scored as "fraction of keywords present".
COMPONENT_KEYWORDS = (
    ("header", ("header", "top", "navigation", "navbar", "menu", "logo")),
    ("hero", ("hero", "banner", "main title", "heading", "welcome", "intro")),
    ("button", ("button", "btn", "subscribe", "cta", "call to action", "click")),
    ("video", ("video", "gallery", "content", "thumbnails", "playlist")),
    ("footer", ("footer", "bottom", "contact", "links", "social")),
    ("navigation", ("nav", "menu", "navigation", "navbar", "sidebar")),
    ("content", ("text", "content", "description", "paragraph", "section")),
)

# First action with any matching phrase wins.
ACTION_KEYWORDS = (
    ("style_update", ("change color", "make bigger", "resize", "style", "background", "font")),
    ("content_update", ("change text", "update content", "modify text", "edit text", "rename")),
    ("structure_update", ("add element", "remove element", "restructure", "layout")),
    ("add_component", ("add", "create", "insert", "new")),
    ("remove_component", ("remove", "delete", "hide", "eliminate")),
)

DEFAULT_ACTION = "style_update"

# Used when no catalog entry of the keyword-selected type exists.
FALLBACK_COMPONENT_IDS = (
    ("header", "main-header"),
    ("hero", "hero-section"),
    ("button", "cta-btn"),
    ("video", "video-gallery"),
    ("footer", "main-footer"),
    ("navigation", "main-nav"),
    ("content", "main-content"),
)

# Semantic type inference over tag, id and class string. Priority order.
TYPE_INFERENCE_KEYWORDS = (
    ("header", ("header",)),
    ("navigation", ("nav",)),
    ("footer", ("footer",)),
    ("button", ("button", "btn")),
    ("hero", ("hero",)),
    ("video", ("video",)),
)

# Structurally significant selectors for the second catalog pass.
# (semantic type, kind, needle): kind is 'tag' or 'class'.
SIGNIFICANT_SELECTORS = (
    ("header", "tag", "header"),
    ("hero", "class", "hero"),
    ("navigation", "tag", "nav"),
    ("footer", "tag", "footer"),
    ("button", "tag", "button"),
    ("video", "class", "video-gallery"),
)

PRESERVATION_KEYWORDS = (
    ("section", ("entire", "whole", "all")),
    ("component", ("component", "element")),
)

DETAIL_KEYWORDS = ("color", "size", "text", "style")

# Plain CSS colour names accepted as-is after "color"/"background".
CSS_COLOR_NAMES = (
    "black", "white", "gray", "grey", "silver", "pink", "brown", "navy", "teal",
    "maroon", "olive", "lime", "aqua", "cyan", "magenta", "gold", "indigo", "violet",
)

SIZE_UP_WORDS = ("bigger", "larger")
SIZE_DOWN_WORDS = ("smaller",)
SIZE_UP_CLASS, SIZE_UP_FONT = "btn-lg", "1.2em"
SIZE_DOWN_CLASS, SIZE_DOWN_FONT = "btn-sm", "0.9em"
HIGHLIGHT_CLASS = "highlighted"


def as_dict(table) -> dict:
    """Lookup view of an ordered table. Never iterate the result for tie-breaks."""
    return {key: value for key, value in table}
