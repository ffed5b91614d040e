# src/editor/dom/locator.py
import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from editor.utils.keyword_tables import SIGNIFICANT_SELECTORS

# Ids the catalog builder synthesizes for significant elements without an id
_SYNTHETIC_ID_RE = re.compile(r'^([a-z]+)-(\d+)$')


def parse_html(html: str) -> BeautifulSoup:
    """Parses a fresh, private tree. Callers never share the returned soup."""
    return BeautifulSoup((html or "").replace('\ufeff', ''), 'html.parser')


def select_significant(soup: BeautifulSoup, kind: str, needle: str) -> List[Tag]:
    """Elements matching one significant selector, in document order."""
    if kind == "tag":
        return soup.find_all(needle)
    return [
        el for el in soup.find_all(class_=True)
        if any(needle in cls for cls in (el.get('class') or []))
    ]


def find_component(soup: BeautifulSoup, component_id: str) -> Optional[Tag]:
    """
    Finds a component by exact id attribute, falling back to a class name match,
    then to a synthesized '<type>-<index>' catalog id.
    """
    if not component_id:
        return None
    target = soup.find(id=component_id)
    if isinstance(target, Tag):
        return target
    target = soup.find(class_=component_id)
    if isinstance(target, Tag):
        return target
    return _find_synthetic(soup, component_id)


def _find_synthetic(soup: BeautifulSoup, component_id: str) -> Optional[Tag]:
    match = _SYNTHETIC_ID_RE.match(component_id)
    if not match:
        return None
    semantic_type, index = match.group(1), int(match.group(2))
    for selector_type, kind, needle in SIGNIFICANT_SELECTORS:
        if selector_type != semantic_type:
            continue
        elements = select_significant(soup, kind, needle)
        # An element with its own id is catalogued under that id instead
        if index < len(elements) and not elements[index].get('id'):
            return elements[index]
    return None


def class_string(tag: Tag) -> str:
    classes = tag.get('class') or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)
