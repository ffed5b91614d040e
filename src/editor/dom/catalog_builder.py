# src/editor/dom/catalog_builder.py
import logging
from typing import Dict, List

from bs4 import Tag

from editor.dom.locator import parse_html, class_string, select_significant
from editor.model import ComponentCatalogEntry
from editor.utils.keyword_tables import SIGNIFICANT_SELECTORS, TYPE_INFERENCE_KEYWORDS

logger = logging.getLogger(__name__)


class ComponentCatalogBuilder:
    """
    Builds the component catalog of a generated page: a mapping from component
    identifier to tag, classes, inferred semantic type and originating file.

    The catalog is a disposable view of the document. Callers must rebuild it
    after every committed document change; nothing here detects staleness.
    """

    def build_catalog(self, html: str, source_file: str = "index.html") -> List[ComponentCatalogEntry]:
        """
        Parses the HTML and returns catalog entries in insertion order.

        Args:
            html (str): The full HTML document.
            source_file (str): The project file the document came from.

        Returns:
            List[ComponentCatalogEntry]: Explicit-id components first, then the
                                         structurally significant ones.
        """
        if not html or not html.strip():
            return []

        soup = parse_html(html)
        catalog: Dict[str, ComponentCatalogEntry] = {}

        # --- Pass 1: elements with an explicit id ---
        for element in soup.find_all(id=True):
            component_id = str(element.get('id')).strip()
            if not component_id or component_id in catalog:
                continue
            catalog[component_id] = self._make_entry(
                element, component_id, self.infer_semantic_type(element), source_file
            )

        # --- Pass 2: structurally significant elements ---
        for semantic_type, kind, needle in SIGNIFICANT_SELECTORS:
            for index, element in enumerate(select_significant(soup, kind, needle)):
                component_id = element.get('id') or f"{semantic_type}-{index}"
                if component_id in catalog:
                    continue
                catalog[component_id] = self._make_entry(element, component_id, semantic_type, source_file)

        logger.debug("Built component catalog with %d entries.", len(catalog))
        return list(catalog.values())

    @staticmethod
    def infer_semantic_type(element: Tag) -> str:
        """
        Priority-ordered keyword match over tag name, id and class string.
        First match wins; anything unmatched is plain content.
        """
        tag_name = (element.name or "").lower()
        element_id = str(element.get('id') or "").lower()
        classes = class_string(element).lower()

        for semantic_type, keywords in TYPE_INFERENCE_KEYWORDS:
            for keyword in keywords:
                if tag_name == keyword or keyword in element_id or keyword in classes:
                    return semantic_type
        return "content"

    @staticmethod
    def _make_entry(element: Tag, component_id: str, semantic_type: str, source_file: str) -> ComponentCatalogEntry:
        classes = list(element.get('class') or [])
        if element.get('id'):
            hint = f"#{element.get('id')}"
        elif classes:
            hint = element.name + "".join(f".{c}" for c in classes)
        else:
            hint = element.name

        return ComponentCatalogEntry(
            component_id=component_id,
            semantic_type=semantic_type,
            source_file=source_file,
            tag=element.name,
            css_classes=classes,
            dom_selector_hint=hint,
        )


catalog_builder = ComponentCatalogBuilder()
