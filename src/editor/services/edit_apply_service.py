# src/editor/services/edit_apply_service.py
import logging
from typing import Dict, List, Optional

from bs4 import Tag

from editor.dom.locator import parse_html, find_component
from editor.model import EditIntent, EditResult, ELEMENT_NOT_FOUND

logger = logging.getLogger(__name__)

# Elements whose visible content lives in the value attribute
VALUE_ELEMENTS = {"input", "textarea"}


def parse_style(style: str) -> Dict[str, str]:
    """Parses an inline style attribute into an ordered property map."""
    props: Dict[str, str] = {}
    for declaration in (style or "").split(";"):
        if ":" not in declaration:
            continue
        name, value = declaration.split(":", 1)
        name = name.strip().lower()
        if name:
            props[name] = value.strip()
    return props


def format_style(props: Dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in props.items())


class EditApplyService:
    """
    Applies a parsed EditIntent to one component of a document.

    Every call works on its own parsed copy; the caller's HTML string is never
    modified. Splicing the result back into the page is a separate, explicit step.
    """

    def apply(self, intent: EditIntent, html: str) -> EditResult:
        """
        Applies style, class, content and attribute updates to the target.

        Returns:
            EditResult: the serialized element and a comma-joined change summary,
                        or a failure naming the missing component.
        """
        try:
            soup = parse_html(html)
            target = find_component(soup, intent.target_component_id)

            if target is None:
                logger.warning("Edit target '%s' not found in document.", intent.target_component_id)
                return EditResult(
                    success=False,
                    reason=ELEMENT_NOT_FOUND,
                    error=f'Component with ID "{intent.target_component_id}" not found',
                )

            changes = self._apply_updates(target, intent)
            return EditResult(
                success=True,
                modified_fragment=str(target),
                change_summary=", ".join(changes),
            )
        except Exception as e:
            logger.error("Failed to apply edit to '%s': %s", intent.target_component_id, e, exc_info=True)
            return EditResult(success=False, error=f"Failed to apply edit: {e}")

    @staticmethod
    def _apply_updates(target: Tag, intent: EditIntent) -> List[str]:
        updates = intent.updates
        changes: List[str] = []

        # --- Inline style ---
        if updates.style:
            props = parse_style(target.get('style', ''))
            for prop, value in updates.style.items():
                props[prop.lower()] = value
                changes.append(f"{prop}: {value}")
            target['style'] = format_style(props)

        # --- Classes ---
        classes = list(target.get('class') or [])
        if updates.add_class:
            if updates.add_class not in classes:
                classes.append(updates.add_class)
            changes.append(f"Added class: {updates.add_class}")
        if updates.remove_class:
            classes = [c for c in classes if c != updates.remove_class]
            changes.append(f"Removed class: {updates.remove_class}")
        if updates.add_class or updates.remove_class:
            if classes:
                target['class'] = classes
            elif target.has_attr('class'):
                del target['class']

        # --- Content ---
        if updates.content is not None:
            if target.name in VALUE_ELEMENTS:
                target['value'] = updates.content
            else:
                target.string = updates.content
            changes.append(f"Content updated to: {updates.content}")

        # --- Attributes ---
        for attr, value in updates.attributes.items():
            target[attr] = value
            changes.append(f"{attr}: {value}")

        return changes

    def splice_into_document(self, html: str, fragment: str, component_id: str) -> str:
        """
        Replaces the component in the full document with the given fragment,
        keeping its position among its siblings. Returns the new document.

        The document is returned unchanged when the component or the fragment
        cannot be resolved.
        """
        soup = parse_html(html)
        target = find_component(soup, component_id)
        if target is None:
            logger.warning("Cannot splice: component '%s' not found.", component_id)
            return html

        replacement = next((node for node in parse_html(fragment).contents if isinstance(node, Tag)), None)
        if replacement is None:
            logger.warning("Cannot splice: fragment for '%s' contains no element.", component_id)
            return html

        target.replace_with(replacement)
        return str(soup)

    @staticmethod
    def extract_component(html: str, component_id: str) -> Optional[str]:
        """Returns the serialized component, or None when it does not exist."""
        target = find_component(parse_html(html), component_id)
        return str(target) if target is not None else None


edit_apply_service = EditApplyService()
