# src/editor/services/edit_validate_service.py
import logging
from collections import Counter
from html.parser import HTMLParser
from typing import List

from editor.dom.locator import parse_html
from editor.model import ValidationResult, MALFORMED_DOCUMENT, STRUCTURAL_DRIFT

logger = logging.getLogger(__name__)

DRIFT_TOLERANCE = 5

VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link",
    "meta", "param", "source", "track", "wbr",
}


class _StructureChecker(HTMLParser):
    """
    Tag-balance scan used to detect parse errors.

    Unclosed elements are tolerated (HTML closes them implicitly); stray end
    tags and markup cut off at the end of input are errors.
    """

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.stack: List[str] = []
        self.errors: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag not in VOID_ELEMENTS:
            self.stack.append(tag)

    def handle_startendtag(self, tag, attrs):
        pass

    def handle_endtag(self, tag):
        if tag in VOID_ELEMENTS:
            return
        if tag not in self.stack:
            self.errors.append(f"Unexpected end tag </{tag}>")
            return
        # Implicitly close everything opened after the matching element
        while self.stack:
            if self.stack.pop() == tag:
                break

    def check(self, html: str) -> List[str]:
        self.feed(html)
        leftover = self.rawdata[self.rawdata.find("<"):] if "<" in self.rawdata else ""
        if leftover.strip():
            self.errors.append(f"Unterminated markup at end of document: {leftover[:40]!r}")
        self.close()
        return self.errors


def find_parse_errors(html: str) -> List[str]:
    if not isinstance(html, str):
        return ["Document is not a string"]
    return _StructureChecker().check(html)


def count_elements(html: str) -> int:
    return len(parse_html(html).find_all(True))


class EditValidateService:
    """
    Coarse structural sanity check between a document and its edited version.

    Advisory only: the caller decides whether to keep or roll back.
    """

    def __init__(self, drift_tolerance: int = DRIFT_TOLERANCE):
        self.drift_tolerance = drift_tolerance

    def validate(self, original: str, modified: str) -> bool:
        return self.validate_detailed(original, modified).valid

    def validate_detailed(self, original: str, modified: str) -> ValidationResult:
        # Only errors the edit introduced count; a loose original stays editable
        introduced = Counter(find_parse_errors(modified)) - Counter(find_parse_errors(original))
        if introduced:
            error = next(iter(introduced))
            logger.warning("Validation failed: edit introduced a parse error: %s", error)
            return ValidationResult(
                valid=False, reason=MALFORMED_DOCUMENT,
                message=f"The modified document could not be parsed: {error}",
            )

        original_count = count_elements(original)
        modified_count = count_elements(modified)
        delta = abs(original_count - modified_count)

        if delta > self.drift_tolerance:
            logger.warning(
                "Validation failed: element count changed from %d to %d.", original_count, modified_count
            )
            return ValidationResult(
                valid=False, reason=STRUCTURAL_DRIFT,
                message=(
                    f"Element count changed by {delta} (from {original_count} to {modified_count}); "
                    f"at most {self.drift_tolerance} is allowed."
                ),
                original_count=original_count, modified_count=modified_count,
            )

        return ValidationResult(valid=True, original_count=original_count, modified_count=modified_count)


edit_validate_service = EditValidateService()
