# tests/editor/test_edit_validate.py
import pytest

from editor.model import MALFORMED_DOCUMENT, STRUCTURAL_DRIFT
from editor.services.edit_validate_service import (
    EditValidateService,
    count_elements,
    find_parse_errors,
)


@pytest.fixture
def validator():
    return EditValidateService()


def test_document_validates_against_itself(validator, site_html):
    assert validator.validate(site_html, site_html)


@pytest.mark.parametrize("document", [
    '<section class="hero"><button id="cta-btn">Sub</button></div></section>',
    "<ul><li>one<li>two<li>three</ul>",
    '<main><p>intro</p><div class="',
    "</p>",
    "",
])
def test_loose_document_validates_against_itself(validator, document):
    """Ook slordige HTML is geldig ten opzichte van zichzelf, zoals in een browser."""
    assert validator.validate(document, document)


def test_style_only_edit_is_valid(validator, site_html):
    """Alleen een style-attribuut erbij: het aantal elementen blijft gelijk."""
    modified = site_html.replace('<button id="cta-btn"', '<button id="cta-btn" style="color: red"')
    result = validator.validate_detailed(site_html, modified)
    assert result.valid
    assert result.original_count == result.modified_count


def test_drift_within_tolerance(validator):
    original = "<div></div>"
    modified = "<div>" + "<span></span>" * 5 + "</div>"
    assert validator.validate(original, modified)


def test_drift_beyond_tolerance(validator):
    original = "<div></div>"
    modified = "<div>" + "<span></span>" * 6 + "</div>"
    result = validator.validate_detailed(original, modified)
    assert not result.valid
    assert result.reason == STRUCTURAL_DRIFT
    assert (result.original_count, result.modified_count) == (1, 7)


def test_custom_tolerance():
    assert not EditValidateService(drift_tolerance=0).validate("<p></p>", "<p></p><p></p>")


def test_truncated_markup_is_malformed(validator, site_html):
    result = validator.validate_detailed(site_html, site_html + '<div class="')
    assert not result.valid
    assert result.reason == MALFORMED_DOCUMENT
    assert "modified" in result.message


def test_stray_end_tag_in_original_is_tolerated(validator):
    assert validator.validate("<div></span></div>", "<div></div>")


def test_stray_end_tag_introduced_by_edit_is_malformed(validator):
    """Alleen fouten die de wijziging zelf toevoegt, keuren het document af."""
    original = "<div></span><p>a</p></div>"
    result = validator.validate_detailed(original, original + "</section>")
    assert not result.valid
    assert result.reason == MALFORMED_DOCUMENT
    assert "</section>" in result.message


def test_unclosed_elements_are_tolerated():
    assert find_parse_errors("<div><p>text</div><ul><li>one<li>two</ul>") == []
    assert find_parse_errors('<br><img src="a.png"></br>') == []


def test_script_content_is_not_markup():
    assert find_parse_errors("<script>if (a < b && c > d) {}</script>") == []


def test_count_elements(site_html):
    assert count_elements("<div><p>a</p><br></div>") == 3
    assert count_elements("") == 0
