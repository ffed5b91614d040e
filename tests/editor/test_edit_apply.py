# tests/editor/test_edit_apply.py
import pytest
from bs4 import BeautifulSoup

from editor.model import EditIntent, EditUpdates, ELEMENT_NOT_FOUND
from editor.services.edit_apply_service import EditApplyService, format_style, parse_style


@pytest.fixture
def applier():
    return EditApplyService()


def _intent(component_id, **updates):
    return EditIntent(target_component_id=component_id, updates=EditUpdates(**updates))


def _tag(fragment):
    return BeautifulSoup(fragment, "html.parser").find(True)


def test_missing_component(applier):
    """Een onbekende id levert een expliciete 'not found'-fout op."""
    html = "<html><body><header id='main-header'></header></body></html>"
    result = applier.apply(_intent("footer-1", add_class="highlighted"), html)
    assert not result.success
    assert result.reason == ELEMENT_NOT_FOUND
    assert "footer-1" in result.error
    assert "not found" in result.error


def test_style_and_class_update(applier, site_html):
    intent = _intent("cta-btn", add_class="btn-lg", style={"color": "#e62117", "font-size": "1.2em"})
    result = applier.apply(intent, site_html)

    assert result.success
    button = _tag(result.modified_fragment)
    assert button["id"] == "cta-btn"
    assert button["class"] == ["btn", "subscribe", "btn-lg"]
    assert parse_style(button["style"]) == {"color": "#e62117", "font-size": "1.2em"}
    assert result.change_summary == "color: #e62117, font-size: 1.2em, Added class: btn-lg"


def test_existing_inline_style_is_merged(applier):
    html = '<button id="b" style="padding: 4px; color: blue">Go</button>'
    result = applier.apply(_intent("b", style={"color": "red"}), html)
    assert _tag(result.modified_fragment)["style"] == "padding: 4px; color: red"


def test_apply_twice_is_idempotent(applier, site_html):
    """Dezelfde wijziging twee keer toepassen geeft hetzelfde fragment."""
    intent = _intent("cta-btn", add_class="btn-lg", style={"font-size": "1.2em"})
    first = applier.apply(intent, site_html)
    document = applier.splice_into_document(site_html, first.modified_fragment, "cta-btn")
    second = applier.apply(intent, document)
    assert second.modified_fragment == first.modified_fragment


def test_remove_last_class_drops_attribute(applier):
    result = applier.apply(_intent("x", remove_class="highlighted"), '<nav id="x" class="highlighted"></nav>')
    assert not _tag(result.modified_fragment).has_attr("class")
    assert result.change_summary == "Removed class: highlighted"


def test_content_update(applier, site_html):
    result = applier.apply(_intent("hero-title", content="Welcome to My Channel"), site_html)
    assert _tag(result.modified_fragment).get_text() == "Welcome to My Channel"
    assert result.change_summary == "Content updated to: Welcome to My Channel"


def test_content_update_on_input_sets_value(applier):
    result = applier.apply(_intent("q", content="search videos"), '<input id="q" type="text">')
    assert _tag(result.modified_fragment)["value"] == "search videos"


def test_attribute_update(applier):
    result = applier.apply(_intent("link", attributes={"href": "https://youtube.com"}), '<a id="link" href="#">x</a>')
    assert _tag(result.modified_fragment)["href"] == "https://youtube.com"
    assert result.change_summary == "href: https://youtube.com"


def test_synthetic_id_is_editable(applier, site_html):
    result = applier.apply(_intent("navigation-0", add_class="highlighted"), site_html)
    assert result.success
    nav = _tag(result.modified_fragment)
    assert nav.name == "nav"
    assert nav["class"] == ["navbar", "highlighted"]


def test_splice_keeps_rest_of_document(applier, site_html):
    result = applier.apply(_intent("cta-btn", add_class="btn-lg"), site_html)
    document = applier.splice_into_document(site_html, result.modified_fragment, "cta-btn")

    original = BeautifulSoup(site_html, "html.parser")
    modified = BeautifulSoup(document, "html.parser")
    assert "btn-lg" in modified.find(id="cta-btn")["class"]
    assert str(modified.find(id="hero-title")) == str(original.find(id="hero-title"))
    assert str(modified.find("footer")) == str(original.find("footer"))
    assert len(modified.find_all(True)) == len(original.find_all(True))


def test_splice_unknown_component_returns_document(applier, site_html):
    assert applier.splice_into_document(site_html, "<p>x</p>", "nope") == site_html


def test_extract_component(applier, site_html):
    assert applier.extract_component(site_html, "hero-title") == '<h1 id="hero-title">My Channel</h1>'
    assert applier.extract_component(site_html, "nope") is None


def test_style_helpers():
    props = parse_style("color: red; ; FONT-SIZE:2em;")
    assert props == {"color": "red", "font-size": "2em"}
    assert format_style(props) == "color: red; font-size: 2em"
