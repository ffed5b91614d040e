# tests/editor/test_token_extract.py
from editor.model import DesignTokenSet
from editor.services.token_extract_service import TokenExtractService


def test_custom_properties(site_css):
    tokens = TokenExtractService().extract_tokens(site_css)
    assert tokens.primary_color == "#e62117"
    assert tokens.secondary_color == "#333333"
    assert tokens.font_family == "Roboto, sans-serif"
    assert tokens.spacing == "24px"
    # Niet aanwezig: standaardwaarde blijft staan
    assert tokens.border_radius == "4px"


def test_plain_color_fallback():
    """Zonder custom properties wordt de eerste 'color:' de primaire kleur."""
    css = "body { background-color: #fff; } h1 { color: #123456; } p { color: #000; }"
    tokens = TokenExtractService().extract_tokens(css)
    assert tokens.primary_color == "#123456"


def test_plain_color_ignored_when_custom_properties_exist():
    css = ":root { --spacing: 8px; } h1 { color: blue; }"
    tokens = TokenExtractService().extract_tokens(css)
    assert tokens.spacing == "8px"
    assert tokens.primary_color == "#ff0000"


def test_no_signal_returns_defaults():
    assert TokenExtractService().extract_tokens("") == DesignTokenSet()
    assert TokenExtractService().extract_tokens(None) == DesignTokenSet()


def test_tokens_from_inline_style(site_html):
    tokens = TokenExtractService().extract_tokens_from_html(site_html)
    assert tokens.primary_color == "#e62117"


def test_color_map_resolves_red_to_primary():
    tokens = DesignTokenSet(primary_color="#e62117")
    assert tokens.resolve_color("red") == "#e62117"
    assert tokens.resolve_color("Blue") == "#0066cc"
    assert tokens.resolve_color("#abcdef") == "#abcdef"
