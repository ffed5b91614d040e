# src/editor/services/token_extract_service.py
import logging
import re

from editor.model import DesignTokenSet

logger = logging.getLogger(__name__)

_CUSTOM_PROP_RE = re.compile(r'--([\w-]+)\s*:\s*([^;}]+)')
# A plain 'color:' declaration, not background-color / border-color / --x-color
_PLAIN_COLOR_RE = re.compile(r'(?<![\w-])color\s*:\s*([^;}]+)', re.IGNORECASE)
_STYLE_BLOCK_RE = re.compile(r'<style[^>]*>([\s\S]*?)</style>', re.IGNORECASE)

# Custom property name fragment -> DesignTokenSet field
_TOKEN_SUFFIXES = (
    ("primary-color", "primary_color"),
    ("secondary-color", "secondary_color"),
    ("font-family", "font_family"),
    ("font-size", "font_size_base"),
    ("spacing", "spacing"),
    ("border-radius", "border_radius"),
)


class TokenExtractService:
    """Scans stylesheets for recognizable design tokens."""

    def extract_tokens(self, css: str) -> DesignTokenSet:
        """
        Returns the token set found in the CSS, starting from the defaults.
        Never fails; missing signal keeps the defaults.
        """
        tokens = DesignTokenSet()
        css = css or ""

        custom_props = _CUSTOM_PROP_RE.findall(css)
        for name, value in custom_props:
            for suffix, field_name in _TOKEN_SUFFIXES:
                if suffix in name.lower():
                    setattr(tokens, field_name, value.strip())

        if not custom_props:
            match = _PLAIN_COLOR_RE.search(css)
            if match:
                tokens.primary_color = match.group(1).strip()

        logger.debug("Extracted design tokens: %s", tokens.model_dump())
        return tokens

    def extract_tokens_from_html(self, html: str) -> DesignTokenSet:
        """Extracts tokens from the inline <style> blocks of a document."""
        css = "\n".join(_STYLE_BLOCK_RE.findall(html or ""))
        return self.extract_tokens(css)


token_extract_service = TokenExtractService()
