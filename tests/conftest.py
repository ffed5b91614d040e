# tests/conftest.py
import pytest

SITE_CSS = """
:root {
  --primary-color: #e62117;
  --secondary-color: #333333;
  --font-family: Roboto, sans-serif;
  --spacing-md: 24px;
}
.hero { padding: var(--spacing-md); }
"""

SITE_HTML = """<!DOCTYPE html>
<html>
<head><title>My Channel</title><style>:root { --primary-color: #e62117; }</style></head>
<body>
<header id="main-header" class="site-header"><nav class="navbar"><a href="#videos">Videos</a></nav></header>
<section class="hero"><h1 id="hero-title">My Channel</h1><button id="cta-btn" class="btn subscribe">Subscribe</button></section>
<div class="video-gallery"><div class="video-card">First video</div></div>
<footer><p>© 2024 My Channel</p></footer>
</body>
</html>
"""

# Catalog ids of SITE_HTML in builder order
SITE_COMPONENT_IDS = [
    "main-header", "hero-title", "cta-btn", "hero-0", "navigation-0", "footer-0", "video-0",
]


@pytest.fixture
def site_html():
    return SITE_HTML


@pytest.fixture
def site_css():
    return SITE_CSS


@pytest.fixture
def site_file(tmp_path):
    """Een gegenereerde site als losse HTML- en CSS-bestanden."""
    html_file = tmp_path / "channel.html"
    html_file.write_text(SITE_HTML, encoding="utf-8")
    css_file = tmp_path / "channel.css"
    css_file.write_text(SITE_CSS, encoding="utf-8")
    return html_file, css_file


@pytest.fixture
def site_component_ids():
    return list(SITE_COMPONENT_IDS)
