# tests/core/test_completion.py
import pytest
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory

from sitesmith_shell.core.context.shell_context import ShellContext
from sitesmith_shell.core.handlers.site_handler import handle_site
from sitesmith_shell.core.managers.completion_manager import CompletionManager

HIERARCHY = {
    "site": {"load": None, "save": None, "status": None, "show": None},
    "catalog": None,
    "preview": None,
}


@pytest.fixture
def manager(site_file):
    ctx = ShellContext()
    handle_site(["load", str(site_file[0])], ctx)
    history = InMemoryHistory()
    history.append_string("catalog")
    history.append_string("site status")
    history.append_string("catalog")
    return CompletionManager(ctx, history, HIERARCHY)


def _texts(manager, text):
    return [c.text for c in manager.generate_completions(Document(text, len(text)))]


def test_main_command_completion(manager):
    assert _texts(manager, "") == ["catalog", "preview", "site"]
    assert _texts(manager, "si") == ["site"]


def test_subcommand_completion(manager):
    assert _texts(manager, "site ") == ["load", "save", "show", "status"]
    assert _texts(manager, "site s") == ["save", "show", "status"]
    assert _texts(manager, "catalog ") == []


def test_component_id_completion(manager):
    """'preview' vult component-ids van de geladen site aan."""
    assert _texts(manager, "preview c") == ["cta-btn"]
    assert "navigation-0" in _texts(manager, "preview ")


def test_history_completion(manager):
    assert _texts(manager, "!h") == ["catalog", "site status"]
