# tests/core/test_config_management.py
import json

import pytest

from sitesmith_shell.core.context.shell_context import ShellContext
from sitesmith_shell.core.handlers.config_handler import handle_config
from sitesmith_shell.core.managers.config_manager import ConfigManager
from sitesmith_shell.core.utils.path_utils import PathUtils

# Een standaard, voorspelbare configuratie voor onze tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "editor": {
        "confidence_threshold": 0.3,
        "keyword_threshold": 0.2,
        "drift_tolerance": 5,
        "source_file": "index.html"
    },
    "shell": {
        "prompt": "SiteSmith>> "
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Een fixture die een geïsoleerde testomgeving opzet voor de ConfigManager:
    - Creëert een tijdelijke package root met een nep 'settings.json'.
    - Monkeypatched PathUtils om naar deze tijdelijke locatie te wijzen.
    - Herlaadt na de test de echte configuratie.
    """
    package_root = tmp_path / "sitesmith_shell"
    package_root.mkdir()
    (package_root / "settings.json").write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    monkeypatch.setattr(PathUtils, 'get_shell_package_root', lambda: package_root)

    # De singleton is al geladen; forceer herladen vanuit ons nep-bestand
    manager = ConfigManager()
    manager.reset()

    yield manager, ShellContext()

    monkeypatch.undo()
    manager.reset()


# --- Tests voor de ConfigManager direct ---

def test_config_manager_is_singleton():
    assert ConfigManager() is ConfigManager()


def test_config_manager_load(config_env):
    manager, _ = config_env
    config = manager.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["editor"]["drift_tolerance"] == 5


def test_config_manager_get_nested(config_env):
    manager, _ = config_env
    assert manager.get_nested("editor.keyword_threshold") == 0.2
    assert manager.get_nested("non.existent.key", "default") == "default"


def test_config_manager_set_nested(config_env):
    """Test het aanpassen van waarden in het geheugen, inclusief type-casting."""
    manager, _ = config_env

    manager.set_nested("debug.level", "INFO")
    assert manager.get_nested("debug.level") == "INFO"

    manager.set_nested("editor.drift_tolerance", "8")
    assert manager.get_nested("editor.drift_tolerance") == 8
    assert isinstance(manager.get_nested("editor.drift_tolerance"), int)

    manager.set_nested("editor.confidence_threshold", "0.45")
    assert manager.get_nested("editor.confidence_threshold") == 0.45


def test_config_manager_refuses_to_overwrite_section(config_env):
    manager, _ = config_env
    assert not manager.set_nested("editor", "oops")
    assert isinstance(manager.get_nested("editor"), dict)


def test_config_manager_reset(config_env):
    manager, _ = config_env
    manager.set_nested("editor.drift_tolerance", "99")
    manager.reset()
    assert manager.get_nested("editor.drift_tolerance") == 5


def test_missing_settings_file_gives_empty_config(tmp_path, monkeypatch):
    monkeypatch.setattr(PathUtils, 'get_shell_package_root', lambda: tmp_path)
    manager = ConfigManager()
    manager.reset()
    try:
        assert manager.get_all() == {}
    finally:
        monkeypatch.undo()
        manager.reset()


# --- Tests voor de 'config' command handler ---

def test_handle_config_list(config_env, capsys):
    _, ctx = config_env
    assert handle_config(["list"], ctx) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["shell"]["prompt"] == "SiteSmith>> "


def test_handle_config_set_rebuilds_pipeline(config_env, capsys):
    """Een gewijzigde drempel moet direct in de edit-pipeline terechtkomen."""
    _, ctx = config_env
    assert handle_config(["set", "editor.confidence_threshold", "0.9"], ctx) == 0
    assert "✅ Config updated: editor.confidence_threshold = 0.9 (type: float)" in capsys.readouterr().out
    assert ctx.controller.parser.confidence_threshold == 0.9


def test_handle_config_reset(config_env, capsys):
    _, ctx = config_env
    handle_config(["set", "editor.drift_tolerance", "0"], ctx)
    assert ctx.controller.validator.drift_tolerance == 0
    assert handle_config(["reset"], ctx) == 0
    assert ctx.controller.validator.drift_tolerance == 5


def test_handle_config_errors(config_env, capsys):
    _, ctx = config_env
    assert handle_config([], ctx) == 1
    assert handle_config(["set", "editor.drift_tolerance"], ctx) == 1
    assert handle_config(["frobnicate"], ctx) == 1
    assert "Unknown command: 'config frobnicate'." in capsys.readouterr().out


def test_editor_values_are_validated(config_env):
    """Drempels buiten hun bereik worden geweigerd; de oude waarde blijft staan."""
    manager, _ = config_env
    assert not manager.set_nested("editor.confidence_threshold", "1.5")
    assert not manager.set_nested("editor.drift_tolerance", "-1")
    assert manager.get_nested("editor.confidence_threshold") == 0.3

    settings = manager.get_editor_settings()
    assert settings.drift_tolerance == 5
    assert settings.source_file == "index.html"


def test_invalid_editor_section_falls_back_to_defaults(config_env):
    manager, _ = config_env
    manager.get_all()["editor"]["keyword_threshold"] = "lots"
    assert manager.get_editor_settings().keyword_threshold == 0.2
