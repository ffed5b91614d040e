# src/sitesmith_shell/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from sitesmith_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class EditorSettings(BaseModel):
    """The 'editor' section of settings.json; feeds the edit pipeline thresholds."""
    confidence_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    keyword_threshold: float = Field(default=0.2, ge=0.0, le=1.0)
    drift_tolerance: int = Field(default=5, ge=0)
    source_file: str = "index.html"


class ConfigManager:
    """
    Session configuration, loaded once from the settings.json next to the
    shell package. Changes made with set_nested() live in memory only; reset()
    throws them away.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Looks up a dotted key such as 'editor.drift_tolerance'.
        Missing keys and null values give the default.
        """
        node: Any = self._config
        for part in key_path.split('.'):
            if not isinstance(node, dict):
                return default
            node = node.get(part)
        return default if node is None else node

    def get_editor_settings(self) -> EditorSettings:
        """The validated editor section; invalid or missing values fall back to the defaults."""
        section = self.get_nested("editor", {})
        try:
            return EditorSettings(**section)
        except (ValidationError, TypeError) as e:
            logger.warning("Invalid 'editor' settings, using defaults: %s", e)
            return EditorSettings()

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Stores a value under a dotted key for this session.

        A string value is converted to the type of the value it replaces.
        Whole sections cannot be overwritten, and editor values must pass
        EditorSettings validation.
        """
        *parents, leaf = key_path.split('.')
        section = self._config
        for part in parents:
            section = section.setdefault(part, {})
            if not isinstance(section, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, part)
                return False

        current = section.get(leaf)
        if isinstance(current, dict):
            logger.error("Cannot replace section '%s' with a single value.", key_path)
            return False
        if current is not None:
            value = self._cast_like(current, value, key_path)

        if parents == ["editor"]:
            try:
                EditorSettings(**{**section, leaf: value})
            except ValidationError as e:
                logger.error("Rejected value for '%s': %s", key_path, e.errors()[0]["msg"])
                return False

        section[leaf] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    @staticmethod
    def _cast_like(current: Any, value: Any, key_path: str) -> Any:
        if isinstance(current, bool) and isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        try:
            return type(current)(value)
        except (ValueError, TypeError):
            logger.warning(
                "Could not convert value for '%s' to %s; keeping it as a string.",
                key_path, type(current).__name__
            )
            return value

    def reset(self):
        """Reloads settings.json, dropping every in-memory change."""
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration loaded from %s", config_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}


# Shared by the whole shell.
config_manager = ConfigManager()
