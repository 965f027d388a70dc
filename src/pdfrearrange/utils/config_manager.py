"""
PdfRearrange - Configuration Manager

This module provides centralized JSON-based configuration management.
It handles loading, saving, and upgrading the user settings file.
"""

import copy
import json
import os
from typing import Any, Final

from pdfrearrange.config import (
    CONFIG_DIR,
    DEFAULT_EXPORT_NAME,
    DEFAULT_RENDER_SCALE,
    DEFAULT_RENDER_WORKERS,
)
from pdfrearrange.utils.logger import logger

# Configuration file path
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")

# Default configuration values
DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "version": 1,
    "window": {
        "width": 1100,
        "height": 720,
    },
    "render": {
        "scale": DEFAULT_RENDER_SCALE,
        "workers": DEFAULT_RENDER_WORKERS,
    },
    "export": {
        "file_name": DEFAULT_EXPORT_NAME,
    },
    "paths": {
        "last_directory": "",
    },
}


class ConfigManager:
    """Manages application configuration in JSON format.

    Settings are read once at construction; missing keys are filled in
    from DEFAULT_CONFIG when the stored version is older.
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to the configuration file.
                        Defaults to CONFIG_FILE_PATH.
        """
        self.config_path = config_path or CONFIG_FILE_PATH
        self._config: dict[str, Any] = {}

        os.makedirs(os.path.dirname(self.config_path), exist_ok=True)

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    self._config = json.load(f)
                logger.info("Configuration loaded from JSON")

                if not isinstance(self._config, dict):
                    raise ValueError("settings root must be an object")

                self._upgrade_config()

            except (OSError, ValueError) as e:
                logger.error(f"Error loading config: {e}")
                self._config = self._get_default_config()
        else:
            self._config = self._get_default_config()
            self.save()

    def _get_default_config(self) -> dict[str, Any]:
        """Get a copy of the default configuration.

        Returns:
            Deep copy of default configuration dictionary.
        """
        return copy.deepcopy(DEFAULT_CONFIG)

    def _upgrade_config(self) -> None:
        """Upgrade configuration to latest version if needed."""
        current_version = self._config.get("version", 0)

        if current_version < DEFAULT_CONFIG["version"]:
            self._merge_defaults(self._config, DEFAULT_CONFIG)
            self._config["version"] = DEFAULT_CONFIG["version"]
            logger.info(f"Configuration upgraded to version {DEFAULT_CONFIG['version']}")

    def _merge_defaults(self, config: dict, defaults: dict) -> None:
        """Merge default values into config for missing keys.

        Args:
            config: Current configuration dictionary.
            defaults: Default configuration dictionary.
        """
        for key, value in defaults.items():
            if key not in config:
                config[key] = copy.deepcopy(value)
            elif isinstance(value, dict) and isinstance(config.get(key), dict):
                self._merge_defaults(config[key], value)

    def save(self) -> bool:
        """Save configuration to file.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
            logger.debug("Configuration saved to JSON")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value (e.g., "render.scale")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any, save_immediately: bool = True) -> None:
        """Set a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value
            value: Value to set
            save_immediately: Whether to save to file immediately
        """
        keys = key_path.split(".")
        config = self._config

        for key in keys[:-1]:
            if not isinstance(config.get(key), dict):
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

        if save_immediately:
            self.save()

    @property
    def render_scale(self) -> float:
        """Render scale, falling back to the default for invalid values."""
        scale = self.get("render.scale", DEFAULT_RENDER_SCALE)
        if isinstance(scale, bool) or not isinstance(scale, (int, float)) or scale <= 0:
            logger.warning(f"Invalid render scale {scale!r}, using {DEFAULT_RENDER_SCALE}")
            return DEFAULT_RENDER_SCALE
        return float(scale)

    @property
    def render_workers(self) -> int:
        workers = self.get("render.workers", DEFAULT_RENDER_WORKERS)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            return DEFAULT_RENDER_WORKERS
        return workers

    @property
    def export_file_name(self) -> str:
        name = self.get("export.file_name", DEFAULT_EXPORT_NAME)
        if not isinstance(name, str) or not name.strip():
            return DEFAULT_EXPORT_NAME
        return name if name.lower().endswith(".pdf") else f"{name}.pdf"

    def get_window_size(self) -> tuple[int, int]:
        """Get the stored window size as (width, height)."""
        width = self.get("window.width", DEFAULT_CONFIG["window"]["width"])
        height = self.get("window.height", DEFAULT_CONFIG["window"]["height"])
        return int(width), int(height)


# Singleton instance for global access
_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance.

    Returns:
        The singleton ConfigManager instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
