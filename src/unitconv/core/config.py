#!/usr/bin/env python3
"""Configuration loader that reads from config.json"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "conversion": {
        "significant_digits": 3,
        "skip_tags": ["script", "style", "textarea", "template"],
        "range_separator": "-",
    },
    "html": {"parser": "html.parser", "display_mode": None},
    "logging": {"level": "INFO"},
}


class ConfigurationError(Exception):
    """Raised when there's a configuration issue that prevents safe operation."""
    pass


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Load configuration from config.json, falling back to built-in defaults"""

    def __init__(self, config_path: str | Path | None = None) -> None:
        if config_path is None:
            config_path = self._find_config_file()

        self.config_file = str(config_path) if config_path else None

        if config_path is None:
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self.project_dir = str(Path.cwd())
            return

        try:
            with open(config_path, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e

        # Remove single-line comments (// ...) for JSONC support
        content = re.sub(r"^\s*//.*$", "", content, flags=re.MULTILINE)

        try:
            loaded = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a JSON object")

        self._config = _merge(DEFAULT_CONFIG, loaded)
        self.project_dir = str(Path(config_path).parent)

    @classmethod
    def from_dict(cls, overrides: dict[str, Any] | None = None) -> ConfigLoader:
        """Build a loader from in-memory settings layered over the defaults"""
        loader = cls.__new__(cls)
        loader.config_file = None
        loader.project_dir = str(Path.cwd())
        loader._config = _merge(DEFAULT_CONFIG, overrides or {})
        return loader

    def _find_config_file(self) -> Path | None:
        """Find config file: env override, then working directory"""
        env_path = os.environ.get("UNITCONV_CONFIG")
        if env_path:
            return Path(env_path)

        for filename in ["config.jsonc", "config.json"]:
            config_path = Path.cwd() / filename
            if config_path.exists():
                return config_path

        return None

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a value using dot notation (e.g., 'conversion.significant_digits')"""
        value = self._config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set a value using dot notation (e.g., 'html.parser')"""
        keys = key_path.split(".")
        target = self._config
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    def __getitem__(self, key: str) -> Any:
        return self._config[key]

    @property
    def significant_digits(self) -> int:
        value = self.get("conversion.significant_digits", 3)
        try:
            digits = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"conversion.significant_digits must be an integer, got {value!r}") from e
        if digits < 1:
            raise ConfigurationError(f"conversion.significant_digits must be positive, got {digits}")
        return digits

    @property
    def skip_tags(self) -> tuple[str, ...]:
        return tuple(str(tag).lower() for tag in self.get("conversion.skip_tags", []))

    @property
    def range_separator(self) -> str:
        return str(self.get("conversion.range_separator", "-"))

    @property
    def html_parser(self) -> str:
        return str(self.get("html.parser", "html.parser"))

    @property
    def display_mode(self) -> str | None:
        value = self.get("html.display_mode")
        return str(value) if value else None

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()

    def save(self, path: str | Path | None = None) -> None:
        """Write the current configuration back to disk"""
        target = path or self.config_file
        if target is None:
            raise ConfigurationError("No config file path to save to")
        with open(target, "w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=2)


_config_loader: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Get the global config loader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def reset_config() -> None:
    """Drop the cached global config so the next get_config() reloads it"""
    global _config_loader
    _config_loader = None


# ========================= CENTRALIZED LOGGING SETUP =========================


def setup_logging(module_name: str, log_level: str | None = None) -> logging.LoggerAdapter:
    """
    Get a structured logger for a unitconv module.

    Args:
        module_name: Name of the module (usually __name__)
        log_level: Logging level override (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger adapter
    """
    from .logging import setup_structured_logging

    return setup_structured_logging(name=module_name, log_level=log_level)
