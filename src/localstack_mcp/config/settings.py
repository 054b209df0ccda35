# config/settings.py
"""
Project Settings - Configuration Manager

Two layers:
- Built-in defaults (DEFAULT_SETTINGS below)
- User overrides from <conf-dir>/settings.yaml (see config/directory.py)

The LOCALSTACK_ENDPOINT environment variable overrides localstack.endpoint,
matching the variable emitted by generate_network_config.

Usage:
    from localstack_mcp.config.settings import get_setting
    endpoint = get_setting("localstack.endpoint")
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Optional

import yaml

from .directory import get_conf_dir

DEFAULT_SETTINGS: dict[str, Any] = {
    "localstack": {
        "endpoint": "http://localhost:4566",
        "connect_timeout": 5.0,
        "request_timeout": 30.0,
    },
    "state": {
        "large_export_threshold": 100,
        "default_services": ["s3", "dynamodb", "sqs", "sns", "lambda"],
    },
    "logging": {
        "level": "INFO",
    },
}


class Settings:
    """
    Settings singleton.

    Usage:
        settings = Settings()
        timeout = settings.get("localstack.connect_timeout")
    """

    _instance: Optional["Settings"] = None
    _instance_lock = threading.RLock()
    _loaded: bool = False

    def __new__(cls) -> "Settings":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._data = {}
        return cls._instance

    def _ensure_loaded(self) -> None:
        """Ensure settings are loaded, thread-safe with double-check locking."""
        if not self._loaded:
            with self._instance_lock:
                if not self._loaded:
                    self._load()
                    self._loaded = True

    def _load(self) -> None:
        user_config: dict[str, Any] = {}
        settings_path = get_conf_dir() / "settings.yaml"
        if settings_path.exists():
            user_config = self._read_yaml(settings_path)

        data = self._deep_merge(DEFAULT_SETTINGS, user_config)

        env_endpoint = os.environ.get("LOCALSTACK_ENDPOINT")
        if env_endpoint:
            data = self._deep_merge(data, {"localstack": {"endpoint": env_endpoint}})

        self._data = data

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        """Read a YAML mapping; an unreadable or non-mapping file counts as empty."""
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError):
            return {}
        return loaded if isinstance(loaded, dict) else {}

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """
        Recursive deep merge of two dictionaries.
        Override values replace base values.
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value using dot notation.

        Args:
            key: Dot-separated path (e.g., "localstack.endpoint")
            default: Default value if key not found
        """
        self._ensure_loaded()

        value: Any = self._data
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_section(self, section: str) -> dict[str, Any]:
        self._ensure_loaded()
        return self._data.get(section, {})

    def reload(self) -> None:
        """Force reload settings from YAML file."""
        with self._instance_lock:
            self._loaded = False
            self._ensure_loaded()


def get_settings() -> Settings:
    return Settings()


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value by dot-separated key."""
    return Settings().get(key, default)


__all__ = ["DEFAULT_SETTINGS", "Settings", "get_settings", "get_setting"]
