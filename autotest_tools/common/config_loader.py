"""
================================================================================
Configuration Loader
================================================================================

Settings for the harness come from three layers, first match wins:

    1. Environment variable named after the dotted key
       (ui.timeout_ms -> UI_TIMEOUT_MS, report.dir -> REPORT_DIR)
    2. config/config.yaml
    3. The default passed by the caller

Environment values are strings; they are coerced to the type of the
caller's default, so ``get("ui.headless", True)`` with UI_HEADLESS=false
returns ``False``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

TRUE_VALUES = ("1", "true", "yes", "on")


class ConfigurationError(Exception):
    """Raised for an unreadable config file or an unusable override."""
    pass


def env_name(key: str) -> str:
    """Environment variable that overrides dotted ``key``."""
    return key.upper().replace(".", "_")


def read_yaml(path: Path) -> Dict[str, Any]:
    """
    Parse ``path`` into a mapping.

    A missing file yields an empty mapping so that defaults and the
    environment still apply.

    Raises:
        ConfigurationError: The file is not valid YAML or not a mapping
    """
    if not path.is_file():
        logger.warning(f"Configuration file not found: {path}. Using defaults and environment only.")
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must hold a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded configuration from: {path}")
    return data


def coerce(name: str, raw: str, like: Any) -> Any:
    """Convert the environment string ``raw`` to the type of ``like``."""
    if isinstance(like, bool):
        return raw.strip().lower() in TRUE_VALUES
    if isinstance(like, int):
        try:
            return int(raw)
        except ValueError as e:
            raise ConfigurationError(f"{name}={raw!r} is not an integer") from e
    return raw


class ConfigLoader:
    """
    Process-wide configuration, loaded on first use.

    Usage:
        >>> ConfigLoader().get("ui.timeout_ms", 15000)
        15000

    Call ``ConfigLoader.reset()`` to load a different file (tests do).
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
            instance.values = read_yaml(instance.path)
            cls._instance = instance
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value of dotted ``key``, or ``default`` when no layer defines it.

        Raises:
            ConfigurationError: The environment override cannot be coerced
        """
        name = env_name(key)
        raw = os.environ.get(name)
        if raw is not None:
            return coerce(name, raw, default)

        node: Any = self.values
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded file; the next ConfigLoader() reads it again."""
        cls._instance = None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "env_name",
]
