"""
================================================================================
Autotest Tools Common Utilities
================================================================================

This module provides shared utilities, configuration access, and logging
setup for the harness and the test suites.

Exports:
    - ConfigLoader: Singleton configuration manager (YAML + env overrides)
    - get_config: Convenience function to get configuration values
    - init_logger: Function to initialize loguru logger with standard settings
    - ensure_directory: Create a directory if missing
    - safe_filename: Make a string usable as part of a file name

Usage:
    from autotest_tools.common import get_config, init_logger

    init_logger()
    timeout_ms = get_config("ui.timeout_ms", 15000)

================================================================================
"""

import re
import sys
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger

from .config_loader import ConfigLoader, ConfigurationError


# ============================================================
# Configuration Access
# ============================================================

def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Args:
        key: Configuration key using dot notation
        default: Default value if not found

    Returns:
        Configuration value or default

    Example:
        base_url = get_config("ui.base_url", "https://app.cloudqa.io")
    """
    return ConfigLoader().get(key, default)


# ============================================================
# Logging Setup
# ============================================================

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_ready = False


def init_logger(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Route loguru output to stderr and, when ``logging.file`` is set, to a
    rotating file as well. Only the first call has an effect.

    Args:
        level: Minimum level for every sink (config logging.level)
        log_file: File sink path (config logging.file)
    """
    global _logger_ready

    if _logger_ready:
        return

    level = (level or get_config("logging.level", "INFO")).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=True)

    log_file = log_file or get_config("logging.file")
    if log_file:
        log_path = Path(log_file)
        ensure_directory(log_path.parent)
        logger.add(
            log_path,
            level=level,
            format=LOG_FORMAT,
            colorize=False,
            encoding="utf-8",
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
        )

    _logger_ready = True
    logger.debug(f"Logging at {level}" + (f", also to {log_file}" if log_file else ""))


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path as a Path (for chaining)
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(value: str) -> str:
    """
    Replace characters that are not portable in file names.

    Parametrized pytest names such as ``test_x[John-123]`` become
    ``test_x_John-123``; separators are never leading or trailing.
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", value).strip("_") or "unnamed"


# Export public API
__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
    "init_logger",
    "ensure_directory",
    "safe_filename",
]
