"""
Repository-level pytest configuration.

Why this exists:
  - Register the command line options shared by every suite
  - Map UI options onto the configuration environment (UI_BROWSER, UI_HEADLESS)
  - Initialize loguru once per session

Live UI scenarios talk to a real website and need a browser binary, so they
only run with ``--run-ui`` (or RUN_UI_TESTS=1).
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from autotest_tools.common import init_logger

pytest_plugins = ["pytester"]


def pytest_addoption(parser):
    group = parser.getgroup("ui", "UI scenario options")
    group.addoption(
        "--run-ui",
        action="store_true",
        default=os.getenv("RUN_UI_TESTS", "").lower() in ("1", "true", "yes"),
        help="Run live browser scenarios (default: skipped)",
    )
    group.addoption(
        "--ui-browser",
        choices=["chromium", "firefox", "webkit"],
        default=None,
        help="Browser for UI scenarios (overrides ui.browser)",
    )
    group.addoption(
        "--ui-headed",
        action="store_true",
        default=False,
        help="Run the browser in headed mode (overrides ui.headless)",
    )


def pytest_configure(config):
    browser = config.getoption("--ui-browser")
    if browser:
        os.environ["UI_BROWSER"] = browser
    if config.getoption("--ui-headed"):
        os.environ["UI_HEADLESS"] = "false"

    init_logger()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
