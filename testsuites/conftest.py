"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and gates live UI scenarios behind --run-ui.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests that need no browser"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Live browser scenarios (run with --run-ui)"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "form: Tests related to the practice form"
    )
    config.addinivalue_line(
        "markers", "locator: Tests related to element resolution"
    )
    config.addinivalue_line(
        "markers", "reporting: Tests related to run reports"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds the domain marker from the directory and skips live UI scenarios
    unless --run-ui was given.
    """
    run_ui = config.getoption("--run-ui", default=False)
    skip_ui = pytest.mark.skip(reason="live UI scenario; use --run-ui or RUN_UI_TESTS=1")

    for item in items:
        if "ui_testing" in str(item.fspath):
            item.add_marker(pytest.mark.ui)
            if not run_ui:
                item.add_marker(skip_ui)

        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Practice Form UI Automation Harness",
        "=" * 60,
        "",
    ]
