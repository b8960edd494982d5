"""
================================================================================
Autotest Tools
================================================================================

Shared infrastructure for the practice-form UI automation suites.

Modules:
    - common: Configuration (YAML + environment) and logging utilities
    - report_tools: Run report aggregation and Allure attachment helpers

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools import ReportManager, RunStatus

    init_logger()
    reports = ReportManager()
    reports.create_run("smoke")
    with reports.step("smoke", "Navigation"):
        ...
    reports.complete_run("smoke", RunStatus.PASSED)
    reports.flush()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
