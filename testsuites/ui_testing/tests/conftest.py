"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for live practice-form scenarios.

Key Features:
- One ReportManager per session: created at session start, flushed at the end
- One report run per test (ScenarioRun), completed in the cleanup path with
  the pytest outcome
- One browser per test, launch and cleanup timed as report steps
- Error screenshot, message and stack trace recorded when a test fails

Teardown order is page -> browser -> scenario, so browser cleanup is still
recorded in the run before it is completed.

================================================================================
"""

import os
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
from loguru import logger
from playwright.async_api import Page

from autotest_tools.common import get_config
from autotest_tools.report_tools import ReportManager, Severity
from testsuites.ui_testing.framework.browser_manager import BrowserManager, DriverUnavailableError
from testsuites.ui_testing.framework.scenario import (
    ScenarioRun,
    final_status,
    record_failure,
    remember_report,
)
from testsuites.ui_testing.pages.practice_form_page import PracticeFormPage


# ================================================================================
# Outcome Tracking
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Keep each phase's report on the item for fixture teardown."""
    outcome = yield
    remember_report(item, outcome.get_result(), call)


# ================================================================================
# Report Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def report_manager() -> Generator[ReportManager, None, None]:
    """
    Session-scoped report manager.

    Initialized once before the first scenario and flushed once after the last.
    """
    report_dir = Path(get_config("report.dir", "TestReports"))
    worker = os.environ.get("PYTEST_XDIST_WORKER")
    if worker:
        # one report per xdist worker
        report_dir = report_dir / worker
    reports = ReportManager(report_dir=report_dir)
    logger.info("Report manager initialized with performance tracking.")
    yield reports
    reports.flush()
    logger.info("Report finalized and saved to disk with performance metrics.")


@pytest.fixture
def scenario(request, report_manager: ReportManager) -> Generator[ScenarioRun, None, None]:
    """Report run for the current test, completed with the test outcome."""
    description = (request.node.function.__doc__ or "").strip()
    run = ScenarioRun(report_manager, request.node.name, description)
    run.log("Setting up test...", "Setup")

    yield run

    run.log("Teardown finished.", "Teardown")
    run.complete(final_status(request.node))


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager(scenario: ScenarioRun) -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager.

    Each scenario owns its browser; a launch failure aborts the scenario
    before any step runs.
    """
    manager = BrowserManager()
    scenario.log(f"Launching {manager.browser_type}...", "Browser")
    try:
        with scenario.step("Browser Launch"):
            await manager.start()
    except DriverUnavailableError as e:
        scenario.log(f"Setup failed: {e}", "Setup Error", Severity.FATAL)
        raise
    scenario.log("Browser launched.", "Browser", Severity.PASS)

    yield manager

    try:
        with scenario.step("Browser Cleanup"):
            await manager.close()
        scenario.log("Browser closed successfully.", "Teardown", Severity.PASS)
    except Exception as e:
        scenario.log(f"Error during teardown: {e}", "Teardown Error", Severity.WARNING)


@pytest.fixture
async def page(request, browser_manager: BrowserManager, scenario: ScenarioRun) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Records the failure (screenshot, message, stack trace) when the test
    body failed.
    """
    with scenario.step("Page Initialization"):
        page = await browser_manager.new_page()

    yield page

    await record_failure(scenario, page, request.node)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def practice_form_page(page: Page) -> PracticeFormPage:
    """Provides PracticeFormPage instance."""
    return PracticeFormPage(page)
