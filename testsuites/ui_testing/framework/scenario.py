"""
================================================================================
Scenario Run
================================================================================

Binds one UI scenario (a pytest test) to its run in the ReportManager.

The resolver fails loud and the report manager fails silent; ScenarioRun is
where the two meet. When a scenario raises, the cleanup path calls
``fail()`` (best-effort screenshot + error and stack trace lines) and then
``complete(RunStatus.FAILED)``; pytest still reports the test failure.

================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Union

from loguru import logger
from playwright.async_api import Page

from autotest_tools.report_tools import ReportManager, RunStatus, Severity, StepTimer, TestRun
from autotest_tools.report_tools.allure_utils import attach_text


class ScenarioRun:
    """
    Report handle of a single scenario.

    Usage:
        scenario = ScenarioRun(reports, "test_basic_fields[John]")
        with scenario.step("Navigation"):
            await form.open()
        await scenario.screenshot(page, "Initial Form State")
        scenario.complete(RunStatus.PASSED)
    """

    def __init__(self, reports: ReportManager, name: str, description: str = ""):
        self.reports = reports
        self.name = name
        self.run: TestRun = reports.create_run(name, description)
        self._completed = False

    @contextmanager
    def step(self, step_name: str) -> Iterator[StepTimer]:
        """Time the enclosed block as a step of this run."""
        with self.reports.step(self.name, step_name) as timer:
            yield timer

    def log(
        self,
        message: str,
        step: str = "Info",
        severity: Union[Severity, str] = Severity.INFO,
    ) -> None:
        self.reports.log_step(self.name, severity, step, message)

    async def screenshot(self, page: Optional[Page], title: str) -> None:
        """Capture ``page`` and attach it to the run. Never raises."""
        if page is None:
            self.log(f"No page available for screenshot '{title}'", "Screenshot", Severity.WARNING)
            return
        try:
            image = await page.screenshot(full_page=True)
        except Exception as e:
            logger.warning(f"Failed to capture screenshot '{title}': {e}")
            self.log(f"Screenshot '{title}' could not be captured: {e}", "Screenshot", Severity.WARNING)
            return
        self.reports.attach_screenshot(self.name, image, title)

    async def fail(self, page: Optional[Page], error: str, trace: str = "") -> None:
        """Record a scenario failure: error screenshot, message and trace."""
        await self.screenshot(page, "Error State")
        self.log(f"Test failed: {error}", "Error", Severity.FAIL)
        self.log(trace or "No stack trace available", "StackTrace", Severity.FAIL)
        if trace:
            attach_text(trace, name="Stack Trace")

    def complete(self, status: Union[RunStatus, str]) -> Optional[TestRun]:
        """Complete the run once; later calls are ignored."""
        if self._completed:
            return None
        self._completed = True
        return self.reports.complete_run(self.name, status)

    @property
    def completed(self) -> bool:
        return self._completed



# =============================================================================
# Pytest Outcome Helpers
# =============================================================================

def remember_report(item, report, call) -> None:
    """Keep a phase report on the test item; called from pytest_runtest_makereport."""
    setattr(item, f"rep_{report.when}", report)

    if report.when == "call" and report.failed and call.excinfo is not None:
        item.failure_message = call.excinfo.exconly()


def final_status(item) -> RunStatus:
    """
    Terminal run status derived from the setup and call reports.

    A failed phase wins over a skipped one. An item without a call report
    never ran its body and counts as FAILED.
    """
    for when in ("setup", "call"):
        report = getattr(item, f"rep_{when}", None)
        if report is None:
            continue
        if report.failed:
            return RunStatus.FAILED
        if report.skipped:
            return RunStatus.SKIPPED

    if getattr(item, "rep_call", None) is None:
        return RunStatus.FAILED
    return RunStatus.PASSED


async def record_failure(scenario: ScenarioRun, page: Optional[Page], item) -> bool:
    """Record the error state of ``item`` in ``scenario`` if its body failed."""
    report = getattr(item, "rep_call", None)
    if report is None or not report.failed:
        return False
    error = getattr(item, "failure_message", "") or "test failed"
    await scenario.fail(page, error, report.longreprtext)
    return True


__all__ = [
    "ScenarioRun",
    "remember_report",
    "final_status",
    "record_failure",
]
