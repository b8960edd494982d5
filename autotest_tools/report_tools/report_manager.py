"""
================================================================================
Report Manager
================================================================================

Process-wide sink for step timings, log lines and screenshots of UI test
runs, rendered into a single HTML report plus an executive dashboard.

Features:
    - Thread-safe registry of live runs keyed by run name
    - Step timers folded into per-run duration tables
    - Performance table (Step, Duration (ms), % of Total) on completion
    - Screenshot persistence linked into the run's report section
    - Cross-run dashboard with pass/fail counts and average step durations

Every public operation is fail-silent: a reporting problem is logged as a
warning and never reaches the test that triggered it.

Lifecycle:
    reports = ReportManager()             # once, at session start
    reports.create_run("test_login")
    with reports.step("test_login", "Navigation"):
        ...
    reports.complete_run("test_login", RunStatus.PASSED)
    reports.flush()                       # once, at session end

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import functools
import platform
import threading
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from jinja2 import Environment, PackageLoader, select_autoescape
from loguru import logger

from autotest_tools.common import ensure_directory, get_config, safe_filename
from .allure_utils import attach_json, attach_png


class ReportingError(Exception):
    """Raised inside the report manager; always caught and logged there."""
    pass


class RunStatus(str, Enum):
    """Lifecycle state of a test run."""

    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.PASSED, RunStatus.FAILED, RunStatus.SKIPPED)


class Severity(str, Enum):
    """Severity of a run log line."""

    INFO = "info"
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"
    FATAL = "fatal"
    SKIP = "skip"


# loguru level used when mirroring run log lines to the console
_LOGURU_LEVELS = {
    Severity.INFO: "DEBUG",
    Severity.PASS: "DEBUG",
    Severity.SKIP: "INFO",
    Severity.WARNING: "WARNING",
    Severity.FAIL: "ERROR",
    Severity.FATAL: "CRITICAL",
}


def fail_silent(func: Callable) -> Callable:
    """Log and swallow any exception raised by a reporting operation."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.warning(f"Reporting failure in {func.__name__}: {e}")
            return None

    return wrapper


@dataclass
class StepTimer:
    """Start instant of one named step; discard after ``stop_step``."""

    run_name: str
    step_name: str
    started: float = field(default_factory=time.perf_counter)

    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started) * 1000)


@dataclass
class LogEntry:
    """Single timestamped line in a run's report section."""

    timestamp: str
    severity: Severity
    step: str
    message: str
    screenshot: Optional[str] = None


@dataclass
class PerformanceRow:
    """One row of a run's performance table."""

    step: str
    duration_ms: int
    percent: float


@dataclass
class TestRun:
    """
    One executing test tracked from registration to completion.

    Attributes:
        name: Unique key among live runs
        description: Free text shown under the run heading
        status: Current lifecycle state
        step_durations: Step name -> elapsed milliseconds (latest wins)
        logs: Ordered log lines, including screenshot links
        total_ms: Wall-clock duration, set on completion
        performance: Performance table, set on completion
    """

    __test__ = False

    name: str
    description: str = ""
    status: RunStatus = RunStatus.PENDING
    started_at: datetime = field(default_factory=datetime.now)
    step_durations: Dict[str, int] = field(default_factory=dict)
    logs: List[LogEntry] = field(default_factory=list)
    total_ms: Optional[int] = None
    finished_at: Optional[datetime] = None
    performance: List[PerformanceRow] = field(default_factory=list)
    _clock: float = field(default_factory=time.perf_counter, repr=False)

    def start(self) -> None:
        self.status = RunStatus.RUNNING

    def finish(self, status: RunStatus) -> None:
        """Stop the run clock and build the performance table."""
        self.total_ms = int((time.perf_counter() - self._clock) * 1000)
        self.finished_at = datetime.now()
        self.performance = [
            PerformanceRow(step, duration, percent_of_total(duration, self.total_ms))
            for step, duration in self.step_durations.items()
        ]
        self.status = status

    @property
    def screenshots(self) -> List[LogEntry]:
        return [entry for entry in self.logs if entry.screenshot]


def as_member(enum_type, value):
    """Convert ``value`` to ``enum_type``; strings match values case-insensitively."""
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        value = value.strip().lower()
    return enum_type(value)


def percent_of_total(duration_ms: int, total_ms: int) -> float:
    """Share of ``total_ms`` taken by ``duration_ms``, to 2 decimal places."""
    if total_ms <= 0:
        return 0.0
    return round(duration_ms / total_ms * 100, 2)


@dataclass
class RunSummary:
    """Aggregate counters accumulated since the manager was created."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    step_totals: Dict[str, int] = field(default_factory=dict)
    step_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def pass_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def record(self, run: TestRun) -> None:
        if run.status == RunStatus.PASSED:
            self.passed += 1
        elif run.status == RunStatus.FAILED:
            self.failed += 1
        elif run.status == RunStatus.SKIPPED:
            self.skipped += 1

        for step, duration in run.step_durations.items():
            self.step_totals[step] = self.step_totals.get(step, 0) + duration
            self.step_counts[step] = self.step_counts.get(step, 0) + 1

    def average_step_durations(self) -> Dict[str, float]:
        return {
            step: round(total / self.step_counts[step], 2)
            for step, total in self.step_totals.items()
        }


class ReportManager:
    """
    Thread-safe aggregator for run timings, logs and screenshots.

    Construct one instance per process and hand it to every scenario.
    Mutations of the run registry are serialized by a single lock; step
    tables of a run are only touched by the scenario that owns the run.

    Looking up a run that is not live (``log_step``, ``attach_screenshot``)
    registers a fresh one under that name. ``stop_step`` and
    ``complete_run`` never create runs.
    """

    def __init__(
        self,
        report_dir: Optional[Union[str, Path]] = None,
        title: Optional[str] = None,
        report_name: Optional[str] = None,
        environment: Optional[str] = None,
        browser: Optional[str] = None,
    ):
        """
        Initialize the report manager.

        Args:
            report_dir: Directory for the report, dashboard and screenshots
            title: HTML document title
            report_name: Heading shown at the top of the report
            environment: Environment label for the system info table
            browser: Browser label for the system info table
        """
        self.report_dir = Path(report_dir or get_config("report.dir", "TestReports"))
        self.title = title or get_config("report.title", "CloudQA Test Automation Report")
        self.report_name = report_name or get_config("report.name", "Practice Form Test Results")
        self.created_at = datetime.now()
        self.report_path = self.report_dir / f"TestReport_{self.created_at:%Y%m%d_%H%M%S}.html"

        self.system_info: Dict[str, str] = {
            "Operating System": platform.platform(),
            "Browser": browser or get_config("ui.browser", "chromium"),
            "Environment": environment or get_config("report.environment", "Test"),
            "Timestamp": self.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            "Python Version": platform.python_version(),
            "Machine Name": platform.node(),
        }

        self._lock = threading.RLock()
        self._live: Dict[str, TestRun] = {}
        self._completed: List[TestRun] = []
        self.summary = RunSummary()

        self._env = Environment(
            loader=PackageLoader("autotest_tools.report_tools", "templates"),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        logger.info(f"Report will be saved to: {self.report_path}")

    # =========================================================================
    # Run Registry
    # =========================================================================

    def create_run(self, name: str, description: str = "") -> TestRun:
        """
        Register a new run and start its wall-clock timer.

        A live run with the same name is replaced.

        Args:
            name: Unique run name (usually the pytest node name)
            description: Optional description for the report

        Returns:
            The registered TestRun
        """
        with self._lock:
            if name in self._live:
                logger.warning(f"Run '{name}' is already live; replacing it")
            run = TestRun(name=name, description=description)
            run.start()
            self._live[name] = run
        logger.debug(f"Run registered: {name}")
        return run

    def get_run(self, name: str) -> TestRun:
        """Return the live run ``name``, registering it if absent."""
        with self._lock:
            run = self._live.get(name)
            if run is None:
                logger.warning(f"Run '{name}' is not registered; creating it on first use")
                run = TestRun(name=name)
                run.start()
                self._live[name] = run
            return run

    def is_live(self, name: str) -> bool:
        with self._lock:
            return name in self._live

    @property
    def completed_runs(self) -> Tuple[TestRun, ...]:
        with self._lock:
            return tuple(self._completed)

    # =========================================================================
    # Step Timing
    # =========================================================================

    def start_step(self, run: str, step: str) -> StepTimer:
        """Start timing ``step`` of ``run``."""
        return StepTimer(run_name=run, step_name=step)

    @fail_silent
    def stop_step(self, run: str, step: str, timer: StepTimer) -> None:
        """
        Record the elapsed time of ``timer`` as ``step`` of ``run``.

        The duration is dropped when ``run`` is not live.
        """
        elapsed = timer.elapsed_ms()
        with self._lock:
            test_run = self._live.get(run)
        if test_run is None:
            logger.debug(f"Dropping timing of step '{step}': run '{run}' is not live")
            return

        test_run.step_durations[step] = elapsed
        self._append(test_run, Severity.INFO, step, f"Step '{step}' completed in {elapsed}ms")

    @contextmanager
    def step(self, run: str, step: str) -> Iterator[StepTimer]:
        """
        Time the enclosed block as ``step`` of ``run``.

        The duration is recorded even when the block raises.
        """
        timer = self.start_step(run, step)
        try:
            yield timer
        finally:
            self.stop_step(run, step, timer)

    # =========================================================================
    # Logging and Attachments
    # =========================================================================

    @fail_silent
    def log_step(
        self,
        run: str,
        severity: Union[Severity, str],
        step: str,
        message: str = "",
    ) -> None:
        """
        Append a timestamped line to ``run`` and time ``step`` as a no-op span.

        Args:
            run: Run name
            severity: Severity of the line
            step: Step name the line belongs to
            message: Line text
        """
        severity = as_member(Severity, severity)
        timer = self.start_step(run, step)
        test_run = self.get_run(run)
        self._append(test_run, severity, step, message)
        test_run.step_durations[step] = timer.elapsed_ms()

    @fail_silent
    def attach_screenshot(self, run: str, image: bytes, title: str = "Screenshot") -> Optional[Path]:
        """
        Persist a screenshot and link it into the run's report section.

        Args:
            run: Run name
            image: PNG bytes
            title: Caption shown in the report

        Returns:
            Path of the written file, or None when it could not be written
        """
        step = f"Screenshot: {title}"
        timer = self.start_step(run, step)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        path = ensure_directory(self.report_dir) / f"Screenshot_{safe_filename(run)}_{timestamp}.png"
        path.write_bytes(image)

        test_run = self.get_run(run)
        self._append(test_run, Severity.INFO, step, title, screenshot=path.name)
        attach_png(image, name=title)
        logger.info(f"Screenshot saved to: {path}")

        self.stop_step(run, step, timer)
        return path

    def _append(
        self,
        run: TestRun,
        severity: Severity,
        step: str,
        message: str,
        screenshot: Optional[str] = None,
    ) -> None:
        stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        run.logs.append(LogEntry(stamp, severity, step, message, screenshot))
        logger.log(_LOGURU_LEVELS[severity], f"[{run.name}] {step}: {message}")

    # =========================================================================
    # Completion and Output
    # =========================================================================

    @fail_silent
    def complete_run(self, run: str, status: Union[RunStatus, str]) -> Optional[TestRun]:
        """
        Finish ``run`` with a terminal ``status`` and evict it from the registry.

        Args:
            run: Run name
            status: PASSED, FAILED or SKIPPED

        Returns:
            The completed TestRun, or None when ``run`` was not live
        """
        status = as_member(RunStatus, status)
        if not status.is_terminal:
            raise ReportingError(f"Cannot complete run '{run}' with status '{status.value}'")

        with self._lock:
            test_run = self._live.pop(run, None)
            if test_run is None:
                logger.warning(f"Cannot complete run '{run}': it is not live")
                return None
            test_run.finish(status)
            self._completed.append(test_run)
            self.summary.record(test_run)

        total = test_run.total_ms
        self._append(test_run, Severity.INFO, "Performance", "PERFORMANCE SUMMARY")
        self._append(
            test_run, Severity.INFO, "Performance",
            f"Total Test Duration: {total}ms ({total / 1000:.2f} seconds)",
        )
        if status == RunStatus.PASSED:
            self._append(test_run, Severity.PASS, "Result", f"Test completed successfully in {total}ms")
        elif status == RunStatus.FAILED:
            self._append(test_run, Severity.FAIL, "Result", f"Test failed after {total}ms")
        else:
            self._append(test_run, Severity.SKIP, "Result", f"Test skipped after {total}ms")

        attach_json(
            [asdict(row) for row in test_run.performance],
            name="Performance Summary",
        )
        logger.info(f"Run '{run}' finished: {status.value} in {total}ms")
        return test_run

    @fail_silent
    def flush(self) -> Optional[Tuple[Path, Optional[Path]]]:
        """
        Write the HTML report of all completed runs, then the dashboard.

        Returns:
            (report path, dashboard path); dashboard path is None when the
            dashboard could not be written
        """
        with self._lock:
            runs = list(self._completed)
            live = sorted(self._live)

        if live:
            logger.warning(f"{len(live)} run(s) still live at flush, not reported: {', '.join(live)}")

        ensure_directory(self.report_dir)
        html = self._env.get_template("test_report.html").render(
            title=self.title,
            report_name=self.report_name,
            system_info=self.system_info,
            runs=runs,
            summary=self.summary,
            generated_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )
        self.report_path.write_text(html, encoding="utf-8")
        logger.info(f"Report flushed to disk: {self.report_path}")

        return self.report_path, self._write_dashboard()

    @fail_silent
    def _write_dashboard(self) -> Path:
        now = datetime.now()
        path = self.report_dir / f"executive-summary_{now:%Y%m%d_%H%M%S}.html"

        with self._lock:
            averages = self.summary.average_step_durations()
            counts = {
                "passed": self.summary.passed,
                "failed": self.summary.failed,
                "skipped": self.summary.skipped,
            }

        html = self._env.get_template("executive_summary.html").render(
            generated_at=now.strftime("%Y-%m-%d %H:%M:%S"),
            report_dir=str(self.report_dir.resolve()),
            report_file=self.report_path.name,
            counts=counts,
            total=sum(counts.values()),
            pass_rate=self.summary.pass_rate,
            step_labels=list(averages),
            step_averages=list(averages.values()),
        )
        path.write_text(html, encoding="utf-8")
        logger.info(f"Executive summary created at: {path}")
        return path


__all__ = [
    "ReportManager",
    "ReportingError",
    "RunStatus",
    "Severity",
    "StepTimer",
    "TestRun",
    "LogEntry",
    "PerformanceRow",
    "RunSummary",
    "percent_of_total",
    "as_member",
    "fail_silent",
]
