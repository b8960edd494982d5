"""
================================================================================
Report Tools
================================================================================

Run report aggregation (HTML report + executive dashboard) and Allure
attachment helpers.

================================================================================
"""

from .report_manager import (
    ReportManager,
    ReportingError,
    RunStatus,
    Severity,
    StepTimer,
    TestRun,
)

__all__ = [
    "ReportManager",
    "ReportingError",
    "RunStatus",
    "Severity",
    "StepTimer",
    "TestRun",
]
