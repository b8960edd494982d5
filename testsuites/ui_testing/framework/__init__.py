"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - smart_locator: Element resolution with a primary and a fallback locator
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle management
    - scenario: Binding between a scenario and its report run

Author: Automation Team
License: MIT
================================================================================
"""

from .smart_locator import (
    By,
    ElementNotFoundError,
    InteractionBlockedError,
    InteractionFailedError,
    LocatorSpec,
    SmartLocator,
    UIAutomationError,
)
from .page_base import BasePage
from .browser_manager import BrowserManager, DriverUnavailableError
from .scenario import ScenarioRun, final_status, record_failure, remember_report

__all__ = [
    "By",
    "LocatorSpec",
    "SmartLocator",
    "UIAutomationError",
    "ElementNotFoundError",
    "InteractionBlockedError",
    "InteractionFailedError",
    "BasePage",
    "BrowserManager",
    "DriverUnavailableError",
    "ScenarioRun",
    "final_status",
    "record_failure",
    "remember_report",
]
