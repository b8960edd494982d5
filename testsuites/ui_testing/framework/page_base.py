"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation
    - Element interactions through SmartLocator (primary + fallback)
    - Field state getters (value, selected)
    - Best-effort screenshot capture

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Locator, Page

from autotest_tools.common import ensure_directory, get_config, safe_filename
from .smart_locator import By, LocatorSpec, SmartLocator


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class PracticeFormPage(BasePage):
            URL_PATH = "/home/AutomationPracticeForm"

            FIRST_NAME = LocatorSpec("First Name", By.id("fname"),
                                     By.css("input[placeholder='First Name']"))

            async def enter_first_name(self, value: str) -> "PracticeFormPage":
                await self.enter_text(self.FIRST_NAME, value)
                return self
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        screenshot_dir: Optional[Path] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application (config ui.base_url)
            timeout: Element wait per locator tier in milliseconds
            screenshot_dir: Where take_screenshot() writes (config screenshot.dir)
        """
        self.page = page
        base_url = base_url or get_config("ui.base_url", "https://app.cloudqa.io")
        self.base_url = base_url.rstrip("/")
        self.smart = SmartLocator(page, timeout=timeout)
        self.screenshot_dir = Path(screenshot_dir or get_config("screenshot.dir", "Screenshots"))

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    async def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.URL_PATH}"):
            logger.info(f"Navigating to: {self.url}")
            await self.page.goto(self.url, wait_until=wait_for)

    # =========================================================================
    # Element Interactions
    # =========================================================================

    async def find(self, spec: LocatorSpec) -> Locator:
        """Resolve ``spec`` (primary, then fallback)."""
        return await self.smart.resolve(spec)

    async def enter_text(self, spec: LocatorSpec, text: str) -> None:
        """
        Clear the field of ``spec`` and type ``text``.

        Args:
            spec: Input element
            text: Value to type
        """
        with allure.step(f"Enter '{text}' into {spec.name}"):
            element = await self.find(spec)
            await self.smart.set_text(element, text, f"{spec.name} field")

    async def click_element(self, spec: LocatorSpec) -> None:
        """Click the element of ``spec``, retrying while it is obscured."""
        with allure.step(f"Click: {spec.name}"):
            element = await self.find(spec)
            await self.smart.click(element, spec.name)

    async def element_exists(self, by: By) -> bool:
        """Check whether ``by`` matches anything right now (no wait)."""
        return await self.smart.exists(by)

    async def get_value(self, spec: LocatorSpec) -> str:
        """Current ``value`` attribute of an input, '' when absent."""
        element = await self.find(spec)
        return await element.get_attribute("value") or ""

    async def is_selected(self, spec: LocatorSpec) -> bool:
        """Whether a checkbox / radio button is selected."""
        element = await self.find(spec)
        return await element.is_checked()

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def take_screenshot(self, label: str, full_page: bool = False) -> Optional[Path]:
        """
        Save a screenshot as ``<label>_<yyyyMMdd_HHmmss>.png``.

        Failures are logged and never fail the test.

        Args:
            label: File name prefix
            full_page: Capture full scrollable page

        Returns:
            Path to saved screenshot, or None if it could not be taken
        """
        try:
            logger.debug(f"Taking screenshot: {label}")
            ensure_directory(self.screenshot_dir)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filepath = self.screenshot_dir / f"{safe_filename(label)}_{timestamp}.png"
            await self.page.screenshot(path=str(filepath), full_page=full_page)
        except Exception as e:
            logger.warning(f"Failed to take screenshot '{label}': {e}")
            return None

        logger.info(f"Screenshot saved to: {filepath}")
        return filepath

    def get_locator_health_report(self) -> str:
        """Get smart locator health report."""
        return self.smart.get_health_report()


__all__ = [
    "BasePage",
    "PageBase",
]

# Alias used by page objects that prefer PageBase naming
PageBase = BasePage
