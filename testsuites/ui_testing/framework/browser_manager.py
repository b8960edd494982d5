"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser per scenario; the page it hands out is owned exclusively
      by that scenario
    - Context isolation (cookies, storage) per page
    - Browser configuration presets from config (ui.browser, ui.headless)
    - Launch failures surface as DriverUnavailableError

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from autotest_tools.common import get_config
from .smart_locator import UIAutomationError


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class DriverUnavailableError(UIAutomationError):
    """Raised when the browser automation driver cannot be started."""
    pass


class BrowserManager:
    """
    Manages the browser instance and contexts of one UI scenario.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await page.goto("https://app.cloudqa.io/home/AutomationPracticeForm")
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--start-maximized",
            "--disable-extensions",
            "--disable-popup-blocking",
            "--ignore-certificate-errors",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode (config ui.headless)
            browser_type: 'chromium', 'firefox' or 'webkit' (config ui.browser)
        """
        self.headless = headless if headless is not None else get_config("ui.headless", True)
        self.browser_type = browser_type or get_config("ui.browser", "chromium")

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    async def start(self) -> None:
        """
        Start Playwright and launch browser.

        Raises:
            DriverUnavailableError: Unknown browser type or launch failure
        """
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise DriverUnavailableError(
                f"Unsupported browser '{self.browser_type}', "
                f"expected one of: {', '.join(SUPPORTED_BROWSERS)}"
            )

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
        }
        if self.browser_type != "chromium":
            # Chromium switches
            launch_options.pop("args")

        try:
            self._playwright = await async_playwright().start()
            browser_launcher = getattr(self._playwright, self.browser_type)
            self._browser = await browser_launcher.launch(**launch_options)
        except Exception as e:
            await self.close()
            raise DriverUnavailableError(
                f"Failed to start {self.browser_type}: {e}"
            ) from e

        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing context: {e}")
        self._contexts.clear()

        try:
            if self._browser:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None

        logger.debug("Browser closed")

    async def new_context(
        self,
        **options: Any,
    ) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise DriverUnavailableError("Browser not started. Call start() first.")

        context_options = {**self.DEFAULT_CONTEXT_OPTIONS, **options}
        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)

        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            **context_options: Options for new context

        Returns:
            New Page
        """
        if context is None:
            context = await self.new_context(**context_options)

        return await context.new_page()

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
    "DriverUnavailableError",
    "SUPPORTED_BROWSERS",
]
