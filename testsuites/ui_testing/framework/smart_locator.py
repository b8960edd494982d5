"""
================================================================================
Smart Locator with Primary / Fallback Element Resolution
================================================================================

Resilient element location for page objects:
    - Two fixed tiers per element: a primary locator (usually the ID) and an
      optional fallback (CSS or XPath) that survives ID churn
    - Bounded visibility waits; worst case is exactly 2x the timeout
    - Click retries while the target is obscured by another element
    - Usage analytics: elements that needed their fallback are reported as
      maintenance candidates

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from autotest_tools.common import get_config


# Substring of Playwright's actionability log when another node covers the target
OBSCURED_MARKER = "intercepts pointer events"


# =============================================================================
# Errors
# =============================================================================

class UIAutomationError(Exception):
    """Base class for errors that fail a UI scenario."""
    pass


class ElementNotFoundError(UIAutomationError):
    """Raised when the primary locator (and fallback, if any) timed out."""

    def __init__(self, name: str, locator: "By"):
        self.name = name
        self.locator = locator
        super().__init__(f"Element '{name}' not found using {locator}")


class InteractionBlockedError(UIAutomationError):
    """Raised when an element stayed non-interactable for the whole timeout."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Element '{name}' was not clickable before the timeout")


class InteractionFailedError(UIAutomationError):
    """Raised when the driver rejects an interaction outright."""

    def __init__(self, name: str, reason: str = ""):
        self.name = name
        self.reason = reason
        message = f"Interaction with '{name}' failed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# =============================================================================
# Locator Values
# =============================================================================

class Strategy(str, Enum):
    """Lookup strategy of a locator."""

    ID = "id"
    CSS = "css"
    XPATH = "xpath"
    NAME = "name"
    TEST_ID = "test_id"
    TEXT = "text"


@dataclass(frozen=True)
class By:
    """
    A lookup strategy plus its selector string.

    Usage:
        >>> By.id("fname").to_selector()
        "[id='fname']"
        >>> By.xpath("//input[@type='radio']").to_selector()
        "xpath=//input[@type='radio']"
    """

    strategy: Strategy
    selector: str

    @classmethod
    def id(cls, value: str) -> "By":
        return cls(Strategy.ID, value)

    @classmethod
    def css(cls, value: str) -> "By":
        return cls(Strategy.CSS, value)

    @classmethod
    def xpath(cls, value: str) -> "By":
        return cls(Strategy.XPATH, value)

    @classmethod
    def name(cls, value: str) -> "By":
        return cls(Strategy.NAME, value)

    @classmethod
    def test_id(cls, value: str) -> "By":
        return cls(Strategy.TEST_ID, value)

    @classmethod
    def text(cls, value: str) -> "By":
        return cls(Strategy.TEXT, value)

    def to_selector(self) -> str:
        """Render as a Playwright selector string."""
        if self.strategy == Strategy.ID:
            return f"[id='{self.selector}']"
        if self.strategy == Strategy.NAME:
            return f"[name='{self.selector}']"
        if self.strategy == Strategy.TEST_ID:
            return f"[data-testid='{self.selector}']"
        if self.strategy == Strategy.XPATH:
            return f"xpath={self.selector}"
        if self.strategy == Strategy.TEXT:
            return f"text={self.selector}"
        return self.selector

    def __str__(self) -> str:
        return f"By.{self.strategy.value}: {self.selector}"


@dataclass(frozen=True)
class LocatorSpec:
    """
    Named UI target with a primary and an optional fallback locator.

    Attributes:
        name: Human-readable element name used in logs and errors
        primary: Locator tried first
        fallback: Locator tried once after the primary wait times out
    """

    name: str
    primary: By
    fallback: Optional[By] = None


@dataclass
class LocatorHealth:
    """
    Tracks locator health and usage statistics.

    Attributes:
        element_name: Human-readable element name
        primary: The preferred locator
        used_fallback: Whether the fallback was used
        fallback: The fallback locator used (if any)
    """
    element_name: str
    primary: By
    used_fallback: bool = False
    fallback: Optional[By] = None


# =============================================================================
# Resolver
# =============================================================================

class SmartLocator:
    """
    Resolves LocatorSpecs to live Playwright locators.

    Features:
        - Primary locator first, fallback once after the primary times out
        - Non-blocking existence check for optional UI states
        - Click retries while the element is obscured
        - Usage analytics for maintenance insights

    Usage:
        >>> smart = SmartLocator(page)
        >>> first_name = LocatorSpec("First Name", By.id("fname"),
        ...                          By.css("input[placeholder='First Name']"))
        >>> element = await smart.resolve(first_name)
        >>> await smart.set_text(element, "John", first_name.name)

    Resolved locators are not cached; resolve again for every interaction.
    """

    def __init__(
        self,
        page: Page,
        timeout: Optional[int] = None,
        poll_interval: Optional[int] = None,
    ):
        """
        Initialize SmartLocator with Playwright page.

        Args:
            page: Playwright Page object
            timeout: Wait per locator tier in milliseconds (config ui.timeout_ms)
            poll_interval: Click retry interval in milliseconds (config ui.poll_interval_ms)
        """
        self.page = page
        self.timeout = timeout if timeout is not None else get_config("ui.timeout_ms", 15000)
        self.poll_interval = (
            poll_interval if poll_interval is not None else get_config("ui.poll_interval_ms", 500)
        )
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    async def _wait_visible(self, by: By, timeout: int) -> Locator:
        locator = self.page.locator(by.to_selector()).first
        await locator.wait_for(state="visible", timeout=timeout)
        return locator

    async def resolve(
        self,
        spec: LocatorSpec,
        timeout: Optional[int] = None,
    ) -> Locator:
        """
        Wait for the element of ``spec`` to become visible.

        Args:
            spec: Element to resolve
            timeout: Wait per tier in milliseconds (defaults to self.timeout)

        Returns:
            Playwright Locator for the visible element

        Raises:
            ElementNotFoundError: When the primary (and fallback) timed out.
                With a fallback configured, the error references the fallback
                and chains the primary failure as its cause.
        """
        timeout = self.timeout if timeout is None else timeout

        logger.debug(f"Attempting to find '{spec.name}' using primary locator: {spec.primary}")
        try:
            locator = await self._wait_visible(spec.primary, timeout)
        except PlaywrightTimeoutError as primary_timeout:
            primary_error = ElementNotFoundError(spec.name, spec.primary)
            if spec.fallback is None:
                logger.error(f"❌ Failed to find '{spec.name}'. No fallback provided.")
                raise primary_error from primary_timeout

            logger.warning(
                f"⚠️ Primary locator failed. Trying fallback locator for "
                f"'{spec.name}': {spec.fallback}"
            )
            try:
                locator = await self._wait_visible(spec.fallback, timeout)
            except PlaywrightTimeoutError:
                logger.error(f"❌ All locators failed for '{spec.name}'")
                # primary_error is never raised, so link its driver timeout here
                primary_error.__cause__ = primary_timeout
                raise ElementNotFoundError(spec.name, spec.fallback) from primary_error

            health = LocatorHealth(spec.name, spec.primary, used_fallback=True, fallback=spec.fallback)
            self._health_records.append(health)
            self._fallback_used[spec.name] = health
            return locator

        self._health_records.append(LocatorHealth(spec.name, spec.primary))
        logger.debug(f"✅ Element '{spec.name}' found: {spec.primary}")
        return locator

    async def exists(self, by: By) -> bool:
        """
        Single-shot existence check, no waiting.

        Args:
            by: Locator to look up

        Returns:
            True if at least one element currently matches
        """
        return await self.page.locator(by.to_selector()).count() > 0

    async def click(
        self,
        element: Locator,
        name: str,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Click ``element``, retrying while another element covers it.

        Args:
            element: Resolved element
            name: Element name for logs and errors
            timeout: Total retry budget in milliseconds

        Raises:
            InteractionBlockedError: Still not clickable when the budget ran out
            InteractionFailedError: The driver rejected the click for another reason
        """
        timeout = self.timeout if timeout is None else timeout
        deadline = time.monotonic() + timeout / 1000
        attempts = 0

        logger.debug(f"Clicking {name}")
        while True:
            attempts += 1
            try:
                await element.click(timeout=self.poll_interval)
                return
            except PlaywrightTimeoutError as e:
                last_error = e
            except PlaywrightError as e:
                if OBSCURED_MARKER not in str(e):
                    raise InteractionFailedError(name, str(e).splitlines()[0]) from e
                last_error = e

            if time.monotonic() >= deadline:
                logger.error(f"❌ '{name}' still blocked after {attempts} click attempt(s)")
                raise InteractionBlockedError(name) from last_error

            logger.debug(f"'{name}' is obscured, retrying click")
            await asyncio.sleep(self.poll_interval / 1000)

    async def set_text(
        self,
        element: Locator,
        text: str,
        name: str,
    ) -> None:
        """
        Clear ``element`` and type ``text`` into it. No retry.

        Raises:
            InteractionFailedError: Clearing or typing failed
        """
        logger.debug(f"Entering text '{text}' into {name}")
        try:
            await element.clear(timeout=self.timeout)
            await element.press_sequentially(text, timeout=self.timeout)
        except PlaywrightError as e:
            raise InteractionFailedError(name, str(e).splitlines()[0]) from e

    @property
    def health_records(self) -> List[LocatorHealth]:
        return list(self._health_records)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists elements that needed their fallback locator (maintenance
        candidates whose primary selector has drifted).

        Returns:
            Formatted health report string
        """
        if not self._fallback_used:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary}",
                f"    Used fallback: {health.fallback}",
                "",
            ])

        return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "LocatorSpec",
    "LocatorHealth",
    "By",
    "Strategy",
    "UIAutomationError",
    "ElementNotFoundError",
    "InteractionBlockedError",
    "InteractionFailedError",
]
