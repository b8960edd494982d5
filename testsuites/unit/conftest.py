"""
In-memory stand-ins for the Playwright Page / Locator surface used by the
framework, so locator and page-object behavior can be tested without a browser.
"""

from __future__ import annotations

import asyncio
import time
from typing import Dict, List, Optional

import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from autotest_tools.common import ConfigLoader
from testsuites.ui_testing.framework.smart_locator import By

OBSCURED_MESSAGE = "Element is not clickable: <div class='overlay'> intercepts pointer events"


class FakeElement:
    """DOM node state behind a selector."""

    def __init__(self, appear_after: float = 0.0, value: str = "", checked: bool = False):
        self.visible_at = time.monotonic() + appear_after
        self.value = value
        self.checked = checked
        self.radio = False
        self.obscured_clicks = 0
        self.blocked = False
        self.click_error: Optional[str] = None
        self.type_error: Optional[str] = None
        self.clicks = 0
        self.events: List[str] = []


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def first(self) -> "FakeLocator":
        return self

    @property
    def element(self) -> FakeElement:
        element = self.page.elements.get(self.selector)
        if element is None:
            raise PlaywrightError(f"No element matches {self.selector}")
        return element

    async def wait_for(self, state: str = "visible", timeout: float = 30000) -> None:
        element = self.page.elements.get(self.selector)
        delay = None if element is None else max(0.0, element.visible_at - time.monotonic())
        if delay is None or delay * 1000 > timeout:
            await asyncio.sleep(timeout / 1000)
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        await asyncio.sleep(delay)

    async def count(self) -> int:
        return 1 if self.selector in self.page.elements else 0

    async def click(self, timeout: float = 30000) -> None:
        element = self.element
        element.clicks += 1
        if element.blocked:
            await asyncio.sleep(timeout / 1000)
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.\n  - {OBSCURED_MESSAGE}")
        if element.obscured_clicks > 0:
            element.obscured_clicks -= 1
            raise PlaywrightError(OBSCURED_MESSAGE)
        if element.click_error:
            raise PlaywrightError(element.click_error)
        if element.radio:
            element.checked = True
        element.events.append("click")

    async def clear(self, timeout: float = 30000) -> None:
        element = self.element
        element.value = ""
        element.events.append("clear")

    async def press_sequentially(self, text: str, timeout: float = 30000) -> None:
        element = self.element
        if element.type_error:
            raise PlaywrightError(element.type_error)
        element.value += text
        element.events.append(f"type:{text}")

    async def get_attribute(self, name: str) -> Optional[str]:
        if name == "value":
            return self.element.value
        return None

    async def is_checked(self) -> bool:
        return self.element.checked


class FakePage:
    """Selector -> element map plus the page-level calls the framework makes."""

    def __init__(self):
        self.elements: Dict[str, FakeElement] = {}
        self.url = "about:blank"
        self.screenshot_error: Optional[str] = None

    def add(self, by: By, **state) -> FakeElement:
        element = FakeElement(**state)
        self.elements[by.to_selector()] = element
        return element

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.url = url

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        if self.screenshot_error:
            raise PlaywrightError(self.screenshot_error)
        image = b"\x89PNG\r\n\x1a\nfake"
        if path:
            with open(path, "wb") as f:
                f.write(image)
        return image


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def fresh_config():
    """Drop the config singleton before and after the test."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
