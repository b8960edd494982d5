"""
================================================================================
Allure Report Utilities
================================================================================

Thin, best-effort wrappers around ``allure.attach`` so the HTML run report
and the Allure report receive the same screenshots and performance tables.

Attachments are silently skipped when no Allure listener is active (for
example when pytest runs without ``--alluredir``).

================================================================================
"""

import json
from typing import Any

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def _attach(body: Any, name: str, attachment_type) -> None:
    try:
        allure.attach(body, name=name, attachment_type=attachment_type)
    except Exception as e:
        logger.warning(f"Failed to attach '{name}' to Allure: {e}")


def attach_png(image: bytes, name: str = "Screenshot") -> None:
    """
    Attach PNG bytes to the Allure report.

    Args:
        image: Raw PNG content
        name: Attachment name
    """
    _attach(image, name, allure.attachment_type.PNG)


def attach_text(text: str, name: str = "Text") -> None:
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    _attach(text, name, allure.attachment_type.TEXT)


def attach_json(data: Any, name: str = "Data") -> None:
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    _attach(json.dumps(data, indent=2, default=str), name, allure.attachment_type.JSON)


__all__ = [
    "attach_png",
    "attach_text",
    "attach_json",
]
