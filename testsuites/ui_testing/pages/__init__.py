"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators (LocatorSpec: primary + fallback)
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .form_data import BASIC_FIELD_ROWS, COMPLETE_FORM_ROWS, FormTestData
from .practice_form_page import PracticeFormPage

__all__ = [
    "PracticeFormPage",
    "FormTestData",
    "BASIC_FIELD_ROWS",
    "COMPLETE_FORM_ROWS",
]
