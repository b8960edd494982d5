"""
Test data for the practice form scenarios.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class FormTestData:
    """Values entered into the practice form by one scenario."""

    first_name: str
    mobile: str
    is_male: bool
    last_name: str = ""
    email: str = ""
    date_of_birth: str = ""

    @property
    def gender(self) -> str:
        return "Male" if self.is_male else "Female"

    @property
    def case_id(self) -> str:
        """Short id used in parametrized test names."""
        return f"{self.first_name}-{self.gender}-{self.mobile}"


# First name, gender and mobile only
BASIC_FIELD_ROWS: List[FormTestData] = [
    FormTestData("John", "1234567890", True),
    FormTestData("Jane", "9876543210", False),
    FormTestData("Chris", "5551234567", True),
]

# Every field of the form
COMPLETE_FORM_ROWS: List[FormTestData] = [
    FormTestData("John", "1234567890", True, "Doe", "john.doe@example.com", "01/15/1990"),
    FormTestData("Jane", "9876543210", False, "Smith", "jane.smith@example.com", "05/20/1985"),
    FormTestData("Robert", "5551234567", True, "Johnson", "robert@example.com", "12/31/1975"),
    FormTestData("Emma", "7778889999", False, "Watson", "emma@example.com", "04/15/1992"),
]
