"""
================================================================================
Practice Form Page Object (Async / Playwright)
================================================================================

Page object for the CloudQA Automation Practice Form.

Design goals:
  - Every field is a LocatorSpec: ID first, CSS/XPath fallback
  - Fluent API: entry methods return the page so steps read as a sequence
  - Getters for assertions read live field state (no cached handles)

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from autotest_tools.common import get_config
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import By, LocatorSpec
from testsuites.ui_testing.pages.form_data import FormTestData


class PracticeFormPage(PageBase):
    """Automation Practice Form page object (async)."""

    URL_PATH = "/home/AutomationPracticeForm"
    PAGE_TITLE = "Automation Practice Form"

    FIRST_NAME = LocatorSpec(
        "First Name",
        By.id("fname"),
        By.css("input[placeholder='First Name']"),
    )
    LAST_NAME = LocatorSpec(
        "Last Name",
        By.id("lname"),
        By.css("input[placeholder='Last Name']"),
    )
    EMAIL = LocatorSpec(
        "Email",
        By.id("email"),
        By.css("input[type='email']"),
    )
    GENDER_MALE = LocatorSpec(
        "Gender (Male)",
        By.id("male"),
        By.xpath(
            "//label[contains(text(),'Male')]/preceding-sibling::input[@type='radio']"
            " | //input[@type='radio' and @value='male']"
        ),
    )
    GENDER_FEMALE = LocatorSpec(
        "Gender (Female)",
        By.id("female"),
        By.xpath(
            "//label[contains(text(),'Female')]/preceding-sibling::input[@type='radio']"
            " | //input[@type='radio' and @value='female']"
        ),
    )
    MOBILE = LocatorSpec(
        "Mobile Number",
        By.id("mobile"),
        By.css("input[placeholder*='Mobile']"),
    )
    DATE_OF_BIRTH = LocatorSpec(
        "Date of Birth",
        By.id("dob"),
        By.css("input[placeholder*='Date of Birth']"),
    )
    SUBMIT = LocatorSpec(
        "Submit Button",
        By.id("submit"),
        By.xpath("//button[contains(text(),'Submit')]"),
    )

    def __init__(self, page, base_url=None, timeout=None, screenshot_dir=None):
        super().__init__(page, base_url=base_url, timeout=timeout, screenshot_dir=screenshot_dir)
        self.URL_PATH = get_config("ui.form_path", self.URL_PATH)

    @allure.step("Open practice form")
    async def open(self) -> "PracticeFormPage":
        """Navigate to the practice form."""
        await self.navigate()
        return self

    async def enter_first_name(self, value: str) -> "PracticeFormPage":
        await self.enter_text(self.FIRST_NAME, value)
        return self

    async def enter_last_name(self, value: str) -> "PracticeFormPage":
        await self.enter_text(self.LAST_NAME, value)
        return self

    async def enter_email(self, value: str) -> "PracticeFormPage":
        await self.enter_text(self.EMAIL, value)
        return self

    async def enter_mobile_number(self, value: str) -> "PracticeFormPage":
        await self.enter_text(self.MOBILE, value)
        return self

    async def enter_date_of_birth(self, value: str) -> "PracticeFormPage":
        await self.enter_text(self.DATE_OF_BIRTH, value)
        return self

    async def _select(self, spec: LocatorSpec) -> "PracticeFormPage":
        element = await self.find(spec)
        if not await element.is_checked():
            await self.smart.click(element, f"{spec.name} radio button")
        return self

    @allure.step("Select Male gender")
    async def select_male_gender(self) -> "PracticeFormPage":
        return await self._select(self.GENDER_MALE)

    @allure.step("Select Female gender")
    async def select_female_gender(self) -> "PracticeFormPage":
        return await self._select(self.GENDER_FEMALE)

    async def select_gender(self, is_male: bool) -> "PracticeFormPage":
        if is_male:
            return await self.select_male_gender()
        return await self.select_female_gender()

    @allure.step("Submit form")
    async def submit_form(self) -> "PracticeFormPage":
        await self.click_element(self.SUBMIT)
        return self

    @allure.step("Fill form with test data")
    async def fill_form(self, data: FormTestData) -> "PracticeFormPage":
        """
        Fill every field present in ``data``.

        Empty optional fields (last name, email, date of birth) are skipped,
        so the basic three-field rows can use the same entry point.
        """
        logger.debug(f"Filling practice form with: {data}")
        await self.enter_first_name(data.first_name)
        if data.last_name:
            await self.enter_last_name(data.last_name)
        if data.email:
            await self.enter_email(data.email)
        await self.select_gender(data.is_male)
        await self.enter_mobile_number(data.mobile)
        if data.date_of_birth:
            await self.enter_date_of_birth(data.date_of_birth)
        return self

    # =========================================================================
    # Verification Getters
    # =========================================================================

    async def get_first_name_value(self) -> str:
        return await self.get_value(self.FIRST_NAME)

    async def get_mobile_number_value(self) -> str:
        return await self.get_value(self.MOBILE)

    async def is_male_gender_selected(self) -> bool:
        return await self.is_selected(self.GENDER_MALE)

    async def is_female_gender_selected(self) -> bool:
        return await self.is_selected(self.GENDER_FEMALE)
