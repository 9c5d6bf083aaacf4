"""Page object for the storefront login screen."""
from __future__ import annotations

import re
from typing import Optional

from storefront_e2e.browser import Driver
from storefront_e2e.locators import Locator
from storefront_e2e.pages.base import PageState, PageSupport


class LoginPage:
    """Entry screen: username, password, submit and the error banner.

    Rejected credentials are not exceptions. After a failed ``login()`` the
    outcome is read with ``is_error_visible()`` and ``get_error_message()``.
    """

    PATH = "/"
    URL_PATTERN = re.compile(r"^https?://[^/]+/?$")

    USERNAME_INPUT = Locator.by_test_id("username field", "username")
    PASSWORD_INPUT = Locator.by_test_id("password field", "password")
    LOGIN_BUTTON = Locator.by_test_id("submit control", "login-button")
    ERROR_MESSAGE = Locator.by_test_id("error banner", "error")

    def __init__(self, driver: Driver) -> None:
        self._driver = driver
        self._support = PageSupport(driver, self.PATH, "LoginPage")

    @property
    def state(self) -> PageState:
        return self._support.state

    # ---- page object contract ---------------------------------------------------
    async def navigate(self) -> None:
        await self._support.navigate()

    async def get_title(self) -> str:
        return await self._support.get_title()

    async def get_current_url(self) -> str:
        return await self._support.get_current_url()

    async def wait_for_page_load(self) -> None:
        await self._support.wait_for_page_load()

    async def take_screenshot(self, name: str) -> Optional[str]:
        return await self._support.take_screenshot(name)

    # ---- screen operations ------------------------------------------------------
    async def fill_username(self, username: str) -> None:
        self._support.require_loaded("fill_username")
        _require_str("username", username)
        await self._driver.fill(self.USERNAME_INPUT, username)

    async def fill_password(self, password: str) -> None:
        self._support.require_loaded("fill_password")
        _require_str("password", password)
        await self._driver.fill(self.PASSWORD_INPUT, password)

    async def click_login(self) -> None:
        """Submit the form without waiting for the resulting navigation."""
        self._support.require_loaded("click_login")
        await self._driver.click(self.LOGIN_BUTTON)

    async def login(self, username: str, password: str) -> None:
        # Order matters: the form reports the first empty field only.
        await self.fill_username(username)
        await self.fill_password(password)
        await self.click_login()

    async def get_error_message(self) -> str:
        self._support.require_loaded("get_error_message")
        return await self._driver.text_content(self.ERROR_MESSAGE) or ""

    async def is_error_visible(self) -> bool:
        self._support.require_loaded("is_error_visible")
        return await self._driver.is_visible(self.ERROR_MESSAGE)

    async def is_login_enabled(self) -> bool:
        self._support.require_loaded("is_login_enabled")
        return await self._driver.is_enabled(self.LOGIN_BUTTON)


def _require_str(field: str, value: object) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {type(value).__name__}")
