"""Offline fixtures: an in-memory storefront that speaks the Driver protocol.

The fake models the two screens closely enough for the page objects to be
exercised without a browser: the login form validates in the same order as
the real site, the inventory lists six products, and the side menu hides the
logout link until opened.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urljoin, urlparse

import pytest

from storefront_e2e import errors
from storefront_e2e.locators import Locator

BASE_URL = "https://shop.test"

USERNAME = '[data-test="username"]'
PASSWORD = '[data-test="password"]'
LOGIN_BUTTON = '[data-test="login-button"]'
ERROR = '[data-test="error"]'
TITLE = ".title"
MENU_BUTTON = "#react-burger-menu-btn"
LOGOUT_LINK = '[data-test="logout-sidebar-link"]'
CART_LINK = ".shopping_cart_link"
CART_BADGE = ".shopping_cart_badge"
ITEM = ".inventory_item"

VALID_USERS = {"standard_user"}
LOCKED_USERS = {"locked_out_user"}
VALID_PASSWORD = "secret_sauce"


@dataclass
class FakeElement:
    text: str = ""
    visible: bool = True
    enabled: bool = True


class FakeStorefront:
    """Driver double holding the DOM of whichever screen is current."""

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.base_url = base_url
        self.url = "about:blank"
        self.calls: List[Tuple[str, Any]] = []
        self.values: Dict[str, str] = {}
        self.error_text: Optional[str] = None
        self.error_visible = True
        self.menu_open = False
        self.cart_items = 0
        self.product_total = 6
        self.login_enabled = True
        self.goto_error: Optional[Exception] = None
        self.idle_error: Optional[Exception] = None
        self.screenshot_error: Optional[BaseException] = None
        self.screenshots: List[str] = []

    # ---- DOM model --------------------------------------------------------------
    @property
    def screen(self) -> str:
        path = urlparse(self.url).path
        if self.url.startswith(self.base_url) and path in ("", "/"):
            return "login"
        if path == "/inventory.html":
            return "inventory"
        return "blank"

    def _dom(self) -> Dict[str, List[FakeElement]]:
        if self.screen == "login":
            dom = {
                USERNAME: [FakeElement()],
                PASSWORD: [FakeElement()],
                LOGIN_BUTTON: [FakeElement(text="Login", enabled=self.login_enabled)],
            }
            if self.error_text is not None:
                dom[ERROR] = [FakeElement(text=self.error_text, visible=self.error_visible)]
            return dom
        if self.screen == "inventory":
            dom = {
                TITLE: [FakeElement(text="Products")],
                MENU_BUTTON: [FakeElement(text="Open Menu")],
                LOGOUT_LINK: [FakeElement(text="Logout", visible=self.menu_open)],
                CART_LINK: [FakeElement()],
                ITEM: [FakeElement(text=f"item {i}") for i in range(self.product_total)],
            }
            if self.cart_items:
                dom[CART_BADGE] = [FakeElement(text=str(self.cart_items))]
            return dom
        return {}

    def _matches(self, locator: Locator) -> List[FakeElement]:
        return self._dom().get(locator.selector, [])

    def _actionable(self, name: str, locator: Locator) -> FakeElement:
        matches = self._matches(locator)
        payload = {"selector": locator.selector}
        if not matches:
            raise errors.ElementNotFoundError(name=name, payload=payload, message=f"no element matches {locator}")
        if not matches[0].visible:
            raise errors.TimeoutError(name=name, payload=payload, message="element not visible")
        return matches[0]

    def _open(self, path: str) -> None:
        self.url = urljoin(self.base_url + "/", path.lstrip("/"))
        self.values.clear()
        self.error_text = None
        self.menu_open = False

    def _submit_login(self) -> None:
        username = self.values.get(USERNAME, "")
        password = self.values.get(PASSWORD, "")
        if not username:
            self.error_text = "Epic sadface: Username is required"
        elif not password:
            self.error_text = "Epic sadface: Password is required"
        elif username in LOCKED_USERS and password == VALID_PASSWORD:
            self.error_text = "Epic sadface: Sorry, this user has been locked out."
        elif username in VALID_USERS and password == VALID_PASSWORD:
            self._open("/inventory.html")
        else:
            self.error_text = (
                "Epic sadface: Username and password do not match any user in this service"
            )

    # ---- Driver protocol --------------------------------------------------------
    async def goto(self, url: str, wait_until: str = "load") -> Dict[str, Any]:
        self.calls.append(("goto", url))
        if self.goto_error is not None:
            raise self.goto_error
        self._open(url)
        return {"url": self.url, "status": 200}

    async def wait_for_network_idle(self) -> None:
        self.calls.append(("wait_for_network_idle", self.url))
        if self.idle_error is not None:
            raise self.idle_error

    async def title(self) -> str:
        self.calls.append(("title", None))
        return "Swag Labs"

    async def screenshot(self, name: str) -> str:
        self.calls.append(("screenshot", name))
        if self.screenshot_error is not None:
            raise self.screenshot_error
        path = f"screenshots/{name}.png"
        self.screenshots.append(path)
        return path

    async def fill(self, locator: Locator, text: str) -> Dict[str, Any]:
        self.calls.append(("fill", (locator.selector, text)))
        self._actionable("fill", locator)
        self.values[locator.selector] = text
        return {"selector": locator.selector, "value": text}

    async def click(self, locator: Locator) -> Dict[str, Any]:
        self.calls.append(("click", locator.selector))
        if locator.selector == MENU_BUTTON and self.menu_open:
            # the open panel covers the trigger, as on the real site
            raise errors.TimeoutError(name="click", payload={"selector": locator.selector}, message="element is obscured")
        self._actionable("click", locator)
        if locator.selector == LOGIN_BUTTON:
            self._submit_login()
        elif locator.selector == MENU_BUTTON:
            self.menu_open = True
        elif locator.selector == LOGOUT_LINK:
            self._open("/")
        return {"selector": locator.selector, "url": self.url}

    async def text_content(self, locator: Locator) -> Optional[str]:
        self.calls.append(("text_content", locator.selector))
        matches = self._matches(locator)
        return matches[0].text if matches else None

    async def is_visible(self, locator: Locator) -> bool:
        self.calls.append(("is_visible", locator.selector))
        matches = self._matches(locator)
        return bool(matches) and matches[0].visible

    async def is_enabled(self, locator: Locator) -> bool:
        self.calls.append(("is_enabled", locator.selector))
        return self._actionable("is_enabled", locator).enabled

    async def count(self, locator: Locator) -> int:
        self.calls.append(("count", locator.selector))
        return len(self._matches(locator))

    async def wait_for_visible(self, locator: Locator) -> None:
        self.calls.append(("wait_for_visible", locator.selector))
        self._actionable("wait_for_visible", locator)

    # ---- helpers for tests ------------------------------------------------------
    def calls_named(self, *names: str) -> List[Tuple[str, Any]]:
        return [call for call in self.calls if call[0] in names]


@pytest.fixture
def storefront() -> FakeStorefront:
    return FakeStorefront()
