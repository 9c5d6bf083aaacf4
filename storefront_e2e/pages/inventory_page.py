"""Page object for the inventory (products) screen shown after login."""
from __future__ import annotations

import re
from typing import Optional

from storefront_e2e.browser import Driver
from storefront_e2e.locators import Locator
from storefront_e2e.pages.base import PageState, PageSupport


class InventoryPage:
    """Authenticated landing screen: product list, cart and side menu."""

    PATH = "/inventory.html"
    URL_PATTERN = re.compile(r".*inventory\.html")

    PAGE_TITLE = Locator.by_class("title", "title")
    MENU_BUTTON = Locator.by_id("menu trigger", "react-burger-menu-btn")
    LOGOUT_LINK = Locator.by_test_id("logout control", "logout-sidebar-link")
    SHOPPING_CART = Locator.by_class("cart indicator", "shopping_cart_link")
    CART_BADGE = Locator.by_class("cart badge", "shopping_cart_badge")
    INVENTORY_ITEMS = Locator.by_class("item list", "inventory_item")

    def __init__(self, driver: Driver) -> None:
        self._driver = driver
        self._support = PageSupport(driver, self.PATH, "InventoryPage")

    @property
    def state(self) -> PageState:
        return self._support.state

    # ---- page object contract ---------------------------------------------------
    async def navigate(self) -> None:
        """Deep-link straight to the inventory (session must already be authenticated)."""
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
    async def get_page_title(self) -> str:
        self._support.require_loaded("get_page_title")
        return await self._driver.text_content(self.PAGE_TITLE) or ""

    async def open_menu(self) -> None:
        """Ensure the side menu is open; a no-op click-wise if it already is."""
        self._support.require_loaded("open_menu")
        if not await self._driver.is_visible(self.LOGOUT_LINK):
            await self._driver.click(self.MENU_BUTTON)
        await self._driver.wait_for_visible(self.LOGOUT_LINK)

    async def logout(self) -> None:
        await self.open_menu()
        await self._driver.click(self.LOGOUT_LINK)

    async def is_on_inventory_page(self) -> bool:
        self._support.require_loaded("is_on_inventory_page")
        return await self._driver.is_visible(self.PAGE_TITLE)

    async def get_product_count(self) -> int:
        self._support.require_loaded("get_product_count")
        return await self._driver.count(self.INVENTORY_ITEMS)

    async def get_cart_item_count(self) -> str:
        """Badge text, or "0" when no badge is shown (an empty cart has none)."""
        self._support.require_loaded("get_cart_item_count")
        if not await self._driver.is_visible(self.CART_BADGE):
            return "0"
        return await self._driver.text_content(self.CART_BADGE) or "0"
