"""
Page Object Model classes for the storefront screens.

Each page object wraps one browser session and a fixed set of locators, and
exposes domain actions (log in, open the menu, count products) instead of
raw selectors.
"""

from storefront_e2e.pages.base import PageObject, PageState, PageSupport
from storefront_e2e.pages.inventory_page import InventoryPage
from storefront_e2e.pages.login_page import LoginPage

__all__ = ["PageObject", "PageState", "PageSupport", "LoginPage", "InventoryPage"]
