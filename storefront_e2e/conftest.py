"""
Fixtures wiring the page objects to real Playwright sessions.

Each test gets its own PlaywrightClient (browser + context + page), so
sessions are never shared between tests and are closed on every exit path,
including assertion failures.
"""
import logging
from typing import Callable, Optional

import pytest
import pytest_asyncio

from storefront_e2e.api_client import ApiClient
from storefront_e2e.browser import Browser
from storefront_e2e.config import TargetProfile, settings
from storefront_e2e.pages import InventoryPage, LoginPage, PageObject
from storefront_e2e.playwright_client import PlaywrightClient

logger = logging.getLogger(__name__)


@pytest_asyncio.fixture()
async def playwright_client():
    """Create a Playwright client instance."""
    async with PlaywrightClient(headless=settings.playwright_headless) as client:
        yield client


@pytest_asyncio.fixture()
async def browser(playwright_client, active_profile):
    """Create a Browser on the client's default page for the active profile."""
    browser = Browser(playwright_client.page, base_url=active_profile.base_url)
    yield browser
    browser.close()


@pytest_asyncio.fixture()
async def login_page(browser):
    """Login page, already navigated and loaded."""
    page = LoginPage(browser)
    await page.navigate()
    return page


@pytest.fixture()
def inventory_page(browser):
    """Inventory page on the same session; not navigated."""
    return InventoryPage(browser)


@pytest_asyncio.fixture()
async def api_client(active_profile):
    """API client for the active profile's API base URL."""
    async with ApiClient(base_url=active_profile.api_base_url) as client:
        yield client


def _profile_id(profile: TargetProfile) -> str:
    return profile.name


@pytest.fixture(params=settings.profiles(), ids=_profile_id)
def active_profile(request):
    """Activate each configured target profile for the test run."""
    profile: TargetProfile = request.param
    with settings.use_profile(profile):
        yield profile


class ScreenshotHelper:
    """Numbered, prefixed screenshots for one test."""

    def __init__(self, page: PageObject, prefix: str):
        self.page = page
        self.prefix = prefix
        self._step = 0

    async def capture(self, name: str, description: str = "") -> Optional[str]:
        """Capture ``<prefix>-<step>-<name>.png``; returns the path, or None if capture failed."""
        self._step += 1
        path = await self.page.take_screenshot(f"{self.prefix}-{self._step:02d}-{name}")
        if description:
            logger.info(f"Screenshot {path}: {description}")
        return path


@pytest.fixture
def screenshot_helper() -> Callable[[PageObject, str], ScreenshotHelper]:
    """Factory fixture creating a ScreenshotHelper for a page object."""
    def _create_helper(page: PageObject, prefix: str) -> ScreenshotHelper:
        return ScreenshotHelper(page, prefix)
    return _create_helper
