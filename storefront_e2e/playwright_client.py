"""
Direct Playwright launcher for storefront sessions.

One client owns one browser process and one default context. Each test gets
its own client, so cookies, storage and authentication state never leak
between tests.

Usage:
    async with PlaywrightClient(browser_type="firefox") as client:
        await client.page.goto("https://www.saucedemo.com")
"""

import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from storefront_e2e.config import settings

logger = logging.getLogger(__name__)


class PlaywrightClient:
    """
    In-process Playwright client.

    Example:
        async with PlaywrightClient() as client:
            page = client.page
            await page.goto("https://www.saucedemo.com")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize Playwright client.

        Args:
            browser_type: Browser to use (chromium, firefox, webkit)
            headless: Run in headless mode (None = PLAYWRIGHT_HEADLESS setting)
            timeout: Default timeout in milliseconds (None = PLAYWRIGHT_TIMEOUT_MS setting)
            base_url: Base URL for relative navigation in the default context
        """
        self.browser_type = browser_type or settings.browser_type
        self.headless = settings.playwright_headless if headless is None else headless
        self.timeout = settings.timeout_ms if timeout is None else timeout
        self.base_url = base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "PlaywrightClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def connect(self) -> None:
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()

        try:
            if self.browser_type == "firefox":
                launcher = self._playwright.firefox
            elif self.browser_type == "webkit":
                launcher = self._playwright.webkit
            else:
                launcher = self._playwright.chromium
            self._browser = await launcher.launch(headless=self.headless)

            self._context = await self.new_context()
            self._page = await self._context.new_page()
        except BaseException:
            # __aexit__ never runs when __aenter__ raises
            await self.close()
            raise
        logger.debug(
            f"Launched {self.browser_type} (headless={self.headless}, timeout={self.timeout}ms)"
        )

    async def new_context(self, **kwargs) -> BrowserContext:
        """
        Create a new browser context with custom options.

        Args:
            **kwargs: Context options (viewport, user_agent, etc.)

        Returns:
            BrowserContext object
        """
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        if self.base_url and "base_url" not in kwargs:
            kwargs["base_url"] = self.base_url
        context = await self._browser.new_context(**kwargs)
        context.set_default_timeout(self.timeout)
        context.set_default_navigation_timeout(self.timeout)
        return context

    async def close(self) -> None:
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self) -> Browser:
        """Get the browser instance."""
        if not self._browser:
            raise RuntimeError("Client not connected")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        """Get the default context."""
        if not self._context:
            raise RuntimeError("Client not connected")
        return self._context

    @property
    def page(self) -> Page:
        """Get the default page."""
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page

