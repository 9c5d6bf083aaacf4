"""Thin wrapper around direct Playwright exposing the driver capability.

Page objects talk to a :class:`Driver`; :class:`Browser` is the Playwright
implementation. Every element operation re-resolves its :class:`Locator`
against the live page, waits using the single session timeout, and
translates Playwright failures into :mod:`storefront_e2e.errors`.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional, Protocol, Type, TypeVar
from urllib.parse import urljoin

import anyio
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator as PlaywrightLocator
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

from storefront_e2e import errors
from storefront_e2e.config import settings
from storefront_e2e.locators import Locator
from storefront_e2e.playwright_client import PlaywrightClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Seconds allowed past the driver timeout before a call that never returns is cancelled.
HARD_DEADLINE_GRACE = 5.0


class Driver(Protocol):
    """Browser capability the page objects are written against."""

    @property
    def url(self) -> str: ...

    async def goto(self, url: str, wait_until: str = "load") -> Dict[str, Any]: ...

    async def wait_for_network_idle(self) -> None: ...

    async def title(self) -> str: ...

    async def screenshot(self, name: str) -> str: ...

    async def fill(self, locator: Locator, text: str) -> Dict[str, Any]: ...

    async def click(self, locator: Locator) -> Dict[str, Any]: ...

    async def text_content(self, locator: Locator) -> Optional[str]: ...

    async def is_visible(self, locator: Locator) -> bool: ...

    async def is_enabled(self, locator: Locator) -> bool: ...

    async def count(self, locator: Locator) -> int: ...

    async def wait_for_visible(self, locator: Locator) -> None: ...


class Browser:
    """Playwright-backed :class:`Driver` bound to one page for one test."""

    def __init__(
        self,
        page: Page,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        screenshot_dir: Optional[str] = None,
    ) -> None:
        self._page = page
        self.base_url = base_url or settings.base_url
        self.timeout_ms = settings.timeout_ms if timeout_ms is None else timeout_ms
        self.screenshot_dir = screenshot_dir or settings.screenshot_dir
        self._closed = False

    # ---- session state ----------------------------------------------------------
    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Mark the session ended; later calls fail instead of touching the page."""
        self._closed = True

    def _ensure_open(self, name: str) -> None:
        if self._closed:
            raise errors.DriverError(name=name, payload={}, message="browser session is closed")

    def resolve_url(self, url: str) -> str:
        """Return an absolute URL, treating relative paths as relative to base_url."""
        return urljoin(self.base_url.rstrip("/") + "/", url.lstrip("/"))

    def _resolve(self, locator: Locator) -> PlaywrightLocator:
        return self._page.locator(locator.selector)

    async def _call(
        self,
        name: str,
        payload: Dict[str, Any],
        action: Callable[[], Awaitable[T]],
        locator: Optional[Locator] = None,
        timeout_error: Type[errors.DriverError] = errors.TimeoutError,
    ) -> T:
        """Run one driver action and translate its failures."""
        self._ensure_open(name)
        logger.debug(f"{name} {payload}")
        deadline = self.timeout_ms / 1000 + HARD_DEADLINE_GRACE
        try:
            with anyio.fail_after(deadline):
                return await action()
        except PlaywrightTimeout as exc:
            if locator is not None and await self._matches_nothing(locator):
                raise errors.ElementNotFoundError(
                    name=name, payload=payload, message=f"no element matches {locator}"
                ) from exc
            raise timeout_error(name=name, payload=payload, message=str(exc)) from exc
        except PlaywrightError as exc:
            raise errors.DriverError(name=name, payload=payload, message=str(exc)) from exc
        except TimeoutError as exc:
            raise timeout_error(
                name=name,
                payload=payload,
                message=f"driver did not respond within {deadline:.1f}s",
            ) from exc

    async def _matches_nothing(self, locator: Locator) -> bool:
        try:
            return await self._resolve(locator).count() == 0
        except PlaywrightError:
            return False

    # ---- navigation -------------------------------------------------------------
    @property
    def url(self) -> str:
        self._ensure_open("url")
        return self._page.url

    async def goto(self, url: str, wait_until: str = "load") -> Dict[str, Any]:
        """Navigate to URL and return the final URL and HTTP status.

        Args:
            url: Absolute URL or path relative to base_url
            wait_until: Playwright load state ("load", "domcontentloaded", "networkidle")
        """
        target = self.resolve_url(url)
        response = await self._call(
            "goto",
            {"url": target, "wait_until": wait_until},
            lambda: self._page.goto(target, wait_until=wait_until, timeout=self.timeout_ms),
            timeout_error=errors.NavigationError,
        )
        return {"url": self._page.url, "status": response.status if response else None}

    async def wait_for_network_idle(self) -> None:
        """Block until no network activity has occurred for Playwright's quiet interval."""
        await self._call(
            "wait_for_network_idle",
            {"url": self._page.url},
            lambda: self._page.wait_for_load_state("networkidle", timeout=self.timeout_ms),
            timeout_error=errors.NavigationError,
        )

    async def title(self) -> str:
        return await self._call("title", {}, self._page.title)

    async def screenshot(self, name: str) -> str:
        """Save a full-page PNG named ``name`` under screenshot_dir and return its path.

        Creating the directory may raise ``OSError``; that is left to the caller.
        """
        os.makedirs(self.screenshot_dir, exist_ok=True)
        path = os.path.join(self.screenshot_dir, f"{name}.png")
        await self._call(
            "screenshot",
            {"name": name, "path": path},
            lambda: self._page.screenshot(path=path, full_page=True),
        )
        return path

    # ---- element operations -----------------------------------------------------
    async def fill(self, locator: Locator, text: str) -> Dict[str, Any]:
        """Fill input field."""
        payload = {"selector": locator.selector, "value": text}
        await self._call(
            "fill",
            payload,
            lambda: self._resolve(locator).fill(text, timeout=self.timeout_ms),
            locator=locator,
        )
        return payload

    async def click(self, locator: Locator) -> Dict[str, Any]:
        """Click element."""
        await self._call(
            "click",
            {"selector": locator.selector},
            lambda: self._resolve(locator).click(timeout=self.timeout_ms),
            locator=locator,
        )
        return {"selector": locator.selector, "url": self._page.url}

    async def text_content(self, locator: Locator) -> Optional[str]:
        """Text of the first match, or None when nothing matches right now."""
        if await self.count(locator) == 0:
            return None
        return await self._call(
            "text_content",
            {"selector": locator.selector},
            lambda: self._resolve(locator).first.text_content(timeout=self.timeout_ms),
            locator=locator,
        )

    async def is_visible(self, locator: Locator) -> bool:
        """Whether the first match is rendered and visible; does not wait."""
        return await self._call(
            "is_visible",
            {"selector": locator.selector},
            lambda: self._resolve(locator).first.is_visible(),
        )

    async def is_enabled(self, locator: Locator) -> bool:
        return await self._call(
            "is_enabled",
            {"selector": locator.selector},
            lambda: self._resolve(locator).first.is_enabled(timeout=self.timeout_ms),
            locator=locator,
        )

    async def count(self, locator: Locator) -> int:
        return await self._call(
            "count",
            {"selector": locator.selector},
            lambda: self._resolve(locator).count(),
        )

    async def wait_for_visible(self, locator: Locator) -> None:
        await self._call(
            "wait_for_visible",
            {"selector": locator.selector},
            lambda: self._resolve(locator).first.wait_for(state="visible", timeout=self.timeout_ms),
            locator=locator,
        )


@asynccontextmanager
async def browser_session(base_url: Optional[str] = None) -> AsyncIterator[Browser]:
    """Yield a Browser on a fresh Playwright client; released on every exit path."""
    client = PlaywrightClient(headless=settings.playwright_headless)
    browser: Optional[Browser] = None
    try:
        await client.connect()
        browser = Browser(client.page, base_url=base_url)
        yield browser
    finally:
        if browser is not None:
            browser.close()
        await client.close()
