"""Page object contract and the readiness helper every screen composes.

Lifecycle of a page object::

    UNINITIALIZED --navigate()--> LOADING --network idle--> LOADED

``wait_for_page_load()`` also moves a page to LOADED, which is how a screen
reached through another screen's action (the inventory after a login) is
adopted. Interaction operations require LOADED and fail fast with
:class:`NotReadyError` otherwise.
"""
from __future__ import annotations

import enum
import logging
from typing import Optional, Protocol

from storefront_e2e.browser import Driver
from storefront_e2e.errors import DriverError, NotReadyError

logger = logging.getLogger(__name__)


class PageState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    LOADED = "loaded"


class PageObject(Protocol):
    """Operations every screen exposes."""

    async def navigate(self) -> None: ...

    async def get_title(self) -> str: ...

    async def get_current_url(self) -> str: ...

    async def wait_for_page_load(self) -> None: ...

    async def take_screenshot(self, name: str) -> Optional[str]: ...


class PageSupport:
    """Session reference plus readiness state shared by one page object."""

    def __init__(self, driver: Driver, path: str, page_name: str) -> None:
        self.driver = driver
        self.path = path
        self.page_name = page_name
        self.state = PageState.UNINITIALIZED

    @property
    def is_loaded(self) -> bool:
        return self.state is PageState.LOADED

    def require_loaded(self, operation: str) -> None:
        if not self.is_loaded:
            raise NotReadyError(page=self.page_name, operation=operation, state=self.state.value)

    async def navigate(self) -> None:
        """Load the screen and wait for network idle.

        Any failure leaves the page UNINITIALIZED, even if an earlier
        navigate() had succeeded, so reads fail with NotReadyError until the
        next successful navigate() or wait_for_page_load().
        """
        self.state = PageState.LOADING
        try:
            await self.driver.goto(self.path)
            await self.driver.wait_for_network_idle()
        except BaseException:
            self.state = PageState.UNINITIALIZED
            raise
        self.state = PageState.LOADED
        logger.debug(f"{self.page_name} loaded at {self.driver.url}")

    async def wait_for_page_load(self) -> None:
        await self.driver.wait_for_network_idle()
        self.state = PageState.LOADED

    async def get_title(self) -> str:
        self.require_loaded("get_title")
        return await self.driver.title()

    async def get_current_url(self) -> str:
        self.require_loaded("get_current_url")
        return self.driver.url

    async def take_screenshot(self, name: str) -> Optional[str]:
        """Capture a diagnostic screenshot; driver failures are logged, not raised."""
        try:
            return await self.driver.screenshot(name)
        except DriverError as exc:
            logger.warning(f"Screenshot '{name}' of {self.page_name} failed: {exc}")
            return None
