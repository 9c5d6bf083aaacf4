"""Shared configuration for the storefront UI and API tests.

Every value is read from the environment first, then from ``.env.defaults``
at the repository root, then from the constants below:

- SHOP_BASE_URL: storefront under test (UI tests)
- API_BASE_URL: JSON API under test (API tests)
- SHOP_STANDARD_USER / SHOP_LOCKED_USER / SHOP_PASSWORD: seeded demo accounts
- PLAYWRIGHT_BROWSER, PLAYWRIGHT_HEADLESS, PLAYWRIGHT_TIMEOUT_MS: driver setup
- SCREENSHOT_DIR: where ``take_screenshot()`` writes
- E2E_LIVE: live tests are skipped unless this is truthy
- SHOP_SMOKE_BASE_URL: optional second storefront profile
"""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional
from urllib.parse import urljoin

from storefront_e2e.env_defaults import get_env_default

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.saucedemo.com"
DEFAULT_API_BASE_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_TIMEOUT_MS = 30000
SUPPORTED_BROWSERS = {"chromium", "firefox", "webkit"}

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(key: str, fallback: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value:
        return value
    return get_env_default(key) or fallback


def _env_flag(key: str, fallback: bool) -> bool:
    value = _env(key)
    if value is None:
        return fallback
    return value.strip().lower() in _TRUE_VALUES


def _join(base_url: str, path: str) -> str:
    return urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))


@dataclass
class TargetProfile:
    """Host plus seeded credentials for one storefront deployment."""

    name: str
    base_url: str
    api_base_url: str
    standard_username: str
    locked_username: str
    password: str


class HarnessConfig:
    """Configuration resolved once per process (see module docstring)."""

    def __init__(self) -> None:
        self.browser_type: str = (_env("PLAYWRIGHT_BROWSER", "chromium") or "chromium").lower()
        if self.browser_type not in SUPPORTED_BROWSERS:
            logger.warning(
                f"[CONFIG] Unknown PLAYWRIGHT_BROWSER={self.browser_type!r}, using chromium"
            )
            self.browser_type = "chromium"

        self.playwright_headless: bool = _env_flag("PLAYWRIGHT_HEADLESS", True)

        timeout_str = _env("PLAYWRIGHT_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))
        try:
            self.timeout_ms: int = int(timeout_str)
        except ValueError:
            raise RuntimeError(
                f"PLAYWRIGHT_TIMEOUT_MS must be an integer number of milliseconds, got {timeout_str!r}"
            )
        if self.timeout_ms <= 0:
            raise RuntimeError(f"PLAYWRIGHT_TIMEOUT_MS must be positive, got {self.timeout_ms}")

        self.screenshot_dir: str = _env("SCREENSHOT_DIR", "screenshots")
        self.live: bool = _env_flag("E2E_LIVE", False)

        primary = TargetProfile(
            name="primary",
            base_url=_env("SHOP_BASE_URL", DEFAULT_BASE_URL),
            api_base_url=_env("API_BASE_URL", DEFAULT_API_BASE_URL),
            standard_username=_env("SHOP_STANDARD_USER", "standard_user"),
            locked_username=_env("SHOP_LOCKED_USER", "locked_out_user"),
            password=_env("SHOP_PASSWORD", "secret_sauce"),
        )

        self._profiles: Dict[str, TargetProfile] = {primary.name: primary}

        smoke_base = _env("SHOP_SMOKE_BASE_URL")
        if smoke_base:
            self._profiles["smoke"] = TargetProfile(
                name="smoke",
                base_url=smoke_base,
                api_base_url=_env("API_SMOKE_BASE_URL", primary.api_base_url),
                standard_username=primary.standard_username,
                locked_username=primary.locked_username,
                password=primary.password,
            )

        self._active: TargetProfile = primary
        logger.debug(
            f"[CONFIG] base_url={primary.base_url} api_base_url={primary.api_base_url} "
            f"browser={self.browser_type} headless={self.playwright_headless} "
            f"timeout_ms={self.timeout_ms} live={self.live}"
        )

    # ---- active profile helpers -------------------------------------------------
    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def api_base_url(self) -> str:
        return self._active.api_base_url

    @property
    def standard_username(self) -> str:
        return self._active.standard_username

    @property
    def locked_username(self) -> str:
        return self._active.locked_username

    @property
    def password(self) -> str:
        return self._active.password

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[TargetProfile]:
        return list(self._profiles.values())

    @contextmanager
    def use_profile(self, profile: TargetProfile) -> Iterator[TargetProfile]:
        """Temporarily switch the active profile.

        The active profile is a copy, so a test mutating it cannot leak the
        change into later tests in the same process.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str) -> str:
        """Return an absolute storefront URL for the provided path."""
        return _join(self.base_url, path)

    def api_url(self, path: str) -> str:
        """Return an absolute API URL for the provided path."""
        return _join(self.api_base_url, path)


# Singleton instance - initialized on first import
settings = HarnessConfig()
