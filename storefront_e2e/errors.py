"""Failure kinds surfaced by the browser layer and the page objects.

Driver failures carry a ``name``/``payload``/``message``
triple so a failing test shows which browser call broke and with what input.
Domain outcomes (wrong password, locked account, empty fields) are never
raised; page objects expose them as observable state instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class DriverError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class NavigationError(DriverError):
    """Navigation or network-idle wait did not settle within the timeout."""


class ElementNotFoundError(DriverError):
    """A selector matched zero elements where one was required."""


class TimeoutError(DriverError):  # noqa: A001 - mirrors playwright's naming
    """An interaction's implicit wait expired."""


@dataclass
class NotReadyError(Exception):
    """Raised when a page operation runs before the page has loaded."""

    page: str
    operation: str
    state: str

    def __str__(self) -> str:
        return (
            f"{self.page}.{self.operation}() called while page is {self.state}; "
            f"await navigate() or wait_for_page_load() first"
        )
