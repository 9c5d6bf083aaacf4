"""Declarative element references bound by the page objects."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SelectorKind = Literal["test-id", "id", "class", "css"]


@dataclass(frozen=True)
class Locator:
    """Immutable description of zero-or-more elements on a screen.

    Nothing is looked up when a Locator is created; the driver resolves the
    selector against the live DOM each time an operation uses it.
    """

    name: str
    selector: str
    kind: SelectorKind = "css"

    @classmethod
    def by_test_id(cls, name: str, test_id: str) -> Locator:
        return cls(name=name, selector=f'[data-test="{test_id}"]', kind="test-id")

    @classmethod
    def by_id(cls, name: str, element_id: str) -> Locator:
        return cls(name=name, selector=f"#{element_id}", kind="id")

    @classmethod
    def by_class(cls, name: str, class_name: str) -> Locator:
        return cls(name=name, selector=f".{class_name}", kind="class")

    def __str__(self) -> str:
        return f"{self.name} ({self.selector})"
