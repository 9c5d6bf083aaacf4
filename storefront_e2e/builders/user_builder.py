"""
Fluent builder for user test data.

Usage:
    user = UserBuilder().with_name("Alice").with_role("admin").build()
    admin = UserBuilder.admin().build()

Defaults are fixed when the builder is created, including the email, which
embeds a timestamp read once from the builder's clock. Two builders created
at different instants get different emails; repeated ``build()`` calls on
one builder return equal records.
"""
from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict

Clock = Callable[[], int]


def epoch_millis() -> int:
    """Milliseconds since the epoch; the default email-uniqueness clock."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class UserRecord:
    """Immutable user produced by :class:`UserBuilder`."""

    name: str
    email: str
    password: str
    role: str
    active: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class UserBuilder:
    """Accumulates field overrides and snapshots them into a UserRecord."""

    DEFAULT_NAME = "Test User"
    DEFAULT_PASSWORD = "Password123!"
    DEFAULT_ROLE = "user"
    EMAIL_TEMPLATE = "test-{stamp}@example.com"

    def __init__(self, clock: Clock = epoch_millis) -> None:
        """
        Args:
            clock: Called exactly once, here, to stamp the default email.
        """
        self._fields: Dict[str, Any] = {
            "name": self.DEFAULT_NAME,
            "email": self.EMAIL_TEMPLATE.format(stamp=clock()),
            "password": self.DEFAULT_PASSWORD,
            "role": self.DEFAULT_ROLE,
            "active": True,
        }

    def with_name(self, name: str) -> UserBuilder:
        self._fields["name"] = name
        return self

    def with_email(self, email: str) -> UserBuilder:
        self._fields["email"] = email
        return self

    def with_password(self, password: str) -> UserBuilder:
        self._fields["password"] = password
        return self

    def with_role(self, role: str) -> UserBuilder:
        self._fields["role"] = role
        return self

    def with_active_status(self, active: bool) -> UserBuilder:
        self._fields["active"] = active
        return self

    def build(self) -> UserRecord:
        return UserRecord(**self._fields)

    @classmethod
    def admin(cls, clock: Clock = epoch_millis) -> UserBuilder:
        """Fresh builder for an administrator."""
        return cls(clock).with_role("admin").with_name("Admin User")

    @classmethod
    def regular(cls, clock: Clock = epoch_millis) -> UserBuilder:
        """Fresh builder for an ordinary shopper."""
        return cls(clock).with_role("user").with_name("Regular User")
