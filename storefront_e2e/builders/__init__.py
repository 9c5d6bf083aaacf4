"""Test-data builders."""

from storefront_e2e.builders.user_builder import UserBuilder, UserRecord, epoch_millis

__all__ = ["UserBuilder", "UserRecord", "epoch_millis"]
