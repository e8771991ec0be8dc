"""Expiry timestamps held by value rather than inherited."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


class Expiry:
    """A TTL that starts expired and is pushed forward on each ``refresh()``."""

    def __init__(self, ttl: timedelta) -> None:
        self.ttl = ttl
        self.expires_at = datetime.now(UTC)

    def is_active(self) -> bool:
        return self.expires_at > datetime.now(UTC)

    def is_expired(self) -> bool:
        return not self.is_active()

    def refresh(self) -> None:
        self.expires_at = datetime.now(UTC) + self.ttl
