"""Customer entity, identified by the address it writes to us from."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderbot.domain.exceptions import ValidationError

DEFAULT_CUSTOMER_NAME = "Customer"


@dataclass
class Customer:
    """A customer known by their channel identifier.

    ``channel_id`` is the natural key (one record per identifier, enforced
    by the store). ``id`` is the surrogate key assigned on insert; the
    display ``name`` is the only attribute that changes after creation.
    """

    id: int | None
    channel_id: str
    name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        channel_id: str,
        name: str | None = None,
        default_name: str = DEFAULT_CUSTOMER_NAME,
    ) -> Customer:
        """Build a not-yet-persisted customer for a first contact."""
        channel_id = normalize_channel_id(channel_id)
        display_name = name.strip() if name and name.strip() else default_name
        return Customer(id=None, channel_id=channel_id, name=display_name)

    def wants_rename(self, name: str | None) -> bool:
        """True when *name* is supplied and differs from the stored one."""
        return bool(name and name.strip()) and name.strip() != self.name


def normalize_channel_id(channel_id: str) -> str:
    if channel_id is None or not str(channel_id).strip():
        raise ValidationError("Channel identifier is required")
    return str(channel_id).strip()


@dataclass(frozen=True)
class CustomerSummary:
    """Lightweight customer view attached to orders on read."""

    id: int
    name: str
    channel_id: str
