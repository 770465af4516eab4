"""Row-to-domain helpers shared by the SQL repositories."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from orderbot.domain.model.value_objects import Money


def as_utc(value: datetime) -> datetime:
    # SQLite hands timezone-aware columns back naive; they were written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def as_money(value: Decimal | float | int | str) -> Money:
    if isinstance(value, Decimal):
        return Money(value)
    return Money.of(value)
