"""Activity-window evaluation for offers and banners.

An entity is active when:
1. it is enabled
2. start_time <= now <= end_time (inclusive, timestamp level)
3. (offers only) max_usage is unset or current_usage < max_usage

`now` is always passed in; nothing here reads the clock.
"""

from datetime import datetime, timezone
from typing import Any, Protocol

from sqlalchemy import ColumnElement, and_, or_


class TimeWindowed(Protocol):
    enabled: bool
    start_time: datetime
    end_time: datetime


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_usage_exhausted(max_usage: int | None, current_usage: int) -> bool:
    """True when a usage cap is set and already reached."""
    return max_usage is not None and current_usage >= max_usage


def is_active(entity: TimeWindowed, now: datetime) -> bool:
    """Decide whether an offer or banner is currently active.

    Banners carry no usage cap, so the cap clause only applies to entities
    that have a `max_usage` attribute.
    """
    if not entity.enabled:
        return False

    now = as_utc(now)
    if now < as_utc(entity.start_time):
        return False
    if now > as_utc(entity.end_time):
        return False

    if hasattr(entity, "max_usage"):
        if is_usage_exhausted(entity.max_usage, entity.current_usage):
            return False

    return True


def active_window_filter(model: Any, now: datetime) -> ColumnElement[bool]:
    """The is_active() predicate as a SQL WHERE clause for `model`."""
    now = as_utc(now)
    clauses = [
        model.enabled.is_(True),
        model.start_time <= now,
        model.end_time >= now,
    ]
    if hasattr(model, "max_usage"):
        clauses.append(or_(model.max_usage.is_(None), model.current_usage < model.max_usage))
    return and_(*clauses)
