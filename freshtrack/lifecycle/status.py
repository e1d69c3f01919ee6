"""Freshness evaluation for pantry items."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from fractions import Fraction
from typing import Callable

from .models import FreshnessStatus

Clock = Callable[[], datetime]

# Share of the total shelf life that counts as the "expiring" window
EXPIRING_FRACTION = Fraction(2, 5)

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class StatusEvaluation:
    days_remaining: int
    status: FreshnessStatus


def system_clock() -> datetime:
    return datetime.now()


def expiring_threshold(total_shelf_life_days: int) -> int:
    """Days-remaining cutoff for the expiring state (40% of shelf life, rounded up)."""
    return math.ceil(EXPIRING_FRACTION * total_shelf_life_days)


def days_until(expiry_date: date, now: datetime | date) -> int:
    """Whole days from ``now`` until the start of ``expiry_date``, floored.

    A bare ``date`` for ``now`` is read as midnight of that day.
    """
    if not isinstance(now, datetime):
        now = datetime.combine(now, time.min)
    expiry = datetime.combine(expiry_date, time.min, tzinfo=now.tzinfo)
    return (expiry - now) // _ONE_DAY


def evaluate(
    quantity: int,
    expiry_date: date,
    total_shelf_life_days: int,
    now: datetime | date,
) -> StatusEvaluation:
    """Compute days remaining and freshness status.

    Pure: identical inputs always give identical output.
    """
    remaining = days_until(expiry_date, now)

    if quantity <= 0:
        status = FreshnessStatus.CONSUMED
    elif remaining < 0:
        status = FreshnessStatus.EXPIRED
    elif remaining <= expiring_threshold(total_shelf_life_days):
        status = FreshnessStatus.EXPIRING
    else:
        status = FreshnessStatus.FRESH

    return StatusEvaluation(days_remaining=remaining, status=status)
