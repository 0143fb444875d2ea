"""Pure date and balance checks used by the leave lifecycle.

All arithmetic is on calendar days: datetimes are truncated to their date so a
timezone offset on a timestamp can never add or drop a day.
"""

from __future__ import annotations

from datetime import date, datetime

from ..common.datetime_utils import as_calendar_date
from ..core.constants import HALF_DAY
from ..core.exceptions import InsufficientBalanceError, InvalidRangeError


def days_between_inclusive(
    start: date | datetime,
    end: date | datetime,
    first_half: bool = False,
    last_half: bool = False,
) -> float:
    """Number of leave days in [start, end], minus half a day per half-day flag.

    A single-day leave with any half-day flag counts as half a day.
    """

    start_day = as_calendar_date(start)
    end_day = as_calendar_date(end)
    if end_day < start_day:
        raise InvalidRangeError("End date must be on or after start date")

    days = float((end_day - start_day).days + 1)
    if start_day == end_day:
        return HALF_DAY if (first_half or last_half) else days

    if first_half:
        days -= HALF_DAY
    if last_half:
        days -= HALF_DAY
    return days


def intervals_overlap(
    a_start: date | datetime,
    a_end: date | datetime,
    b_start: date | datetime,
    b_end: date | datetime,
) -> bool:
    """Inclusive on both ends: ranges touching on one day overlap."""

    return as_calendar_date(a_start) <= as_calendar_date(b_end) and as_calendar_date(a_end) >= as_calendar_date(b_start)


def ensure_sufficient_balance(requested: float, remaining: float) -> None:
    if requested > remaining:
        raise InsufficientBalanceError(
            f"Insufficient leave balance. You have {remaining:g} days remaining."
        )
