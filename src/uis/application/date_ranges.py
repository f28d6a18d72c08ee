"""Calendar ranges for delivery counters and report filters.

All ranges are half-open ``[start, end)`` and keep the tzinfo of the
moment they are derived from, so "today" means midnight to midnight in
the caller's own calendar.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo

from uis.domain.exceptions import ValidationError


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Midnight today to midnight tomorrow."""
    start = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)
    return start, datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=now.tzinfo)


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """First of this month to first of next month."""
    start = datetime(now.year, now.month, 1, tzinfo=now.tzinfo)
    if now.month == 12:
        end = datetime(now.year + 1, 1, 1, tzinfo=now.tzinfo)
    else:
        end = datetime(now.year, now.month + 1, 1, tzinfo=now.tzinfo)
    return start, end


def inclusive_days(
    start_date: date, end_date: date, tz: tzinfo | None
) -> tuple[datetime, datetime]:
    """A report period where both the start and the end day are included."""
    if end_date < start_date:
        raise ValidationError("End date is before start date", field="end_date")
    start = datetime.combine(start_date, time.min, tzinfo=tz)
    end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=tz)
    return start, end
