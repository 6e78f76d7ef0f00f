"""Resolve calendar coordinates to half-open UTC timestamp windows.

Weeks are Monday-start and numbered relative to the month: week 1 begins
on the first Monday on or after the 1st, so a month has four or five
weeks. A week always spans exactly seven days and may run into the next
month.
"""

import calendar
from datetime import UTC, datetime, timedelta

import structlog

from tg_digest.data_model.base import StrictBaseModel
from tg_digest.errors import DateWindowError
from tg_digest.window.constants import (
    DAYS_PER_WEEK,
    MAX_MONTH,
    MAX_WEEK,
    MIN_MONTH,
    MIN_WEEK,
    MIN_YEAR,
)


logger = structlog.get_logger()


class DateWindow(StrictBaseModel):
    """Half-open ``[from_ts, to_ts)`` interval in UTC seconds."""

    from_ts: int
    to_ts: int

    @property
    def start(self) -> datetime:
        """Inclusive start as an aware UTC datetime."""
        return datetime.fromtimestamp(self.from_ts, tz=UTC)

    @property
    def end(self) -> datetime:
        """Exclusive end as an aware UTC datetime."""
        return datetime.fromtimestamp(self.to_ts, tz=UTC)

    def contains(self, timestamp: int) -> bool:
        """Check whether a timestamp falls inside the window.

        Args:
            timestamp: UTC seconds.

        Returns:
            True if ``from_ts <= timestamp < to_ts``.
        """
        return self.from_ts <= timestamp < self.to_ts

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "DateWindow":
        """Build a window from two aware datetimes."""
        return cls(from_ts=int(start.timestamp()), to_ts=int(end.timestamp()))


def _utc(year: int, month: int, day: int = 1) -> datetime:
    """Construct midnight UTC, reporting calendar rejections as input errors."""
    try:
        return datetime(year, month, day, tzinfo=UTC)
    except (ValueError, OverflowError) as e:
        raise DateWindowError(
            f"Can't construct date {year}-{month}-{day}: {e}",
            year=year,
            month=month,
            day=day,
        ) from e


def get_date_from_year(year: int) -> DateWindow:
    """Resolve a whole year.

    Args:
        year: Calendar year, 2014 or later.

    Returns:
        ``[Jan 1 of year, Jan 1 of year + 1)``.

    Raises:
        DateWindowError: If the year predates Telegram or is unrepresentable.
    """
    if year < MIN_YEAR:
        raise DateWindowError(
            f"Telegram did not exist before {MIN_YEAR} (got year {year})",
            year=year,
        )
    window = DateWindow.between(_utc(year, 1), _utc(year + 1, 1))
    logger.debug("window_resolved", component="window", year=year)
    return window


def get_date_from_month(year: int, month: int) -> DateWindow:
    """Resolve a calendar month.

    Args:
        year: Calendar year, 2014 or later.
        month: Month number 1..12.

    Returns:
        ``[1st of month, 1st of next month)``.

    Raises:
        DateWindowError: If the year or month is out of range.
    """
    get_date_from_year(year)
    if not MIN_MONTH <= month <= MAX_MONTH:
        raise DateWindowError(
            f"Month must be in range [{MIN_MONTH};{MAX_MONTH}] (got {month})",
            year=year,
            month=month,
        )

    next_year, next_month = (year + 1, 1) if month == MAX_MONTH else (year, month + 1)
    window = DateWindow.between(
        _utc(year, month),
        _utc(next_year, next_month),
    )
    logger.debug("window_resolved", component="window", year=year, month=month)
    return window


def first_week_day(year: int, month: int) -> int:
    """Return the day of month on which week 1 starts.

    Args:
        year: Calendar year.
        month: Month number.

    Returns:
        Day of month (1..7) of the first Monday.
    """
    weekday = calendar.weekday(year, month, 1)  # Monday == 0
    return 1 + (DAYS_PER_WEEK - weekday) % DAYS_PER_WEEK


def get_date_from_week(year: int, month: int, week: int) -> DateWindow:
    """Resolve a month-relative, Monday-start week.

    Args:
        year: Calendar year, 2014 or later.
        month: Month number 1..12.
        week: Week of month 1..5.

    Returns:
        Seven-day window starting on the week's Monday.

    Raises:
        DateWindowError: If any coordinate is out of range or the week's
            first day falls beyond the end of the month.
    """
    get_date_from_month(year, month)
    if not MIN_WEEK <= week <= MAX_WEEK:
        raise DateWindowError(
            f"Week must be in range [{MIN_WEEK};{MAX_WEEK}] (got {week})",
            year=year,
            month=month,
            week=week,
        )

    day = (week - 1) * DAYS_PER_WEEK + first_week_day(year, month)
    days_in_month = calendar.monthrange(year, month)[1]
    if day > days_in_month:
        raise DateWindowError(
            f"Week {week} of {year}-{month:02d} starts on day {day}, "
            f"but the month has only {days_in_month} days",
            year=year,
            month=month,
            week=week,
        )

    start = _utc(year, month, day)
    window = DateWindow.between(start, start + timedelta(days=DAYS_PER_WEEK))
    logger.debug(
        "window_resolved", component="window", year=year, month=month, week=week
    )
    return window


def resolve_window(
    year: int, month: int | None = None, week: int | None = None
) -> DateWindow:
    """Resolve year, year+month or year+month+week coordinates.

    Args:
        year: Calendar year.
        month: Optional month number.
        week: Optional week of month; requires ``month``.

    Returns:
        The matching window.

    Raises:
        DateWindowError: If the coordinates are invalid.
    """
    if week is not None:
        if month is None:
            raise DateWindowError(
                "Week requires a month", year=year, month=month, week=week
            )
        return get_date_from_week(year, month, week)
    if month is not None:
        return get_date_from_month(year, month)
    return get_date_from_year(year)
