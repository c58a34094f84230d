"""Date windows: range filtering and neighbouring periods.

All windows are inclusive on both ends. Two notions of "neighbour" exist:

- prior_range(): the window of equal length ending the day before the
  current one. Used for period-over-period comparison.
- previous_calendar_period() / next_calendar_period(): month-aligned
  neighbours when the range covers whole calendar months, equal-length
  neighbours otherwise. Used for projection.
"""

from calendar import monthrange
from collections.abc import Iterable, Iterator
from datetime import date, timedelta

from cashe.core.exceptions import InvalidPeriodError
from cashe.core.models import DateRange, Movement


def filter_by_range(movements: Iterable[Movement], date_range: DateRange) -> list[Movement]:
    """Select movements dated inside the range (both bounds included).

    An unset range selects nothing. Input order is preserved.

    Args:
        movements: Movements to filter.
        date_range: Inclusive window.

    Returns:
        New list with the movements inside the window.
    """
    if not date_range.is_set:
        return []
    return [m for m in movements if date_range.start <= m.date <= date_range.end]


def prior_range(date_range: DateRange) -> DateRange | None:
    """Window of the same length ending the day before date_range starts.

    Returns None for an unset range.
    """
    if not date_range.is_set:
        return None
    span = date_range.end - date_range.start
    prior_end = date_range.start - timedelta(days=1)
    return DateRange(start=prior_end - span, end=prior_end)


def month_range(year: int, month: int) -> DateRange:
    """Full calendar month as an inclusive range."""
    return DateRange(start=date(year, month, 1), end=date(year, month, monthrange(year, month)[1]))


def add_months(day: date, months: int) -> date:
    """First day of the month `months` away from the month of `day`."""
    total = day.year * 12 + (day.month - 1) + months
    return date(total // 12, total % 12 + 1, 1)


def months_spanned(date_range: DateRange) -> int:
    """Number of calendar months the range touches."""
    if not date_range.is_set:
        return 0
    return (
        (date_range.end.year - date_range.start.year) * 12
        + date_range.end.month
        - date_range.start.month
        + 1
    )


def is_calendar_aligned(date_range: DateRange) -> bool:
    """True if the range starts on a 1st and ends on a month's last day."""
    if not date_range.is_set:
        return False
    last_day = monthrange(date_range.end.year, date_range.end.month)[1]
    return date_range.start.day == 1 and date_range.end.day == last_day


def _shift_calendar(date_range: DateRange, months: int) -> DateRange:
    start = add_months(date_range.start, months)
    last_month = add_months(date_range.end, months)
    end = last_month.replace(day=monthrange(last_month.year, last_month.month)[1])
    return DateRange(start=start, end=end)


def previous_calendar_period(date_range: DateRange) -> DateRange | None:
    """Period immediately before date_range.

    Whole calendar months shift back by the number of months covered
    (February's previous period is all of January). Other ranges fall back
    to prior_range().
    """
    if not date_range.is_set:
        return None
    if is_calendar_aligned(date_range):
        return _shift_calendar(date_range, -months_spanned(date_range))
    return prior_range(date_range)


def next_calendar_period(date_range: DateRange) -> DateRange | None:
    """Period immediately after date_range (mirror of previous_calendar_period)."""
    if not date_range.is_set:
        return None
    if is_calendar_aligned(date_range):
        return _shift_calendar(date_range, months_spanned(date_range))
    span = date_range.end - date_range.start
    next_start = date_range.end + timedelta(days=1)
    return DateRange(start=next_start, end=next_start + span)


def iterate_months(date_range: DateRange) -> Iterator[DateRange]:
    """Yield each calendar month touched by the range, clipped to it."""
    if not date_range.is_set:
        return
    current = date_range.start.replace(day=1)
    while current <= date_range.end:
        month = month_range(current.year, current.month)
        yield DateRange(
            start=max(month.start, date_range.start),
            end=min(month.end, date_range.end),
        )
        current = add_months(current, 1)


def get_current_period(today: date | None = None) -> DateRange:
    """Calendar month containing today."""
    today = today or date.today()
    return month_range(today.year, today.month)


def parse_period(value: str) -> DateRange:
    """Parse a "YYYY-MM" month label into a calendar-month range.

    Raises:
        InvalidPeriodError: If the label is not a valid month.
    """
    try:
        year_str, month_str = value.strip().split("-")
        return month_range(int(year_str), int(month_str))
    except ValueError as e:
        raise InvalidPeriodError(f"Invalid period '{value}', expected YYYY-MM") from e


def parse_date(value: str) -> date:
    """Parse an ISO date (YYYY-MM-DD).

    Raises:
        InvalidPeriodError: If the value is not a valid date.
    """
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidPeriodError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def format_period(date_range: DateRange) -> str:
    """Short label for a range.

    "2024-01" for a single calendar month, "2024-01-05_2024-02-04" otherwise.
    """
    if not date_range.is_set:
        return "no-range"
    if is_calendar_aligned(date_range) and months_spanned(date_range) == 1:
        return date_range.start.strftime("%Y-%m")
    return f"{date_range.start.isoformat()}_{date_range.end.isoformat()}"
