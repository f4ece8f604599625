"""Pure calendar calculations, no UI dependencies."""

from datetime import date, datetime, timedelta

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

ONE_DAY = timedelta(days=1)


def normalize_date(d: date | datetime) -> date:
    """Strip time-of-day so only the calendar date is left."""
    if isinstance(d, datetime):
        return d.date()
    return date(d.year, d.month, d.day)


def date_key(d: date | datetime) -> str:
    """Return the canonical set key for a date, e.g. ``2024-1-5``."""
    d = normalize_date(d)
    return f"{d.year}-{d.month}-{d.day}"


def parse_date_key(key: str) -> date:
    """Inverse of :func:`date_key`."""
    year, month, day = (int(part) for part in key.split("-"))
    return date(year, month, day)


# ------------------------------------------------------------------
# Month-index arithmetic (month is 0-based here)
# ------------------------------------------------------------------
def month_index(year: int, month: int) -> int:
    return year * 12 + month


def from_month_index(index: int) -> tuple[int, int]:
    """Return (year, 0-based month) for a month index."""
    return divmod(index, 12)


def first_of_month_index(index: int) -> date:
    year, month = from_month_index(index)
    return date(year, month + 1, 1)


def last_of_month_index(index: int) -> date:
    return first_of_month_index(index + 1) - ONE_DAY


def shift_month(month: int, year: int, offset: int) -> tuple[int, int]:
    """Return (0-based month, year) moved by ``offset`` months."""
    year, month = from_month_index(month_index(year, month) + offset)
    return month, year


# ------------------------------------------------------------------
# Grid
# ------------------------------------------------------------------
def build_month_grid(month: int, year: int) -> list[date]:
    """Return every date shown for a month, in complete Monday–Sunday weeks.

    ``month`` is 0-based and may lie outside 0..11: -1 is December of the
    previous year, 12 is January of the next one.
    """
    index = month_index(year, month)
    start = first_of_month_index(index)
    end = last_of_month_index(index)

    while start.weekday() != 0:  # Monday
        start -= ONE_DAY
    while end.weekday() != 6:  # Sunday
        end += ONE_DAY

    return list(iter_days(start, end))


def iter_days(start: date, end: date):
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = start
    while current <= end:
        yield current
        current += ONE_DAY
