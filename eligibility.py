"""Which dates may be picked, given today and the month-limit settings."""

from dataclasses import dataclass
from datetime import date

from calendar_logic import (
    first_of_month_index,
    last_of_month_index,
    month_index,
    normalize_date,
)


@dataclass(frozen=True)
class EligibilityConstraints:
    """Per-render configuration for the date policy.

    With ``limit_months`` set, picking is restricted to a window of
    ``number_of_allowed_months`` months after the current one, and the same
    number before it when ``allow_past`` is also set.
    """

    today: date
    limit_months: bool = False
    allow_past: bool = False
    number_of_allowed_months: int = 0

    def __post_init__(self) -> None:
        if self.number_of_allowed_months < 0:
            raise ValueError(
                f"number_of_allowed_months must be >= 0, "
                f"got {self.number_of_allowed_months}")
        object.__setattr__(self, "today", normalize_date(self.today))


def month_window(constraints: EligibilityConstraints) -> tuple[int, int] | None:
    """Return (min, max) month index, or None when months are not limited."""
    if not constraints.limit_months:
        return None
    today = constraints.today
    today_index = month_index(today.year, today.month - 1)
    past_offset = constraints.number_of_allowed_months if constraints.allow_past else 0
    return (today_index - past_offset,
            today_index + constraints.number_of_allowed_months)


def is_eligible(d: date, constraints: EligibilityConstraints) -> bool:
    """Return False for cells that must be rendered disabled."""
    d = normalize_date(d)
    if d < constraints.today and not constraints.allow_past:
        return False
    window = month_window(constraints)
    if window is None:
        return True
    min_index, max_index = window
    if d < first_of_month_index(min_index):
        return False
    if d > last_of_month_index(max_index):
        return False
    return True


def can_navigate_to(month: int, year: int, constraints: EligibilityConstraints) -> bool:
    """Return True if the (0-based) month lies inside the allowed window."""
    window = month_window(constraints)
    if window is None:
        return True
    min_index, max_index = window
    return min_index <= month_index(year, month) <= max_index
