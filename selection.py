"""Selected-date set and the drag-to-select protocol."""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable

from calendar_logic import ONE_DAY, date_key, iter_days, normalize_date, parse_date_key

logger = logging.getLogger(__name__)


class SelectionMode(Enum):
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass
class DragSelectionState:
    """Transient state of the gesture in progress."""

    active: bool = False
    anchor: date | None = None
    cursor: date | None = None
    mode: SelectionMode = SelectionMode.ADD


def group_consecutive(dates: Iterable[date]) -> list[DateRange]:
    """Reduce chronologically sorted dates to maximal runs of consecutive days."""
    ranges: list[DateRange] = []
    start = end = None
    for d in dates:
        if start is None:
            start = end = d
        elif d == end + ONE_DAY:
            end = d
        else:
            ranges.append(DateRange(start, end))
            start = end = d
    if start is not None:
        ranges.append(DateRange(start, end))
    return ranges


class SelectionEngine:
    """Owns the selected dates and applies press / drag / release gestures.

    A gesture picks its mode from the date it starts on: pressing an
    unselected date adds, pressing a selected one removes. Every update
    re-applies the whole anchor..cursor window in that mode. Dates left
    behind when the drag shrinks keep whatever state the last application
    gave them.

    Eligibility is not checked here; the rendering layer must not feed
    gestures from disabled cells.
    """

    def __init__(self) -> None:
        self._keys: set[str] = set()
        self.drag = DragSelectionState()

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def begin_gesture(self, d: date) -> None:
        d = normalize_date(d)
        drag = self.drag
        drag.anchor = drag.cursor = d
        drag.mode = SelectionMode.REMOVE if date_key(d) in self._keys else SelectionMode.ADD
        drag.active = True
        logger.debug("Gesture started on %s (%s)", d, drag.mode.value)
        self._apply(d, d, drag.mode)

    def update_gesture(self, d: date) -> None:
        drag = self.drag
        if not drag.active or drag.anchor is None:
            return
        drag.cursor = normalize_date(d)
        lo = min(drag.anchor, drag.cursor)
        hi = max(drag.anchor, drag.cursor)
        self._apply(lo, hi, drag.mode)

    def end_gesture(self) -> None:
        if self.drag.active:
            logger.debug("Gesture ended at %s", self.drag.cursor)
        self.drag.active = False

    @property
    def is_dragging(self) -> bool:
        return self.drag.active

    # ------------------------------------------------------------------
    # Programmatic edits
    # ------------------------------------------------------------------
    def add_range(self, start: date, end: date) -> None:
        start, end = sorted((normalize_date(start), normalize_date(end)))
        self._apply(start, end, SelectionMode.ADD)

    def remove_range(self, start: date, end: date) -> None:
        start, end = sorted((normalize_date(start), normalize_date(end)))
        self._apply(start, end, SelectionMode.REMOVE)

    def clear(self, reset_anchor: bool = True) -> None:
        self._keys.clear()
        if reset_anchor:
            self.drag.anchor = None
            self.drag.cursor = None

    def set_default(self, d: date) -> None:
        """Replace the whole selection with a single date."""
        self._keys = {date_key(d)}

    def _apply(self, start: date, end: date, mode: SelectionMode) -> None:
        keys = [date_key(d) for d in iter_days(start, end)]
        if mode is SelectionMode.ADD:
            self._keys.update(keys)
        else:
            self._keys.difference_update(keys)
        logger.debug("%s %d day(s) %s..%s", mode.value, len(keys), start, end)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_selected(self, d: date) -> bool:
        return date_key(d) in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def selected_dates(self) -> list[date]:
        return sorted(parse_date_key(k) for k in self._keys)

    def contiguous_ranges(self) -> list[DateRange]:
        return group_consecutive(self.selected_dates())
