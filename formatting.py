"""Turning the selection into the strings shown to (and returned for) the user."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from selection import DateRange, SelectionEngine

PLACEHOLDER = "Pick a date"

# Zero-padded day, month and four-digit year
_FORMATS = {
    "dotted": "{0.day:02d}.{0.month:02d}.{0.year:04d}",
    "iso": "{0.year:04d}-{0.month:02d}-{0.day:02d}",
}

OUTPUT_STYLES = tuple(_FORMATS)


@dataclass(frozen=True)
class RangeOutput:
    """Value handed to the host when the selection is submitted.

    ``date_range`` holds every range as ``"<start> to <end>"`` joined by
    ``", "``; it is empty when nothing is selected.
    """

    date_range: str


def format_date(d: date, style: str = "dotted") -> str:
    try:
        fmt = _FORMATS[style]
    except KeyError:
        raise ValueError(f"Unknown output style {style!r}") from None
    return fmt.format(d)


def format_ranges(ranges: Iterable[DateRange], style: str = "dotted") -> str:
    return ", ".join(
        f"{format_date(r.start, style)} to {format_date(r.end, style)}"
        for r in ranges
    )


def build_output(engine: SelectionEngine, style: str = "dotted") -> RangeOutput:
    return RangeOutput(date_range=format_ranges(engine.contiguous_ranges(), style))


def input_caption(engine: SelectionEngine, style: str = "dotted") -> str:
    """Text for the read-only input field."""
    text = format_ranges(engine.contiguous_ranges(), style)
    return text or PLACEHOLDER


def summarize(ranges: list[DateRange]) -> str:
    """Footer line, e.g. ``5 days in 2 ranges``."""
    if not ranges:
        return "Nothing selected"
    total = sum(r.days for r in ranges)
    day_word = "day" if total == 1 else "days"
    if len(ranges) == 1:
        return f"{total} {day_word}"
    return f"{total} {day_word} in {len(ranges)} ranges"
