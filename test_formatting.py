"""Tests for output formatting."""

from datetime import date

import pytest

from formatting import (
    PLACEHOLDER,
    RangeOutput,
    build_output,
    format_date,
    format_ranges,
    input_caption,
    summarize,
)
from selection import DateRange, SelectionEngine


class TestFormatDate:

    def test_dotted(self):
        assert format_date(date(2024, 1, 5)) == "05.01.2024"

    def test_iso(self):
        assert format_date(date(2024, 1, 5), "iso") == "2024-01-05"

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            format_date(date(2024, 1, 5), "us")


class TestOutput:

    def _engine(self) -> SelectionEngine:
        engine = SelectionEngine()
        engine.add_range(date(2024, 1, 1), date(2024, 1, 3))
        engine.add_range(date(2024, 1, 5), date(2024, 1, 5))
        return engine

    def test_format_ranges(self):
        ranges = self._engine().contiguous_ranges()
        assert format_ranges(ranges) == "01.01.2024 to 03.01.2024, 05.01.2024 to 05.01.2024"
        assert format_ranges(ranges, "iso") == "2024-01-01 to 2024-01-03, 2024-01-05 to 2024-01-05"

    def test_build_output(self):
        assert build_output(self._engine(), "iso") == RangeOutput(
            date_range="2024-01-01 to 2024-01-03, 2024-01-05 to 2024-01-05")
        assert build_output(SelectionEngine()).date_range == ""

    def test_input_caption(self):
        assert input_caption(SelectionEngine()) == PLACEHOLDER
        assert input_caption(self._engine()).startswith("01.01.2024 to 03.01.2024")


class TestSummarize:

    def test_summaries(self):
        assert summarize([]) == "Nothing selected"
        assert summarize([DateRange(date(2024, 1, 1), date(2024, 1, 1))]) == "1 day"
        assert summarize([
            DateRange(date(2024, 1, 1), date(2024, 1, 3)),
            DateRange(date(2024, 1, 5), date(2024, 1, 6)),
        ]) == "5 days in 2 ranges"
