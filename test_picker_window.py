"""Tests for the display-free helpers of the picker window."""

import pytest

pytest.importorskip("tkinter")

from picker_window import is_inside  # noqa: E402


class TestIsInside:
    """Outside-click detection by Tk path name."""

    def test_container_itself(self):
        assert is_inside(".!frame", ".!frame")

    def test_descendants(self):
        assert is_inside(".!frame.!entry", ".!frame")
        assert is_inside(".!frame.!frame2.!label17", ".!frame")

    def test_root_window_is_outside_content(self):
        assert not is_inside(".", ".!frame")

    def test_sibling_with_common_prefix_is_outside(self):
        assert not is_inside(".!frame2.!label", ".!frame")
        assert not is_inside(".!frame2", ".!frame")

    def test_everything_is_inside_root(self):
        assert is_inside(".!frame.!entry", ".")
        assert is_inside(".", ".")
