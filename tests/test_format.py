"""Tests for page format lookup and orientation."""
import pytest

from poster_errors import UnsupportedFormatError, UnsupportedOrientationError
from poster_format import (Orientation, PageFormat, mm_to_pt, pt_to_mm,
                           resolve_page_size)


class TestResolvePageSize:

    @pytest.mark.parametrize("fmt, size", [
        (PageFormat.A4, (210, 297)),
        (PageFormat.A3, (297, 420)),
        (PageFormat.LETTER, (216, 279)),
    ])
    def test_portrait_is_table_value(self, fmt, size):
        assert resolve_page_size(fmt, Orientation.PORTRAIT) == size

    @pytest.mark.parametrize("fmt", list(PageFormat))
    def test_landscape_swaps(self, fmt):
        w, h = resolve_page_size(fmt, Orientation.PORTRAIT)
        assert resolve_page_size(fmt, Orientation.LANDSCAPE) == (h, w)

    def test_accepts_names(self):
        assert resolve_page_size("a3", "landscape") == (420, 297)
        assert resolve_page_size("Letter", "PORTRAIT") == (216, 279)

    def test_unknown_format_fails_fast(self):
        with pytest.raises(UnsupportedFormatError):
            resolve_page_size("A5", Orientation.PORTRAIT)

    def test_unknown_orientation_fails_fast(self):
        with pytest.raises(UnsupportedOrientationError):
            resolve_page_size(PageFormat.A4, "sideways")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            PageFormat.parse(None)


class TestUnits:

    def test_inch(self):
        assert mm_to_pt(25.4) == pytest.approx(72.0)

    def test_a4_width(self):
        assert mm_to_pt(210) == pytest.approx(595.27, abs=0.01)
        assert pt_to_mm(mm_to_pt(297)) == pytest.approx(297)
