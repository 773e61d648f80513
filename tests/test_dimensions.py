"""Tests for target-size parsing."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from dimensions import InvalidDimensionSpec, ResizeDimension


class TestParse:
    def test_width_and_height(self):
        assert ResizeDimension.parse("20x22") == ResizeDimension.both(20, 22)

    def test_width_only(self):
        assert ResizeDimension.parse("20x") == ResizeDimension.width_only(20)

    def test_height_only(self):
        assert ResizeDimension.parse("x100") == ResizeDimension.height_only(100)

    def test_invalid(self):
        with pytest.raises(InvalidDimensionSpec) as exc:
            ResizeDimension.parse("Foo")
        assert str(exc.value) == "invalid dimensions"

    @pytest.mark.parametrize("text", ["", "x", "20", "20x22x", "20x22 ", " 20x22",
                                      "20X22", "-1x5", "20x-3", "1.5x2", "20xx", "abc20x22"])
    def test_rejects_malformed(self, text):
        with pytest.raises(InvalidDimensionSpec, match="invalid dimensions"):
            ResizeDimension.parse(text)

    def test_zero_is_allowed(self):
        assert ResizeDimension.parse("0x0") == ResizeDimension.both(0, 0)

    def test_u32_bounds(self):
        assert ResizeDimension.parse("4294967295x") == ResizeDimension.width_only(2**32 - 1)
        with pytest.raises(InvalidDimensionSpec, match="could not parse width"):
            ResizeDimension.parse("4294967296x")
        with pytest.raises(InvalidDimensionSpec, match="could not parse height"):
            ResizeDimension.parse("10x99999999999")

    def test_overlong_digit_field(self):
        """Fields far beyond 32 bits fail as parse errors, not int() limits."""
        with pytest.raises(InvalidDimensionSpec, match="could not parse width"):
            ResizeDimension.parse("9" * 5000 + "x")
        with pytest.raises(InvalidDimensionSpec, match="could not parse height"):
            ResizeDimension.parse("x" + "9" * 5000)
        assert ResizeDimension.parse("0" * 5000 + "7x") == ResizeDimension.width_only(7)

    def test_is_value_error(self):
        """argparse and callers can treat parse failures as ValueError."""
        with pytest.raises(ValueError):
            ResizeDimension.parse("nope")


class TestResizeDimension:
    def test_resolve(self):
        assert ResizeDimension.width_only(5).resolve(10, 20) == (5, 20)
        assert ResizeDimension.height_only(7).resolve(10, 20) == (10, 7)
        assert ResizeDimension.both(3, 4).resolve(10, 20) == (3, 4)

    def test_str_round_trips_grammar(self):
        for text in ("20x22", "20x", "x100"):
            assert str(ResizeDimension.parse(text)) == text

    def test_kind(self):
        assert ResizeDimension.parse("1x").kind == "width"
        assert ResizeDimension.parse("x1").kind == "height"
        assert ResizeDimension.parse("1x1").kind == "both"
