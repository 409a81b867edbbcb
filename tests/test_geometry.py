"""Tests for gridpull.core.geometry – points and directions."""

from __future__ import annotations

import pytest

from gridpull.core.geometry import Direction, Point, PointDir


# ---------------------------------------------------------------------------
# Point
# ---------------------------------------------------------------------------

class TestPoint:
    def test_components(self):
        p = Point(3, -2)
        assert p.x == 3
        assert p.y == -2

    def test_equality_by_value(self):
        assert Point(1, 2) == Point(1, 2)
        assert Point(1, 2) != Point(2, 1)

    def test_hashable(self):
        assert len({Point(0, 0), Point(0, 0), Point(1, 0)}) == 2

    def test_frozen(self):
        p = Point(0, 0)
        with pytest.raises(AttributeError):
            p.x = 5  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Direction
# ---------------------------------------------------------------------------

class TestDirectionParse:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Up", Direction.UP),
            ("down", Direction.DOWN),
            ("LEFT", Direction.LEFT),
            (" Right ", Direction.RIGHT),
            ("None", Direction.NONE),
        ],
    )
    def test_names_ignore_case(self, text: str, expected: Direction):
        assert Direction.parse(text) is expected

    def test_null_is_none_direction(self):
        assert Direction.parse(None) is Direction.NONE

    def test_passes_through_members(self):
        assert Direction.parse(Direction.LEFT) is Direction.LEFT

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="unknown direction"):
            Direction.parse("Diagonal")

    def test_non_string(self):
        with pytest.raises(ValueError, match="unknown direction"):
            Direction.parse(3)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# PointDir
# ---------------------------------------------------------------------------

class TestPointDir:
    def test_several_arcs_share_a_point(self):
        a = PointDir(Point(1, 0), Direction.LEFT)
        b = PointDir(Point(1, 0), Direction.RIGHT)
        assert a.point == b.point
        assert a != b

    def test_equality(self):
        assert PointDir(Point(0, 0), Direction.UP) == PointDir(Point(0, 0), Direction.UP)
