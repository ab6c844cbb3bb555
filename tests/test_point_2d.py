import math

import pytest
from hypothesis import given, strategies as st

from geometry2d.point_2d import Point2D

coords = st.floats(-1e6, 1e6)


class TestPoint2D:
    def test_coordinates_are_floats(self):
        p = Point2D(1, 2)
        assert isinstance(p.x, float) and isinstance(p.y, float)
        assert p == Point2D(1.0, 2.0)

    def test_immutable(self):
        p = Point2D(0.0, 0.0)
        with pytest.raises(AttributeError):
            p.x = 1.0

    def test_distance(self):
        assert Point2D(0, 0).distance_squared_to(Point2D(3, 4)) == 25.0
        assert Point2D(0, 0).distance_to(Point2D(3, 4)) == 5.0

    def test_order_is_y_then_x(self):
        pts = [Point2D(1, 1), Point2D(0, 1), Point2D(5, 0)]
        assert sorted(pts) == [Point2D(5, 0), Point2D(0, 1), Point2D(1, 1)]

    def test_infinite_coordinates_accepted(self):
        p = Point2D(math.inf, -math.inf)
        assert p == Point2D(float("inf"), float("-inf"))

    def test_str(self):
        assert str(Point2D(0.5, 0.25)) == "(0.5, 0.25)"

    @given(coords, coords)
    def test_equal_points_hash_equal(self, x, y):
        assert Point2D(x, y) == Point2D(x, y)
        assert hash(Point2D(x, y)) == hash(Point2D(x, y))
        assert len({Point2D(x, y), Point2D(x, y)}) == 1

    @given(coords, coords, coords, coords)
    def test_distance_symmetric(self, x1, y1, x2, y2):
        a, b = Point2D(x1, y1), Point2D(x2, y2)
        assert a.distance_squared_to(b) == b.distance_squared_to(a)
        assert a.distance_squared_to(b) >= 0.0
