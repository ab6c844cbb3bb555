import pytest
import pyarrow as pa
from hypothesis import given, strategies as st

from geometry2d.point_2d import Point2D
from geometry2d.rect_hv import RectHV
from symbol_tables.errors import InvalidArgument
from symbol_tables.point_st import PointST

grid = st.integers(0, 8).map(lambda i: i / 8)
grid_points = st.builds(Point2D, grid, grid)


class TestPointST:
    def test_empty(self):
        ref = PointST()
        assert ref.is_empty()
        assert ref.size() == 0
        assert ref.nearest(Point2D(0.5, 0.5)) is None
        assert ref.range(RectHV(0, 0, 1, 1)) == []
        assert ref.points() == []

    def test_points_in_sorted_order(self):
        ref = PointST()
        for i, p in enumerate([Point2D(0.9, 0.1), Point2D(0.1, 0.9), Point2D(0.5, 0.1)]):
            ref.put(p, i)
        assert ref.points() == [Point2D(0.5, 0.1), Point2D(0.9, 0.1), Point2D(0.1, 0.9)]

    def test_four_point_scenario(self):
        ref = PointST()
        for p, v in [((0.5, 0.5), "A"), ((0.25, 0.25), "B"), ((0.75, 0.25), "C"), ((0.25, 0.75), "D")]:
            ref.put(Point2D(*p), v)
        assert ref.size() == 4
        assert ref.range(RectHV(0, 0, 0.5, 0.5)) == [Point2D(0.25, 0.25), Point2D(0.5, 0.5)]
        assert ref.nearest(Point2D(0.1, 0.1)) == Point2D(0.25, 0.25)
        assert ref.get(Point2D(0.75, 0.25)) == "C"

    def test_tie_goes_to_first_in_order(self):
        ref = PointST()
        for i, p in enumerate([Point2D(1, 1), Point2D(0, 0), Point2D(1, 0), Point2D(0, 1)]):
            ref.put(p, i)
        assert ref.nearest(Point2D(0.5, 0.5)) == Point2D(0, 0)

    def test_new_point_refreshes_columns(self):
        ref = PointST()
        ref.put(Point2D(0.0, 0.0), 1)
        assert ref.nearest(Point2D(1.0, 1.0)) == Point2D(0.0, 0.0)
        ref.put(Point2D(0.9, 0.9), 2)
        assert ref.nearest(Point2D(1.0, 1.0)) == Point2D(0.9, 0.9)
        assert ref.range(RectHV(0.5, 0.5, 1.0, 1.0)) == [Point2D(0.9, 0.9)]

    def test_invalid_arguments(self):
        ref = PointST()
        with pytest.raises(InvalidArgument):
            ref.put(None, 1)
        with pytest.raises(InvalidArgument):
            ref.put(Point2D(0, 0), None)
        with pytest.raises(InvalidArgument):
            ref.get(None)
        with pytest.raises(InvalidArgument):
            ref.contains(None)
        with pytest.raises(InvalidArgument):
            ref.range(None)
        with pytest.raises(InvalidArgument):
            ref.nearest(None)
        assert ref.is_empty()

    def test_from_arrow_default_values(self):
        table = pa.table({'x': [0.1, 0.2, 0.1], 'y': [0.3, 0.4, 0.3]})
        ref = PointST.from_arrow(table)
        assert ref.size() == 2
        assert ref.get(Point2D(0.1, 0.3)) == 2.0
        assert ref.get(Point2D(0.2, 0.4)) == 1.0

    @given(st.lists(st.tuples(grid_points, st.integers())))
    def test_put_get_roundtrip(self, items):
        ref = PointST()
        for p, v in items:
            ref.put(p, v)
            assert ref.get(p) == v
        assert ref.size() == len({p for p, _ in items})

    @given(st.lists(grid_points), grid, grid, grid, grid)
    def test_range_matches_scan(self, points, a, b, c, d):
        ref = PointST()
        for p in points:
            ref.put(p, 0)
        rect = RectHV(min(a, b), min(c, d), max(a, b), max(c, d))
        assert ref.range(rect) == [p for p in sorted(set(points)) if rect.contains(p)]
