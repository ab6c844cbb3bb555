from typing import Any, Dict, List, Optional, Sequence

import pyarrow as pa
import pyarrow.compute as pc

from geometry2d.point_2d import Point2D
from geometry2d.rect_hv import RectHV
from symbol_tables.arrow_io import iter_points, points_table
from symbol_tables.errors import InvalidArgument
from symbol_tables.loggers import get_logger

log = get_logger("point_st")


class PointST:
    """Brute-force symbol table keyed by 2-d points.

    Shares the contract of :class:`KdTreeST` but answers range and
    nearest-neighbour queries with a linear scan, vectorized over Arrow
    columns. It is the reference the kd-tree is checked and timed against.

    Keys are kept in a dict; ``points()`` returns them in Point2D order
    (by y, then x), and the x/y columns used by the scans are rebuilt only
    after a new key has been added.

    Attributes:
        _values (dict): Point2D -> value.
        _columns (pyarrow.Table): Cached x/y columns of the sorted keys, or
                                  None when stale.

    Example:
        >>> st = PointST()
        >>> st.put(Point2D(0.5, 0.5), 1.0)
        >>> st.put(Point2D(0.25, 0.25), 2.0)
        >>> st.points()
        [Point2D(x=0.25, y=0.25), Point2D(x=0.5, y=0.5)]
        >>> st.nearest(Point2D(0.4, 0.4))
        Point2D(x=0.5, y=0.5)

    """
    def __init__(self):
        self._values: Dict[Point2D, Any] = {}
        self._columns: Optional[pa.Table] = None

    @classmethod
    def from_arrow(cls, table: pa.Table, values: Optional[Sequence[Any]] = None) -> "PointST":
        st = cls()
        if values is not None and len(values) != table.num_rows:
            raise ValueError(f"Got {len(values)} values for {table.num_rows} points")
        for i, p in enumerate(iter_points(table)):
            st.put(p, float(i) if values is None else values[i])
        log.debug("Loaded %d rows into brute-force table (%d distinct points)", table.num_rows, st.size())
        return st

    def is_empty(self) -> bool:
        return not self._values

    def size(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def put(self, p: Point2D, value: Any) -> None:
        if p is None or value is None:
            raise InvalidArgument("point and value cannot be None")
        if p not in self._values:
            self._columns = None
        self._values[p] = value

    def get(self, p: Point2D) -> Optional[Any]:
        if p is None:
            raise InvalidArgument("point cannot be None")
        return self._values.get(p)

    def contains(self, p: Point2D) -> bool:
        if p is None:
            raise InvalidArgument("point cannot be None")
        return p in self._values

    def __contains__(self, p: Point2D) -> bool:
        return self.contains(p)

    def points(self) -> List[Point2D]:
        return sorted(self._values)

    def _table(self) -> pa.Table:
        if self._columns is None:
            self._columns = points_table(self.points())
        return self._columns

    def range(self, rect: RectHV) -> List[Point2D]:
        """Points inside rect or on its boundary, in Point2D order"""
        if rect is None:
            raise InvalidArgument("rectangle cannot be None")
        if not self._values:
            return []
        table = self._table()
        xs, ys = table['x'], table['y']
        in_rect = pc.and_(
            pc.and_(
                pc.greater_equal(xs, rect.xmin),
                pc.less_equal(xs, rect.xmax)
            ),
            pc.and_(
                pc.greater_equal(ys, rect.ymin),
                pc.less_equal(ys, rect.ymax)
            )
        )
        return list(iter_points(table.filter(in_rect)))

    def nearest(self, p: Point2D) -> Optional[Point2D]:
        """Closest point to p by exhaustive scan; the first in Point2D order
        wins a tie. None when the table is empty.
        """
        if p is None:
            raise InvalidArgument("point cannot be None")
        if not self._values:
            return None
        table = self._table()
        dx = pc.subtract(table['x'], p.x)
        dy = pc.subtract(table['y'], p.y)
        dist2 = pc.add(pc.multiply(dx, dx), pc.multiply(dy, dy))
        idx = pc.index(dist2, pc.min(dist2)).as_py()
        return Point2D(table['x'][idx].as_py(), table['y'][idx].as_py())

    def to_arrow(self) -> pa.Table:
        return points_table(self.points())
