from collections import deque
from dataclasses import dataclass, replace
from typing import Any, List, Optional, Sequence

import pyarrow as pa

from geometry2d.point_2d import Point2D
from geometry2d.rect_hv import RectHV
from symbol_tables.arrow_io import iter_points, points_table
from symbol_tables.errors import InvalidArgument
from symbol_tables.loggers import get_logger

log = get_logger("kd_tree")


@dataclass
class _Node:
    point: Point2D
    value: Any
    vertical: bool  # children compared on x when True, on y otherwise
    region: RectHV
    left: Optional["_Node"] = None
    right: Optional["_Node"] = None

    def compare(self, p: Point2D) -> int:
        """Sign of p against this node's point along the splitting axis"""
        if self.vertical:
            a, b = p.x, self.point.x
        else:
            a, b = p.y, self.point.y
        return (a > b) - (a < b)

    def child_region(self, p: Point2D) -> RectHV:
        """Region of the child slot that p routes to"""
        go_left = self.compare(p) < 0
        if self.vertical:
            if go_left:
                return replace(self.region, xmax=self.point.x)
            return replace(self.region, xmin=self.point.x)
        if go_left:
            return replace(self.region, ymax=self.point.y)
        return replace(self.region, ymin=self.point.y)


class KdTreeST:
    """Symbol table keyed by 2-d points, backed by a 2-d tree.

    Each node splits the plane with a line through its point: a vertical
    line (children compared by x-coordinate) at even depths and a horizontal
    line (compared by y-coordinate) at odd depths. Points smaller on the
    splitting axis go left; equal or larger go right. Every node keeps the
    rectangle of the plane that routes to it, computed once from its parent
    when the node is created. Range and nearest-neighbour searches use that
    rectangle to skip whole subtrees.

    The tree is never rebalanced and keys are unique: putting an existing
    point again only replaces its value.

    Attributes:
        _root (_Node): Root node, None while the table is empty.
        _size (int): Number of distinct points stored.

    Example:
        >>> st = KdTreeST()
        >>> st.put(Point2D(0.5, 0.5), "A")
        >>> st.put(Point2D(0.25, 0.25), "B")
        >>> st.get(Point2D(0.25, 0.25))
        'B'
        >>> st.nearest(Point2D(0.1, 0.1))
        Point2D(x=0.25, y=0.25)
        >>> st.range(RectHV(0.0, 0.0, 0.5, 0.5))
        [Point2D(x=0.5, y=0.5), Point2D(x=0.25, y=0.25)]

    """
    def __init__(self):
        self._root: Optional[_Node] = None
        self._size = 0

    @classmethod
    def from_arrow(cls, table: pa.Table, values: Optional[Sequence[Any]] = None) -> "KdTreeST":
        """Bulk-load the x/y columns of table, row by row
        Args:
        table: Arrow table with float x and y columns
        values: One value per row; defaults to the row index as a float
        """
        st = cls()
        if values is not None and len(values) != table.num_rows:
            raise ValueError(f"Got {len(values)} values for {table.num_rows} points")
        for i, p in enumerate(iter_points(table)):
            st.put(p, float(i) if values is None else values[i])
        log.debug("Loaded %d rows into kd-tree (%d distinct points)", table.num_rows, st.size())
        return st

    def is_empty(self) -> bool:
        return self._size == 0

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def put(self, p: Point2D, value: Any) -> None:
        """Associate value with p, replacing any previous value"""
        if p is None or value is None:
            raise InvalidArgument("point and value cannot be None")

        if self._root is None:
            self._root = _Node(p, value, True, RectHV.plane())
            self._size += 1
            return

        node = self._root
        while True:
            if p == node.point:
                node.value = value
                return
            if node.compare(p) < 0:
                if node.left is None:
                    node.left = _Node(p, value, not node.vertical, node.child_region(p))
                    break
                node = node.left
            else:
                if node.right is None:
                    node.right = _Node(p, value, not node.vertical, node.child_region(p))
                    break
                node = node.right
        self._size += 1

    def get(self, p: Point2D) -> Optional[Any]:
        """Value stored under p, or None"""
        if p is None:
            raise InvalidArgument("point cannot be None")
        node = self._root
        while node is not None:
            if p == node.point:
                return node.value
            node = node.left if node.compare(p) < 0 else node.right
        return None

    def contains(self, p: Point2D) -> bool:
        return self.get(p) is not None

    def __contains__(self, p: Point2D) -> bool:
        return self.contains(p)

    def points(self) -> List[Point2D]:
        """All points in level order, left before right"""
        out: List[Point2D] = []
        if self._root is None:
            return out
        queue = deque([self._root])
        while queue:
            node = queue.popleft()
            out.append(node.point)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        return out

    def range(self, rect: RectHV) -> List[Point2D]:
        """All points inside rect or on its boundary.

        A subtree is skipped as soon as its node's region misses rect, since
        every point below the node lies within that region. Points come back
        in depth-first order: node, then left subtree, then right subtree.
        """
        if rect is None:
            raise InvalidArgument("rectangle cannot be None")
        found: List[Point2D] = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            if not rect.intersects(node.region):
                continue
            if rect.contains(node.point):
                found.append(node.point)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return found

    def nearest(self, p: Point2D) -> Optional[Point2D]:
        """A closest stored point to p, or None when the table is empty.

        The search starts with the root's point as the best candidate and
        skips any subtree whose region is no closer than the best so far.
        At each node the child on p's side of the splitting line is searched
        before the other one. Among equidistant points the first one reached
        wins.
        """
        if p is None:
            raise InvalidArgument("point cannot be None")
        if self._root is None:
            return None

        best = self._root.point
        best_d = p.distance_squared_to(best)
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.region.distance_squared_to(p) >= best_d:
                continue
            d = p.distance_squared_to(node.point)
            if d < best_d:
                best, best_d = node.point, d

            if node.compare(p) < 0:
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left
            # far is pushed first so the near subtree is exhausted before it
            if far is not None:
                stack.append(far)
            if near is not None:
                stack.append(near)
        return best

    def to_arrow(self) -> pa.Table:
        """x/y table of points() in level order"""
        return points_table(self.points())
