import math
from dataclasses import dataclass

from geometry2d.point_2d import Point2D


@dataclass(frozen=True)
class RectHV:
    """Immutable axis-aligned rectangle.

    The rectangle is closed: points on the boundary are contained, and two
    rectangles that only touch along an edge or a corner intersect. Bounds
    may be infinite, which is how the unbounded plane is represented.

    Attributes:
        xmin (float): Left edge.
        ymin (float): Bottom edge.
        xmax (float): Right edge.
        ymax (float): Top edge.

    Example:
        >>> rect = RectHV(0.0, 0.0, 0.5, 0.5)
        >>> rect.contains(Point2D(0.5, 0.25))
        True
        >>> rect.distance_squared_to(Point2D(1.5, 0.5))
        1.0

    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self):
        for name in ('xmin', 'ymin', 'xmax', 'ymax'):
            object.__setattr__(self, name, float(getattr(self, name)))
        if self.xmin > self.xmax:
            raise ValueError(f"xmin {self.xmin} is greater than xmax {self.xmax}")
        if self.ymin > self.ymax:
            raise ValueError(f"ymin {self.ymin} is greater than ymax {self.ymax}")

    @classmethod
    def plane(cls) -> "RectHV":
        """The whole plane, infinite on both axes"""
        return cls(-math.inf, -math.inf, math.inf, math.inf)

    def width(self) -> float:
        return self.xmax - self.xmin

    def height(self) -> float:
        return self.ymax - self.ymin

    def contains(self, p: Point2D) -> bool:
        """Inclusive containment test"""
        return (self.xmin <= p.x <= self.xmax
                and self.ymin <= p.y <= self.ymax)

    def intersects(self, other: "RectHV") -> bool:
        """Inclusive intersection test; touching rectangles intersect"""
        return (self.xmax >= other.xmin and self.ymax >= other.ymin
                and other.xmax >= self.xmin and other.ymax >= self.ymin)

    def distance_squared_to(self, p: Point2D) -> float:
        """Squared distance from p to the closest point of the rectangle
        Returns:
        0.0 when p is inside or on the boundary
        """
        dx = 0.0
        dy = 0.0
        if p.x < self.xmin:
            dx = p.x - self.xmin
        elif p.x > self.xmax:
            dx = p.x - self.xmax
        if p.y < self.ymin:
            dy = p.y - self.ymin
        elif p.y > self.ymax:
            dy = p.y - self.ymax
        return dx * dx + dy * dy

    def distance_to(self, p: Point2D) -> float:
        return math.sqrt(self.distance_squared_to(p))

    def __str__(self) -> str:
        return f"[{self.xmin}, {self.xmax}] x [{self.ymin}, {self.ymax}]"
