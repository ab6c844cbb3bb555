import math
from dataclasses import dataclass
from functools import total_ordering


@total_ordering
@dataclass(frozen=True, eq=True)
class Point2D:
    """Immutable point in the plane.

    Points compare equal only on an exact match of both coordinates and are
    hashable, so they can key a dict or a symbol table. The natural order
    sorts by y-coordinate first and breaks ties on the x-coordinate.

    Attributes:
        x (float): The x-coordinate.
        y (float): The y-coordinate.

    Example:
        >>> p = Point2D(0.0, 0.0)
        >>> p.distance_squared_to(Point2D(3.0, 4.0))
        25.0
        >>> Point2D(1.0, 0.0) < Point2D(0.0, 1.0)
        True

    """
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    def __lt__(self, other: "Point2D") -> bool:
        if not isinstance(other, Point2D):
            return NotImplemented
        return (self.y, self.x) < (other.y, other.x)

    def distance_squared_to(self, other: "Point2D") -> float:
        """Squared Euclidean distance, no square root taken"""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def distance_to(self, other: "Point2D") -> float:
        return math.sqrt(self.distance_squared_to(other))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
