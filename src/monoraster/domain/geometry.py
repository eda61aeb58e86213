"""Core geometric value types.

This module defines the fundamental geometric types used throughout monoraster:
- Point: A 2D point or vector
- Bounds: An axis-aligned bounding box
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable for use in sets/dicts.
    Uses slots for memory efficiency when large primitive lists are built.

    Attributes:
        x: X coordinate in path units
        y: Y coordinate in path units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linearly interpolate towards another point.

        Args:
            other: Point reached at t = 1
            t: Interpolation parameter

        Returns:
            Interpolated point
        """
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box.

    Degenerate boxes (zero width or zero height) are valid; a vertical or
    horizontal line has one.

    Attributes:
        min: Corner with the smallest coordinates
        max: Corner with the largest coordinates
    """

    min: Point
    max: Point

    def __post_init__(self) -> None:
        if self.min.x > self.max.x or self.min.y > self.max.y:
            raise ValueError(f"Inverted bounds: min={self.min} max={self.max}")

    @classmethod
    def from_points(cls, *points: Point) -> "Bounds":
        """Build the tightest box around the given points.

        Args:
            *points: One or more points

        Returns:
            Bounds enclosing every point

        Raises:
            ValueError: If no points are given
        """
        if not points:
            raise ValueError("Bounds require at least one point")

        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(Point(min(xs), min(ys)), Point(max(xs), max(ys)))

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def union(self, other: "Bounds") -> "Bounds":
        """Return the smallest box enclosing both boxes."""
        return Bounds(
            Point(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            Point(max(self.max.x, other.max.x), max(self.max.y, other.max.y)),
        )

    def contains_x(self, x: float) -> bool:
        return self.min.x <= x <= self.max.x

    def contains_y(self, y: float) -> bool:
        return self.min.y <= y <= self.max.y
