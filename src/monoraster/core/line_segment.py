"""Straight line primitive."""

from dataclasses import dataclass, field

from monoraster.core.curve import EPSILON, Curve, Intersection
from monoraster.domain import Bounds, Point


@dataclass(frozen=True)
class LineSegment(Curve):
    """A straight edge from start to end.

    A straight line is trivially monotonic in both axes. Use new_rasterable()
    to build one from path data so degenerate edges are rejected.

    Attributes:
        start: Start point in traversal order
        end: End point in traversal order
    """

    start: Point
    end: Point
    _bounds: Bounds = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_bounds", Bounds.from_points(self.start, self.end))

    @classmethod
    def new_rasterable(cls, start: Point, end: Point) -> "LineSegment | None":
        """Build a line that can contribute coverage.

        Args:
            start: Start point of the edge
            end: End point of the edge

        Returns:
            LineSegment, or None if the edge has zero length
        """
        if abs(end.x - start.x) <= EPSILON and abs(end.y - start.y) <= EPSILON:
            return None
        return cls(start, end)

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    def sample_t(self, t: float) -> Point | None:
        if not 0.0 <= t <= 1.0:
            return None
        return self._lerp(t)

    def sample_x(self, x: float) -> Intersection | None:
        if not self._bounds.contains_x(x):
            return None

        dx = self.end.x - self.start.x
        if dx == 0.0:
            # Vertical line: every y matches, report the start
            return Intersection(axis=self.start.y, t=0.0)

        t = min(1.0, max(0.0, (x - self.start.x) / dx))
        return Intersection(axis=self._lerp(t).y, t=t)

    def sample_y(self, y: float) -> Intersection | None:
        if not self._bounds.contains_y(y):
            return None

        dy = self.end.y - self.start.y
        if dy == 0.0:
            # Horizontal line: every x matches, report the start
            return Intersection(axis=self.start.x, t=0.0)

        t = min(1.0, max(0.0, (y - self.start.y) / dy))
        return Intersection(axis=self._lerp(t).x, t=t)

    def _lerp(self, t: float) -> Point:
        # Weighted form so t = 0 and t = 1 reproduce the end points exactly
        mt = 1.0 - t
        return Point(
            self.start.x * mt + self.end.x * t,
            self.start.y * mt + self.end.y * t,
        )
