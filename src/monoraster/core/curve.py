"""The monotonic curve contract shared by every rasterizable primitive.

Every primitive is monotonic in both x and y over its parametric domain
[0, 1], so any axis-aligned query line crosses it at most once. This is what
lets the scanline sweep ask each primitive for a single crossing per row.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from monoraster.domain import Bounds, Point

# Coordinate differences below this are treated as zero
EPSILON = 1e-9


@dataclass(frozen=True, slots=True)
class Intersection:
    """Crossing of a primitive with an axis-aligned query line.

    Attributes:
        axis: Coordinate on the excluded axis (x when querying by y, y when
            querying by x)
        t: Where along the primitive the crossing occurs, in [0, 1]
    """

    axis: float
    t: float


class Curve(ABC):
    """A curve piece monotonic in both x and y over t in [0, 1].

    Concrete primitives also expose their traversal-ordered end points as
    ``start`` and ``end`` attributes.
    """

    start: Point
    end: Point

    @abstractmethod
    def sample_t(self, t: float) -> Point | None:
        """Return the point at t, or None when t is outside [0, 1]."""

    @abstractmethod
    def sample_x(self, x: float) -> Intersection | None:
        """Return the y and t where the curve crosses the vertical line at x.

        Returns None when x lies outside the curve's x bounds.
        """

    @abstractmethod
    def sample_y(self, y: float) -> Intersection | None:
        """Return the x and t where the curve crosses the horizontal line at y.

        Returns None when y lies outside the curve's y bounds.
        """

    @property
    @abstractmethod
    def bounds(self) -> Bounds:
        """Precomputed bounding box of the curve."""

    @property
    def winding(self) -> int:
        """Crossing sign: +1 if y increases along the curve, -1 if it decreases, 0 if flat."""
        if self.end.y > self.start.y:
            return 1
        if self.end.y < self.start.y:
            return -1
        return 0
