"""Monotonic quadratic and cubic Bezier primitives.

These pieces are produced only by the decomposer, which splits curved path
edges at their x and y extrema. Each piece is therefore monotonic in both
axes: its end points are its extremes and every axis-aligned query has a
single solution for t.
"""

from dataclasses import dataclass, field

from monoraster.core._bezier import (
    cubic_point,
    quadratic_point,
    quadratic_roots,
    solve_monotonic,
)
from monoraster.core.curve import Curve, Intersection
from monoraster.domain import Bounds, Point

# Roots this far outside [0, 1] still count as the end point
_ROOT_SLACK = 1e-7


class _MonotonicBezier(Curve):
    """Shared sampling logic for monotonic Bezier pieces."""

    _bounds: Bounds

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    def _evaluate(self, t: float) -> Point:
        raise NotImplementedError

    def _solve_t(self, value: float, axis: str) -> float:
        raise NotImplementedError

    def sample_t(self, t: float) -> Point | None:
        if not 0.0 <= t <= 1.0:
            return None
        if t == 0.0:
            return self.start
        if t == 1.0:
            return self.end
        return self._evaluate(t)

    def sample_x(self, x: float) -> Intersection | None:
        if not self._bounds.contains_x(x):
            return None
        t = self._parameter(x, "x")
        return Intersection(axis=self.sample_t(t).y, t=t)  # type: ignore[union-attr]

    def sample_y(self, y: float) -> Intersection | None:
        if not self._bounds.contains_y(y):
            return None
        t = self._parameter(y, "y")
        return Intersection(axis=self.sample_t(t).x, t=t)  # type: ignore[union-attr]

    def _parameter(self, value: float, axis: str) -> float:
        start = getattr(self.start, axis)
        end = getattr(self.end, axis)
        if value == start or start == end:
            return 0.0
        if value == end:
            return 1.0
        return min(1.0, max(0.0, self._solve_t(value, axis)))


@dataclass(frozen=True)
class QuadraticSegment(_MonotonicBezier):
    """A quadratic Bezier piece, monotonic in x and y.

    Attributes:
        start: First on-curve point
        control: Off-curve control point
        end: Last on-curve point
    """

    start: Point
    control: Point
    end: Point
    _bounds: Bounds = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_bounds", Bounds.from_points(self.start, self.end))

    @property
    def points(self) -> list[Point]:
        return [self.start, self.control, self.end]

    def _evaluate(self, t: float) -> Point:
        return quadratic_point(self.points, t)

    def _solve_t(self, value: float, axis: str) -> float:
        a0, a1, a2 = (getattr(p, axis) for p in self.points)

        # a0 (1-t)^2 + 2 a1 (1-t) t + a2 t^2 - value = 0
        for root in quadratic_roots(a0 - 2.0 * a1 + a2, 2.0 * (a1 - a0), a0 - value):
            if -_ROOT_SLACK <= root <= 1.0 + _ROOT_SLACK:
                return root

        return solve_monotonic(
            lambda t: getattr(quadratic_point(self.points, t), axis),
            lambda t: 2.0 * ((a1 - a0) * (1.0 - t) + (a2 - a1) * t),
            value,
        )


@dataclass(frozen=True)
class CubicSegment(_MonotonicBezier):
    """A cubic Bezier piece, monotonic in x and y.

    Attributes:
        start: First on-curve point
        control1: First off-curve control point
        control2: Second off-curve control point
        end: Last on-curve point
    """

    start: Point
    control1: Point
    control2: Point
    end: Point
    _bounds: Bounds = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_bounds", Bounds.from_points(self.start, self.end))

    @property
    def points(self) -> list[Point]:
        return [self.start, self.control1, self.control2, self.end]

    def _evaluate(self, t: float) -> Point:
        return cubic_point(self.points, t)

    def _solve_t(self, value: float, axis: str) -> float:
        a0, a1, a2, a3 = (getattr(p, axis) for p in self.points)

        def coordinate(t: float) -> float:
            mt = 1.0 - t
            return (
                mt * mt * mt * a0
                + 3.0 * mt * mt * t * a1
                + 3.0 * mt * t * t * a2
                + t * t * t * a3
            )

        def derivative(t: float) -> float:
            mt = 1.0 - t
            return 3.0 * (
                mt * mt * (a1 - a0) + 2.0 * mt * t * (a2 - a1) + t * t * (a3 - a2)
            )

        return solve_monotonic(coordinate, derivative, value)
