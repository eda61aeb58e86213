"""Unit tests for monotonic primitives and the Bezier helpers."""

import math

import pytest

from monoraster.core._bezier import (
    cubic_extrema,
    flatten_cubic,
    flatten_quadratic,
    quadratic_extrema,
    quadratic_roots,
    solve_monotonic,
    split_at,
)
from monoraster.core.bezier_segment import CubicSegment, QuadraticSegment
from monoraster.core.curve import Curve
from monoraster.core.line_segment import LineSegment
from monoraster.domain import Point


def _is_monotonic(values: list[float]) -> bool:
    tolerance = 1e-9
    increasing = all(b >= a - tolerance for a, b in zip(values, values[1:]))
    decreasing = all(b <= a + tolerance for a, b in zip(values, values[1:]))
    return increasing or decreasing


class TestLineSegment:
    """Tests for LineSegment."""

    def test_new_rasterable_rejects_zero_length(self) -> None:
        """Test that a zero-length edge produces no primitive."""
        assert LineSegment.new_rasterable(Point(3, 3), Point(3, 3)) is None
        assert LineSegment.new_rasterable(Point(3, 3), Point(3 + 1e-12, 3)) is None

    def test_new_rasterable_accepts_horizontal(self) -> None:
        """Test that a horizontal edge is still a primitive."""
        line = LineSegment.new_rasterable(Point(0, 2), Point(5, 2))
        assert line is not None
        assert line.winding == 0

    def test_is_curve(self) -> None:
        """Test that lines satisfy the curve contract."""
        assert isinstance(LineSegment(Point(0, 0), Point(1, 1)), Curve)

    def test_winding(self) -> None:
        """Test winding follows the vertical direction."""
        assert LineSegment(Point(0, 0), Point(1, 5)).winding == 1
        assert LineSegment(Point(0, 5), Point(1, 0)).winding == -1

    def test_bounds(self) -> None:
        """Test bounds are ordered regardless of direction."""
        line = LineSegment(Point(4, 7), Point(-2, 1))
        assert line.bounds.min == Point(-2, 1)
        assert line.bounds.max == Point(4, 7)

    def test_sample_t(self) -> None:
        """Test parametric sampling and its domain."""
        line = LineSegment(Point(0, 0), Point(10, 20))
        assert line.sample_t(0.0) == Point(0, 0)
        assert line.sample_t(1.0) == Point(10, 20)
        assert line.sample_t(0.25) == Point(2.5, 5.0)
        assert line.sample_t(-0.1) is None
        assert line.sample_t(1.1) is None

    def test_sample_y(self) -> None:
        """Test crossing a horizontal line."""
        line = LineSegment(Point(0, 0), Point(10, 20))
        hit = line.sample_y(5.0)
        assert hit is not None
        assert hit.axis == pytest.approx(2.5)
        assert hit.t == pytest.approx(0.25)
        assert line.sample_y(20.5) is None
        assert line.sample_y(-1.0) is None

    def test_sample_x(self) -> None:
        """Test crossing a vertical line."""
        line = LineSegment(Point(10, 0), Point(0, 20))
        hit = line.sample_x(2.5)
        assert hit is not None
        assert hit.axis == pytest.approx(15.0)
        assert hit.t == pytest.approx(0.75)
        assert line.sample_x(11.0) is None

    def test_sample_end_points_exact(self) -> None:
        """Test that queries at the end coordinates return the end points."""
        line = LineSegment(Point(0.5, 0.25), Point(7.75, 9.5))
        start = line.sample_y(0.25)
        end = line.sample_y(9.5)
        assert start is not None and start.axis == 0.5
        assert end is not None and end.axis == 7.75

    def test_vertical_and_horizontal_queries(self) -> None:
        """Test queries along a line's own constant axis."""
        vertical = LineSegment(Point(3, 0), Point(3, 10))
        hit = vertical.sample_x(3.0)
        assert hit is not None and hit.axis == 0.0 and hit.t == 0.0

        horizontal = LineSegment(Point(0, 4), Point(10, 4))
        hit = horizontal.sample_y(4.0)
        assert hit is not None and hit.axis == 0.0 and hit.t == 0.0


class TestQuadraticSegment:
    """Tests for QuadraticSegment."""

    @pytest.fixture
    def segment(self) -> QuadraticSegment:
        """Monotonic quadratic with its control point on the left."""
        return QuadraticSegment(Point(0, 0), Point(0, 8), Point(10, 10))

    def test_bounds_from_end_points(self, segment: QuadraticSegment) -> None:
        """Test bounds of a monotonic piece are its end points."""
        assert segment.bounds.min == Point(0, 0)
        assert segment.bounds.max == Point(10, 10)

    def test_sample_t_end_points(self, segment: QuadraticSegment) -> None:
        """Test that t = 0 and t = 1 reproduce the end points exactly."""
        assert segment.sample_t(0.0) == Point(0, 0)
        assert segment.sample_t(1.0) == Point(10, 10)
        assert segment.sample_t(2.0) is None

    def test_round_trip_y(self, segment: QuadraticSegment) -> None:
        """Test sample_t(sample_y(y).t).y == y across the range."""
        for i in range(1, 20):
            y = i * 0.5
            hit = segment.sample_y(y)
            assert hit is not None
            point = segment.sample_t(hit.t)
            assert point is not None
            assert point.y == pytest.approx(y, abs=1e-7)
            assert point.x == pytest.approx(hit.axis, abs=1e-7)

    def test_round_trip_x(self, segment: QuadraticSegment) -> None:
        """Test sample_t(sample_x(x).t).x == x across the range."""
        for i in range(1, 20):
            x = i * 0.5
            hit = segment.sample_x(x)
            assert hit is not None
            point = segment.sample_t(hit.t)
            assert point is not None
            assert point.x == pytest.approx(x, abs=1e-7)

    def test_outside_bounds(self, segment: QuadraticSegment) -> None:
        """Test queries outside the bounds."""
        assert segment.sample_x(-0.5) is None
        assert segment.sample_y(10.5) is None

    def test_winding(self, segment: QuadraticSegment) -> None:
        """Test winding of a downward-moving piece."""
        assert segment.winding == 1
        reverse = QuadraticSegment(segment.end, segment.control, segment.start)
        assert reverse.winding == -1


class TestCubicSegment:
    """Tests for CubicSegment."""

    @pytest.fixture
    def segment(self) -> CubicSegment:
        """Monotonic cubic with a flat start tangent."""
        return CubicSegment(Point(0, 0), Point(6, 0), Point(10, 4), Point(10, 10))

    def test_round_trip_y(self, segment: CubicSegment) -> None:
        """Test sample_t(sample_y(y).t).y == y across the range."""
        for i in range(0, 21):
            y = i * 0.5
            hit = segment.sample_y(y)
            assert hit is not None
            point = segment.sample_t(hit.t)
            assert point is not None
            assert point.y == pytest.approx(y, abs=1e-7)

    def test_round_trip_x(self, segment: CubicSegment) -> None:
        """Test sample_t(sample_x(x).t).x == x across the range."""
        for i in range(0, 21):
            x = i * 0.5
            hit = segment.sample_x(x)
            assert hit is not None
            point = segment.sample_t(hit.t)
            assert point is not None
            assert point.x == pytest.approx(x, abs=1e-7)

    def test_parameter_is_monotonic(self, segment: CubicSegment) -> None:
        """Test that increasing y gives increasing t."""
        ts = []
        for i in range(0, 21):
            hit = segment.sample_y(i * 0.5)
            assert hit is not None
            ts.append(hit.t)
        assert ts == sorted(ts)
        assert ts[0] == 0.0
        assert ts[-1] == 1.0


class TestBezierHelpers:
    """Tests for the internal Bezier algorithms."""

    def test_quadratic_roots(self) -> None:
        """Test roots of quadratic and degenerate linear equations."""
        assert sorted(quadratic_roots(1.0, -3.0, 2.0)) == pytest.approx([1.0, 2.0])
        assert quadratic_roots(0.0, 2.0, -1.0) == pytest.approx([0.5])
        assert quadratic_roots(1.0, 0.0, 1.0) == []
        assert quadratic_roots(0.0, 0.0, 1.0) == []

    def test_quadratic_extrema(self) -> None:
        """Test the y extremum of a symmetric arch."""
        points = [Point(0, 0), Point(5, 10), Point(10, 0)]
        assert quadratic_extrema(points) == pytest.approx([0.5])

    def test_monotonic_quadratic_has_no_extrema(self) -> None:
        """Test that a monotonic quadratic needs no split."""
        assert quadratic_extrema([Point(0, 0), Point(0, 8), Point(10, 10)]) == []

    def test_cubic_extrema_s_curve(self) -> None:
        """Test the two y extrema of an S curve."""
        points = [Point(0, 0), Point(10, 20), Point(20, -20), Point(30, 0)]
        ts = cubic_extrema(points)
        assert len(ts) == 2
        assert all(0.0 < t < 1.0 for t in ts)
        assert ts == sorted(ts)

    def test_split_at_produces_monotonic_pieces(self) -> None:
        """Test splitting at extrema yields monotonic, connected pieces."""
        points = [Point(0, 0), Point(10, 20), Point(20, -20), Point(30, 0)]
        pieces = split_at(points, cubic_extrema(points))

        assert len(pieces) == 3
        assert pieces[0][0] == points[0]
        assert pieces[-1][-1] == points[-1]
        for left, right in zip(pieces, pieces[1:]):
            assert left[-1] == right[0]

        for piece in pieces:
            segment = CubicSegment(*piece)
            samples = [segment.sample_t(i / 50) for i in range(51)]
            assert _is_monotonic([p.x for p in samples])
            assert _is_monotonic([p.y for p in samples])

    def test_solve_monotonic(self) -> None:
        """Test the safeguarded Newton solver on a function with flat ends."""

        def f(t: float) -> float:
            return t * t * (3.0 - 2.0 * t)

        def df(t: float) -> float:
            return 6.0 * t * (1.0 - t)

        for target in (0.0, 0.01, 0.3, 0.5, 0.99, 1.0):
            t = solve_monotonic(f, df, target)
            assert 0.0 <= t <= 1.0
            assert f(t) == pytest.approx(target, abs=1e-9)

    def test_flatten_quadratic_within_tolerance(self) -> None:
        """Test that flattening subdivides until the curve is close."""
        points = [Point(0, 0), Point(50, 100), Point(100, 0)]
        polyline = flatten_quadratic(points, 0.1)

        assert polyline[0] == points[0]
        assert polyline[-1] == points[-1]
        assert len(polyline) > 8

    def test_flatten_straight_cubic(self) -> None:
        """Test that a straight cubic flattens to its chord."""
        points = [Point(0, 0), Point(1, 1), Point(2, 2), Point(3, 3)]
        assert flatten_cubic(points, 0.1) == [Point(0, 0), Point(3, 3)]

    def test_flatten_cubic_circle_quadrant(self) -> None:
        """Test flattened quarter circle stays near the radius."""
        k = 0.5522847498 * 10
        points = [Point(10, 0), Point(10, k), Point(k, 10), Point(0, 10)]
        polyline = flatten_cubic(points, 0.01)

        for p in polyline:
            assert math.hypot(p.x, p.y) == pytest.approx(10.0, abs=0.05)
