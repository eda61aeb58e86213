"""Unit tests for monotonic segment decomposition."""

import pytest

from monoraster.core.bezier_segment import CubicSegment, QuadraticSegment
from monoraster.core.decompose import decompose_path, from_link
from monoraster.core.line_segment import LineSegment
from monoraster.domain import (
    Close,
    CubicTo,
    Fill,
    LineTo,
    MoveTo,
    Path,
    Point,
    QuadTo,
    Stroke,
)


def _is_monotonic(values: list[float]) -> bool:
    tolerance = 1e-9
    increasing = all(b >= a - tolerance for a, b in zip(values, values[1:]))
    decreasing = all(b <= a + tolerance for a, b in zip(values, values[1:]))
    return increasing or decreasing


def _assert_monotonic(segment) -> None:
    samples = [segment.sample_t(i / 64) for i in range(65)]
    assert _is_monotonic([p.x for p in samples])
    assert _is_monotonic([p.y for p in samples])


class TestFromLink:
    """Tests for from_link()."""

    def test_line(self) -> None:
        """Test a straight edge becomes one line."""
        segments = list(from_link(MoveTo(Point(0, 0)), LineTo(Point(4, 3))))
        assert segments == [LineSegment(Point(0, 0), Point(4, 3))]

    def test_zero_length_line_dropped(self) -> None:
        """Test a zero-length edge produces nothing and raises nothing."""
        assert list(from_link(LineTo(Point(2, 2)), LineTo(Point(2, 2)))) == []

    def test_move_terminates(self) -> None:
        """Test that a link ending in MoveTo produces nothing."""
        assert list(from_link(LineTo(Point(0, 0)), MoveTo(Point(9, 9)))) == []
        assert list(from_link(MoveTo(Point(0, 0)), MoveTo(Point(9, 9)))) == []

    def test_close_produces_nothing(self) -> None:
        """Test that Close on either side of a link produces nothing."""
        assert list(from_link(LineTo(Point(0, 0)), Close())) == []
        assert list(from_link(Close(), LineTo(Point(1, 1)))) == []

    def test_is_lazy(self) -> None:
        """Test that from_link returns a generator."""
        result = from_link(MoveTo(Point(0, 0)), LineTo(Point(1, 1)))
        assert next(result) == LineSegment(Point(0, 0), Point(1, 1))
        with pytest.raises(StopIteration):
            next(result)

    def test_monotonic_quadratic_not_split(self) -> None:
        """Test that an already monotonic quadratic stays whole."""
        segments = list(from_link(MoveTo(Point(0, 0)), QuadTo(Point(0, 8), Point(10, 10))))
        assert segments == [QuadraticSegment(Point(0, 0), Point(0, 8), Point(10, 10))]

    def test_quadratic_split_at_extremum(self) -> None:
        """Test an arch is split at its apex."""
        segments = list(from_link(MoveTo(Point(0, 0)), QuadTo(Point(5, 10), Point(10, 0))))

        assert len(segments) == 2
        assert all(isinstance(s, QuadraticSegment) for s in segments)
        assert segments[0].start == Point(0, 0)
        assert segments[0].end == Point(5, 5)
        assert segments[1].start == segments[0].end
        assert segments[1].end == Point(10, 0)
        for segment in segments:
            _assert_monotonic(segment)

    def test_cubic_split_into_monotonic_pieces(self) -> None:
        """Test a loop-like cubic yields monotonic pieces in order."""
        link = (
            MoveTo(Point(0, 0)),
            CubicTo(Point(40, 30), Point(-10, 30), Point(30, 0)),
        )
        segments = list(from_link(*link))

        assert len(segments) >= 3
        assert all(isinstance(s, CubicSegment) for s in segments)
        assert segments[0].start == Point(0, 0)
        assert segments[-1].end == Point(30, 0)
        for left, right in zip(segments, segments[1:]):
            assert left.end == right.start
        for segment in segments:
            _assert_monotonic(segment)

    def test_degenerate_curves_dropped(self) -> None:
        """Test curves that collapse to a point produce nothing."""
        p = Point(3, 3)
        assert list(from_link(MoveTo(p), QuadTo(p, p))) == []
        assert list(from_link(MoveTo(p), CubicTo(p, p, p))) == []

    def test_curve_from_curve(self) -> None:
        """Test that the previous command's end point starts the edge."""
        segments = list(
            from_link(QuadTo(Point(1, 1), Point(2, 0)), LineTo(Point(2, 5)))
        )
        assert segments == [LineSegment(Point(2, 0), Point(2, 5))]


class TestDecomposePath:
    """Tests for decompose_path()."""

    def test_fill_closes_open_subpath(self) -> None:
        """Test that a fill adds the edge back to the subpath start."""
        path = Path().move_to(0, 0).line_to(10, 0).line_to(10, 10)
        segments = decompose_path(path, Fill())

        assert len(segments) == 3
        assert segments[-1] == LineSegment(Point(10, 10), Point(0, 0))

    def test_fill_does_not_duplicate_closing_edge(self) -> None:
        """Test that a subpath ending on its start gets no extra edge."""
        path = Path().move_to(0, 0).line_to(10, 0).line_to(10, 10).line_to(0, 0).close()
        segments = decompose_path(path, Fill())
        assert len(segments) == 3

    def test_fill_never_joins_subpaths(self) -> None:
        """Test that no primitive connects two subpaths."""
        path = (
            Path()
            .move_to(0, 0)
            .line_to(4, 0)
            .line_to(4, 4)
            .close()
            .move_to(10, 10)
            .line_to(14, 10)
            .line_to(14, 14)
            .close()
        )
        segments = decompose_path(path, Fill())

        assert len(segments) == 6
        for segment in segments:
            assert (segment.bounds.max.x <= 4) or (segment.bounds.min.x >= 10)

    def test_fill_includes_horizontal_edges(self) -> None:
        """Test that horizontal edges are kept as primitives."""
        path = Path().move_to(0, 0).line_to(5, 0).line_to(5, 5).line_to(0, 5).close()
        segments = decompose_path(path, Fill())
        assert sum(1 for s in segments if s.winding == 0) == 2

    def test_stroke_open_path_has_no_closing_edge(self) -> None:
        """Test that stroking an open path never connects its ends."""
        a = Point(0, 0)
        c = Point(20, 20)
        path = Path().move_to(a.x, a.y).line_to(20, 0).line_to(c.x, c.y)
        segments = decompose_path(path, Stroke(2.0))

        assert segments
        # A closing edge A-C would cross the interior diagonal around (10, 10)
        for segment in segments:
            assert not (
                segment.bounds.min.x < 9 < segment.bounds.max.x
                and segment.bounds.min.y < 9 < segment.bounds.max.y
            )

    def test_stroke_single_point(self) -> None:
        """Test that a lone point with butt caps strokes to nothing."""
        path = Path().move_to(5, 5).line_to(5, 5)
        assert decompose_path(path, Stroke(2.0)) == []

    def test_all_primitives_monotonic(self) -> None:
        """Test every primitive of a mixed path is monotonic."""
        path = (
            Path()
            .move_to(0, 0)
            .quad_to(20, -10, 30, 10)
            .cubic_to(40, 40, -10, 30, 5, 15)
            .close()
        )
        for segment in decompose_path(path, Fill()):
            _assert_monotonic(segment)

    def test_empty_path(self) -> None:
        """Test that an empty path decomposes to nothing."""
        assert decompose_path(Path(), Fill()) == []
        assert decompose_path(Path(), Stroke(1.0)) == []
