"""Monotonic segment decomposition.

This module converts path links (pairs of consecutive commands) into
primitives that are monotonic in both x and y:

- A straight edge becomes at most one LineSegment; zero-length edges are
  dropped silently.
- A quadratic or cubic edge is split at its x and y extrema; each non-empty
  piece becomes a QuadraticSegment or CubicSegment.
- A link whose current command is a MoveTo starts a new subpath and produces
  nothing.

decompose_path() applies the rasterization method on top: a Fill closes every
subpath with a synthesized edge, a Stroke builds offset outlines and never
closes an open subpath.
"""

import logging
from collections.abc import Iterator

from monoraster.config import RasterConfig, StrokeConfig
from monoraster.core._bezier import cubic_extrema, quadratic_extrema, split_at
from monoraster.core.bezier_segment import CubicSegment, QuadraticSegment
from monoraster.core.curve import EPSILON
from monoraster.core.line_segment import LineSegment
from monoraster.core.segment import Segment
from monoraster.core.stroke import flatten_subpath, stroke_outlines
from monoraster.domain import (
    Close,
    Command,
    CubicTo,
    Fill,
    LineTo,
    Method,
    MoveTo,
    Path,
    Point,
    QuadTo,
    Stroke,
)

logger = logging.getLogger(__name__)


def from_link(previous: Command, current: Command) -> Iterator[Segment]:
    """Decompose one link into monotonic primitives.

    The result is a lazy, finite generator yielding zero or more primitives
    that cover the edge exactly, in traversal order.

    Args:
        previous: Command whose end point starts the edge
        current: Command describing the edge

    Yields:
        Monotonic primitives for the edge
    """
    if isinstance(current, MoveTo | Close) or isinstance(previous, Close):
        return

    start = previous.point

    if isinstance(current, LineTo):
        segment = LineSegment.new_rasterable(start, current.point)
        if segment is not None:
            yield segment

    elif isinstance(current, QuadTo):
        points = [start, current.control, current.point]
        for piece in split_at(points, quadratic_extrema(points)):
            if not _is_point(piece):
                yield QuadraticSegment(*piece)

    elif isinstance(current, CubicTo):
        points = [start, current.control1, current.control2, current.point]
        for piece in split_at(points, cubic_extrema(points)):
            if not _is_point(piece):
                yield CubicSegment(*piece)


def _is_point(piece: list[Point]) -> bool:
    """True if every control point coincides with the first one."""
    first = piece[0]
    return all(
        abs(p.x - first.x) <= EPSILON and abs(p.y - first.y) <= EPSILON for p in piece[1:]
    )


def decompose_path(
    path: Path,
    method: Method,
    raster_config: RasterConfig | None = None,
    stroke_config: StrokeConfig | None = None,
) -> list[Segment]:
    """Decompose a whole path into the primitives the sweep rasterizes.

    Args:
        path: Path to decompose
        method: Fill (every subpath closed) or Stroke (offset outlines)
        raster_config: Curve flattening tolerance for strokes
        stroke_config: Join, cap and miter settings for strokes

    Returns:
        Monotonic primitives for the whole path
    """
    raster_config = raster_config or RasterConfig()
    stroke_config = stroke_config or StrokeConfig()

    segments: list[Segment] = []
    link_count = 0

    for subpath in path.subpaths():
        if isinstance(method, Fill):
            links = list(subpath.links())
            if subpath.end != subpath.start:
                links.append((subpath.commands[-1], LineTo(subpath.start)))

            for previous, current in links:
                link_count += 1
                segments.extend(from_link(previous, current))

        elif isinstance(method, Stroke):
            polyline = flatten_subpath(subpath, raster_config.curve_tolerance)
            polygons = stroke_outlines(
                polyline,
                closed=subpath.closed,
                thickness=method.thickness,
                config=stroke_config,
                tolerance=raster_config.curve_tolerance,
            )
            for polygon in polygons:
                for previous, current in _polygon_links(polygon):
                    link_count += 1
                    segments.extend(from_link(previous, current))

    logger.debug(
        "Path decomposed: method=%s links=%d segments=%d",
        type(method).__name__,
        link_count,
        len(segments),
    )
    return segments


def _polygon_links(polygon: list[Point]) -> Iterator[tuple[Command, Command]]:
    """Links of a closed polygon, closing edge included."""
    commands: list[Command] = [MoveTo(polygon[0])]
    commands.extend(LineTo(p) for p in polygon[1:])
    commands.append(LineTo(polygon[0]))

    for i in range(1, len(commands)):
        yield commands[i - 1], commands[i]
