"""Stroke outline construction.

A stroke is rasterized as the nonzero fill of a set of closed polygons:

- one quadrilateral per flattened edge, offset by half the thickness
- one join polygon at every interior vertex (bevel, miter or round)
- one cap polygon at each end of an open subpath (square or round)

Every polygon is emitted with the same orientation (positive signed area),
so where polygons overlap their winding adds up and never cancels. The union
under the nonzero rule is exactly the stroked area.

An open subpath never gets an edge from its last point back to its first.
"""

import logging
import math

from monoraster.config import StrokeConfig
from monoraster.core._bezier import flatten_cubic, flatten_quadratic
from monoraster.core.curve import EPSILON
from monoraster.core.geometry import perpendicular_direction, signed_area, unit_direction
from monoraster.domain import CubicTo, LineCap, LineJoin, LineTo, Point, QuadTo, Subpath

logger = logging.getLogger(__name__)


def flatten_subpath(subpath: Subpath, tolerance: float) -> list[Point]:
    """Flatten a subpath into a polyline.

    Curves are subdivided until they deviate less than tolerance from their
    chords. Consecutive duplicate points are removed; for a closed subpath a
    final point equal to the first is removed too (the closing edge is implied).

    Args:
        subpath: Subpath to flatten
        tolerance: Maximum distance between curve and polyline

    Returns:
        Polyline points in traversal order
    """
    points: list[Point] = [subpath.start]

    for command in subpath.commands[1:]:
        current = points[-1]
        if isinstance(command, LineTo):
            points.append(command.point)
        elif isinstance(command, QuadTo):
            points.extend(flatten_quadratic([current, command.control, command.point], tolerance)[1:])
        elif isinstance(command, CubicTo):
            points.extend(
                flatten_cubic(
                    [current, command.control1, command.control2, command.point], tolerance
                )[1:]
            )

    polyline = [points[0]]
    for point in points[1:]:
        if not _same_point(point, polyline[-1]):
            polyline.append(point)

    if subpath.closed and len(polyline) > 1 and _same_point(polyline[0], polyline[-1]):
        polyline.pop()

    return polyline


def stroke_outlines(
    polyline: list[Point],
    closed: bool,
    thickness: float,
    config: StrokeConfig,
    tolerance: float,
) -> list[list[Point]]:
    """Build the polygons whose union is the stroke of a polyline.

    Args:
        polyline: Points of the flattened subpath
        closed: Whether the subpath closes back onto its first point
        thickness: Full stroke width
        config: Join, cap and miter limit settings
        tolerance: Flattening tolerance for round joins and caps

    Returns:
        Closed polygons (implicitly closed point lists), all with positive
        signed area
    """
    half = thickness / 2.0

    if not polyline:
        return []

    if len(polyline) == 1:
        return _orient(_dot(polyline[0], half, config.line_cap, tolerance))

    if closed and len(polyline) == 2:
        # A closed two-point subpath is an out-and-back line
        closed = False

    polygons: list[list[Point]] = []
    n = len(polyline)
    edge_count = n if closed else n - 1

    for i in range(edge_count):
        polygons.append(_edge_quad(polyline[i], polyline[(i + 1) % n], half))

    join_vertices = range(n) if closed else range(1, n - 1)
    for i in join_vertices:
        polygons.extend(
            _join(
                polyline[i - 1],
                polyline[i],
                polyline[(i + 1) % n],
                half,
                config,
                tolerance,
            )
        )

    if not closed:
        polygons.extend(_cap(polyline[0], polyline[1], half, config.line_cap, tolerance))
        polygons.extend(_cap(polyline[-1], polyline[-2], half, config.line_cap, tolerance))

    result = _orient(polygons)
    logger.debug("Stroke outline built: %d points, %d polygons", n, len(result))
    return result


def _same_point(a: Point, b: Point) -> bool:
    return abs(a.x - b.x) <= EPSILON and abs(a.y - b.y) <= EPSILON


def _orient(polygons: list[list[Point]]) -> list[list[Point]]:
    """Give every polygon positive signed area; drop degenerate ones."""
    result: list[list[Point]] = []
    for polygon in polygons:
        area = signed_area(polygon)
        if area > 0.0:
            result.append(polygon)
        elif area < 0.0:
            result.append(list(reversed(polygon)))
    return result


def _edge_quad(a: Point, b: Point, half: float) -> list[Point]:
    normal = perpendicular_direction(a, b) * half
    return [a + normal, b + normal, b - normal, a - normal]


def _arc_steps(sweep: float, half: float, tolerance: float) -> int:
    """Number of chords approximating an arc within tolerance."""
    if tolerance >= half:
        step = math.pi / 2.0
    else:
        step = 2.0 * math.acos(1.0 - tolerance / half)
    return max(1, math.ceil(abs(sweep) / step))


def _arc(center: Point, radius: float, start_angle: float, sweep: float, tolerance: float) -> list[Point]:
    steps = _arc_steps(sweep, radius, tolerance)
    return [
        Point(
            center.x + radius * math.cos(start_angle + sweep * k / steps),
            center.y + radius * math.sin(start_angle + sweep * k / steps),
        )
        for k in range(steps + 1)
    ]


def _join(
    previous: Point,
    vertex: Point,
    following: Point,
    half: float,
    config: StrokeConfig,
    tolerance: float,
) -> list[list[Point]]:
    d0 = unit_direction(previous, vertex)
    d1 = unit_direction(vertex, following)
    cross = d0.x * d1.y - d0.y * d1.x
    dot = d0.x * d1.x + d0.y * d1.y

    if abs(cross) < 1e-12:
        if dot > 0.0:
            # Straight continuation, the edge quads already meet
            return []
        if config.line_join is LineJoin.ROUND:
            return [_arc(vertex, half, 0.0, 2.0 * math.pi, tolerance)[:-1]]
        return []

    # The outer side of the turn is opposite to the turning direction
    side = -1.0 if cross > 0.0 else 1.0
    n0 = Point(-d0.y, d0.x) * (half * side)
    n1 = Point(-d1.y, d1.x) * (half * side)
    outer0 = vertex + n0
    outer1 = vertex + n1

    if config.line_join is LineJoin.ROUND:
        start_angle = math.atan2(n0.y, n0.x)
        sweep = math.atan2(n1.y, n1.x) - start_angle
        if sweep > math.pi:
            sweep -= 2.0 * math.pi
        elif sweep < -math.pi:
            sweep += 2.0 * math.pi
        return [[vertex, *_arc(vertex, half, start_angle, sweep, tolerance)]]

    if config.line_join is LineJoin.MITER:
        bisector = n0 + n1
        length = math.hypot(bisector.x, bisector.y)
        cos_half = length / (2.0 * half)
        if cos_half > 0.0 and 1.0 / cos_half <= config.miter_limit:
            tip = vertex + bisector * (half / cos_half / length)
            return [[vertex, outer0, tip, outer1]]

    return [[vertex, outer0, outer1]]


def _cap(end: Point, neighbour: Point, half: float, cap: LineCap, tolerance: float) -> list[list[Point]]:
    if cap is LineCap.BUTT:
        return []

    outward = unit_direction(neighbour, end)
    normal = Point(-outward.y, outward.x) * half

    if cap is LineCap.SQUARE:
        extension = outward * half
        return [[end + normal, end + normal + extension, end - normal + extension, end - normal]]

    # Half disc from +normal through the outward direction to -normal
    start_angle = math.atan2(normal.y, normal.x)
    return [_arc(end, half, start_angle, -math.pi, tolerance)]


def _dot(center: Point, half: float, cap: LineCap, tolerance: float) -> list[list[Point]]:
    if cap is LineCap.ROUND:
        return [_arc(center, half, 0.0, 2.0 * math.pi, tolerance)[:-1]]
    if cap is LineCap.SQUARE:
        return [
            [
                Point(center.x - half, center.y - half),
                Point(center.x + half, center.y - half),
                Point(center.x + half, center.y + half),
                Point(center.x - half, center.y + half),
            ]
        ]
    return []
