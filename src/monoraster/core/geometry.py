"""Geometric operations for outline construction.

This module provides small mathematical utilities for:
- Signed area calculation (shoelace formula)
- Unit direction and perpendicular vector computation

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math

from monoraster.domain import Point


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates orientation: with y pointing up a positive
    area is counter-clockwise, with y pointing down (raster space) it is
    clockwise on screen. Either way, two polygons with the same sign have the
    same orientation.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])
        1.0
        >>> signed_area([p1, p4, p3, p2])
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def unit_direction(p1: Point, p2: Point) -> Point:
    """Calculate the unit vector pointing from p1 to p2.

    Raises:
        ValueError: If p1 and p2 are the same point (zero-length line)
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    length = math.hypot(dx, dy)

    if length < 1e-12:
        raise ValueError("Cannot calculate direction of zero-length line")

    return Point(dx / length, dy / length)


def perpendicular_direction(p1: Point, p2: Point) -> Point:
    """Calculate the unit perpendicular vector to a line from p1 to p2.

    The perpendicular is the direction vector (p2 - p1) rotated by +90
    degrees: (x, y) -> (-y, x).

    Args:
        p1: Start point of line
        p2: End point of line

    Returns:
        Unit perpendicular vector

    Raises:
        ValueError: If p1 and p2 are the same point (zero-length line)

    Examples:
        >>> perpendicular_direction(Point(0.0, 0.0), Point(1.0, 0.0))
        Point(x=-0.0, y=1.0)
    """
    direction = unit_direction(p1, p2)
    return Point(-direction.y, direction.x)
