"""Internal Bezier curve algorithms.

This is an internal module containing helpers for curve decomposition,
monotonic root finding and flattening. Not intended for public use.
"""

import math
from collections.abc import Callable

from monoraster.domain import Point

# Parameters closer than this to 0 or 1 (or to each other) do not split a curve
SPLIT_EPSILON = 1e-9

_MAX_FLATTEN_DEPTH = 16


def quadratic_point(points: list[Point], t: float) -> Point:
    """Evaluate a quadratic Bezier curve at t."""
    p0, p1, p2 = points
    mt = 1.0 - t
    a, b, c = mt * mt, 2.0 * mt * t, t * t
    return Point(a * p0.x + b * p1.x + c * p2.x, a * p0.y + b * p1.y + c * p2.y)


def cubic_point(points: list[Point], t: float) -> Point:
    """Evaluate a cubic Bezier curve at t."""
    p0, p1, p2, p3 = points
    mt = 1.0 - t
    a, b, c, d = mt * mt * mt, 3.0 * mt * mt * t, 3.0 * mt * t * t, t * t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y,
    )


def quadratic_roots(a: float, b: float, c: float) -> list[float]:
    """Real roots of a*t^2 + b*t + c, degrading to the linear case."""
    if abs(a) < 1e-12:
        if abs(b) < 1e-12:
            return []
        return [-c / b]

    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return []
    if disc == 0.0:
        return [-b / (2.0 * a)]

    # Citardauq form avoids cancellation
    q = -0.5 * (b + math.copysign(math.sqrt(disc), b))
    roots = [q / a]
    if q != 0.0:
        roots.append(c / q)
    return roots


def _interior(ts: list[float]) -> list[float]:
    """Sort, deduplicate and keep parameters strictly inside (0, 1)."""
    result: list[float] = []
    for t in sorted(ts):
        if SPLIT_EPSILON < t < 1.0 - SPLIT_EPSILON:
            if not result or t - result[-1] > SPLIT_EPSILON:
                result.append(t)
    return result


def quadratic_extrema(points: list[Point]) -> list[float]:
    """Parameters in (0, 1) where the quadratic has an x or y extremum.

    Args:
        points: Control points [p0, p1, p2]

    Returns:
        Sorted parameters at which the curve must be split to be monotonic
    """
    p0, p1, p2 = points
    ts: list[float] = []
    for a0, a1, a2 in ((p0.x, p1.x, p2.x), (p0.y, p1.y, p2.y)):
        denom = a0 - 2.0 * a1 + a2
        if denom != 0.0:
            ts.append((a0 - a1) / denom)
    return _interior(ts)


def cubic_extrema(points: list[Point]) -> list[float]:
    """Parameters in (0, 1) where the cubic has an x or y extremum.

    The derivative of each coordinate is a quadratic in t; its roots are the
    candidate extrema.

    Args:
        points: Control points [p0, p1, p2, p3]

    Returns:
        Sorted parameters at which the curve must be split to be monotonic
    """
    p0, p1, p2, p3 = points
    ts: list[float] = []
    for a0, a1, a2, a3 in ((p0.x, p1.x, p2.x, p3.x), (p0.y, p1.y, p2.y, p3.y)):
        a = -a0 + 3.0 * a1 - 3.0 * a2 + a3
        b = 2.0 * (a0 - 2.0 * a1 + a2)
        c = a1 - a0
        ts.extend(quadratic_roots(a, b, c))
    return _interior(ts)


def split_quadratic(points: list[Point], t: float) -> tuple[list[Point], list[Point]]:
    """Split a quadratic at t using De Casteljau's algorithm."""
    p0, p1, p2 = points
    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    mid = q0.lerp(q1, t)
    return [p0, q0, mid], [mid, q1, p2]


def split_cubic(points: list[Point], t: float) -> tuple[list[Point], list[Point]]:
    """Split a cubic at t using De Casteljau's algorithm."""
    p0, p1, p2, p3 = points
    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    q2 = p2.lerp(p3, t)
    r0 = q0.lerp(q1, t)
    r1 = q1.lerp(q2, t)
    mid = r0.lerp(r1, t)
    return [p0, q0, r0, mid], [mid, r1, q2, p3]


def split_at(points: list[Point], ts: list[float]) -> list[list[Point]]:
    """Split a quadratic or cubic curve at every parameter in ts.

    Args:
        points: Control points (3 or 4)
        ts: Sorted parameters in (0, 1) of the original curve

    Returns:
        Pieces in traversal order; consecutive pieces share their end points
    """
    split = split_quadratic if len(points) == 3 else split_cubic
    pieces: list[list[Point]] = []
    remainder = points
    previous = 0.0

    for t in ts:
        # Re-parametrize t onto the remaining piece
        local = (t - previous) / (1.0 - previous)
        left, remainder = split(remainder, local)
        pieces.append(left)
        previous = t

    pieces.append(remainder)
    return pieces


def solve_monotonic(
    f: Callable[[float], float],
    df: Callable[[float], float],
    target: float,
    tolerance: float = 1e-10,
    max_iterations: int = 64,
) -> float:
    """Find t in [0, 1] with f(t) == target for a monotonic f.

    Newton iteration safeguarded by bisection: every step keeps the root
    bracketed, so the result stays inside [0, 1] even where the derivative
    vanishes at an end point.

    Args:
        f: Monotonic function on [0, 1]
        df: Derivative of f
        target: Value to solve for (between f(0) and f(1))
        tolerance: Absolute tolerance on f
        max_iterations: Iteration cap

    Returns:
        Parameter t in [0, 1]
    """
    lo, hi = 0.0, 1.0
    increasing = f(1.0) >= f(0.0)
    t = 0.5

    for _ in range(max_iterations):
        value = f(t) - target
        if abs(value) <= tolerance:
            return t

        if (value < 0.0) == increasing:
            lo = t
        else:
            hi = t

        slope = df(t)
        candidate = t - value / slope if slope != 0.0 else -1.0
        t = candidate if lo < candidate < hi else 0.5 * (lo + hi)

        if hi - lo <= 1e-15:
            break

    return t


def flatten_quadratic(points: list[Point], tolerance: float, _depth: int = 0) -> list[Point]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        points: List of 3 control points [p0, p1, p2]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, both end points included
    """
    p0, p1, p2 = points

    # Curve midpoint (t=0.5) against chord midpoint
    curve_mid_x = 0.25 * p0.x + 0.5 * p1.x + 0.25 * p2.x
    curve_mid_y = 0.25 * p0.y + 0.5 * p1.y + 0.25 * p2.y
    chord_mid_x = (p0.x + p2.x) / 2
    chord_mid_y = (p0.y + p2.y) / 2

    distance = math.hypot(curve_mid_x - chord_mid_x, curve_mid_y - chord_mid_y)

    if distance <= tolerance or _depth >= _MAX_FLATTEN_DEPTH:
        return [p0, p2]

    left_points, right_points = split_quadratic(points, 0.5)

    left = flatten_quadratic(left_points, tolerance, _depth + 1)
    right = flatten_quadratic(right_points, tolerance, _depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_cubic(points: list[Point], tolerance: float, _depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision. The distance of both inner
    control points from the chord bounds the curve's deviation, which catches
    S-shaped curves whose midpoint happens to lie on the chord.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve

    Returns:
        List of points approximating the curve, both end points included
    """
    p0, p1, p2, p3 = points

    dx = p3.x - p0.x
    dy = p3.y - p0.y
    chord = math.hypot(dx, dy)
    if chord > 0.0:
        d1 = abs((p1.x - p0.x) * dy - (p1.y - p0.y) * dx) / chord
        d2 = abs((p2.x - p0.x) * dy - (p2.y - p0.y) * dx) / chord
    else:
        d1 = math.hypot(p1.x - p0.x, p1.y - p0.y)
        d2 = math.hypot(p2.x - p0.x, p2.y - p0.y)

    # 3/4 of the control point distance bounds the curve distance
    if 0.75 * max(d1, d2) <= tolerance or _depth >= _MAX_FLATTEN_DEPTH:
        return [p0, p3]

    left_points, right_points = split_cubic(points, 0.5)

    left = flatten_cubic(left_points, tolerance, _depth + 1)
    right = flatten_cubic(right_points, tolerance, _depth + 1)

    return left[:-1] + right
