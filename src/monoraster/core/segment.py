"""The closed set of rasterizable primitive kinds.

Every variant implements the full Curve contract, so the sweep handles a
Segment without knowing which kind it holds. Adding a kind means adding a
variant here, implementing the Curve operations for it and teaching the
decomposer when to emit it.
"""

from monoraster.core.bezier_segment import CubicSegment, QuadraticSegment
from monoraster.core.line_segment import LineSegment

Segment = LineSegment | QuadraticSegment | CubicSegment
