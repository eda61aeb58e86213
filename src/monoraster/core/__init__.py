"""Core rasterization algorithms for monoraster.

This module contains the core algorithms for:

- Monotonic primitives (lines, quadratic and cubic Bezier pieces)
- Path decomposition (splitting edges at their extrema)
- Stroke outline construction (edge quads, joins and caps)
- Scanline sweep (crossings, winding, antialiased coverage)

Everything except RasterProcessor is stateless and safe to call from worker
processes.

Key functions:
- from_link: Decompose one link into monotonic primitives
- decompose_path: Decompose a whole path for Fill or Stroke
- stroke_outlines: Build the polygons whose union is a stroke
- rasterize: Path and method in, coverage buffer out
- signed_area: Calculate polygon area using shoelace formula

Key classes:
- Curve: Contract every monotonic primitive satisfies
- LineSegment, QuadraticSegment, CubicSegment: The primitives
- ScanlineSweep: Rasterizes primitives into coverage
- RasterProcessor: Parallel batch rasterization
"""

from monoraster.core.bezier_segment import CubicSegment, QuadraticSegment
from monoraster.core.curve import EPSILON, Curve, Intersection
from monoraster.core.decompose import decompose_path, from_link
from monoraster.core.geometry import perpendicular_direction, signed_area, unit_direction
from monoraster.core.line_segment import LineSegment
from monoraster.core.processor import RasterProcessor, rasterize_path_task
from monoraster.core.segment import Segment
from monoraster.core.stroke import flatten_subpath, stroke_outlines
from monoraster.core.sweep import Crossing, Region, ScanlineSweep, rasterize

__all__ = [
    "EPSILON",
    # Primitives
    "CubicSegment",
    "Curve",
    "Intersection",
    "LineSegment",
    "QuadraticSegment",
    "Segment",
    # Decomposition
    "decompose_path",
    "flatten_subpath",
    "from_link",
    "stroke_outlines",
    # Sweep
    "Crossing",
    "Region",
    "ScanlineSweep",
    "rasterize",
    # Processor
    "RasterProcessor",
    "rasterize_path_task",
    # Geometry functions
    "perpendicular_direction",
    "signed_area",
    "unit_direction",
]
