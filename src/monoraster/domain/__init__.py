"""Domain models for monoraster.

This module contains the value types that flow through rasterization: points,
bounds, path commands, rasterization methods and coverage buffers. All models
are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of fonttools implementation details

Key classes:
- Point: A 2D point or vector
- Bounds: Axis-aligned bounding box
- Path: Ordered MoveTo/LineTo/QuadTo/CubicTo/Close commands
- Fill, Stroke: Rasterization methods
- CoverageBuffer: Per-pixel coverage output
"""

from monoraster.domain.coverage import CoverageBuffer
from monoraster.domain.geometry import Bounds, Point
from monoraster.domain.method import (
    Fill,
    FillRule,
    LineCap,
    LineJoin,
    Method,
    Stroke,
    method_from_dict,
)
from monoraster.domain.path import (
    Close,
    Command,
    CubicTo,
    LineTo,
    Link,
    MoveTo,
    Path,
    QuadTo,
    Subpath,
)

__all__: list[str] = [
    # Enums
    "FillRule",
    "LineCap",
    "LineJoin",
    # Geometry
    "Bounds",
    "Point",
    # Path model
    "Close",
    "Command",
    "CubicTo",
    "LineTo",
    "Link",
    "MoveTo",
    "Path",
    "QuadTo",
    "Subpath",
    # Methods
    "Fill",
    "Method",
    "Stroke",
    "method_from_dict",
    # Output
    "CoverageBuffer",
]
