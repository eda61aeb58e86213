"""Rasterization methods and the rules that go with them.

- Fill: the area enclosed by the path; subpaths are closed automatically
- Stroke: the area within thickness / 2 of the path; subpaths stay open
- FillRule: how signed crossings decide what is inside
- LineJoin / LineCap: stroke outline shapes at vertices and open ends
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FillRule(str, Enum):
    """Winding rule applied to scanline crossings."""

    NONZERO = "nonzero"
    EVEN_ODD = "evenodd"

    def is_inside(self, winding: int) -> bool:
        if self is FillRule.NONZERO:
            return winding != 0
        return winding % 2 != 0


class LineJoin(str, Enum):
    """Shape drawn where two stroked edges meet."""

    MITER = "miter"
    BEVEL = "bevel"
    ROUND = "round"


class LineCap(str, Enum):
    """Shape drawn at the open ends of a stroked subpath."""

    BUTT = "butt"
    SQUARE = "square"
    ROUND = "round"


@dataclass(frozen=True, slots=True)
class Fill:
    """Rasterize everything inside the path.

    Every subpath is closed by assuming an edge from its last point back to
    its first point.
    """

    def to_dict(self) -> dict[str, Any]:
        return {"method": "fill"}


@dataclass(frozen=True, slots=True)
class Stroke:
    """Rasterize the area adjacent to the path within the given thickness.

    Subpaths are left open; no edge between the last and first point is assumed.

    Attributes:
        thickness: Full stroke width in path units (must be positive)
    """

    thickness: float

    def __post_init__(self) -> None:
        if not self.thickness > 0:
            raise ValueError(f"Stroke thickness must be positive, got {self.thickness}")

    def to_dict(self) -> dict[str, Any]:
        return {"method": "stroke", "thickness": self.thickness}


Method = Fill | Stroke


def method_from_dict(data: dict[str, Any]) -> Method:
    """Deserialize a method produced by Fill.to_dict() or Stroke.to_dict()."""
    if data["method"] == "stroke":
        return Stroke(thickness=data["thickness"])
    return Fill()
