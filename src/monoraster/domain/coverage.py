"""Coverage buffer produced by the scanline sweep."""

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass
class CoverageBuffer:
    """Per-pixel coverage over the rasterized region.

    Pixel (row i, column j) covers the path-space square
    [origin_x + j, origin_x + j + 1) x [origin_y + i, origin_y + i + 1).
    Axis orientation is the path's own; rows are stored in increasing y.

    Attributes:
        origin_x: Path-space x of the left edge of column 0
        origin_y: Path-space y of the top edge of row 0
        values: Row-major float array of shape (height, width), each in [0, 1]
    """

    origin_x: int
    origin_y: int
    values: np.ndarray

    @classmethod
    def empty(cls) -> "CoverageBuffer":
        """Buffer for a path with nothing to rasterize."""
        return cls(origin_x=0, origin_y=0, values=np.zeros((0, 0), dtype=np.float64))

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])

    def is_empty(self) -> bool:
        return self.values.size == 0

    def at(self, x: int, y: int) -> float:
        """Coverage of the pixel whose top-left corner is (x, y) in path space.

        Pixels outside the region were never visited and have coverage 0.0.
        """
        column = x - self.origin_x
        row = y - self.origin_y
        if 0 <= row < self.height and 0 <= column < self.width:
            return float(self.values[row, column])
        return 0.0

    def total(self) -> float:
        """Sum of coverage, i.e. the rasterized area in square pixels."""
        return float(self.values.sum())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "origin_x": self.origin_x,
            "origin_y": self.origin_y,
            "shape": list(self.values.shape),
            "values": self.values.tobytes(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CoverageBuffer":
        """Deserialize from dictionary."""
        values = np.frombuffer(data["values"], dtype=np.float64).reshape(data["shape"])
        return cls(
            origin_x=data["origin_x"],
            origin_y=data["origin_y"],
            values=values.copy(),
        )
