"""Scanline sweep and coverage accumulation.

The sweep turns monotonic primitives into per-pixel coverage:

1. The union bounds of all primitives define the pixel region.
2. Each pixel row is sampled at stratified sub-row positions.
3. An active list, fed from primitives sorted by their top y, holds only the
   primitives whose y range contains the current sample.
4. Each active primitive crosses the sample line at most once (it is
   monotonic); crossings are sorted by x and walked with a winding counter.
5. Spans that are inside under the fill rule add exact horizontal coverage
   to the pixels they overlap, weighted by the sub-row share.

Shared vertices: a primitive crosses a sample line at y only when
min_y <= y < max_y. Where one edge ends and the next continues in the same
vertical direction exactly one of them counts; at the apex of a V both or
neither count and their windings cancel over a zero-width span.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from monoraster.config import RasterConfig, RasterSettings
from monoraster.core.decompose import decompose_path
from monoraster.core.segment import Segment
from monoraster.domain import Bounds, CoverageBuffer, FillRule, Method, Path, Stroke
from monoraster.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Crossing:
    """A signed crossing of a sample line.

    Attributes:
        x: Where the primitive crosses the line
        winding: +1 or -1 depending on the primitive's vertical direction
    """

    x: float
    winding: int


@dataclass(frozen=True, slots=True)
class Region:
    """Integer pixel box enclosing a set of primitives."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0


def union_bounds(segments: Sequence[Segment]) -> Bounds | None:
    """Smallest box enclosing every primitive, or None if there are none."""
    if not segments:
        return None

    bounds = segments[0].bounds
    for segment in segments[1:]:
        bounds = bounds.union(segment.bounds)
    return bounds


class ScanlineSweep:
    """Rasterizes monotonic primitives into a coverage buffer.

    Example:
        sweep = ScanlineSweep(RasterConfig(subsamples=8))
        coverage = sweep.rasterize(decompose_path(path, Fill()))
    """

    def __init__(self, config: RasterConfig | None = None, fill_rule: FillRule | None = None) -> None:
        """Initialize the sweep.

        Args:
            config: Sub-row count, fill rule and size limit
            fill_rule: Overrides config.fill_rule when given
        """
        self.config = config or RasterConfig()
        self.fill_rule = fill_rule or self.config.fill_rule

    @classmethod
    def for_method(cls, method: Method, config: RasterConfig | None = None) -> "ScanlineSweep":
        """Sweep suited to a rasterization method.

        Strokes always use the nonzero rule: their outline polygons overlap and
        must add up rather than cancel.
        """
        config = config or RasterConfig()
        if isinstance(method, Stroke):
            return cls(config, fill_rule=FillRule.NONZERO)
        return cls(config)

    def region(self, segments: Sequence[Segment]) -> Region | None:
        """Pixel region covering the union bounds of the primitives.

        Raises:
            ConfigurationError: If the region exceeds config.max_pixels
        """
        bounds = union_bounds(segments)
        if bounds is None:
            return None

        region = Region(
            x0=math.floor(bounds.min.x),
            y0=math.floor(bounds.min.y),
            x1=math.ceil(bounds.max.x),
            y1=math.ceil(bounds.max.y),
        )
        if region.width * region.height > self.config.max_pixels:
            raise ConfigurationError(
                f"Coverage region {region.width}x{region.height} exceeds "
                f"max_pixels={self.config.max_pixels}"
            )
        return region

    def rasterize(self, segments: Sequence[Segment]) -> CoverageBuffer:
        """Compute coverage for all primitives of one path.

        Args:
            segments: Monotonic primitives, possibly from several subpaths

        Returns:
            Coverage over the union-bounds region (empty if nothing to draw)
        """
        region = self.region(segments)
        if region is None:
            return CoverageBuffer.empty()
        return self._sweep(segments, region, region.y0, region.y1)

    def rasterize_rows(self, segments: Sequence[Segment], start_row: int, end_row: int) -> CoverageBuffer:
        """Compute coverage for the pixel rows [start_row, end_row) only.

        Rows only read the primitives and write their own part of the buffer,
        so disjoint row bands can be computed independently and stacked.

        Args:
            segments: Monotonic primitives of the whole path
            start_row: First path-space pixel row
            end_row: One past the last pixel row

        Returns:
            Coverage band with the full region width, clipped to the region
        """
        region = self.region(segments)
        if region is None:
            return CoverageBuffer.empty()

        start_row = max(start_row, region.y0)
        end_row = max(start_row, min(end_row, region.y1))
        return self._sweep(segments, region, start_row, end_row)

    def crossings(self, segments: Sequence[Segment], y: float) -> list[Crossing]:
        """Sorted crossings of the horizontal line at y.

        Uses the same half-open rule as the sweep but tests every primitive,
        so it is meant for inspection rather than bulk rasterization.
        """
        result = []
        for segment in segments:
            if segment.bounds.min.y <= y < segment.bounds.max.y:
                hit = segment.sample_y(y)
                if hit is not None:
                    result.append(Crossing(x=hit.axis, winding=segment.winding))
        result.sort(key=lambda c: c.x)
        return result

    def _sweep(self, segments: Sequence[Segment], region: Region, start_row: int, end_row: int) -> CoverageBuffer:
        values = np.zeros((end_row - start_row, region.width), dtype=np.float64)

        ordered = sorted(segments, key=lambda s: s.bounds.min.y)
        pending = 0
        active: list[Segment] = []

        samples = self.config.subsamples
        weight = 1.0 / samples

        for row in range(start_row, end_row):
            row_values = values[row - start_row]

            for k in range(samples):
                y = row + (k + 0.5) * weight

                while pending < len(ordered) and ordered[pending].bounds.min.y <= y:
                    active.append(ordered[pending])
                    pending += 1

                active = [s for s in active if s.bounds.max.y > y]
                if not active:
                    continue

                crossings: list[tuple[float, int]] = []
                for segment in active:
                    hit = segment.sample_y(y)
                    if hit is not None:
                        crossings.append((hit.axis, segment.winding))

                if len(crossings) > 1:
                    crossings.sort(key=lambda c: c[0])
                    self._accumulate_row(row_values, crossings, region.x0, weight)

        np.clip(values, 0.0, 1.0, out=values)
        return CoverageBuffer(origin_x=region.x0, origin_y=start_row, values=values)

    def _accumulate_row(
        self,
        row_values: np.ndarray,
        crossings: list[tuple[float, int]],
        origin_x: int,
        weight: float,
    ) -> None:
        winding = 0
        for i in range(len(crossings) - 1):
            winding += crossings[i][1]
            if self.fill_rule.is_inside(winding):
                _accumulate_span(
                    row_values,
                    crossings[i][0] - origin_x,
                    crossings[i + 1][0] - origin_x,
                    weight,
                )


def _accumulate_span(row_values: np.ndarray, left: float, right: float, weight: float) -> None:
    """Add weight times the horizontal overlap of [left, right) to each pixel."""
    width = row_values.shape[0]
    left = max(left, 0.0)
    right = min(right, float(width))
    if right <= left:
        return

    first = int(math.floor(left))
    last = int(math.floor(right))

    if first == last:
        row_values[first] += (right - left) * weight
        return

    row_values[first] += (first + 1 - left) * weight
    if last > first + 1:
        row_values[first + 1 : last] += weight
    if last < width and right > last:
        row_values[last] += (right - last) * weight


def rasterize(path: Path, method: Method, settings: RasterSettings | None = None) -> CoverageBuffer:
    """Rasterize a path into coverage.

    Args:
        path: Path in pixel coordinates
        method: Fill() or Stroke(thickness)
        settings: Raster and stroke settings (defaults when None)

    Returns:
        Coverage buffer over the path's union-bounds region
    """
    settings = settings or RasterSettings()
    segments = decompose_path(path, method, settings.raster, settings.stroke)

    coverage = ScanlineSweep.for_method(method, settings.raster).rasterize(segments)

    logger.debug(
        "Path rasterized: segments=%d size=%dx%d coverage=%.3f",
        len(segments),
        coverage.width,
        coverage.height,
        coverage.total(),
    )
    return coverage
