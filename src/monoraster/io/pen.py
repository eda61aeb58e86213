"""fontTools pen that records drawing calls into a Path.

BasePen takes care of TrueType quadratic splines (implied on-curve points,
all-off-curve contours) and super-Bezier cubic runs, so only single curve
segments reach the Path model.
"""

from typing import Any

from fontTools.pens.basePen import BasePen

from monoraster.domain import Path


class PathPen(BasePen):
    """Pen producing a monoraster Path.

    Example:
        pen = PathPen()
        glyph_set["a"].draw(pen)
        path = pen.path
    """

    def __init__(self, glyphSet: Any = None) -> None:  # noqa: N803
        super().__init__(glyphSet)
        self.path = Path()

    def _moveTo(self, pt: tuple[float, float]) -> None:
        self.path.move_to(*pt)

    def _lineTo(self, pt: tuple[float, float]) -> None:
        self.path.line_to(*pt)

    def _qCurveToOne(self, pt1: tuple[float, float], pt2: tuple[float, float]) -> None:
        self.path.quad_to(*pt1, *pt2)

    def _curveToOne(
        self,
        pt1: tuple[float, float],
        pt2: tuple[float, float],
        pt3: tuple[float, float],
    ) -> None:
        self.path.cubic_to(*pt1, *pt2, *pt3)

    def _closePath(self) -> None:
        self.path.close()

    def _endPath(self) -> None:
        # Open subpath: nothing to record, the next MoveTo starts a new one
        pass
