"""Path model: ordered drawing commands grouped into subpaths.

A path is a sequence of commands where every subpath begins with a MoveTo.
Consecutive command pairs ("links") are the unit of input to decomposition.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from monoraster.domain.geometry import Bounds, Point
from monoraster.exceptions import PathConstructionError


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at point."""

    point: Point


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight edge from the current point to point."""

    point: Point


@dataclass(frozen=True, slots=True)
class QuadTo:
    """Quadratic Bezier edge from the current point to point."""

    control: Point
    point: Point


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier edge from the current point to point."""

    control1: Point
    control2: Point
    point: Point


@dataclass(frozen=True, slots=True)
class Close:
    """Close the current subpath."""


Command = MoveTo | LineTo | QuadTo | CubicTo | Close
DrawCommand = LineTo | QuadTo | CubicTo

Link = tuple[Command, Command]

_COMMAND_TYPES: dict[str, type] = {
    "move": MoveTo,
    "line": LineTo,
    "quad": QuadTo,
    "cubic": CubicTo,
    "close": Close,
}


def command_points(command: Command) -> list[Point]:
    """Return every point a command carries, control points included."""
    if isinstance(command, MoveTo | LineTo):
        return [command.point]
    if isinstance(command, QuadTo):
        return [command.control, command.point]
    if isinstance(command, CubicTo):
        return [command.control1, command.control2, command.point]
    return []


def command_to_dict(command: Command) -> dict[str, Any]:
    """Serialize a single command for IPC."""
    name = next(key for key, value in _COMMAND_TYPES.items() if isinstance(command, value))
    return {"type": name, "points": [p.to_dict() for p in command_points(command)]}


def command_from_dict(data: dict[str, Any]) -> Command:
    """Deserialize a single command.

    Raises:
        PathConstructionError: If the type is unknown or the point count is wrong
    """
    name = data.get("type", "")
    command_type = _COMMAND_TYPES.get(name)
    if command_type is None:
        raise PathConstructionError(str(name), "unknown command type")

    points = [Point.from_dict(p) for p in data.get("points", [])]
    expected = {"move": 1, "line": 1, "quad": 2, "cubic": 3, "close": 0}[name]
    if len(points) != expected:
        raise PathConstructionError(name, f"expected {expected} points, got {len(points)}")

    return command_type(*points)


@dataclass
class Subpath:
    """A run of commands starting with a MoveTo.

    Attributes:
        commands: MoveTo followed by drawing commands (never a Close)
        closed: True if the subpath was explicitly closed
    """

    commands: list[Command]
    closed: bool = False

    @property
    def start(self) -> Point:
        return self.commands[0].point  # type: ignore[union-attr]

    @property
    def end(self) -> Point:
        return self.commands[-1].point  # type: ignore[union-attr]

    def links(self) -> Iterator[Link]:
        """Yield consecutive (previous, current) command pairs."""
        for i in range(1, len(self.commands)):
            yield self.commands[i - 1], self.commands[i]


@dataclass
class Path:
    """An ordered sequence of path commands, possibly spanning several subpaths.

    Builder methods return the path itself so calls can be chained:

        path = Path().move_to(0, 0).line_to(10, 0).line_to(10, 10).close()

    A drawing command issued after close() without an explicit move_to()
    starts a new subpath at the closed subpath's first point.

    Attributes:
        commands: Commands in drawing order
    """

    commands: list[Command] = field(default_factory=list)
    _subpath_start: Point | None = field(default=None, repr=False, init=False)
    _open: bool = field(default=False, repr=False, init=False)

    def __post_init__(self) -> None:
        commands = self.commands
        self.commands = []
        for command in commands:
            self.append(command)

    def append(self, command: Command) -> "Path":
        """Append a command, enforcing the subpath contract.

        Args:
            command: Command to append

        Returns:
            This path

        Raises:
            PathConstructionError: If a drawing command or Close comes before
                any MoveTo
        """
        if isinstance(command, MoveTo):
            self._subpath_start = command.point
            self._open = True
        elif isinstance(command, Close):
            if self._subpath_start is None:
                raise PathConstructionError("close", "no current subpath")
            self._open = False
        else:
            if self._subpath_start is None:
                raise PathConstructionError(
                    type(command).__name__, "drawing command before any MoveTo"
                )
            if not self._open:
                self.commands.append(MoveTo(self._subpath_start))
                self._open = True

        self.commands.append(command)
        return self

    def move_to(self, x: float, y: float) -> "Path":
        return self.append(MoveTo(Point(x, y)))

    def line_to(self, x: float, y: float) -> "Path":
        return self.append(LineTo(Point(x, y)))

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> "Path":
        return self.append(QuadTo(Point(cx, cy), Point(x, y)))

    def cubic_to(
        self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float
    ) -> "Path":
        return self.append(CubicTo(Point(c1x, c1y), Point(c2x, c2y), Point(x, y)))

    def close(self) -> "Path":
        return self.append(Close())

    def is_empty(self) -> bool:
        return not self.commands

    def subpaths(self) -> list[Subpath]:
        """Split the path into subpaths.

        Returns:
            Subpaths in drawing order; each begins with its MoveTo
        """
        result: list[Subpath] = []
        current: Subpath | None = None

        for command in self.commands:
            if isinstance(command, MoveTo):
                current = Subpath(commands=[command])
                result.append(current)
            elif isinstance(command, Close):
                if current is not None:
                    current.closed = True
            elif current is not None:
                current.commands.append(command)

        return result

    def links(self) -> Iterator[Link]:
        """Yield consecutive (previous, current) command pairs.

        Close commands are skipped; the edge back to the subpath start is not
        a link and is synthesized by the decomposer when the method needs it.
        """
        previous: Command | None = None
        for command in self.commands:
            if isinstance(command, Close):
                continue
            if previous is not None:
                yield previous, command
            previous = command

    def bounds(self) -> Bounds | None:
        """Bounding box of all points, control points included.

        Returns:
            Bounds, or None for an empty path
        """
        points = [p for command in self.commands for p in command_points(command)]
        if not points:
            return None
        return Bounds.from_points(*points)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"commands": [command_to_dict(c) for c in self.commands]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Path":
        """Deserialize from dictionary.

        Raises:
            PathConstructionError: If the command data is malformed
        """
        return cls(commands=[command_from_dict(c) for c in data["commands"]])
