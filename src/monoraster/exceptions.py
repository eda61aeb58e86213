"""Exception hierarchy for Monoraster."""


class MonorasterError(Exception):
    """Base exception for all Monoraster errors."""

    pass


class PathError(MonorasterError):
    """Errors related to path construction or deserialization."""

    pass


class PathConstructionError(PathError):
    """A path command sequence violates the path model contract."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        self.reason = reason
        super().__init__(f"Invalid '{command}' command: {reason}")


class ConfigurationError(MonorasterError):
    """Rasterization parameters rejected before any buffer is allocated."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FontError(MonorasterError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")


class OutputError(MonorasterError):
    """Errors related to writing rasterized output."""

    pass


class CoverageSaveError(OutputError):
    """Error saving a coverage buffer."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save coverage '{path}': {reason}")
