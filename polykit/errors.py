"""Exception types for polykit."""


class PolykitError(Exception):
    """Base error for polykit."""


class MatrixNotInvertibleError(PolykitError, ValueError):
    """Raised when inverting a singular, non-identity matrix."""


class TriangulationError(PolykitError):
    """Raised by a triangulation backend that cannot handle its input."""


class UnsupportedPathCommandError(PolykitError, ValueError):
    """Raised when an SVG path uses a command other than M, L, H, V or Z."""
