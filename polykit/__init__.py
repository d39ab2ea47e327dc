"""polykit: 2D polygon kernel with triangulation and boolean operations."""

__version__ = "0.1.0"

from .geometry import Mat, Poly, Rect, Triangulation, Vect
from .errors import (
    MatrixNotInvertibleError,
    PolykitError,
    TriangulationError,
    UnsupportedPathCommandError,
)

__all__ = [
    "Vect",
    "Mat",
    "Rect",
    "Poly",
    "Triangulation",
    "PolykitError",
    "MatrixNotInvertibleError",
    "TriangulationError",
    "UnsupportedPathCommandError",
]
