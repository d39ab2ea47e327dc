"""Geometry kernel for polykit."""

from .engines import (
    ClipEngine,
    ConstrainedDelaunayEngine,
    EarcutEngine,
    ShapelyClipEngine,
    TriangulationEngine,
)
from .mat import Mat
from .poly import Poly
from .polygon import polygon_signed_area, remove_path_reps
from .rect import Rect
from .triangulation import join_triangulations, polys_to_triangulation, triangulation_to_polys
from .types import AngledRect, Tangents, Triangulation
from .vect import Vect

__all__ = [
    "Vect",
    "Mat",
    "Rect",
    "Poly",
    "AngledRect",
    "Tangents",
    "Triangulation",
    "TriangulationEngine",
    "ClipEngine",
    "EarcutEngine",
    "ConstrainedDelaunayEngine",
    "ShapelyClipEngine",
    "polygon_signed_area",
    "remove_path_reps",
    "join_triangulations",
    "polys_to_triangulation",
    "triangulation_to_polys",
]
