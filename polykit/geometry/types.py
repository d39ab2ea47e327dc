"""Type definitions for polykit geometry."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np

from .rect import Rect
from .vect import Vect

Coord = Tuple[float, float]
Ring = List[Coord]
RingSet = List[Ring]
"""Outer ring followed by hole rings (the interchange representation)."""
Triple = Tuple[int, int, int]
Meta = Dict[str, Any]


@dataclass
class Triangulation:
    """Points plus index triples into them."""
    vs: List[Vect]
    tris: List[Triple]

    def to_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Vertices as an (N, 2) float array and triangles as an (M, 3) int array."""
        vertices = np.array([(v.x, v.y) for v in self.vs], dtype=np.float64).reshape(-1, 2)
        triangles = np.array(self.tris, dtype=np.int64).reshape(-1, 3)
        return vertices, triangles

    @property
    def json(self) -> Dict[str, list]:
        return {
            "vs": [[v.x, v.y] for v in self.vs],
            "tris": [list(t) for t in self.tris],
        }


@dataclass
class AngledRect:
    """A rectangle rotated by `angle` radians about its (x, y) corner."""
    base_rect: Rect
    angle: float = 0.0


@dataclass
class Tangents:
    """Unit edge directions of the outline and of each hole."""
    outer: List[Vect] = field(default_factory=list)
    inner: List[List[Vect]] = field(default_factory=list)
