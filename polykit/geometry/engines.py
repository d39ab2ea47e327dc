"""Triangulation and boolean-clip backends used by `Poly`.

Backends are plain objects; `Poly` only relies on the two protocols below,
so another implementation can be swapped in by assigning it to
`Poly.fast_engine`, `Poly.quality_engine` or `Poly.clip_engine`.
"""

import logging
from typing import Dict, List, Optional, Protocol, Sequence

import shapely
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from ..errors import TriangulationError
from .earcut import earcut, flatten
from .types import Coord, Ring, RingSet, Triple

logger = logging.getLogger(__name__)

CLIP_OPERATIONS = ("union", "intersection", "difference")


class TriangulationEngine(Protocol):
    def triangulate(self, outline: Ring, holes: Sequence[Ring]) -> List[Triple]:
        """Index triples into `outline + holes[0] + holes[1] + ...`."""
        ...


class ClipEngine(Protocol):
    def clip(
        self,
        op: str,
        subjects: Sequence[RingSet],
        others: Optional[Sequence[RingSet]] = None,
    ) -> List[RingSet]:
        """Boolean `op` of the union of `subjects` with the union of `others`."""
        ...


class EarcutEngine:
    """Fast ear clipping. Cannot use Steiner points."""

    def triangulate(self, outline: Ring, holes: Sequence[Ring]) -> List[Triple]:
        vertices, hole_indices = flatten([outline, *holes])
        ids = earcut(vertices, hole_indices, 2)
        return [(ids[i], ids[i + 1], ids[i + 2]) for i in range(0, len(ids) - 2, 3)]


class ConstrainedDelaunayEngine:
    """Quality triangulation via GEOS constrained Delaunay (shapely >= 2.1).

    Triangle corners are mapped back to input vertices by exact coordinate
    lookup, so the result refers to input points only.
    """

    def triangulate(self, outline: Ring, holes: Sequence[Ring]) -> List[Triple]:
        polygon = Polygon(outline, list(holes))
        if not polygon.is_valid:
            raise TriangulationError(
                f"cannot triangulate invalid polygon: {shapely.is_valid_reason(polygon)}"
            )

        ids: Dict[Coord, int] = {}
        for i, (x, y) in enumerate(p for ring in (outline, *holes) for p in ring):
            ids.setdefault((float(x), float(y)), i)

        tris: List[Triple] = []
        for triangle in shapely.constrained_delaunay_triangles(polygon).geoms:
            corners = list(triangle.exterior.coords)[:3]
            try:
                u, v, w = (ids[(float(x), float(y))] for x, y in corners)
            except KeyError as e:
                raise TriangulationError(f"triangle vertex {e} is not an input point") from e
            tris.append((u, v, w))
        return tris


class ShapelyClipEngine:
    """Boolean operations over polygon-with-holes ring sets via shapely/GEOS.

    Output rings are closed (last coordinate repeats the first).
    """

    def clip(
        self,
        op: str,
        subjects: Sequence[RingSet],
        others: Optional[Sequence[RingSet]] = None,
    ) -> List[RingSet]:
        if op not in CLIP_OPERATIONS:
            raise ValueError(f"Unknown clip operation '{op}', expected one of {CLIP_OPERATIONS}")

        subject = _union_of(subjects)
        if op == "union":
            result = subject
        elif op == "intersection":
            result = subject.intersection(_union_of(others or []))
        else:
            result = subject.difference(_union_of(others or []))

        ring_sets: List[RingSet] = []
        _collect_ring_sets(result, ring_sets)
        logger.debug("%s of %d/%d ring sets gave %d", op, len(subjects), len(others or []), len(ring_sets))
        return ring_sets


def ring_set_to_shapely(ring_set: RingSet) -> Polygon:
    outline, *holes = ring_set
    return Polygon(outline, holes)


def _union_of(ring_sets: Sequence[RingSet]) -> BaseGeometry:
    return unary_union([ring_set_to_shapely(rs) for rs in ring_sets if rs and rs[0]])


def _collect_ring_sets(geom: BaseGeometry, out: List[RingSet]) -> None:
    """Gather polygons of `geom`, ignoring lower-dimensional parts."""
    if geom.is_empty:
        return
    if geom.geom_type == 'Polygon':
        out.append(
            [_ring_coords(geom.exterior)] + [_ring_coords(interior) for interior in geom.interiors]
        )
    elif geom.geom_type in ('MultiPolygon', 'GeometryCollection'):
        for part in geom.geoms:
            _collect_ring_sets(part, out)


def _ring_coords(ring) -> List[List[float]]:
    return [[float(x), float(y)] for x, y, *_ in ring.coords]
