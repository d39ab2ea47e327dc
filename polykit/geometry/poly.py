"""Polygon with holes.

Mutating methods return `self`. A polygon owns at most one cached
triangulation, refreshed or dropped inside every mutating method:

- coordinate edits that keep every point in place in the ring lists
  (translate, scale, precision, round) rebuild the triangles from the
  cached index triples;
- anything that can change ring membership or order (apply_matrix,
  reverse, remove_holes, clean_final_reps) drops the cache.
"""

import logging
import math
from dataclasses import dataclass
from itertools import chain
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple

from .engines import (
    ClipEngine,
    ConstrainedDelaunayEngine,
    EarcutEngine,
    ShapelyClipEngine,
    TriangulationEngine,
)
from .mat import Mat
from .polygon import polygon_signed_area
from .rect import Rect
from .types import AngledRect, Meta, RingSet, Tangents, Triangulation, Triple
from .vect import Vect

logger = logging.getLogger(__name__)

DEFAULT_CLEAN_PRECISION = 4


@dataclass
class _TriangulationCache:
    ids: List[Triple]
    tris: List["Poly"]


@dataclass
class Poly:
    """An outline plus zero or more holes, each a list of `Vect`.

    Holes are assumed to lie inside the outline; nothing is validated.
    """
    outline: List[Vect]
    holes: List[List[Vect]]
    meta: Meta

    fast_engine: ClassVar[TriangulationEngine] = EarcutEngine()
    quality_engine: ClassVar[TriangulationEngine] = ConstrainedDelaunayEngine()
    clip_engine: ClassVar[ClipEngine] = ShapelyClipEngine()

    def __init__(
        self,
        outline: Optional[List[Vect]] = None,
        holes: Optional[List[List[Vect]]] = None,
        meta: Optional[Meta] = None,
    ):
        self.outline = outline if outline is not None else []
        self.holes = holes if holes is not None else []
        self.meta = meta if meta is not None else {}
        self._cache: Optional[_TriangulationCache] = None

    # ----- derived -----

    @property
    def all_points(self) -> List[Vect]:
        """Outline followed by every hole."""
        return list(chain(self.outline, *self.holes))

    @property
    def area(self) -> float:
        """Outline area minus hole areas."""
        return abs(polygon_signed_area(self.outline)) - sum(
            abs(polygon_signed_area(hole)) for hole in self.holes
        )

    @property
    def center(self) -> Vect:
        return Vect.average(self.all_points)

    @property
    def coordinates(self) -> List[List[List[float]]]:
        """Outline then holes as `[x, y]` pairs."""
        return [[[p.x, p.y] for p in ring] for ring in [self.outline, *self.holes]]

    @property
    def geo_json(self) -> Dict[str, Any]:
        """Interchange representation; `meta` only when non-empty."""
        result: Dict[str, Any] = {"type": "Polygon", "coordinates": self.coordinates}
        if self.meta:
            result["meta"] = dict(self.meta)
        return result

    @property
    def line_segs(self) -> List[Tuple[Vect, Vect]]:
        """Consecutive point pairs of the outline and of each hole, wrapping."""
        return [
            (p.clone(), ring[(i + 1) % len(ring)].clone())
            for ring in [self.outline, *self.holes]
            for i, p in enumerate(ring)
        ]

    @property
    def rect(self) -> Rect:
        return Rect.from_points(*self.outline)

    @property
    def svg_path(self) -> str:
        if not self.outline:
            return ""
        return " ".join(
            "M" + " ".join(str(p) for p in ring) + "Z"
            for ring in [self.outline, *self.holes]
        )

    @property
    def tangents(self) -> Tangents:
        """Unit direction of every edge, outline and holes separately."""
        outer, *inner = [_ring_tangents(ring) for ring in [self.outline, *self.holes]]
        return Tangents(outer=outer, inner=inner)

    @property
    def triangulation(self) -> List["Poly"]:
        """Cached triangles, computed by `fast_triangulate` when missing."""
        if self._cache is None:
            self.fast_triangulate()
        return self._cache.tris

    # ----- mutation -----

    def add(self, delta) -> "Poly":
        return self.translate(delta.x, delta.y)

    def apply_matrix(self, m: Mat, sans_translate: bool = False) -> "Poly":
        if m.is_identity:
            return self
        transform = m.transform_sans_translate if sans_translate else m.transform_point
        for p in self.all_points:
            transform(p)
        self._clear_cache(clear_all=True)
        return self

    def clean_final_reps(self) -> "Poly":
        """Drop trailing points of each ring equal to its first point.

        Boolean operations produce closed rings; triangulation wants them open.
        """
        changed = False
        for ring in [self.outline, *self.holes]:
            while len(ring) > 1 and ring[-1].equals(ring[0]):
                ring.pop()
                changed = True
        if changed:
            self._clear_cache(clear_all=True)
        return self

    def fix_orientation(self) -> "Poly":
        return self.reverse() if self.anticlockwise() else self

    def fix_orientation_convex(self) -> "Poly":
        return self.reverse() if self.anticlockwise_convex() else self

    def precision(self, dp: int) -> "Poly":
        """Snap every point to `dp` decimal places."""
        for p in self.all_points:
            p.precision(dp)
        self._clear_cache()
        return self

    def remove_holes(self) -> "Poly":
        self.holes = []
        self._clear_cache(clear_all=True)
        return self

    def reverse(self) -> "Poly":
        self.outline.reverse()
        for hole in self.holes:
            hole.reverse()
        self._clear_cache(clear_all=True)
        return self

    def round(self) -> "Poly":
        for p in self.all_points:
            p.round()
        self._clear_cache()
        return self

    def scale(self, scalar: float) -> "Poly":
        for p in self.all_points:
            p.scale(scalar)
        self._clear_cache()
        return self

    def translate(self, dx: float, dy: float) -> "Poly":
        for p in self.all_points:
            p.translate(dx, dy)
        self._clear_cache()
        return self

    # ----- queries -----

    def anticlockwise(self) -> bool:
        """Sum of (x[i+1] - x[i]) * (y[i+1] + y[i]) over the closed outline is positive.

        Anticlockwise w.r.t. canvas coords (x right, y down). Three points
        are not enough in general since they may form an exterior triangle.
        """
        if not self.outline:
            return False
        ps = self.outline + [self.outline[0]]
        total = sum(
            (ps[i + 1].x - p.x) * (ps[i + 1].y + p.y)
            for i, p in enumerate(ps[:-1])
        )
        return total > 0

    def anticlockwise_convex(self) -> bool:
        """Only valid for convex polygons: uses the first three outline points."""
        p, q, r = self.outline[:3]
        return (
            (q.x - p.x) * (q.y + p.y)
            + (r.x - q.x) * (r.y + q.y)
            + (p.x - r.x) * (p.y + r.y)
        ) > 0

    def clone(self) -> "Poly":
        outline = [p.clone() for p in self.outline]
        holes = [[p.clone() for p in hole] for hole in self.holes]
        return Poly(outline, holes, dict(self.meta))

    def clean_clone(
        self,
        mat: Optional[Mat] = None,
        extra_meta: Optional[Meta] = None,
        precision: int = DEFAULT_CLEAN_PRECISION,
    ) -> "Poly":
        """Clone, optionally transform, then fix orientation and snap precision."""
        cloned = self.clone()
        if mat is not None:
            cloned.apply_matrix(mat)
        cloned.fix_orientation().precision(precision)
        cloned.meta.update(extra_meta or {})
        return cloned

    def contains(self, point) -> bool:
        """Boundary points count as contained."""
        if not self.rect.contains(point):
            return False
        return any(
            Poly.point_in_triangle(point, *t.outline[:3])
            for t in self.triangulation
        )

    # ----- triangulation -----

    def fast_triangulate(self) -> Triangulation:
        """Ear clipping: fast but less uniform, no Steiner points."""
        tris = self.fast_engine.triangulate(*self._rings())
        self._cache_triples(tris)
        return Triangulation(vs=self.all_points, tris=tris)

    def quality_triangulate(self) -> Triangulation:
        """Constrained Delaunay triangulation, falling back to `fast_triangulate`.

        Fails e.g. for a square with two holes meeting at a point; failures
        are logged and never raised.
        """
        try:
            tris = self.quality_engine.triangulate(*self._rings())
        except Exception as e:
            logger.warning("Quality triangulation failed: falling back to ear clipping: %s", e)
            return self.fast_triangulate()
        self._cache_triples(tris)
        return Triangulation(vs=self.all_points, tris=tris)

    def triangle_ids_to_polys(self, tri_ids: Sequence[Triple]) -> List["Poly"]:
        """Triangles share their `Vect`s with this polygon."""
        ps = self.all_points
        return [Poly([ps[u], ps[v], ps[w]]) for u, v, w in tri_ids]

    def _cache_triples(self, tri_ids: List[Triple]) -> None:
        self._cache = _TriangulationCache(ids=tri_ids, tris=self.triangle_ids_to_polys(tri_ids))

    def _clear_cache(self, clear_all: bool = False) -> None:
        if clear_all:
            self._cache = None
        elif self._cache is not None and self._cache.ids:
            self._cache.tris = self.triangle_ids_to_polys(self._cache.ids)

    def _rings(self) -> Tuple[List[Tuple[float, float]], List[List[Tuple[float, float]]]]:
        outline = [(p.x, p.y) for p in self.outline]
        holes = [[(p.x, p.y) for p in hole] for hole in self.holes]
        return outline, holes

    # ----- construction -----

    @staticmethod
    def circle(center, radius: float, segments: int) -> "Poly":
        """Regular polygon with `segments` vertices on the circle."""
        step = 2 * math.pi / segments
        return Poly([
            Vect(center.x + radius * math.cos(i * step), center.y + radius * math.sin(i * step))
            for i in range(segments)
        ])

    @staticmethod
    def from_geo_json(value: Any) -> "Poly":
        """Accepts a list of rings or `{"coordinates": rings, "meta": ...}`."""
        if isinstance(value, dict):
            rings = value["coordinates"]
            meta = dict(value.get("meta") or {})
        else:
            rings = value
            meta = {}
        if not rings:
            return Poly(meta=meta)
        return Poly(
            [Vect(x, y) for x, y in rings[0]],
            [[Vect(x, y) for x, y in hole] for hole in rings[1:]],
            meta,
        )

    @staticmethod
    def from_rect(rect: Any) -> "Poly":
        rect = rect if isinstance(rect, Rect) else Rect.from_json(rect)
        return Poly(rect.points)

    @staticmethod
    def from_angled_rect(angled: Any) -> "Poly":
        """Rectangle rotated by `angle` about its (x, y) corner."""
        if isinstance(angled, dict):
            angled = AngledRect(Rect.from_json(angled["base_rect"]), angled.get("angle", 0.0))
        base = angled.base_rect
        poly = Poly.from_rect(Rect(0, 0, base.width, base.height))
        poly.apply_matrix(Mat().set_rotation(angled.angle))
        poly.translate(base.x, base.y)
        return poly

    # ----- predicates -----

    @staticmethod
    def point_in_triangle(pt, v1, v2, v3) -> bool:
        """True when inside or on an edge."""
        d1 = Poly.sign(pt, v1, v2)
        d2 = Poly.sign(pt, v2, v3)
        d3 = Poly.sign(pt, v3, v1)
        has_neg = d1 < 0 or d2 < 0 or d3 < 0
        has_pos = d1 > 0 or d2 > 0 or d3 > 0
        return not (has_neg and has_pos)

    @staticmethod
    def sign(p1, p2, p3) -> float:
        return (p1.x - p3.x) * (p2.y - p3.y) - (p2.x - p3.x) * (p1.y - p3.y)

    # ----- boolean operations -----

    @staticmethod
    def cut_out(cutting_polys: Sequence["Poly"], polys: Sequence["Poly"]) -> List["Poly"]:
        """Cut `cutting_polys` from `polys`."""
        if not cutting_polys:
            return [poly.clone() for poly in polys]
        return _from_ring_sets(Poly.clip_engine.clip(
            "difference",
            [poly.coordinates for poly in polys],
            [poly.coordinates for poly in cutting_polys],
        ))

    @staticmethod
    def cut_out_safely(cutting_polys: Sequence["Poly"], polys: Sequence["Poly"]) -> List["Poly"]:
        """Cut `cutting_polys` from `polys`, one unioned cutter at a time.

        Clipping many polygons in one call breaks on adjacent or degenerate
        input (stack overflows, malformed rings). Union both sides first,
        then subtract each unioned cutter in turn.
        """
        if not cutting_polys:
            return [poly.clone() for poly in polys]
        result = Poly.union(polys)
        for cutter in Poly.union(cutting_polys):
            result = Poly.cut_out([cutter], result)
        return result

    @staticmethod
    def intersect(polys: Sequence["Poly"], others: Sequence["Poly"]) -> List["Poly"]:
        """Intersect union of `polys` with union of `others`."""
        return _from_ring_sets(Poly.clip_engine.clip(
            "intersection",
            [poly.coordinates for poly in polys],
            [poly.coordinates for poly in others],
        ))

    @staticmethod
    def union(polys: Sequence["Poly"]) -> List["Poly"]:
        return _from_ring_sets(Poly.clip_engine.clip(
            "union", [poly.coordinates for poly in polys],
        ))

    @staticmethod
    def union_safe(polys: Sequence["Poly"]) -> List["Poly"]:
        """Union one polygon at a time."""
        ring_sets: List[RingSet] = []
        for poly in polys:
            ring_sets = Poly.clip_engine.clip("union", ring_sets + [poly.coordinates])
        return _from_ring_sets(ring_sets)


def _from_ring_sets(ring_sets: Sequence[RingSet]) -> List[Poly]:
    return [Poly.from_geo_json(rs).clean_final_reps() for rs in ring_sets]


def _ring_tangents(ring: List[Vect]) -> List[Vect]:
    if not ring:
        return []
    closed = ring + [ring[0]]
    return [closed[i].clone().sub(closed[i - 1]).normalize() for i in range(1, len(closed))]
