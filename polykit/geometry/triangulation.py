"""Helpers combining per-polygon triangulations into one mesh."""

from typing import List, Sequence, Tuple

from .poly import Poly
from .types import Triangulation, Triple
from .vect import Vect


def join_triangulations(triangulations: Sequence[Triangulation]) -> Tuple[Triangulation, List[int]]:
    """Join disjoint triangulations.

    Returns:
        The joined triangulation, and for each input the index of its first triangle
    """
    vs: List[Vect] = []
    tris: List[Triple] = []
    t_offsets: List[int] = []
    v_offset = 0

    for decomp in triangulations:
        vs.extend(decomp.vs)
        t_offsets.append(len(tris))
        tris.extend((u + v_offset, v + v_offset, w + v_offset) for u, v, w in decomp.tris)
        v_offset += len(decomp.vs)

    return Triangulation(vs=vs, tris=tris), t_offsets


def polys_to_triangulation(polys: Sequence[Poly], quality: bool = True) -> Triangulation:
    decomps = [
        poly.quality_triangulate() if quality else poly.fast_triangulate()
        for poly in polys
    ]
    joined, _ = join_triangulations(decomps)
    return joined


def triangulation_to_polys(decomp: Triangulation) -> List[Poly]:
    return [Poly([decomp.vs[u], decomp.vs[v], decomp.vs[w]]) for u, v, w in decomp.tris]
