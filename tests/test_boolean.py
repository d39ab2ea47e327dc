"""Tests for union, intersection and cutting of polygons."""

import pytest
from polykit.geometry import Poly, ShapelyClipEngine


def total_area(polys) -> float:
    return sum(poly.area for poly in polys)


def assert_open_rings(polys):
    """Clip results never repeat their first point at the end."""
    for poly in polys:
        for ring in [poly.outline, *poly.holes]:
            assert not ring[-1].equals(ring[0])


def test_union_overlapping(make_square):
    result = Poly.union([make_square(0, 0, 10), make_square(5, 5, 10)])
    assert len(result) == 1
    assert result[0].area == pytest.approx(175)
    assert_open_rings(result)


def test_union_disjoint(make_square):
    result = Poly.union([make_square(0, 0, 10), make_square(20, 0, 4)])
    assert len(result) == 2
    assert sorted(poly.area for poly in result) == pytest.approx([16, 100])


def test_union_empty():
    assert Poly.union([]) == []


def test_union_safe_matches_union(make_square):
    polys = [make_square(0, 0, 10), make_square(5, 5, 10), make_square(30, 30, 1)]
    safe = Poly.union_safe(polys)
    assert len(safe) == 2
    assert total_area(safe) == pytest.approx(total_area(Poly.union(polys)))
    assert_open_rings(safe)


def test_intersect(make_square):
    result = Poly.intersect([make_square(0, 0, 10)], [make_square(5, 5, 10)])
    assert len(result) == 1
    assert result[0].area == pytest.approx(25)


def test_intersect_unions_each_side(make_square):
    """Each side is unioned before intersecting."""
    result = Poly.intersect(
        [make_square(0, 0, 10), make_square(0, 0, 10)],
        [make_square(5, 0, 10), make_square(-5, 0, 10)],
    )
    assert total_area(result) == pytest.approx(100)


def test_intersect_nothing(make_square):
    assert Poly.intersect([make_square(0, 0, 10)], []) == []
    assert Poly.intersect([make_square(0, 0, 10)], [make_square(50, 50, 1)]) == []


def test_cut_out_makes_hole(make_square):
    result = Poly.cut_out([make_square(2, 2, 2)], [make_square(0, 0, 10)])
    assert len(result) == 1
    assert len(result[0].holes) == 1
    assert result[0].area == pytest.approx(96)
    assert_open_rings(result)
    assert triangle_area(result[0]) == pytest.approx(96)


def test_cut_out_without_cutters_clones(make_square):
    original = make_square(0, 0, 10)
    original.meta["id"] = "a"
    result = Poly.cut_out([], [original])
    assert result == [original]
    assert result[0] is not original
    assert result[0].outline[0] is not original.outline[0]


def test_cut_out_splits(make_square):
    """A bar across the square leaves two pieces."""
    bar = Poly.from_geo_json([[[4, -1], [6, -1], [6, 11], [4, 11]]])
    result = Poly.cut_out([bar], [make_square(0, 0, 10)])
    assert len(result) == 2
    assert total_area(result) == pytest.approx(80)


def test_cut_out_safely_recovers_area(make_square):
    """Cutting then adding the cutters back gives the original region."""
    target = make_square(0, 0, 10)
    cutters = [make_square(2, 2, 2), make_square(3, 3, 3), make_square(7, 7, 1)]

    result = Poly.cut_out_safely(cutters, [target])
    assert total_area(result) == pytest.approx(87)
    assert_open_rings(result)

    restored = Poly.union(result + cutters)
    assert len(restored) == 1
    assert restored[0].area == pytest.approx(100)


def test_cut_out_safely_matches_cut_out(make_square):
    targets = [make_square(0, 0, 10), make_square(10, 0, 10)]
    cutters = [make_square(8, 2, 4), make_square(1, 1, 1)]
    safe = Poly.cut_out_safely(cutters, targets)
    plain = Poly.cut_out(cutters, targets)
    assert total_area(safe) == pytest.approx(total_area(plain))
    assert total_area(safe) == pytest.approx(200 - 16 - 1)


def test_cut_out_safely_without_cutters(make_square):
    original = make_square(0, 0, 10)
    assert Poly.cut_out_safely([], [original]) == [original]


def test_clip_engine_rejects_unknown_operation(make_square):
    with pytest.raises(ValueError):
        ShapelyClipEngine().clip("xor", [make_square(0, 0, 1).coordinates])


def test_clip_engine_closes_rings(make_square):
    ring_sets = ShapelyClipEngine().clip("union", [make_square(0, 0, 1).coordinates])
    assert len(ring_sets) == 1
    assert ring_sets[0][0][0] == ring_sets[0][0][-1]


def triangle_area(poly: Poly) -> float:
    return sum(t.area for t in poly.triangulation)
