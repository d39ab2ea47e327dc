"""Tests for the polykit command line."""

import json

import pytest
from click.testing import CliRunner
from polykit.cli import dump_polys, main, parse_polys
from polykit.geometry import Poly

SQUARE = [[[0, 0], [10, 0], [10, 10], [0, 10]]]
OVERLAPPING = [[[5, 5], [15, 5], [15, 15], [5, 15]]]
HOLE = [[[2, 2], [4, 2], [4, 4], [2, 4]]]


@pytest.fixture
def runner():
    return CliRunner()


def write_json(tmp_path, name, value) -> str:
    path = tmp_path / name
    path.write_text(json.dumps(value))
    return str(path)


def total_area(result_output: str) -> float:
    return sum(poly.area for poly in parse_polys(result_output))


def test_single_ring_set():
    polys = parse_polys(json.dumps(SQUARE))
    assert len(polys) == 1
    assert polys[0].area == 100


def test_list_of_ring_sets():
    assert len(parse_polys(json.dumps([SQUARE, HOLE]))) == 2


def test_interchange_objects():
    value = {"coordinates": SQUARE, "meta": {"id": "a"}}
    assert parse_polys(json.dumps(value))[0].meta == {"id": "a"}
    assert parse_polys(json.dumps([value, value]))[1].meta == {"id": "a"}


def test_dump():
    poly = Poly.from_geo_json(SQUARE)
    assert json.loads(dump_polys([poly])) == [poly.geo_json]


def test_union_from_stdin(runner):
    result = runner.invoke(main, ['union'], input=json.dumps([SQUARE, OVERLAPPING]))
    assert result.exit_code == 0
    assert len(parse_polys(result.output)) == 1
    assert total_area(result.output) == pytest.approx(175)


def test_union_safe(runner, tmp_path):
    path = write_json(tmp_path, "in.json", [SQUARE, OVERLAPPING])
    result = runner.invoke(main, ['union', path, '--safe'])
    assert result.exit_code == 0
    assert total_area(result.output) == pytest.approx(175)


def test_union_to_file(runner, tmp_path):
    path = write_json(tmp_path, "in.json", [SQUARE])
    out = tmp_path / "out.json"
    result = runner.invoke(main, ['union', path, '-o', str(out)])
    assert result.exit_code == 0
    assert total_area(out.read_text()) == pytest.approx(100)


def test_intersect(runner, tmp_path):
    first = write_json(tmp_path, "a.json", SQUARE)
    second = write_json(tmp_path, "b.json", OVERLAPPING)
    result = runner.invoke(main, ['intersect', first, second])
    assert result.exit_code == 0
    assert total_area(result.output) == pytest.approx(25)


@pytest.mark.parametrize("flag", ['--safe', '--no-safe'])
def test_cut(runner, tmp_path, flag):
    cutters = write_json(tmp_path, "cutters.json", HOLE)
    result = runner.invoke(main, ['cut', cutters, flag], input=json.dumps(SQUARE))
    assert result.exit_code == 0
    polys = parse_polys(result.output)
    assert len(polys) == 1
    assert len(polys[0].holes) == 1
    assert polys[0].area == pytest.approx(96)


@pytest.mark.parametrize("args", [['--fast'], ['--quality'], []])
def test_triangulate(runner, args):
    result = runner.invoke(main, ['triangulate', *args], input=json.dumps([SQUARE, OVERLAPPING]))
    assert result.exit_code == 0
    decomp = json.loads(result.output)
    assert len(decomp["vs"]) == 8
    assert len(decomp["tris"]) == 4


def test_clean(runner):
    ring = [[0, 10], [10, 10], [10, 0], [0, 0]]
    result = runner.invoke(
        main,
        ['clean', '-m', 'matrix(1, 0, 0, 1, 0.123456, 0)', '-p', '2'],
        input=json.dumps({"coordinates": [ring], "meta": {"id": "a"}}),
    )
    assert result.exit_code == 0
    poly = parse_polys(result.output)[0]
    assert not poly.anticlockwise()
    assert sorted({p.x for p in poly.outline}) == [0.12, 10.12]
    assert poly.meta == {"id": "a"}


def test_clean_bad_matrix(runner):
    result = runner.invoke(main, ['clean', '-m', 'matrix(1, 2)'], input=json.dumps(SQUARE))
    assert result.exit_code == 2
    assert "--matrix" in result.output


def test_bad_input(runner):
    result = runner.invoke(main, ['union'], input="not json")
    assert result.exit_code == 1
    assert "Error reading input" in result.output


def test_missing_file(runner, tmp_path):
    result = runner.invoke(main, ['union', str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_svg(runner):
    result = runner.invoke(main, ['svg', '--stroke', 'red'], input=json.dumps([SQUARE]))
    assert result.exit_code == 0
    assert '<svg' in result.output
    assert 'd="M0,0 10,0 10,10 0,10Z"' in result.output
    assert 'stroke="red"' in result.output


def test_from_svg(runner):
    svg = '<svg viewBox="0 0 10 10"><rect id="r" x="0" y="0" width="10" height="10"/></svg>'
    result = runner.invoke(main, ['from-svg'], input=svg)
    assert result.exit_code == 0
    polys = parse_polys(result.output)
    assert polys[0].area == 100
    assert polys[0].meta == {"id": "r"}


def test_from_svg_without_shapes(runner):
    result = runner.invoke(main, ['from-svg'], input='<svg><circle r="1"/></svg>')
    assert result.exit_code == 1
    assert "No polygonal shapes" in result.output


def test_verbose_reports_timing(runner):
    result = runner.invoke(main, ['--verbose', 'union'], input=json.dumps([SQUARE]))
    assert result.exit_code == 0
    assert "Completed in" in result.output
