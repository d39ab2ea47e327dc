"""Command-line interface for polykit."""

import json
import logging
import sys
import time
from typing import Any, List

import click

from .geometry import Mat, Poly, polys_to_triangulation
from .svg_io import (
    create_svg_from_polys,
    extract_polys_from_svg,
    read_text,
    write_text,
)


def parse_polys(content: str) -> List[Poly]:
    """Polygons from JSON: one polygon or a list, each a ring list or interchange dict."""
    value = json.loads(content)
    if isinstance(value, dict) or _is_ring_set(value):
        return [Poly.from_geo_json(value)]
    return [Poly.from_geo_json(item) for item in value]


def dump_polys(polys: List[Poly]) -> str:
    return json.dumps([poly.geo_json for poly in polys]) + '\n'


def _is_ring_set(value: Any) -> bool:
    try:
        return isinstance(value[0][0][0], (int, float))
    except (IndexError, KeyError, TypeError):
        return False


def _load(path: str) -> List[Poly]:
    try:
        return parse_polys(read_text(path if path != '-' else None))
    except Exception as e:
        click.echo(f"Error reading input: {e}", err=True)
        sys.exit(1)


def _save(content: str, path: str):
    try:
        write_text(content, path if path != '-' else None)
    except Exception as e:
        click.echo(f"Error writing output: {e}", err=True)
        sys.exit(1)


def _report(ctx: click.Context, message: str):
    if ctx.obj['verbose']:
        click.echo(message, err=True)


@click.group()
@click.version_option()
@click.option('--verbose', '-v', is_flag=True, help='Print timing, statistics and debug logs')
@click.pass_context
def main(ctx, verbose):
    """polykit: 2D polygons with holes.

    Polygons are read and written as JSON: a list of rings (outline first,
    then holes), an interchange object {"coordinates": rings, "meta": {...}},
    or a list of either.

    Examples:

        polykit union rooms.json -o floor.json

        cat floor.json | polykit triangulate --quality > mesh.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['start_time'] = time.time()


@main.result_callback()
@click.pass_context
def finish(ctx, *args, **kwargs):
    _report(ctx, f"Completed in {time.time() - ctx.obj['start_time']:.3f}s")


@main.command()
@click.argument('input', default='-', required=False)
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.option('--quality/--fast', default=False,
              help='Constrained Delaunay instead of ear clipping (default: fast)')
@click.pass_context
def triangulate(ctx, input, output, quality):
    """Triangulate polygons into one mesh {"vs": [[x, y], ...], "tris": [[i, j, k], ...]}."""
    polys = _load(input)
    decomp = polys_to_triangulation(polys, quality=quality)
    _report(ctx, f"{len(polys)} polygons, {len(decomp.vs)} vertices, {len(decomp.tris)} triangles")
    _save(json.dumps(decomp.json) + '\n', output)


@main.command()
@click.argument('input', default='-', required=False)
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.option('--safe', is_flag=True, help='Union one polygon at a time')
@click.pass_context
def union(ctx, input, output, safe):
    """Union all polygons of INPUT."""
    polys = _load(input)
    result = Poly.union_safe(polys) if safe else Poly.union(polys)
    _report(ctx, f"Union of {len(polys)} polygons gave {len(result)}")
    _save(dump_polys(result), output)


@main.command()
@click.argument('input')
@click.argument('other')
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.pass_context
def intersect(ctx, input, other, output):
    """Intersect the union of INPUT with the union of OTHER."""
    result = Poly.intersect(_load(input), _load(other))
    _report(ctx, f"Intersection gave {len(result)} polygons")
    _save(dump_polys(result), output)


@main.command()
@click.argument('cutters')
@click.argument('input', default='-', required=False)
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.option('--safe/--no-safe', default=True,
              help='Union first, then cut one polygon at a time (default: safe)')
@click.pass_context
def cut(ctx, cutters, input, output, safe):
    """Cut the polygons of CUTTERS out of the polygons of INPUT."""
    cutting_polys = _load(cutters)
    polys = _load(input)
    result = Poly.cut_out_safely(cutting_polys, polys) if safe else Poly.cut_out(cutting_polys, polys)
    _report(ctx, f"Cut {len(cutting_polys)} from {len(polys)} polygons, {len(result)} remain")
    _save(dump_polys(result), output)


@main.command()
@click.argument('input', default='-', required=False)
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.option('--matrix', '-m', default=None, help='Transform as "matrix(a, b, c, d, e, f)"')
@click.option('--precision', '-p', default=4, type=int, help='Decimal places (default: 4)')
@click.pass_context
def clean(ctx, input, output, matrix, precision):
    """Transform, fix orientation and snap precision of every polygon."""
    try:
        mat = Mat(matrix) if matrix else None
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--matrix')
    result = [poly.clean_clone(mat, precision=precision) for poly in _load(input)]
    _report(ctx, f"Cleaned {len(result)} polygons")
    _save(dump_polys(result), output)


@main.command()
@click.argument('input', default='-', required=False)
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.option('--fill', default='none', help='Fill color (default: none)')
@click.option('--stroke', default='black', help='Stroke color (default: black)')
@click.option('--stroke-width', default='1', help='Stroke width (default: 1)')
@click.pass_context
def svg(ctx, input, output, fill, stroke, stroke_width):
    """Render polygons as an SVG document."""
    polys = _load(input)
    _report(ctx, f"Rendering {len(polys)} polygons")
    _save(create_svg_from_polys(polys, fill=fill, stroke=stroke, stroke_width=stroke_width), output)


@main.command('from-svg')
@click.argument('input', default='-', required=False)
@click.option('-o', '--output', default='-', help='Output file (default: stdout)')
@click.pass_context
def from_svg(ctx, input, output):
    """Extract path, polygon and rect shapes of an SVG as polygon JSON."""
    try:
        polys, metadata = extract_polys_from_svg(read_text(input if input != '-' else None))
    except Exception as e:
        click.echo(f"Error reading input: {e}", err=True)
        sys.exit(1)

    _report(ctx, f"Found {len(polys)} shapes (viewBox '{metadata['viewBox']}')")
    if not polys:
        click.echo("No polygonal shapes found in input", err=True)
        sys.exit(1)

    _save(dump_polys(polys), output)


if __name__ == '__main__':
    main()
