"""SVG input/output utilities for polykit."""

import logging
import re
import sys
from typing import List, Optional, Sequence, Tuple
from xml.etree import ElementTree as ET

from .errors import UnsupportedPathCommandError
from .geometry import Mat, Poly, Rect, Vect, remove_path_reps

logger = logging.getLogger(__name__)

NUMBER_REGEX = r'-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'


def parse_path_d(d: str) -> List[List[Vect]]:
    """Parse an SVG path d attribute into rings.

    Only straight lines are supported: M, L, H, V, Z and their lowercase
    variants. Every moveto starts a new ring.

    Raises:
        UnsupportedPathCommandError: for curve and arc commands
    """
    if not d or not d.strip():
        return []

    command_regex = r'[MLHVCSQTAZmlhvcsqtaz][^MLHVCSQTAZmlhvcsqtaz]*'
    commands = re.findall(command_regex, d)

    rings: List[List[Vect]] = []
    ring: List[Vect] = []
    current_x, current_y = 0.0, 0.0
    start_x, start_y = 0.0, 0.0

    for cmd in commands:
        cmd_type = cmd[0]
        args = [float(x) for x in re.findall(NUMBER_REGEX, cmd[1:])]

        if cmd_type in ('M', 'm'):
            for i in range(0, len(args) - 1, 2):
                if cmd_type == 'M':
                    current_x, current_y = args[i], args[i + 1]
                else:
                    current_x += args[i]
                    current_y += args[i + 1]
                if i == 0:
                    # Moveto starts a ring; further pairs are implicit linetos
                    start_x, start_y = current_x, current_y
                    ring = []
                    rings.append(ring)
                ring.append(Vect(current_x, current_y))

        elif cmd_type in ('L', 'l'):
            for i in range(0, len(args) - 1, 2):
                if cmd_type == 'L':
                    current_x, current_y = args[i], args[i + 1]
                else:
                    current_x += args[i]
                    current_y += args[i + 1]
                ring.append(Vect(current_x, current_y))

        elif cmd_type in ('H', 'h'):
            for x in args:
                current_x = x if cmd_type == 'H' else current_x + x
                ring.append(Vect(current_x, current_y))

        elif cmd_type in ('V', 'v'):
            for y in args:
                current_y = y if cmd_type == 'V' else current_y + y
                ring.append(Vect(current_x, current_y))

        elif cmd_type in ('Z', 'z'):
            current_x, current_y = start_x, start_y

        else:
            raise UnsupportedPathCommandError(f"svg command {cmd_type} is not supported")

    return [r for r in rings if r]


def svg_path_to_poly(d: str) -> Optional[Poly]:
    """Convert a straight-line SVG path into a single polygon with holes.

    The ring with the largest bounding box becomes the outline, the rest holes.
    """
    rings = [remove_path_reps(ring) for ring in parse_path_d(d)]
    polys = [Poly(ring).clean_final_reps() for ring in rings]

    if not polys:
        return None
    if len(polys) == 1:
        return polys[0]

    polys.sort(key=lambda poly: poly.rect.area, reverse=True)
    return Poly(polys[0].outline, [poly.outline for poly in polys[1:]])


def element_to_poly(element: ET.Element) -> Optional[Poly]:
    """Convert an SVG element to a Poly, applying a `matrix(...)` transform if present."""
    tag = element.tag.split('}')[-1].lower()  # Remove namespace

    poly: Optional[Poly] = None

    if tag == 'path':
        poly = svg_path_to_poly(element.get('d', ''))

    elif tag == 'polygon':
        coords = [float(c) for c in re.findall(NUMBER_REGEX, element.get('points', ''))]
        poly = Poly(remove_path_reps(Vect.from_coords(coords))).clean_final_reps()

    elif tag == 'rect':
        poly = Poly.from_rect(Rect(
            float(element.get('x', 0)),
            float(element.get('y', 0)),
            float(element.get('width', 0)),
            float(element.get('height', 0)),
        ))

    if poly is None or len(poly.outline) < 3:
        return None

    transform = element.get('transform', '').strip()
    if transform.startswith('matrix('):
        poly.apply_matrix(Mat(transform))
    elif transform:
        logger.warning("Ignoring unsupported transform '%s' on <%s>", transform, tag)

    element_id = element.get('id')
    if element_id:
        poly.meta['id'] = element_id

    return poly


def extract_polys_from_svg(svg_content: str) -> Tuple[List[Poly], dict]:
    """Extract all polygons from SVG content.

    Returns:
        Tuple of (list of polygons, SVG metadata dict with viewBox, width, height)
    """
    root = ET.fromstring(svg_content)

    metadata = {
        'viewBox': root.get('viewBox', ''),
        'width': root.get('width', ''),
        'height': root.get('height', ''),
    }

    polys: List[Poly] = []
    shape_tags = ['path', 'polygon', 'rect']

    def process_element(elem: ET.Element):
        tag = elem.tag.split('}')[-1].lower()
        if tag in shape_tags:
            poly = element_to_poly(elem)
            if poly:
                polys.append(poly)

        # Recurse into children
        for child in elem:
            process_element(child)

    process_element(root)

    return polys, metadata


def create_svg_from_polys(
    polys: Sequence[Poly],
    viewbox: str = '',
    width: str = '',
    height: str = '',
    fill: str = 'none',
    stroke: str = 'black',
    stroke_width: str = '1'
) -> str:
    """Create a complete SVG document with one path per polygon.

    Args:
        polys: Polygons to draw (holes become subpaths)
        viewbox: SVG viewBox attribute, defaults to the polygons' bounds
        width: SVG width attribute
        height: SVG height attribute
        fill: Fill color
        stroke: Stroke color
        stroke_width: Stroke width

    Returns:
        Complete SVG document as string
    """
    if not viewbox and polys:
        bounds = Rect.from_points(*(p for poly in polys for p in poly.outline))
        viewbox = f"{bounds.x} {bounds.y} {bounds.width} {bounds.height}"

    attrs = ['xmlns="http://www.w3.org/2000/svg"']
    if viewbox:
        attrs.append(f'viewBox="{viewbox}"')
    if width:
        attrs.append(f'width="{width}"')
    if height:
        attrs.append(f'height="{height}"')

    paths = '\n'.join(
        f'  <path d="{poly.svg_path}" fill="{fill}" fill-rule="evenodd" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>'
        for poly in polys
    )

    svg = f'''<?xml version="1.0" encoding="UTF-8"?>
<svg {' '.join(attrs)}>
{paths}
</svg>'''

    return svg


def read_text(path: Optional[str] = None) -> str:
    """Whole text of `path`; stdin when `path` is None or '-'."""
    if path is None or path == '-':
        return sys.stdin.read()
    else:
        with open(path, 'r') as f:
            return f.read()


def write_text(content: str, path: Optional[str] = None):
    """Write `content` to `path`, or to stdout for None or '-'. Nothing is appended."""
    if path is None or path == '-':
        sys.stdout.write(content)
    else:
        with open(path, 'w') as f:
            f.write(content)
