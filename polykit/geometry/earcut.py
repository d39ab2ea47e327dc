"""Ear-clipping triangulation of polygons with holes.

Follows the approach of mapbox/earcut: the outline and holes become
circular doubly linked lists, every hole is bridged to the outline at a
visible vertex, and ears are clipped from the single resulting ring. When
no ear can be found the ring is filtered, then locally de-intersected, then
split along a valid diagonal, in that order.

Indices in the output refer to vertex positions (not flat offsets).
"""

import math
from typing import List, Optional, Sequence, Tuple


class _Node:
    __slots__ = ("i", "x", "y", "prev", "next", "steiner")

    def __init__(self, i: int, x: float, y: float):
        self.i = i
        self.x = x
        self.y = y
        self.prev: Optional["_Node"] = None
        self.next: Optional["_Node"] = None
        self.steiner = False


def flatten(rings: Sequence[Sequence[Sequence[float]]]) -> Tuple[List[float], List[int]]:
    """Flatten `[outline, *holes]` coordinate rings.

    Returns:
        Flat `[x0, y0, x1, y1, ...]` vertex data and the vertex index where each hole starts.
    """
    vertices: List[float] = []
    hole_indices: List[int] = []
    count = 0
    for ring_index, ring in enumerate(rings):
        if ring_index > 0:
            hole_indices.append(count)
        for x, y in ring:
            vertices.append(float(x))
            vertices.append(float(y))
        count += len(ring)
    return vertices, hole_indices


def earcut(data: Sequence[float], hole_indices: Sequence[int] = (), dim: int = 2) -> List[int]:
    """Triangulate flat vertex data.

    Args:
        data: Flat coordinates, `dim` numbers per vertex
        hole_indices: Vertex index where each hole starts
        dim: Numbers per vertex (only the first two are used)

    Returns:
        Flat list of vertex indices, three per triangle
    """
    has_holes = len(hole_indices) > 0
    outer_len = hole_indices[0] * dim if has_holes else len(data)
    outer_node = _linked_list(data, 0, outer_len, dim, True)
    triangles: List[int] = []

    if outer_node is None or outer_node.next is outer_node.prev:
        return triangles

    if has_holes:
        outer_node = _eliminate_holes(data, hole_indices, outer_node, dim)

    _earcut_linked(outer_node, triangles, 0)
    return triangles


def _linked_list(data, start: int, end: int, dim: int, clockwise: bool) -> Optional[_Node]:
    last = None
    if clockwise == (_signed_area(data, start, end, dim) > 0):
        for i in range(start, end, dim):
            last = _insert_node(i // dim, data[i], data[i + 1], last)
    else:
        for i in range(end - dim, start - 1, -dim):
            last = _insert_node(i // dim, data[i], data[i + 1], last)

    if last is not None and _equals(last, last.next):
        _remove_node(last)
        last = last.next

    return last


def _filter_points(start: Optional[_Node], end: Optional[_Node] = None) -> Optional[_Node]:
    """Remove duplicate and collinear points."""
    if start is None:
        return start
    if end is None:
        end = start

    p = start
    while True:
        again = False
        if not p.steiner and (_equals(p, p.next) or _area(p.prev, p, p.next) == 0):
            _remove_node(p)
            p = end = p.prev
            if p is p.next:
                break
            again = True
        else:
            p = p.next
        if not again and p is end:
            break

    return end


def _earcut_linked(ear: Optional[_Node], triangles: List[int], pass_: int) -> None:
    if ear is None:
        return

    stop = ear
    while ear.prev is not ear.next:
        prev = ear.prev
        nxt = ear.next

        if _is_ear(ear):
            triangles.extend((prev.i, ear.i, nxt.i))
            _remove_node(ear)
            # Skipping the next vertex leads to less sliver triangles
            ear = nxt.next
            stop = nxt.next
            continue

        ear = nxt

        # Went through the whole ring without finding an ear
        if ear is stop:
            if pass_ == 0:
                _earcut_linked(_filter_points(ear), triangles, 1)
            elif pass_ == 1:
                ear = _cure_local_intersections(_filter_points(ear), triangles)
                _earcut_linked(ear, triangles, 2)
            else:
                _split_earcut(ear, triangles)
            break


def _is_ear(ear: _Node) -> bool:
    a = ear.prev
    b = ear
    c = ear.next

    if _area(a, b, c) >= 0:
        return False  # reflex

    x0 = min(a.x, b.x, c.x)
    y0 = min(a.y, b.y, c.y)
    x1 = max(a.x, b.x, c.x)
    y1 = max(a.y, b.y, c.y)

    p = c.next
    while p is not a:
        if (x0 <= p.x <= x1 and y0 <= p.y <= y1
                and _point_in_triangle(a.x, a.y, b.x, b.y, c.x, c.y, p.x, p.y)
                and _area(p.prev, p, p.next) >= 0):
            return False
        p = p.next

    return True


def _cure_local_intersections(start: _Node, triangles: List[int]) -> Optional[_Node]:
    p = start
    while True:
        a = p.prev
        b = p.next.next

        if (not _equals(a, b) and _intersects(a, p, p.next, b)
                and _locally_inside(a, b) and _locally_inside(b, a)):
            triangles.extend((a.i, p.i, b.i))
            _remove_node(p)
            _remove_node(p.next)
            p = start = b

        p = p.next
        if p is start:
            break

    return _filter_points(p)


def _split_earcut(start: _Node, triangles: List[int]) -> None:
    a = start
    while True:
        b = a.next.next
        while b is not a.prev:
            if a.i != b.i and _is_valid_diagonal(a, b):
                c = _split_polygon(a, b)
                a = _filter_points(a, a.next)
                c = _filter_points(c, c.next)
                _earcut_linked(a, triangles, 0)
                _earcut_linked(c, triangles, 0)
                return
            b = b.next
        a = a.next
        if a is start:
            break


def _eliminate_holes(data, hole_indices: Sequence[int], outer_node: _Node, dim: int) -> _Node:
    queue = []
    for n, hole_start in enumerate(hole_indices):
        start = hole_start * dim
        end = hole_indices[n + 1] * dim if n < len(hole_indices) - 1 else len(data)
        ring = _linked_list(data, start, end, dim, False)
        if ring is None:
            continue
        if ring is ring.next:
            ring.steiner = True
        queue.append(_get_leftmost(ring))

    queue.sort(key=lambda node: node.x)

    for hole in queue:
        outer_node = _eliminate_hole(hole, outer_node)

    return outer_node


def _eliminate_hole(hole: _Node, outer_node: _Node) -> _Node:
    bridge = _find_hole_bridge(hole, outer_node)
    if bridge is None:
        return outer_node

    bridge_reverse = _split_polygon(bridge, hole)
    _filter_points(bridge_reverse, bridge_reverse.next)
    return _filter_points(bridge, bridge.next)


def _find_hole_bridge(hole: _Node, outer_node: _Node) -> Optional[_Node]:
    """David Eberly's algorithm for finding a bridge between a hole and the outline."""
    p = outer_node
    hx = hole.x
    hy = hole.y
    qx = -math.inf
    m = None

    # Find a segment intersected by a ray from the hole's leftmost point to the left
    while True:
        if p.next.y <= hy <= p.y and p.next.y != p.y:
            x = p.x + (hy - p.y) * (p.next.x - p.x) / (p.next.y - p.y)
            if qx < x <= hx:
                qx = x
                m = p if p.x < p.next.x else p.next
                if x == hx:
                    return m  # hole touches the outline
        p = p.next
        if p is outer_node:
            break

    if m is None:
        return None

    # Look for points inside the triangle (hole point, intersection, endpoint);
    # if any, pick the one with the minimal angle to the ray as the connection
    stop = m
    mx = m.x
    my = m.y
    tan_min = math.inf

    p = m
    while True:
        if (mx <= p.x <= hx and hx != p.x and _point_in_triangle(
                hx if hy < my else qx, hy, mx, my, qx if hy < my else hx, hy, p.x, p.y)):
            tan = abs(hy - p.y) / (hx - p.x)
            if _locally_inside(p, hole) and (
                    tan < tan_min
                    or (tan == tan_min and (p.x > m.x or (p.x == m.x and _sector_contains_sector(m, p))))):
                m = p
                tan_min = tan
        p = p.next
        if p is stop:
            break

    return m


def _sector_contains_sector(m: _Node, p: _Node) -> bool:
    return _area(m.prev, m, p.prev) < 0 and _area(p.next, m, m.next) < 0


def _get_leftmost(start: _Node) -> _Node:
    p = start
    leftmost = start
    while True:
        if p.x < leftmost.x or (p.x == leftmost.x and p.y < leftmost.y):
            leftmost = p
        p = p.next
        if p is start:
            break
    return leftmost


def _point_in_triangle(ax, ay, bx, by, cx, cy, px, py) -> bool:
    return (
        (cx - px) * (ay - py) >= (ax - px) * (cy - py)
        and (ax - px) * (by - py) >= (bx - px) * (ay - py)
        and (bx - px) * (cy - py) >= (cx - px) * (by - py)
    )


def _is_valid_diagonal(a: _Node, b: _Node) -> bool:
    """Whether a diagonal between a and b stays inside the ring without crossing it."""
    if a.next.i == b.i or a.prev.i == b.i or _intersects_polygon(a, b):
        return False
    locally_visible = (
        _locally_inside(a, b) and _locally_inside(b, a) and _middle_inside(a, b)
        and (_area(a.prev, a, b.prev) != 0 or _area(a, b.prev, b) != 0)
    )
    zero_length = (
        _equals(a, b) and _area(a.prev, a, a.next) > 0 and _area(b.prev, b, b.next) > 0
    )
    return locally_visible or zero_length


def _area(p: _Node, q: _Node, r: _Node) -> float:
    return (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)


def _equals(p1: _Node, p2: _Node) -> bool:
    return p1.x == p2.x and p1.y == p2.y


def _sign(num: float) -> int:
    return 1 if num > 0 else -1 if num < 0 else 0


def _on_segment(p: _Node, q: _Node, r: _Node) -> bool:
    """For collinear p, q, r: does q lie on segment pr."""
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def _intersects(p1: _Node, q1: _Node, p2: _Node, q2: _Node) -> bool:
    o1 = _sign(_area(p1, q1, p2))
    o2 = _sign(_area(p1, q1, q2))
    o3 = _sign(_area(p2, q2, p1))
    o4 = _sign(_area(p2, q2, q1))

    if o1 != o2 and o3 != o4:
        return True

    if o1 == 0 and _on_segment(p1, p2, q1):
        return True
    if o2 == 0 and _on_segment(p1, q2, q1):
        return True
    if o3 == 0 and _on_segment(p2, p1, q2):
        return True
    if o4 == 0 and _on_segment(p2, q1, q2):
        return True

    return False


def _intersects_polygon(a: _Node, b: _Node) -> bool:
    p = a
    while True:
        if (p.i != a.i and p.next.i != a.i and p.i != b.i and p.next.i != b.i
                and _intersects(p, p.next, a, b)):
            return True
        p = p.next
        if p is a:
            break
    return False


def _locally_inside(a: _Node, b: _Node) -> bool:
    if _area(a.prev, a, a.next) < 0:
        return _area(a, b, a.next) >= 0 and _area(a, a.prev, b) >= 0
    return _area(a, b, a.prev) < 0 or _area(a, a.next, b) < 0


def _middle_inside(a: _Node, b: _Node) -> bool:
    """Ray-cast the midpoint of the diagonal ab against the ring."""
    p = a
    inside = False
    px = (a.x + b.x) / 2
    py = (a.y + b.y) / 2
    while True:
        if ((p.y > py) != (p.next.y > py)) and p.next.y != p.y and \
           (px < (p.next.x - p.x) * (py - p.y) / (p.next.y - p.y) + p.x):
            inside = not inside
        p = p.next
        if p is a:
            break
    return inside


def _split_polygon(a: _Node, b: _Node) -> _Node:
    """Link a to b with a bridge; the ring splits in two or a hole merges into the outline."""
    a2 = _Node(a.i, a.x, a.y)
    b2 = _Node(b.i, b.x, b.y)
    an = a.next
    bp = b.prev

    a.next = b
    b.prev = a

    a2.next = an
    an.prev = a2

    b2.next = a2
    a2.prev = b2

    bp.next = b2
    b2.prev = bp

    return b2


def _insert_node(i: int, x: float, y: float, last: Optional[_Node]) -> _Node:
    p = _Node(i, x, y)
    if last is None:
        p.prev = p
        p.next = p
    else:
        p.next = last.next
        p.prev = last
        last.next.prev = p
        last.next = p
    return p


def _remove_node(p: _Node) -> None:
    p.next.prev = p.prev
    p.prev.next = p.next


def _signed_area(data, start: int, end: int, dim: int) -> float:
    total = 0.0
    j = end - dim
    for i in range(start, end, dim):
        total += (data[j] - data[i]) * (data[i + 1] + data[j + 1])
        j = i
    return total
