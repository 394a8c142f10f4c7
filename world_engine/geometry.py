# world_engine/geometry.py

"""
================================================================================
POLYGON & TOROIDAL GEOMETRY HELPERS
================================================================================
Small, pure functions over lists of Points: area, perimeter, centroid,
rectangle clipping, and wrap-aware distance on the toroidal map.

Data Contract:
---------------
- Inputs: Sequences of Points (ordered around the polygon) and Dimensions.
- Outputs: Floats or new Point lists. Inputs are never mutated.
- Side Effects: None.
================================================================================
"""

import math
from typing import Sequence

from . import config as DEFAULTS
from .models import Dimensions, Point


def polygon_area(vertices: Sequence[Point]) -> float:
    """Unsigned shoelace area. Polygons with fewer than 3 vertices have area 0."""
    return abs(_signed_area(vertices))


def _signed_area(vertices: Sequence[Point]) -> float:
    if len(vertices) < 3:
        return 0.0
    area = 0.0
    for i, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(i + 1) % len(vertices)]
        area += x1 * y2 - x2 * y1
    return area / 2.0


def polygon_perimeter(vertices: Sequence[Point]) -> float:
    if len(vertices) < 2:
        return 0.0
    perimeter = 0.0
    for i, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(i + 1) % len(vertices)]
        perimeter += math.hypot(x2 - x1, y2 - y1)
    return perimeter


def polygon_centroid(vertices: Sequence[Point]) -> Point:
    """
    Area-weighted centroid. Falls back to the vertex mean when the polygon has
    (near) zero area.
    """
    if not vertices:
        raise ValueError("Cannot take the centroid of an empty polygon")

    area = _signed_area(vertices)
    if abs(area) < 1e-12:
        n = len(vertices)
        return Point(sum(v.x for v in vertices) / n, sum(v.y for v in vertices) / n)

    cx = cy = 0.0
    for i, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(i + 1) % len(vertices)]
        cross = x1 * y2 - x2 * y1
        cx += (x1 + x2) * cross
        cy += (y1 + y2) * cross
    factor = 1.0 / (6.0 * area)
    return Point(cx * factor, cy * factor)


def order_vertices(vertices: Sequence[Point]) -> list[Point]:
    """Sorts the vertices of a convex polygon counter-clockwise around their mean."""
    if not vertices:
        return []
    mx = sum(v.x for v in vertices) / len(vertices)
    my = sum(v.y for v in vertices) / len(vertices)
    return sorted(vertices, key=lambda v: math.atan2(v.y - my, v.x - mx))


def clip_to_rectangle(vertices: Sequence[Point], dimensions: Dimensions) -> list[Point]:
    """
    Sutherland-Hodgman clip of a polygon against [0, width] x [0, height].
    Consecutive duplicate vertices produced by the clip are dropped.
    """
    width, height = dimensions
    # Each edge: (inside test, intersection with the clip line).
    edges = (
        (lambda p: p.x >= 0.0, lambda a, b: _intersect_x(a, b, 0.0)),
        (lambda p: p.x <= width, lambda a, b: _intersect_x(a, b, width)),
        (lambda p: p.y >= 0.0, lambda a, b: _intersect_y(a, b, 0.0)),
        (lambda p: p.y <= height, lambda a, b: _intersect_y(a, b, height)),
    )

    output = list(vertices)
    for inside, intersect in edges:
        if not output:
            break
        source, output = output, []
        previous = source[-1]
        for current in source:
            if inside(current):
                if not inside(previous):
                    output.append(intersect(previous, current))
                output.append(current)
            elif inside(previous):
                output.append(intersect(previous, current))
            previous = current

    return _drop_repeated(output)


def _intersect_x(a: Point, b: Point, x: float) -> Point:
    t = (x - a.x) / (b.x - a.x)
    return Point(x, a.y + t * (b.y - a.y))


def _intersect_y(a: Point, b: Point, y: float) -> Point:
    t = (y - a.y) / (b.y - a.y)
    return Point(a.x + t * (b.x - a.x), y)


def _drop_repeated(vertices: list[Point], tolerance: float = 1e-9) -> list[Point]:
    result: list[Point] = []
    for v in vertices:
        if result and abs(v.x - result[-1].x) <= tolerance and abs(v.y - result[-1].y) <= tolerance:
            continue
        result.append(v)
    while len(result) > 1 and abs(result[0].x - result[-1].x) <= tolerance and abs(result[0].y - result[-1].y) <= tolerance:
        result.pop()
    return result


def toroidal_distance(a: Point, b: Point, dimensions: Dimensions) -> float:
    """Shortest distance between two points when both map axes wrap."""
    width, height = dimensions
    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    dx = min(dx, abs(width - dx))
    dy = min(dy, abs(height - dy))
    return math.hypot(dx, dy)


def points_coincide(a: Point, b: Point, dimensions: Dimensions,
                    threshold: float = DEFAULTS.VERTEX_COINCIDENCE_THRESHOLD) -> bool:
    return toroidal_distance(a, b, dimensions) < threshold


def find_shared_edge(vertices1: Sequence[Point], vertices2: Sequence[Point], dimensions: Dimensions,
                     threshold: float = DEFAULTS.VERTEX_COINCIDENCE_THRESHOLD) -> list[Point]:
    """
    Vertices of the first polygon that coincide (wrap-aware) with a vertex of
    the second polygon, with near-identical points kept only once.
    """
    shared: list[Point] = []
    for v1 in vertices1:
        if not any(points_coincide(v1, v2, dimensions, threshold) for v2 in vertices2):
            continue
        if any(points_coincide(p, v1, dimensions, threshold) for p in shared):
            continue
        shared.append(Point(v1.x, v1.y))
    return shared
