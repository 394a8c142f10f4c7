# world_engine/voronoi.py

"""
================================================================================
VORONOI TESSELLATION & LLOYD RELAXATION
================================================================================
This module turns a set of seed points into the parcel layout of the world.
The map is a torus, so the sites are tiled 3x3 around the map rectangle
before Qhull (via scipy.spatial.Voronoi) builds the dual of their Delaunay
triangulation. Every original site is then surrounded by copies of the
whole point set, which gives it a bounded cell and lets adjacency run
across the wrap-around seam.

Data Contract:
---------------
- Inputs:
    - points: At least 3 Points inside [0, width] x [0, height].
    - dimensions: The map extent.
- Outputs:
    - One VoronoiCell per input point, in input order. `vertices` is the cell
      clipped to the map rectangle; `periodic_vertices` is the full cell on
      the torus (it may extend past the rectangle). `edges` maps each neighbor
      to the Voronoi ridge the two cells share, in the same unwrapped frame
      as `periodic_vertices`.
- Side Effects: Logs a warning for each degenerate (< 3 vertex) cell.
- Invariants: Neighbor lists are symmetric and never contain the cell itself.
================================================================================
"""

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from scipy.spatial import Voronoi

from .errors import InsufficientPointsError
from .geometry import clip_to_rectangle, order_vertices, polygon_area, polygon_centroid, polygon_perimeter
from .models import Dimensions, Point
from .rng import SeededRandom

MIN_SITES = 3

# Tile offsets in units of (width, height). The untranslated tile comes first
# so that extended index i < n is original site i.
_TILE_OFFSETS = [(0, 0)] + [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]

module_logger = logging.getLogger(__name__)


@dataclass
class VoronoiCell:
    id: int
    center: Point
    vertices: list[Point]
    neighbors: list[int]
    periodic_vertices: list[Point] = field(default_factory=list)
    # neighbor id -> shared ridge, in this cell's (unwrapped) coordinates
    edges: dict[int, list[Point]] = field(default_factory=dict)

    @property
    def is_degenerate(self) -> bool:
        return len(self.vertices) < 3

    @property
    def area(self) -> float:
        """Area of the full toroidal cell."""
        return polygon_area(self.periodic_vertices)


def generate_seed_points(count: int, dimensions: Dimensions, rng: SeededRandom, equator_bias: float = 0.0) -> list[Point]:
    """
    Draws `count` sites deterministically. With equator_bias > 0 the latitude
    is blended from an arcsine distribution (denser at the equator) and a
    uniform one, which makes parcels grow toward the poles.
    """
    width, height = dimensions
    points = []
    for _ in range(count):
        u = rng.random_float(0.0, 1.0)
        biased_y = math.asin(2.0 * u - 1.0) / math.pi + 0.5
        uniform_y = rng.random_float(0.0, 1.0)
        blended_y = biased_y * equator_bias + uniform_y * (1.0 - equator_bias)
        x = rng.random_float(0.0, width)
        points.append(Point(x, min(blended_y * height, height)))
    return points


def _keep_longest(edges: dict, neighbor_id: int, edge: list[Point]):
    # On a small torus two sites can share more than one ridge.
    current = edges.get(neighbor_id)
    if current is None or math.dist(*edge) > math.dist(*current):
        edges[neighbor_id] = edge


def build_voronoi(points: list[Point], dimensions: Dimensions, logger: logging.Logger = None) -> list[VoronoiCell]:
    """Builds the toroidal Voronoi tessellation of `points`."""
    logger = logger or module_logger
    n = len(points)
    if n < MIN_SITES:
        raise InsufficientPointsError(
            f"Voronoi tessellation requires at least {MIN_SITES} points, got {n}"
        )

    width, height = dimensions
    sites = np.array([(p.x, p.y) for p in points], dtype=np.float64)
    tiled = np.concatenate([sites + np.array([dx * width, dy * height]) for dx, dy in _TILE_OFFSETS])
    vor = Voronoi(tiled)

    # Adjacency from the Delaunay edges (Voronoi ridges) touching the center tile.
    neighbor_sets = [set() for _ in range(n)]
    ridges = [{} for _ in range(n)]
    for (a, b), ridge_vertices in zip(vor.ridge_points, vor.ridge_vertices):
        if a >= n and b >= n:
            continue
        ia, ib = int(a) % n, int(b) % n
        if ia == ib:
            continue
        neighbor_sets[ia].add(ib)
        neighbor_sets[ib].add(ia)

        if -1 in ridge_vertices:
            continue
        edge = [Point(float(vor.vertices[k][0]), float(vor.vertices[k][1])) for k in ridge_vertices]
        for owner, other in ((a, ib), (b, ia)):
            if owner < n:
                _keep_longest(ridges[owner], other, edge)

    cells = []
    for i, site in enumerate(points):
        region = vor.regions[vor.point_region[i]]
        if not region or -1 in region:
            periodic = []
        else:
            periodic = order_vertices([Point(float(vor.vertices[j][0]), float(vor.vertices[j][1])) for j in region])

        clipped = clip_to_rectangle(periodic, dimensions) if periodic else []
        cell = VoronoiCell(
            id=i,
            center=Point(float(site.x), float(site.y)),
            vertices=clipped,
            neighbors=sorted(neighbor_sets[i]),
            periodic_vertices=periodic,
            edges=ridges[i],
        )
        if cell.is_degenerate:
            logger.warning(f"Degenerate Voronoi cell {i} at ({site.x:.2f}, {site.y:.2f}): {len(clipped)} vertices after clipping.")
        cells.append(cell)

    return cells


def relax_points(points: list[Point], dimensions: Dimensions, iterations: int, logger: logging.Logger = None) -> list[Point]:
    """
    Lloyd relaxation: moves every site to the centroid of its own toroidal
    cell, `iterations` times. Sites with degenerate cells stay where they are.
    """
    logger = logger or module_logger
    width, height = dimensions
    current = list(points)

    for iteration in range(iterations):
        cells = build_voronoi(current, dimensions, logger)
        relaxed = []
        for cell, site in zip(cells, current):
            if len(cell.periodic_vertices) < 3:
                relaxed.append(site)
                continue
            centroid = polygon_centroid(cell.periodic_vertices)
            x = min(max(centroid.x % width, 0.0), width)
            y = min(max(centroid.y % height, 0.0), height)
            relaxed.append(Point(x, y))
        current = relaxed
        logger.debug(f"Lloyd relaxation pass {iteration + 1}/{iterations} complete.")

    return current


def cell_metrics(cell: VoronoiCell) -> dict:
    """Area and perimeter of the cell as clipped to the map rectangle."""
    return {
        "area": polygon_area(cell.vertices),
        "perimeter": polygon_perimeter(cell.vertices),
    }
