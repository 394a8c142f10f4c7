# world_engine/generator.py

"""
================================================================================
CORE WORLD GENERATOR
================================================================================
This module contains the MapConfig parameters and the main WorldGenerator
class, responsible for assembling a complete WorldMap: seed points, Lloyd
relaxation, the Voronoi parcel layout, climate and terrain, resources, and
the shared boundaries between adjacent parcels.

Data Contract:
---------------
- Inputs (on initialization):
    - config (MapConfig or dict): Generation parameters. Dict keys override
      the internal defaults and may be snake_case or camelCase.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from generate()):
    - A WorldMap owned by the caller.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same seed and configuration, the output is identical
  except for the wall-clock `last_update` field.
================================================================================
"""

import json
import logging
import math
import time
from dataclasses import asdict, dataclass

from . import config as DEFAULTS
from .errors import InvalidConfigurationError
from .geometry import find_shared_edge
from .models import Boundary, Dimensions, Parcel, WorldMap, current_time_ms
from .resources import place_resources
from .rng import SeededRandom
from .terrain import generate_terrain
from .voronoi import build_voronoi, generate_seed_points, relax_points


def _lookup(config: dict, snake_key: str, camel_key: str, default):
    """Reads a setting under either naming style, falling back to the default."""
    if snake_key in config:
        return config[snake_key]
    return config.get(camel_key, default)


@dataclass(frozen=True)
class MapConfig:
    width: float = DEFAULTS.DEFAULT_WIDTH
    height: float = DEFAULTS.DEFAULT_HEIGHT
    num_parcels: int = DEFAULTS.DEFAULT_NUM_PARCELS
    seed: int = DEFAULTS.DEFAULT_SEED
    ocean_proportion: float = DEFAULTS.DEFAULT_OCEAN_PROPORTION
    resource_richness: float = DEFAULTS.DEFAULT_RESOURCE_RICHNESS
    polar_ice_caps: bool = DEFAULTS.DEFAULT_POLAR_ICE_CAPS
    relaxation_iterations: int = DEFAULTS.DEFAULT_RELAXATION_ITERATIONS
    equator_bias: float = DEFAULTS.DEFAULT_EQUATOR_BIAS

    @property
    def water_level(self) -> float:
        """The water line sits at the requested ocean proportion."""
        return self.ocean_proportion

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)

    @classmethod
    def from_dict(cls, config: dict) -> "MapConfig":
        """Consolidates a user dict over the internal defaults. Unknown keys are ignored."""
        ocean = _lookup(config, 'ocean_proportion', 'oceanProportion', None)
        if ocean is None:
            ocean = _lookup(config, 'water_level', 'waterLevel', DEFAULTS.DEFAULT_OCEAN_PROPORTION)

        return cls(
            width=_lookup(config, 'width', 'width', DEFAULTS.DEFAULT_WIDTH),
            height=_lookup(config, 'height', 'height', DEFAULTS.DEFAULT_HEIGHT),
            num_parcels=_lookup(config, 'num_parcels', 'numParcels', DEFAULTS.DEFAULT_NUM_PARCELS),
            seed=_lookup(config, 'seed', 'seed', DEFAULTS.DEFAULT_SEED),
            ocean_proportion=ocean,
            resource_richness=_lookup(config, 'resource_richness', 'resourceRichness', DEFAULTS.DEFAULT_RESOURCE_RICHNESS),
            polar_ice_caps=_lookup(config, 'polar_ice_caps', 'polarIceCaps', DEFAULTS.DEFAULT_POLAR_ICE_CAPS),
            relaxation_iterations=_lookup(config, 'relaxation_iterations', 'relaxationIterations', DEFAULTS.DEFAULT_RELAXATION_ITERATIONS),
            equator_bias=_lookup(config, 'equator_bias', 'equatorBias', DEFAULTS.DEFAULT_EQUATOR_BIAS),
        )

    @classmethod
    def from_json_file(cls, path: str) -> "MapConfig":
        """
        Loads a JSON config file. Parameters may sit at the top level or under
        a 'world_generation_parameters' section.
        """
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data.get('world_generation_parameters', data))

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self):
        """Raises InvalidConfigurationError for any out-of-range value."""
        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not math.isfinite(value) or not value > 0:
                raise InvalidConfigurationError(f"{name} must be a finite positive number, got {value!r}")
        if isinstance(self.num_parcels, bool) or not isinstance(self.num_parcels, int) or self.num_parcels <= 0:
            raise InvalidConfigurationError(f"num_parcels must be a positive integer, got {self.num_parcels!r}")
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise InvalidConfigurationError(f"seed must be an integer, got {self.seed!r}")
        for name in ('ocean_proportion', 'resource_richness', 'equator_bias'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
                raise InvalidConfigurationError(f"{name} must be within [0, 1], got {value!r}")
        if isinstance(self.relaxation_iterations, bool) or not isinstance(self.relaxation_iterations, int) \
                or self.relaxation_iterations < 0:
            raise InvalidConfigurationError(
                f"relaxation_iterations must be a non-negative integer, got {self.relaxation_iterations!r}"
            )


class WorldGenerator:
    """
    Generates a complete WorldMap from a MapConfig.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config, logger: logging.Logger = None):
        """
        Initializes the world generator.

        Args:
            config (MapConfig | dict): Generation parameters.
            logger (logging.Logger): The logger instance for all output.

        Raises:
            InvalidConfigurationError: If any parameter is out of range.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config = config if isinstance(config, MapConfig) else MapConfig.from_dict(config)
        self.config.validate()

        self.seed = self.config.seed
        self.dimensions = self.config.dimensions

        self.logger.debug(f"WorldGenerator configured: {self.config.to_dict()}")

    def generate(self) -> WorldMap:
        """Runs the full pipeline. Each call uses a fresh RNG seeded from the config."""
        cfg = self.config
        self.logger.info(f"Generating world map with seed: {self.seed}")
        self.logger.info(
            f"World dimensions: {cfg.width}x{cfg.height} map units, {cfg.num_parcels} parcels"
        )
        start_time = time.perf_counter()
        rng = SeededRandom(self.seed)

        # 1. --- Seed points and relaxation ---
        self.logger.info("Generating Voronoi cells...")
        points = generate_seed_points(cfg.num_parcels, self.dimensions, rng, cfg.equator_bias)

        self.logger.info(f"Relaxing Voronoi cells ({cfg.relaxation_iterations} iterations)...")
        points = relax_points(points, self.dimensions, cfg.relaxation_iterations, self.logger)
        cells = build_voronoi(points, self.dimensions, self.logger)

        # 2. --- Parcels ---
        self.logger.info("Creating parcels...")
        parcels = [
            Parcel(id=cell.id, vertices=cell.vertices, center=cell.center, neighbors=list(cell.neighbors))
            for cell in cells
        ]

        # 3. --- Terrain and resources ---
        self.logger.info("Generating terrain...")
        generate_terrain(parcels, self.dimensions, rng, cfg.ocean_proportion, cfg.polar_ice_caps)

        self.logger.info("Generating resources...")
        place_resources(parcels, rng, cfg.resource_richness)

        # 4. --- Boundaries ---
        self.logger.info("Creating boundaries...")
        boundaries = self.build_boundaries(parcels, {cell.id: cell.edges for cell in cells})

        world = WorldMap(
            parcels=parcels,
            boundaries=boundaries,
            width=cfg.width,
            height=cfg.height,
            last_update=current_time_ms(),
        )

        end_time = time.perf_counter()
        self.logger.info(
            f"Map generation complete! {len(parcels)} parcels, {len(boundaries)} boundaries "
            f"in {end_time - start_time:.2f} seconds."
        )
        return world

    def build_boundaries(self, parcels: list[Parcel], ridges: dict[int, dict[int, list]] = None) -> list[Boundary]:
        """
        One Boundary per unordered neighbor pair, in first-seen order.

        With `ridges` (parcel id -> neighbor id -> shared Voronoi ridge) the
        edge is the ridge as seen from the first parcel's toroidal cell, so
        pairs adjacent across the seam get their full edge. Without it, or for
        a pair it does not cover, the edge falls back to the wrap-aware vertex
        match between the two clipped polygons.
        """
        ridges = ridges or {}
        by_id = {parcel.id: parcel for parcel in parcels}
        processed = set()
        boundaries = []

        for parcel in parcels:
            for neighbor_id in parcel.neighbors:
                edge_key = (min(parcel.id, neighbor_id), max(parcel.id, neighbor_id))
                if edge_key in processed:
                    continue
                processed.add(edge_key)

                neighbor = by_id.get(neighbor_id)
                if neighbor is None:
                    self.logger.warning(f"Parcel {parcel.id} lists unknown neighbor {neighbor_id}.")
                    continue

                edge = ridges.get(parcel.id, {}).get(neighbor_id)
                if edge is None:
                    edge = find_shared_edge(parcel.vertices, neighbor.vertices, self.dimensions)

                boundaries.append(Boundary(parcel1=parcel.id, parcel2=neighbor_id, edge=list(edge)))

        return boundaries


def generate(config, logger: logging.Logger = None) -> WorldMap:
    """Generates a WorldMap from a MapConfig or a plain dict of parameters."""
    return WorldGenerator(config, logger).generate()
