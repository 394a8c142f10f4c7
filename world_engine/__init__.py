# world_engine/__init__.py

from .errors import (
    GenerationError,
    InsufficientPointsError,
    InvalidConfigurationError,
    MapFormatError,
    SimulationError,
    WorldEngineError,
)
from .generator import MapConfig, WorldGenerator, generate
from .models import (
    Boundary,
    Dimensions,
    Parcel,
    ParcelDelta,
    Point,
    Resource,
    ResourceAttribute,
    ResourceType,
    TerrainType,
    WorldMap,
)
from .rng import SeededRandom
from .runtime import Simulation, StateDifferencer, advance

__all__ = [
    "Boundary",
    "Dimensions",
    "GenerationError",
    "InsufficientPointsError",
    "InvalidConfigurationError",
    "MapConfig",
    "MapFormatError",
    "Parcel",
    "ParcelDelta",
    "Point",
    "Resource",
    "ResourceAttribute",
    "ResourceType",
    "SeededRandom",
    "Simulation",
    "SimulationError",
    "StateDifferencer",
    "TerrainType",
    "WorldEngineError",
    "WorldGenerator",
    "WorldMap",
    "advance",
    "generate",
]
