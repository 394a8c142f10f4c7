# world_engine/models.py

"""
================================================================================
WORLD DATA MODEL
================================================================================
Plain data types shared by generation, simulation and serialization.

Data Contract:
---------------
- WorldMap is the aggregate root. It owns its parcels as a dense list plus an
  id -> index lookup, and its boundaries as a list. It is created once by the
  WorldGenerator and afterwards mutated in place only by the simulator.
- Parcels and boundaries are never added or removed after generation.
- Invariants: 0 <= Resource.current <= Resource.maximum; neighbor lists are
  symmetric; no unordered parcel pair appears twice in boundaries.
================================================================================
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class Point(NamedTuple):
    """Immutable 2D coordinate."""
    x: float
    y: float


class Dimensions(NamedTuple):
    """Map extent. Coordinates wrap at these bounds (toroidal)."""
    width: float
    height: float


class TerrainType(str, Enum):
    OCEAN = "ocean"
    SHALLOW_WATER = "shallow_water"
    BEACH = "beach"
    GRASSLAND = "grassland"
    FOREST = "forest"
    JUNGLE = "jungle"
    DESERT = "desert"
    TUNDRA = "tundra"
    MOUNTAIN = "mountain"
    SNOW = "snow"


class ResourceType(str, Enum):
    WATER = "water"
    WOOD = "wood"
    STONE = "stone"
    IRON = "iron"
    GOLD = "gold"
    OIL = "oil"
    COAL = "coal"
    FERTILE_SOIL = "fertile_soil"
    FISH = "fish"
    GAME = "game"


@dataclass(frozen=True)
class ResourceAttribute:
    """Descriptive tag consumed by gameplay logic outside the engine."""
    name: str
    efficiency: float


@dataclass
class Resource:
    type: ResourceType
    current: float
    maximum: float
    change_rate: float
    attributes: list[ResourceAttribute] = field(default_factory=list)


@dataclass
class Parcel:
    id: int
    vertices: list[Point]
    center: Point
    terrain: TerrainType = TerrainType.GRASSLAND
    resources: list[Resource] = field(default_factory=list)
    neighbors: list[int] = field(default_factory=list)
    elevation: float = 0.0
    moisture: float = 0.0
    temperature: float = 0.0


@dataclass
class Boundary:
    parcel1: int
    parcel2: int
    edge: list[Point] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)


@dataclass
class ParcelDelta:
    """A parcel whose resources changed since the previous snapshot."""
    id: int
    resources: list[Resource]


def current_time_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass
class WorldMap:
    parcels: list[Parcel]
    boundaries: list[Boundary]
    width: float
    height: float
    last_update: int = 0
    _index: dict[int, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._index = {parcel.id: i for i, parcel in enumerate(self.parcels)}
        if len(self._index) != len(self.parcels):
            raise ValueError("Parcel ids must be unique")

    @property
    def dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)

    def get_parcel(self, parcel_id: int) -> Parcel | None:
        index = self._index.get(parcel_id)
        return None if index is None else self.parcels[index]

    def __contains__(self, parcel_id: int) -> bool:
        return parcel_id in self._index

    def touch(self):
        """Refreshes last_update without ever moving it backwards."""
        self.last_update = max(self.last_update, current_time_ms())
