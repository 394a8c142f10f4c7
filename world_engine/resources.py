# world_engine/resources.py

"""
================================================================================
RESOURCE RULES & PLACEMENT
================================================================================
Static rule tables (terrain -> eligible resources, resource -> base
properties) and the seeded placement pass that stocks each parcel with
0 to 3 resource instances, plus an occasional bonus water source.

Data Contract:
---------------
- Inputs:
    - parcels: Parcels with terrain and moisture already assigned.
    - rng: The generation run's SeededRandom.
    - richness: [0, 1]. Scales both spawn probability and magnitude.
- Outputs: None. Resources are appended to each parcel in place.
- Invariants: A parcel never holds the same resource type twice, and every
  placed resource satisfies 0 <= current <= maximum.
================================================================================
"""

from dataclasses import dataclass
from types import MappingProxyType

from . import config as DEFAULTS
from .models import Parcel, Resource, ResourceAttribute, ResourceType, TerrainType
from .rng import SeededRandom


@dataclass(frozen=True)
class SpawnRule:
    types: tuple[ResourceType, ...]
    probability: float


@dataclass(frozen=True)
class ResourceProperties:
    max: float
    change_rate: float
    attributes: tuple[ResourceAttribute, ...]


RESOURCE_RULES = MappingProxyType({
    TerrainType.OCEAN: SpawnRule((ResourceType.FISH, ResourceType.OIL), 0.4),
    TerrainType.SHALLOW_WATER: SpawnRule((ResourceType.FISH, ResourceType.WATER), 0.5),
    TerrainType.BEACH: SpawnRule((ResourceType.STONE,), 0.2),
    TerrainType.GRASSLAND: SpawnRule((ResourceType.FERTILE_SOIL, ResourceType.GAME, ResourceType.STONE), 0.6),
    TerrainType.FOREST: SpawnRule((ResourceType.WOOD, ResourceType.GAME, ResourceType.FERTILE_SOIL), 0.7),
    TerrainType.JUNGLE: SpawnRule((ResourceType.WOOD, ResourceType.GAME, ResourceType.GOLD), 0.65),
    TerrainType.DESERT: SpawnRule((ResourceType.OIL, ResourceType.STONE), 0.3),
    TerrainType.TUNDRA: SpawnRule((ResourceType.GAME, ResourceType.IRON), 0.35),
    TerrainType.MOUNTAIN: SpawnRule((ResourceType.STONE, ResourceType.IRON, ResourceType.GOLD, ResourceType.COAL), 0.8),
    TerrainType.SNOW: SpawnRule((ResourceType.WATER,), 0.2),
})

RESOURCE_PROPERTIES = MappingProxyType({
    ResourceType.WATER: ResourceProperties(1000, 0.0, (ResourceAttribute("hydration", 1.0),)),
    ResourceType.WOOD: ResourceProperties(500, 0.5, (ResourceAttribute("energy", 0.8), ResourceAttribute("construction", 1.0))),
    ResourceType.STONE: ResourceProperties(800, 0.0, (ResourceAttribute("construction", 1.2),)),
    ResourceType.IRON: ResourceProperties(300, 0.0, (ResourceAttribute("tools", 1.0), ResourceAttribute("construction", 0.9))),
    ResourceType.GOLD: ResourceProperties(150, 0.0, (ResourceAttribute("wealth", 1.0),)),
    ResourceType.OIL: ResourceProperties(400, 0.0, (ResourceAttribute("energy", 1.5),)),
    ResourceType.COAL: ResourceProperties(600, 0.0, (ResourceAttribute("energy", 1.2),)),
    ResourceType.FERTILE_SOIL: ResourceProperties(100, 0.2, (ResourceAttribute("food", 1.0),)),
    ResourceType.FISH: ResourceProperties(300, 0.3, (ResourceAttribute("food", 0.9),)),
    ResourceType.GAME: ResourceProperties(200, 0.4, (ResourceAttribute("food", 1.2),)),
})

BONUS_WATER_TERRAINS = frozenset({TerrainType.GRASSLAND, TerrainType.FOREST})


def magnitude_multiplier(richness: float) -> float:
    """0.5x capacity at richness 0, 1.5x at richness 1."""
    span = DEFAULTS.MAX_RICHNESS_MULTIPLIER - DEFAULTS.MIN_RICHNESS_MULTIPLIER
    return DEFAULTS.MIN_RICHNESS_MULTIPLIER + richness * span


def probability_multiplier(richness: float) -> float:
    """0 at richness 0 (nothing spawns), 2 at richness 1."""
    cap = DEFAULTS.MAX_PROBABILITY_MULTIPLIER
    return min(cap, max(0.0, richness * cap))


def create_resource(resource_type: ResourceType, rng: SeededRandom,
                    richness: float = DEFAULTS.DEFAULT_RESOURCE_RICHNESS) -> Resource:
    props = RESOURCE_PROPERTIES[resource_type]
    multiplier = magnitude_multiplier(richness)
    low, high = DEFAULTS.INITIAL_FILL_RANGE
    maximum = props.max * multiplier
    initial = rng.random_float(low, high) * maximum
    return Resource(
        type=resource_type,
        current=min(initial, maximum),
        maximum=maximum,
        change_rate=props.change_rate,
        attributes=list(props.attributes),
    )


def _resource_count(rng: SeededRandom, multiplier: float) -> int:
    # 2 needs the first flip, 3 needs both.
    if not rng.chance(DEFAULTS.MULTI_RESOURCE_CHANCE * multiplier):
        return 1
    if rng.chance(DEFAULTS.TRIPLE_RESOURCE_CHANCE * multiplier):
        return 3
    return 2


def place_resources(parcels: list[Parcel], rng: SeededRandom,
                    richness: float = DEFAULTS.DEFAULT_RESOURCE_RICHNESS):
    """Stocks every parcel according to its terrain rule."""
    multiplier = probability_multiplier(richness)

    for parcel in parcels:
        rule = RESOURCE_RULES[parcel.terrain]
        if not rng.chance(min(1.0, rule.probability * multiplier)):
            continue

        count = _resource_count(rng, multiplier)
        available = rng.shuffle(list(rule.types))

        placed = set()
        for resource_type in available[:count]:
            if resource_type in placed:
                continue
            parcel.resources.append(create_resource(resource_type, rng, richness))
            placed.add(resource_type)

        if (
            parcel.terrain in BONUS_WATER_TERRAINS
            and parcel.moisture > DEFAULTS.BONUS_WATER_MIN_MOISTURE
            and rng.chance(DEFAULTS.BONUS_WATER_CHANCE * multiplier)
            and ResourceType.WATER not in placed
        ):
            parcel.resources.append(create_resource(ResourceType.WATER, rng, richness))
