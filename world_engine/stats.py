# world_engine/stats.py

"""Summary statistics over a WorldMap, used for logging and reporting."""

import collections

from .models import WorldMap


def terrain_distribution(world: WorldMap) -> dict[str, int]:
    """Parcel count per terrain type, most common first."""
    counts = collections.Counter(parcel.terrain.value for parcel in world.parcels)
    return dict(counts.most_common())


def resource_totals(world: WorldMap) -> dict[str, dict[str, float]]:
    """Per resource type: number of instances, summed current and summed maximum."""
    totals: dict[str, dict[str, float]] = {}
    for parcel in world.parcels:
        for resource in parcel.resources:
            entry = totals.setdefault(resource.type.value, {"count": 0, "current": 0.0, "maximum": 0.0})
            entry["count"] += 1
            entry["current"] += resource.current
            entry["maximum"] += resource.maximum
    return dict(sorted(totals.items()))


def summarize(world: WorldMap) -> dict:
    return {
        "parcels": len(world.parcels),
        "boundaries": len(world.boundaries),
        "parcels_with_resources": sum(1 for p in world.parcels if p.resources),
        "terrain": terrain_distribution(world),
        "resources": resource_totals(world),
    }
