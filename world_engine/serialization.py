# world_engine/serialization.py

"""
================================================================================
WORLD MAP PERSISTENCE FORMAT
================================================================================
Converts a WorldMap to and from its persisted JSON document:

    {"parcels": [...], "boundaries": [...], "width": w, "height": h,
     "lastUpdate": ms}

Keys inside the document are camelCase (changeRate, parcel1, lastUpdate).
Resource order within a parcel is preserved, which keeps diffing stable.

Data Contract:
---------------
- world_to_dict / world_from_dict: in-memory conversion.
- dumps / loads: JSON text.
- save_world / load_world / list_maps: JSON files on disk.
- Invariant: world_from_dict(world_to_dict(m)) == m, field for field.
- Errors: malformed documents raise MapFormatError.
================================================================================
"""

import json
import logging
import math
import os

from .errors import MapFormatError
from .models import Boundary, Parcel, Point, Resource, ResourceAttribute, ResourceType, TerrainType, WorldMap

logger = logging.getLogger(__name__)


def _point_to_dict(point: Point) -> dict:
    return {"x": point.x, "y": point.y}


def _resource_to_dict(resource: Resource) -> dict:
    return {
        "type": resource.type.value,
        "current": resource.current,
        "maximum": resource.maximum,
        "changeRate": resource.change_rate,
        "attributes": [{"name": a.name, "efficiency": a.efficiency} for a in resource.attributes],
    }


def _parcel_to_dict(parcel: Parcel) -> dict:
    return {
        "id": parcel.id,
        "vertices": [_point_to_dict(v) for v in parcel.vertices],
        "center": _point_to_dict(parcel.center),
        "terrain": parcel.terrain.value,
        "resources": [_resource_to_dict(r) for r in parcel.resources],
        "neighbors": list(parcel.neighbors),
        "elevation": parcel.elevation,
        "moisture": parcel.moisture,
        "temperature": parcel.temperature,
    }


def _boundary_to_dict(boundary: Boundary) -> dict:
    return {
        "parcel1": boundary.parcel1,
        "parcel2": boundary.parcel2,
        "edge": [_point_to_dict(p) for p in boundary.edge],
        "resources": [_resource_to_dict(r) for r in boundary.resources],
    }


def world_to_dict(world: WorldMap) -> dict:
    return {
        "parcels": [_parcel_to_dict(p) for p in world.parcels],
        "boundaries": [_boundary_to_dict(b) for b in world.boundaries],
        "width": world.width,
        "height": world.height,
        "lastUpdate": world.last_update,
    }


def _number(data: dict, key: str, default=None) -> float:
    """Reads a numeric field, rejecting NaN and infinities."""
    value = data[key] if default is None else data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"'{key}' must be finite, got {value!r}")
    return value


def _point_from_dict(data: dict) -> Point:
    return Point(_number(data, "x"), _number(data, "y"))


def _resource_from_dict(data: dict) -> Resource:
    return Resource(
        type=ResourceType(data["type"]),
        current=_number(data, "current"),
        maximum=_number(data, "maximum"),
        change_rate=_number(data, "changeRate"),
        attributes=[ResourceAttribute(a["name"], a["efficiency"]) for a in data.get("attributes", [])],
    )


def _parcel_from_dict(data: dict) -> Parcel:
    return Parcel(
        id=data["id"],
        vertices=[_point_from_dict(v) for v in data["vertices"]],
        center=_point_from_dict(data["center"]),
        terrain=TerrainType(data["terrain"]),
        resources=[_resource_from_dict(r) for r in data.get("resources", [])],
        neighbors=list(data.get("neighbors", [])),
        elevation=_number(data, "elevation", 0.0),
        moisture=_number(data, "moisture", 0.0),
        temperature=_number(data, "temperature", 0.0),
    )


def _boundary_from_dict(data: dict) -> Boundary:
    return Boundary(
        parcel1=data["parcel1"],
        parcel2=data["parcel2"],
        edge=[_point_from_dict(p) for p in data.get("edge", [])],
        resources=[_resource_from_dict(r) for r in data.get("resources", [])],
    )


def world_from_dict(data: dict) -> WorldMap:
    """Rebuilds a WorldMap. Raises MapFormatError on missing fields, unknown types or non-finite numbers."""
    try:
        return WorldMap(
            parcels=[_parcel_from_dict(p) for p in data["parcels"]],
            boundaries=[_boundary_from_dict(b) for b in data.get("boundaries", [])],
            width=_number(data, "width"),
            height=_number(data, "height"),
            last_update=data.get("lastUpdate", 0),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MapFormatError(f"Invalid world map document: {e}") from e


def dumps(world: WorldMap, indent: int = None) -> str:
    return json.dumps(world_to_dict(world), indent=indent)


def loads(text: str) -> WorldMap:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MapFormatError(f"World map is not valid JSON: {e}") from e
    return world_from_dict(data)


def save_world(world: WorldMap, path: str):
    """Writes the map as indented JSON, creating parent directories as needed."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dumps(world, indent=2))
    logger.info(f"Saved world map ({len(world.parcels)} parcels) to '{path}'")


def load_world(path: str) -> WorldMap:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Map file not found: '{path}'")
    with open(path, 'r', encoding='utf-8') as f:
        world = loads(f.read())
    logger.info(f"Loaded world map ({len(world.parcels)} parcels) from '{path}'")
    return world


def list_maps(directory: str) -> list[str]:
    """Sorted names of the .json files in `directory`; empty if it does not exist."""
    if not os.path.isdir(directory):
        return []
    return sorted(name for name in os.listdir(directory) if name.endswith('.json'))
