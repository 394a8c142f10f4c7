# tests/conftest.py
import pytest

from world_engine import generate
from world_engine.models import Boundary, Parcel, Point, Resource, ResourceType, TerrainType, WorldMap


SMALL_CONFIG = {
    "width": 400,
    "height": 300,
    "num_parcels": 60,
    "seed": 42,
}


@pytest.fixture
def small_config():
    return dict(SMALL_CONFIG)


@pytest.fixture(scope="session")
def small_world():
    """Generated once per session. Tests must not mutate it."""
    return generate(SMALL_CONFIG)


def make_resource(current=10.0, maximum=100.0, change_rate=0.0, resource_type=ResourceType.WOOD):
    return Resource(type=resource_type, current=current, maximum=maximum, change_rate=change_rate)


@pytest.fixture
def tiny_world():
    """
    Three hand-built parcels in a row:
        0 - growing wood, 1 - static stone, 2 - no resources
    """
    parcels = [
        Parcel(
            id=0,
            vertices=[Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)],
            center=Point(5, 5),
            terrain=TerrainType.FOREST,
            resources=[make_resource(current=10.0, change_rate=1.0)],
            neighbors=[1],
        ),
        Parcel(
            id=1,
            vertices=[Point(10, 0), Point(20, 0), Point(20, 10), Point(10, 10)],
            center=Point(15, 5),
            terrain=TerrainType.MOUNTAIN,
            resources=[make_resource(current=50.0, maximum=800.0, resource_type=ResourceType.STONE)],
            neighbors=[0, 2],
        ),
        Parcel(
            id=2,
            vertices=[Point(20, 0), Point(30, 0), Point(30, 10), Point(20, 10)],
            center=Point(25, 5),
            terrain=TerrainType.DESERT,
            neighbors=[1],
        ),
    ]
    boundaries = [
        Boundary(parcel1=0, parcel2=1, edge=[Point(10, 0), Point(10, 10)]),
        Boundary(parcel1=1, parcel2=2, edge=[Point(20, 0), Point(20, 10)]),
    ]
    return WorldMap(parcels=parcels, boundaries=boundaries, width=30, height=10, last_update=0)
