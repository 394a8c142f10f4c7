# tests/test_terrain.py
import numpy as np
import pytest

from world_engine import config as DEFAULTS
from world_engine.models import Dimensions, Parcel, Point, TerrainType
from world_engine.rng import SeededRandom
from world_engine.terrain import compute_climate, determine_terrain_type, generate_terrain, latitude_of


@pytest.mark.parametrize("elevation, moisture, temperature, expected", [
    (0.20, 0.5, 0.5, TerrainType.OCEAN),
    (0.33, 0.5, 0.5, TerrainType.SHALLOW_WATER),
    (0.36, 0.5, 0.5, TerrainType.BEACH),
    (0.80, 0.5, 0.8, TerrainType.MOUNTAIN),
    (0.80, 0.5, 0.2, TerrainType.SNOW),
    (0.50, 0.5, 0.2, TerrainType.TUNDRA),
    (0.50, 0.2, 0.8, TerrainType.DESERT),
    (0.50, 0.7, 0.8, TerrainType.JUNGLE),
    (0.50, 0.6, 0.5, TerrainType.FOREST),
    (0.50, 0.4, 0.5, TerrainType.GRASSLAND),
])
def test_decision_list(elevation, moisture, temperature, expected):
    assert determine_terrain_type(elevation, moisture, temperature, water_level=0.35) is expected


def test_polar_latitude_overrides_everything():
    assert determine_terrain_type(0.2, 1.0, 0.9, water_level=0.35, latitude=0.9) is TerrainType.SNOW
    assert determine_terrain_type(0.5, 0.4, 0.5, water_level=0.35, latitude=0.9) is TerrainType.SNOW


def test_ice_caps_can_be_disabled():
    terrain = determine_terrain_type(0.5, 0.4, 0.5, water_level=0.35, polar_ice_caps=False, latitude=0.9)
    assert terrain is TerrainType.GRASSLAND


def test_water_level_moves_the_coast():
    assert determine_terrain_type(0.5, 0.4, 0.5, water_level=0.6) is TerrainType.OCEAN
    assert determine_terrain_type(0.5, 0.4, 0.5, water_level=0.1) is TerrainType.GRASSLAND


def test_boundaries_are_exclusive_on_the_low_side():
    # Exactly at the water line is no longer water.
    assert determine_terrain_type(0.35, 0.5, 0.5, water_level=0.35) is TerrainType.BEACH
    # Exactly at the mountain line is not a mountain.
    assert determine_terrain_type(0.75, 0.4, 0.5, water_level=0.35) is TerrainType.GRASSLAND


def test_custom_thresholds():
    thresholds = dict(DEFAULTS.TERRAIN_THRESHOLDS, forest_min_moisture=0.3)
    assert determine_terrain_type(0.5, 0.4, 0.5, water_level=0.35, thresholds=thresholds) is TerrainType.FOREST


def test_latitude_of():
    assert latitude_of(50.0, 100.0) == pytest.approx(0.0)
    assert latitude_of(0.0, 100.0) == pytest.approx(1.0)
    assert latitude_of(100.0, 100.0) == pytest.approx(1.0)
    assert latitude_of(np.array([25.0, 75.0]), 100.0) == pytest.approx([0.5, 0.5])


def test_climate_values_in_unit_interval():
    sample = np.random.default_rng(3)
    x = sample.uniform(0, 1200, 500)
    y = sample.uniform(0, 800, 500)
    elevation, moisture, temperature, latitude = compute_climate(x, y, 800.0, SeededRandom(42), 0.35)
    for values in (elevation, moisture, temperature, latitude):
        assert values.shape == (500,)
        assert values.min() >= 0.0
        assert values.max() <= 1.0


def test_water_is_saturated():
    sample = np.random.default_rng(4)
    x = sample.uniform(0, 1200, 500)
    y = sample.uniform(0, 800, 500)
    elevation, moisture, _, _ = compute_climate(x, y, 800.0, SeededRandom(9), 0.35)
    assert np.all(moisture[elevation < 0.35] == 1.0)


def test_climate_is_deterministic():
    x = np.array([10.0, 300.0, 900.0])
    y = np.array([40.0, 400.0, 700.0])
    a = compute_climate(x, y, 800.0, SeededRandom(42), 0.35)
    b = compute_climate(x, y, 800.0, SeededRandom(42), 0.35)
    for left, right in zip(a, b):
        assert np.array_equal(left, right)


def test_generate_terrain_sets_every_parcel():
    parcels = [
        Parcel(id=i, vertices=[], center=Point(40.0 * i + 5, 30.0 * i + 5))
        for i in range(10)
    ]
    generate_terrain(parcels, Dimensions(400, 300), SeededRandom(1), ocean_proportion=0.35)
    for parcel in parcels:
        assert 0.0 <= parcel.elevation <= 1.0
        assert 0.0 <= parcel.moisture <= 1.0
        assert 0.0 <= parcel.temperature <= 1.0
        assert isinstance(parcel.terrain, TerrainType)


def test_generate_terrain_with_no_parcels_is_a_noop():
    rng = SeededRandom(1)
    generate_terrain([], Dimensions(10, 10), rng)
    assert rng.random() == SeededRandom(1).random()
