# world_engine/terrain.py

"""
================================================================================
TERRAIN & CLIMATE CLASSIFICATION
================================================================================
Derives elevation, moisture and temperature for every parcel from three
independent noise fields, then maps them to a TerrainType with an ordered
decision list.

Data Contract:
---------------
- Inputs:
    - parcels: Parcels with their `center` set.
    - dimensions, rng, ocean_proportion, polar_ice_caps.
- Outputs: None. Parcels are updated in place.
- Side Effects: Consumes the RNG to build three noise permutation tables.
- Invariants: elevation, moisture and temperature are all in [0, 1].
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from .models import Dimensions, Parcel, TerrainType
from .noise import NoiseField
from .rng import SeededRandom


def determine_terrain_type(
    elevation: float,
    moisture: float,
    temperature: float,
    water_level: float = DEFAULTS.DEFAULT_OCEAN_PROPORTION,
    polar_ice_caps: bool = DEFAULTS.DEFAULT_POLAR_ICE_CAPS,
    latitude: float = 0.0,
    thresholds: dict = None,
) -> TerrainType:
    """
    First match wins. The order of these checks is part of the contract;
    reordering changes the result for boundary cases.
    """
    t = thresholds or DEFAULTS.TERRAIN_THRESHOLDS

    if polar_ice_caps and latitude > t["polar_latitude"]:
        return TerrainType.SNOW
    if elevation < water_level - t["deep_water_offset"]:
        return TerrainType.OCEAN
    if elevation < water_level:
        return TerrainType.SHALLOW_WATER
    if elevation < water_level + t["beach_offset"]:
        return TerrainType.BEACH
    if elevation > t["mountain_elevation"]:
        if temperature < t["snow_peak_max_temp"]:
            return TerrainType.SNOW
        return TerrainType.MOUNTAIN
    if temperature < t["tundra_max_temp"]:
        return TerrainType.TUNDRA
    if temperature > t["desert_min_temp"] and moisture < t["desert_max_moisture"]:
        return TerrainType.DESERT
    if temperature > t["jungle_min_temp"] and moisture > t["jungle_min_moisture"]:
        return TerrainType.JUNGLE
    if moisture > t["forest_min_moisture"]:
        return TerrainType.FOREST
    return TerrainType.GRASSLAND


def latitude_of(y, height: float):
    """0 at the equator (mid-height), 1 at either pole."""
    half = height / 2.0
    return np.abs(np.asarray(y, dtype=np.float64) - half) / half


def compute_climate(x: np.ndarray, y: np.ndarray, height: float, rng: SeededRandom,
                    ocean_proportion: float) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Returns (elevation, moisture, temperature, latitude) arrays for the given
    sample coordinates.
    """
    elevation_noise = NoiseField(rng)
    moisture_noise = NoiseField(rng)
    temperature_noise = NoiseField(rng)

    scale = DEFAULTS.TERRAIN_NOISE_SCALE
    latitude = latitude_of(y, height)

    # 1. Elevation: fractal noise, lowered toward the poles, shifted so the
    #    share of water roughly follows the requested ocean proportion.
    elevation = elevation_noise.octave_noise(x * scale, y * scale, DEFAULTS.ELEVATION_OCTAVES)
    elevation = elevation * (1.0 - latitude * DEFAULTS.POLAR_ELEVATION_REDUCTION)
    elevation = (elevation + 1.0) / 2.0
    ocean_shift = ocean_proportion * DEFAULTS.OCEAN_PROPORTION_SCALE
    elevation = np.clip(elevation * (1.0 - ocean_shift) + ocean_shift, 0.0, 1.0)

    # 2. Moisture: independent noise, saturated below the water line and
    #    boosted along the coast.
    moisture_scale = scale * DEFAULTS.MOISTURE_SCALE_FACTOR
    moisture = moisture_noise.octave_noise(x * moisture_scale, y * moisture_scale, DEFAULTS.MOISTURE_OCTAVES)
    moisture = (moisture + 1.0) / 2.0
    coastal = (elevation >= ocean_proportion) & (elevation < ocean_proportion + DEFAULTS.COASTAL_MOISTURE_BAND)
    moisture = np.where(coastal, np.maximum(moisture, DEFAULTS.COASTAL_MIN_MOISTURE), moisture)
    moisture = np.where(elevation < ocean_proportion, 1.0, moisture)

    # 3. Temperature: warm at the equator, cold at the poles, colder with height.
    temperature_scale = scale * DEFAULTS.TEMPERATURE_SCALE_FACTOR
    temperature = temperature_noise.octave_noise(x * temperature_scale, y * temperature_scale, DEFAULTS.TEMPERATURE_OCTAVES)
    temperature = (
        temperature * (1.0 - latitude * DEFAULTS.LATITUDE_TEMPERATURE_DAMPING)
        + (1.0 - latitude) * DEFAULTS.EQUATOR_TEMPERATURE_BONUS
    )
    temperature -= (elevation - DEFAULTS.ELEVATION_TEMPERATURE_BASELINE) * DEFAULTS.ELEVATION_TEMPERATURE_PENALTY
    temperature = np.clip((temperature + 1.0) / 2.0, 0.0, 1.0)

    return elevation, moisture, temperature, latitude


def generate_terrain(parcels: list[Parcel], dimensions: Dimensions, rng: SeededRandom,
                     ocean_proportion: float = DEFAULTS.DEFAULT_OCEAN_PROPORTION,
                     polar_ice_caps: bool = DEFAULTS.DEFAULT_POLAR_ICE_CAPS):
    """Sets climate values and terrain type on every parcel."""
    if not parcels:
        return

    x = np.array([p.center.x for p in parcels], dtype=np.float64)
    y = np.array([p.center.y for p in parcels], dtype=np.float64)
    elevation, moisture, temperature, latitude = compute_climate(x, y, dimensions.height, rng, ocean_proportion)

    for i, parcel in enumerate(parcels):
        parcel.elevation = float(elevation[i])
        parcel.moisture = float(moisture[i])
        parcel.temperature = float(temperature[i])
        parcel.terrain = determine_terrain_type(
            parcel.elevation, parcel.moisture, parcel.temperature,
            water_level=ocean_proportion,
            polar_ice_caps=polar_ice_caps,
            latitude=float(latitude[i]),
        )
