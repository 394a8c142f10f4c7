# world_engine/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the world
engine. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC SIMULATION.
Instead, pass a configuration dictionary to the WorldGenerator instance.
================================================================================
"""

# --- Map Layout ---
DEFAULT_SEED = 1337
DEFAULT_WIDTH = 1200.0
DEFAULT_HEIGHT = 800.0
DEFAULT_NUM_PARCELS = 500

# Number of Lloyd relaxation passes applied to the seed points.
DEFAULT_RELAXATION_ITERATIONS = 2

# Fraction of the seed point latitude drawn from the equator-biased
# distribution. 0.0 is uniform, 1.0 is fully biased toward the equator.
DEFAULT_EQUATOR_BIAS = 0.7

# --- Deterministic RNG (Park-Miller minimal standard) ---
RNG_MULTIPLIER = 16807
RNG_MODULUS = 2147483647

# --- Noise Generation ---
NOISE_PERMUTATION_SIZE = 256
DEFAULT_NOISE_PERSISTENCE = 0.5
NOISE_LACUNARITY = 2.0

# Base frequency applied to parcel centers before sampling noise.
TERRAIN_NOISE_SCALE = 0.003
ELEVATION_OCTAVES = 6
MOISTURE_OCTAVES = 4
MOISTURE_SCALE_FACTOR = 1.5
TEMPERATURE_OCTAVES = 3
TEMPERATURE_SCALE_FACTOR = 0.8

# --- Climate Shaping ---
# Reduces elevation near the poles to create more ocean there.
POLAR_ELEVATION_REDUCTION = 0.3
# Controls how much the ocean proportion shifts the elevation distribution.
OCEAN_PROPORTION_SCALE = 0.3
# Land within this elevation band above the water line counts as coastal.
COASTAL_MOISTURE_BAND = 0.1
COASTAL_MIN_MOISTURE = 0.7
# Latitude gradient and lapse rate for the normalized temperature model.
LATITUDE_TEMPERATURE_DAMPING = 0.8
EQUATOR_TEMPERATURE_BONUS = 0.5
ELEVATION_TEMPERATURE_BASELINE = 0.4
ELEVATION_TEMPERATURE_PENALTY = 0.5

# --- Terrain Levels (Normalized 0.0 to 1.0) ---
DEFAULT_OCEAN_PROPORTION = 0.35
DEFAULT_POLAR_ICE_CAPS = True

# A dictionary is used to make it easy to pass this as a single config item.
TERRAIN_THRESHOLDS = {
    "polar_latitude": 0.85,
    "deep_water_offset": 0.05,
    "beach_offset": 0.03,
    "mountain_elevation": 0.75,
    "snow_peak_max_temp": 0.3,
    "tundra_max_temp": 0.25,
    "desert_min_temp": 0.7,
    "desert_max_moisture": 0.3,
    "jungle_min_temp": 0.6,
    "jungle_min_moisture": 0.6,
    "forest_min_moisture": 0.5,
}

# --- Resource Placement ---
DEFAULT_RESOURCE_RICHNESS = 0.5
# Richness can double the base spawn probability.
MAX_PROBABILITY_MULTIPLIER = 2.0
# Capacity and initial amount scale from 0.5x (sparse) to 1.5x (abundant).
MIN_RICHNESS_MULTIPLIER = 0.5
MAX_RICHNESS_MULTIPLIER = 1.5
MULTI_RESOURCE_CHANCE = 0.4
TRIPLE_RESOURCE_CHANCE = 0.1
INITIAL_FILL_RANGE = (0.3, 0.9)
BONUS_WATER_MIN_MOISTURE = 0.7
BONUS_WATER_CHANCE = 0.5

# --- Geometry ---
# Two vertices closer than this (in map units, wrap-aware) are the same point.
VERTEX_COINCIDENCE_THRESHOLD = 1.0

# --- Simulation ---
DEFAULT_SIMULATION_SPEED = 1.0
MIN_SIMULATION_SPEED = 0.1
MAX_SIMULATION_SPEED = 10.0
DEFAULT_TICK_SECONDS = 1.0
