# world_engine/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides coherent 2D Perlin noise for the terrain and climate
layers. The heavy lifting is a Numba-compiled kernel working on flat NumPy
coordinate arrays; NoiseField wraps it with a permutation table drawn from
the generation run's SeededRandom.

Data Contract:
---------------
- Inputs:
    - rng: A SeededRandom used once, at construction, to shuffle the table.
    - x, y: Scalars or NumPy arrays of coordinates (same shape).
    - octaves, persistence: Standard fractal noise parameters.
- Outputs:
    - Noise values in the range [-1, 1], shaped like the inputs.
- Side Effects: None after construction.
- Invariants: The same permutation table always yields the same values.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .rng import SeededRandom

# Pre-defined gradient vectors for performance.
_GRADIENT_VECTORS = np.array([[0, 1], [0, -1], [1, 0], [-1, 0]])

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y):
    """Calculates the dot product between a gradient vector and coordinates."""
    g = _GRADIENT_VECTORS[h % 4]
    return g[0] * x + g[1] * y

@njit
def _perlin_sample(p, x_sample, y_sample):
    """Single-octave Perlin noise at one coordinate."""
    xi = int(np.floor(x_sample))
    yi = int(np.floor(y_sample))

    xf = x_sample - xi
    yf = y_sample - yi

    u = _fade(xf)
    v = _fade(yf)

    px0 = xi % 256
    px1 = (px0 + 1) % 256
    py0 = yi % 256
    py1 = (py0 + 1) % 256

    idx00 = p[p[px0] + py0]
    idx01 = p[p[px0] + py1]
    idx10 = p[p[px1] + py0]
    idx11 = p[p[px1] + py1]

    g00 = _gradient(idx00, xf, yf)
    g01 = _gradient(idx01, xf, yf - 1)
    g10 = _gradient(idx10, xf - 1, yf)
    g11 = _gradient(idx11, xf - 1, yf - 1)

    x1 = _lerp(g00, g10, u)
    x2 = _lerp(g01, g11, u)
    return _lerp(x1, x2, v)

@njit
def perlin_noise_points(p, xs, ys, octaves=1, persistence=0.5, lacunarity=2.0):
    """
    Fractal Perlin noise for a flat list of sample points, normalized by the
    total amplitude so the result stays in [-1, 1].
    This function is JIT-compiled with Numba for maximum performance.
    """
    n = xs.shape[0]
    total_noise = np.zeros(n)

    max_amplitude = 0.0
    amplitude = 1.0
    for _ in range(octaves):
        max_amplitude += amplitude
        amplitude *= persistence

    for i in range(n):
        noise_val = 0.0
        amplitude = 1.0
        frequency = 1.0

        for _ in range(octaves):
            noise_val += _perlin_sample(p, xs[i] * frequency, ys[i] * frequency) * amplitude
            amplitude *= persistence
            frequency *= lacunarity

        total_noise[i] = noise_val / max_amplitude

    return total_noise


def build_permutation_table(rng: SeededRandom) -> np.ndarray:
    """Shuffles 0..255 with the run's RNG and duplicates it for wraparound."""
    p = list(range(DEFAULTS.NOISE_PERMUTATION_SIZE))
    rng.shuffle(p)
    return np.array(p + p, dtype=np.int64)


class NoiseField:
    """A seeded, reproducible source of coherent 2D noise."""

    def __init__(self, rng: SeededRandom):
        self.permutation_table = build_permutation_table(rng)

    def noise(self, x, y):
        """Single-octave noise in [-1, 1]."""
        return self.octave_noise(x, y, octaves=1)

    def octave_noise(self, x, y, octaves: int = 1, persistence: float = DEFAULTS.DEFAULT_NOISE_PERSISTENCE):
        """
        Sums `octaves` layers of noise with doubling frequency and amplitude
        decaying by `persistence`. Scalars in, float out; arrays in, array out.
        """
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")

        x_arr = np.asarray(x, dtype=np.float64)
        y_arr = np.asarray(y, dtype=np.float64)
        if x_arr.shape != y_arr.shape:
            raise ValueError(f"Coordinate shapes differ: {x_arr.shape} vs {y_arr.shape}")

        values = perlin_noise_points(
            self.permutation_table,
            x_arr.ravel(), y_arr.ravel(),
            octaves, float(persistence), DEFAULTS.NOISE_LACUNARITY
        )
        if x_arr.ndim == 0:
            return float(values[0])
        return values.reshape(x_arr.shape)
