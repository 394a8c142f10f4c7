# tests/test_noise.py
import numpy as np
import pytest

from world_engine.noise import NoiseField, build_permutation_table
from world_engine.rng import SeededRandom


def test_permutation_table_is_doubled_shuffle():
    table = build_permutation_table(SeededRandom(42))
    assert table.shape == (512,)
    assert sorted(table[:256].tolist()) == list(range(256))
    assert np.array_equal(table[:256], table[256:])


def test_same_seed_same_noise():
    a = NoiseField(SeededRandom(42))
    b = NoiseField(SeededRandom(42))
    points = [(0.5, 0.5), (1.0, 1.5), (2.5, 3.0)]
    assert [a.noise(x, y) for x, y in points] == [b.noise(x, y) for x, y in points]


def test_different_seeds_give_different_fields():
    a = NoiseField(SeededRandom(42))
    b = NoiseField(SeededRandom(123))
    xs = np.linspace(0.1, 20.0, 50)
    ys = np.linspace(0.3, 15.0, 50)
    assert not np.array_equal(a.octave_noise(xs, ys, 4), b.octave_noise(xs, ys, 4))


def test_scalar_in_scalar_out():
    value = NoiseField(SeededRandom(1)).octave_noise(0.3, 0.7, 3)
    assert isinstance(value, float)


def test_array_shape_preserved():
    field = NoiseField(SeededRandom(1))
    xs = np.random.default_rng(0).uniform(0, 50, size=(4, 5))
    ys = np.random.default_rng(1).uniform(0, 50, size=(4, 5))
    assert field.octave_noise(xs, ys, 2).shape == (4, 5)


@pytest.mark.parametrize("octaves", [1, 3, 6])
def test_octave_noise_stays_in_range(octaves):
    field = NoiseField(SeededRandom(42))
    rng = np.random.default_rng(7)
    xs = rng.uniform(-100, 100, 2000)
    ys = rng.uniform(-100, 100, 2000)
    values = field.octave_noise(xs, ys, octaves, 0.5)
    assert values.min() >= -1.0
    assert values.max() <= 1.0


def test_noise_is_zero_on_lattice_points():
    field = NoiseField(SeededRandom(42))
    assert field.noise(3.0, 7.0) == 0.0


def test_noise_is_continuous():
    field = NoiseField(SeededRandom(42))
    v1 = field.octave_noise(1.23, 4.56, 4)
    v2 = field.octave_noise(1.2301, 4.5601, 4)
    assert abs(v1 - v2) < 0.01


def test_rejects_zero_octaves():
    with pytest.raises(ValueError):
        NoiseField(SeededRandom(1)).octave_noise(0.0, 0.0, 0)


def test_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        NoiseField(SeededRandom(1)).octave_noise(np.zeros(3), np.zeros(4), 1)
