# tests/test_stats.py
import pytest

from world_engine.stats import resource_totals, summarize, terrain_distribution


def test_terrain_distribution(tiny_world):
    assert terrain_distribution(tiny_world) == {"forest": 1, "mountain": 1, "desert": 1}


def test_resource_totals(tiny_world):
    totals = resource_totals(tiny_world)
    assert list(totals) == ["stone", "wood"]
    assert totals["wood"] == {"count": 1, "current": 10.0, "maximum": 100.0}


def test_summarize(tiny_world):
    summary = summarize(tiny_world)
    assert summary["parcels"] == 3
    assert summary["boundaries"] == 2
    assert summary["parcels_with_resources"] == 2


def test_summary_of_generated_world(small_world):
    summary = summarize(small_world)
    assert sum(summary["terrain"].values()) == len(small_world.parcels)
    total_current = sum(r.current for p in small_world.parcels for r in p.resources)
    assert sum(e["current"] for e in summary["resources"].values()) == pytest.approx(total_current)
