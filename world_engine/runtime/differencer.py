# world_engine/runtime/differencer.py

"""
================================================================================
STATE DIFFERENCER
================================================================================
Detects which parcels' resources changed between two successive ticks so
that only those parcels need to be pushed to subscribers.

The snapshot stores plain values, never references to the live Resource
objects, so in-place mutation by the simulator is always detected.

Data Contract:
---------------
- snapshot(world): Replaces the stored baseline with the world's current state.
- diff(world): Returns ParcelDeltas for parcels that differ from the
  baseline, then re-baselines on the current state.
- Invariant: Each diff compares against the immediately preceding call,
  never against the original baseline.
================================================================================
"""

from dataclasses import replace

from ..models import ParcelDelta, Resource, WorldMap

ResourceKey = tuple[float, float, float]


def _resource_keys(resources: list[Resource]) -> tuple[ResourceKey, ...]:
    return tuple((r.current, r.maximum, r.change_rate) for r in resources)


class StateDifferencer:
    """Keeps the previous tick's resource values per parcel id."""

    def __init__(self, world: WorldMap = None):
        self._previous: dict[int, tuple[ResourceKey, ...]] = {}
        if world is not None:
            self.snapshot(world)

    def snapshot(self, world: WorldMap):
        self._previous = {parcel.id: _resource_keys(parcel.resources) for parcel in world.parcels}

    def clear(self):
        self._previous = {}

    def diff(self, world: WorldMap) -> list[ParcelDelta]:
        deltas = []
        for parcel in world.parcels:
            current = _resource_keys(parcel.resources)
            previous = self._previous.get(parcel.id)
            # A parcel missing from the snapshot should not happen in normal
            # operation, but it is reported rather than rejected.
            if previous is None or previous != current:
                deltas.append(ParcelDelta(
                    id=parcel.id,
                    resources=[replace(r, attributes=list(r.attributes)) for r in parcel.resources],
                ))

        self.snapshot(world)
        return deltas
