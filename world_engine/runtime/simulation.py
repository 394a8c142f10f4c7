# world_engine/runtime/simulation.py

"""
================================================================================
SIMULATION RUNTIME
================================================================================
This module provides the user-facing `Simulation` class, the primary
interface for running a generated or loaded world over time. It composes
the ResourceSimulator and the StateDifferencer so that every tick yields
exactly the parcels that changed since the previous one.

Ticks must be serialized by the caller: a tick runs the simulator to
completion and then the differencer, which re-baselines before returning.
================================================================================
"""

import logging

from .. import config as DEFAULTS
from ..models import ParcelDelta, WorldMap
from .differencer import StateDifferencer
from .simulator import ResourceSimulator, simulate_world


class Simulation:
    """
    Owns the runtime state for one WorldMap. The map itself stays owned by
    the caller; replacing it means building a new Simulation.
    """
    def __init__(self, world: WorldMap, speed: float = DEFAULTS.DEFAULT_SIMULATION_SPEED):
        """
        Args:
            world (WorldMap): The map to simulate. It is mutated in place.
            speed (float): Initial time multiplier.
        """
        self.logger = logging.getLogger(__name__)
        self.world = world

        # --- Compose runtime components ---
        self.simulator = ResourceSimulator(world, speed)
        self.differencer = StateDifferencer(world)

        self.logger.info(
            f"Simulation ready: {len(world.parcels)} parcels, {len(world.boundaries)} boundaries."
        )

    def tick(self, real_delta_time: float) -> list[ParcelDelta]:
        """
        Advances the simulation by `real_delta_time` real seconds and returns
        the parcels whose resources changed. Returns [] while stopped.
        """
        if not self.simulator.tick(real_delta_time):
            return []
        deltas = self.differencer.diff(self.world)
        self.logger.debug(f"Tick {self.simulator.ticks_elapsed}: {len(deltas)} parcels changed.")
        return deltas

    # --- Public API for User Control ---
    def start(self):
        self.simulator.start()

    def stop(self):
        self.simulator.stop()

    def is_running(self) -> bool:
        return self.simulator.is_running()

    def set_speed(self, new_speed: float):
        self.simulator.set_speed(new_speed)

    @property
    def speed(self) -> float:
        return self.simulator.speed


def advance(world: WorldMap, delta_time: float, differencer: StateDifferencer = None) -> list[int]:
    """
    Advances `world` by `delta_time` game seconds and returns the ids of the
    parcels that changed.

    Pass the same differencer on every call to diff tick against tick. Without
    one, a fresh snapshot of the world is taken just before the update.
    """
    if differencer is None:
        differencer = StateDifferencer(world)
    simulate_world(world, delta_time)
    return [delta.id for delta in differencer.diff(world)]
