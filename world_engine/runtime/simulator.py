# world_engine/runtime/simulator.py

"""
================================================================================
RESOURCE SIMULATOR
================================================================================
This module advances resource quantities over time. It is a small state
machine (Stopped / Running) whose ticks are driven by an external
scheduler; it never owns a timer or a thread of its own.

Data Contract:
---------------
- Inputs (on initialization):
    - world (WorldMap): The map to mutate in place.
    - speed (float): Time multiplier in [0.1, 10].
- Public Methods:
    - start(), stop(), is_running(), set_speed(new_speed)
    - tick(real_delta_time): Advances resources if running.
- Side Effects: Mutates resources and `last_update` on the world.
- Invariants: Every resource stays within [0, maximum]. Updates are purely
  local per resource, so parcel order does not matter. A step that hits a
  non-finite value raises SimulationError before mutating anything.
================================================================================
"""

import logging
import math
from enum import Enum
from typing import Iterable

from .. import config as DEFAULTS
from ..errors import SimulationError
from ..models import Resource, WorldMap

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


def check_resources(resources: Iterable[Resource]):
    """Raises SimulationError if any resource holds a non-finite value."""
    for resource in resources:
        for name in ('current', 'maximum', 'change_rate'):
            value = getattr(resource, name)
            if not math.isfinite(value):
                raise SimulationError(
                    f"Non-finite {name} {value!r} on resource '{resource.type.value}'"
                )


def update_resources(resources: Iterable[Resource], delta_time: float):
    """Applies each resource's change rate for `delta_time` and clamps the result."""
    resources = list(resources)
    check_resources(resources)
    for resource in resources:
        updated = resource.current + resource.change_rate * delta_time
        resource.current = max(0.0, min(resource.maximum, updated))


def simulate_world(world: WorldMap, delta_time: float):
    """
    One simulation step of `delta_time` game seconds over every parcel and
    boundary. The whole world is checked before anything is mutated, so a
    failing step leaves the map untouched.
    """
    if not math.isfinite(delta_time):
        raise SimulationError(f"Non-finite delta time {delta_time!r}")

    groups = [parcel.resources for parcel in world.parcels]
    groups += [boundary.resources for boundary in world.boundaries]
    for resources in groups:
        check_resources(resources)

    for resources in groups:
        update_resources(resources, delta_time)

    world.touch()


class ResourceSimulator:
    """Manages the passage of time for one WorldMap."""

    def __init__(self, world: WorldMap, speed: float = DEFAULTS.DEFAULT_SIMULATION_SPEED):
        self.world = world
        self.state = SimulationState.STOPPED
        self.speed = DEFAULTS.DEFAULT_SIMULATION_SPEED
        self.set_speed(speed)
        self.ticks_elapsed = 0
        self.game_seconds_elapsed = 0.0

    def start(self):
        if self.state is SimulationState.RUNNING:
            logger.info("Simulation already running.")
            return
        self.state = SimulationState.RUNNING
        logger.info(f"Simulation started at speed {self.speed}x.")

    def stop(self):
        if self.state is SimulationState.STOPPED:
            logger.info("Simulation not running.")
            return
        self.state = SimulationState.STOPPED
        logger.info("Simulation stopped.")

    def is_running(self) -> bool:
        return self.state is SimulationState.RUNNING

    def set_speed(self, new_speed: float):
        """
        Sets the speed of in-game time.
        1 = real-time, > 1 = fast-forward. Stop the simulator to pause it.
        """
        if not DEFAULTS.MIN_SIMULATION_SPEED <= new_speed <= DEFAULTS.MAX_SIMULATION_SPEED:
            raise ValueError(
                f"Speed must be between {DEFAULTS.MIN_SIMULATION_SPEED} and "
                f"{DEFAULTS.MAX_SIMULATION_SPEED}, got {new_speed}"
            )
        self.speed = new_speed
        logger.debug(f"Simulation speed set to {new_speed}x.")

    def tick(self, real_delta_time: float) -> bool:
        """
        Advances the world by a given amount of real-world time.

        Args:
            real_delta_time (float): The time elapsed in the real world, in seconds.

        Returns:
            bool: True if the world was updated, False if the simulator is stopped.
        """
        if not self.is_running():
            return False

        game_delta_time = real_delta_time * self.speed
        simulate_world(self.world, game_delta_time)
        self.ticks_elapsed += 1
        self.game_seconds_elapsed += game_delta_time
        return True
