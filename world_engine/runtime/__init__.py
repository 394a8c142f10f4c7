# world_engine/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# We can also use it to define the public API of the package.

from .differencer import StateDifferencer
from .simulation import Simulation, advance
from .simulator import ResourceSimulator, SimulationState, check_resources, simulate_world, update_resources

__all__ = [
    "Simulation",
    "advance",
    "ResourceSimulator",
    "SimulationState",
    "check_resources",
    "StateDifferencer",
    "simulate_world",
    "update_resources",
]
