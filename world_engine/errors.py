# world_engine/errors.py

"""Exception types raised by the world engine."""


class WorldEngineError(Exception):
    """Base class for every error raised by this package."""


class GenerationError(WorldEngineError):
    """World generation could not produce a map."""


class InvalidConfigurationError(GenerationError):
    """A MapConfig value is out of range. Raised before any RNG consumption."""


class InsufficientPointsError(GenerationError):
    """A Voronoi tessellation was requested with fewer than 3 sites."""


class SimulationError(WorldEngineError):
    """A simulation tick hit non-finite data."""


class MapFormatError(WorldEngineError):
    """A persisted map document is malformed."""
