"""
Custom exceptions for the air voxel system.
"""


class AirVoxelError(Exception):
    """Base exception for air voxel errors."""
    pass


class MalformedFrameError(AirVoxelError, ValueError):
    """Raised when a landmark frame is not 21 numeric (x, y, z) points."""
    pass


class ConfigError(AirVoxelError):
    """Raised when a configuration value is invalid."""
    pass
