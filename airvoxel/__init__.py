"""
Air Voxels

Classifies hand landmarks from a pose estimator into gestures and uses them
to draw, clear and recolor voxels in a sparse 3D grid.
"""

__version__ = "0.1.0"

from .types import (
    Gesture, GateDecision, GateState, VoxelCell, VoxelCoord, FrameResult,
    DuplicatePolicy, OutOfRangePolicy, LandmarkSource, RendererProto,
)
from .exceptions import AirVoxelError, MalformedFrameError, ConfigError
from .config import load_config, default_config, Cfg
from .landmarks import distance3, fingers_extended
from .gestures import classify, evaluate_gate, ActionGate
from .voxels import VoxelStore
from .mapping import map_to_voxel, point_color
from .session import VoxelSession
from .renderer_mock import MockRenderer

__all__ = [
    "Gesture",
    "GateDecision",
    "GateState",
    "VoxelCell",
    "VoxelCoord",
    "FrameResult",
    "DuplicatePolicy",
    "OutOfRangePolicy",
    "LandmarkSource",
    "RendererProto",
    "AirVoxelError",
    "MalformedFrameError",
    "ConfigError",
    "load_config",
    "default_config",
    "Cfg",
    "distance3",
    "fingers_extended",
    "classify",
    "evaluate_gate",
    "ActionGate",
    "VoxelStore",
    "map_to_voxel",
    "point_color",
    "VoxelSession",
    "MockRenderer",
]
