"""
Type definitions for gesture-driven voxel drawing.
"""
from dataclasses import dataclass
from enum import Enum
from typing import (
    Optional, Protocol, Sequence, Tuple, Union, runtime_checkable,
)

import numpy as np


Landmark = Tuple[float, float, float]

# 21 (x, y, z) points, or an array of shape (21, 3)
LandmarkFrame = Union[Sequence[Landmark], np.ndarray]

FrameSize = Tuple[int, int]  # (width, height) in pixels


class Gesture(str, Enum):
    """Gesture labels produced by the classifier."""
    FIST = "fist"
    POINT = "point"
    OPEN = "open"
    THUMBS_UP = "thumbs_up"
    PARTIAL = "partial"


class Digit(str, Enum):
    """The five digits of a hand."""
    THUMB = "thumb"
    INDEX = "index"
    MIDDLE = "middle"
    RING = "ring"
    PINKY = "pinky"


class GateDecision(str, Enum):
    """Outcome of passing a gesture through the action gate."""
    ADMITTED = "admitted"      # action fires
    DROPPED = "dropped"        # different gesture inside the gesture window
    COOLDOWN = "cooldown"      # same gesture, interval not yet elapsed
    LABEL_ONLY = "label_only"  # gesture never triggers an action


class DuplicatePolicy(str, Enum):
    """What adding a voxel at an occupied coordinate does."""
    APPEND = "append"
    OVERWRITE = "overwrite"


class OutOfRangePolicy(str, Enum):
    """What the mapper does with coordinates outside the grid."""
    CLAMP = "clamp"
    REJECT = "reject"


@dataclass(frozen=True)
class VoxelCoord:
    """Integer cell position inside the voxel grid."""
    x: int
    y: int
    z: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class VoxelCell:
    """A colored voxel. Color is an opaque display string, e.g. "hsl(90, 70%, 50%)"."""
    coord: VoxelCoord
    color: str

    def with_color(self, color: str) -> "VoxelCell":
        return VoxelCell(coord=self.coord, color=color)


@dataclass(frozen=True)
class GateState:
    """Action gate memory. Timestamps are in milliseconds."""
    last_gesture: Optional[Gesture] = None
    last_gesture_time_ms: float = float("-inf")
    last_voxel_time_ms: float = float("-inf")


@dataclass
class FrameResult:
    """Everything the overlay and renderer need after one processed frame."""
    gesture: Gesture
    decision: GateDecision
    status: str
    voxels: Tuple[VoxelCell, ...]
    grid_size: int
    changed: bool  # store was mutated during this frame


@runtime_checkable
class LandmarkSource(Protocol):
    """Producer of landmark frames for at most one hand."""

    def poll(self) -> Optional[Tuple[LandmarkFrame, FrameSize]]:
        """Return (frame, (width, height)) when a hand is ready, else None."""
        ...


@runtime_checkable
class RendererProto(Protocol):
    """Abstract protocol for renderers that display the voxel grid."""

    async def render(self, voxels: Tuple[VoxelCell, ...], grid_size: int) -> None:
        """Display the given snapshot of voxels."""
        ...
