"""
Projection of the index fingertip into voxel grid coordinates, plus voxel colors.
"""
import logging
import math
import random
from typing import Optional, Union

from .landmarks import INDEX_TIP, as_frame
from .types import FrameSize, LandmarkFrame, OutOfRangePolicy, VoxelCoord

logger = logging.getLogger(__name__)


def map_to_voxel(landmarks: LandmarkFrame, frame_wh: FrameSize, grid_size: int = 40,
                 out_of_range: Union[OutOfRangePolicy, str] = OutOfRangePolicy.CLAMP
                 ) -> Optional[VoxelCoord]:
    """
    Map the index fingertip onto the voxel grid.

    x and y are normalized image coordinates scaled by the grid size; z is
    assumed to lie roughly in [-1, 1] and is shifted onto [0, grid_size).

    Args:
        landmarks: 21 (x, y, z) hand landmarks
        frame_wh: Frame dimensions (width, height)
        grid_size: Number of cells along each axis
        out_of_range: CLAMP to pull each axis into the grid, REJECT to return None

    Returns:
        VoxelCoord, or None if rejected as out of range
    """
    frame = as_frame(landmarks)
    x, y, z = frame[INDEX_TIP]

    frame_width, frame_height = frame_wh
    logger.debug("Index tip at (%.0f, %.0f)px z=%.3f", x * frame_width, y * frame_height, z)

    vx = math.floor(x * grid_size)
    vy = math.floor(y * grid_size)
    vz = math.floor((z + 1) * grid_size / 2)

    in_range = all(0 <= v < grid_size for v in (vx, vy, vz))
    if in_range:
        return VoxelCoord(vx, vy, vz)

    if OutOfRangePolicy(out_of_range) is OutOfRangePolicy.REJECT:
        logger.debug("Rejected out-of-grid voxel (%d, %d, %d)", vx, vy, vz)
        return None

    return VoxelCoord(_clamp(vx, grid_size), _clamp(vy, grid_size), _clamp(vz, grid_size))


def _clamp(value: int, grid_size: int) -> int:
    return max(0, min(grid_size - 1, value))


def hsl(hue: float, saturation: int = 70, lightness: int = 50) -> str:
    """CSS-style color string."""
    return f"hsl({hue:g}, {saturation}%, {lightness}%)"


def point_color(voxel_x: int, grid_size: int = 40, saturation: int = 70,
                lightness: int = 50) -> str:
    """Color of a point-drawn voxel; hue sweeps across the grid's x axis."""
    return hsl(voxel_x / grid_size * 360, saturation, lightness)


def random_color(rng: random.Random, saturation: int = 70, lightness: int = 50) -> str:
    return hsl(rng.randrange(360), saturation, lightness)


def random_coord(rng: random.Random, grid_size: int = 40) -> VoxelCoord:
    return VoxelCoord(rng.randrange(grid_size), rng.randrange(grid_size), rng.randrange(grid_size))
