"""
Mock renderer implementation for testing voxel snapshots.
"""
import logging
from typing import Optional, Tuple

from .types import VoxelCell

logger = logging.getLogger(__name__)


class MockRenderer:
    """Mock renderer that logs snapshots instead of drawing them."""

    def __init__(self):
        """Initialize the mock renderer."""
        self.render_count = 0
        self.last_voxels: Optional[Tuple[VoxelCell, ...]] = None
        self.last_grid_size: Optional[int] = None

    async def render(self, voxels: Tuple[VoxelCell, ...], grid_size: int) -> None:
        """Record and log the snapshot instead of drawing it."""
        self.render_count += 1
        self.last_voxels = voxels
        self.last_grid_size = grid_size
        logger.info("[MockRenderer] %d voxels in %d^3 grid (call #%d)",
                    len(voxels), grid_size, self.render_count)

    def reset_counters(self) -> None:
        """Reset render counters for testing."""
        self.render_count = 0
        self.last_voxels = None
        self.last_grid_size = None
