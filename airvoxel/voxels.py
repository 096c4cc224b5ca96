"""
Sparse voxel store.
"""
import logging
from typing import Callable, Dict, Iterator, List, Tuple, Union

from .types import DuplicatePolicy, VoxelCell, VoxelCoord

logger = logging.getLogger(__name__)


class VoxelStore:
    """
    Ordered collection of colored voxel cells.

    Cells keep insertion order. Under DuplicatePolicy.APPEND re-adding at an
    occupied coordinate stacks another cell; under OVERWRITE the existing
    cell keeps its position and takes the new color.

    Snapshots returned by get_voxels() are tuples of frozen cells, so
    holding one never observes later mutations.
    """

    def __init__(self, grid_size: int = 40,
                 duplicate_policy: Union[DuplicatePolicy, str] = DuplicatePolicy.APPEND):
        self.grid_size = grid_size
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self._cells: List[VoxelCell] = []
        self._index: Dict[VoxelCoord, int] = {}  # only maintained for OVERWRITE
        self.version = 0

    def add_voxel(self, x: int, y: int, z: int, color: str) -> VoxelCell:
        """Add a voxel at (x, y, z). Returns the stored cell."""
        return self.add_cell(VoxelCell(coord=VoxelCoord(int(x), int(y), int(z)), color=color))

    def add_cell(self, cell: VoxelCell) -> VoxelCell:
        if self.duplicate_policy is DuplicatePolicy.OVERWRITE:
            pos = self._index.get(cell.coord)
            if pos is not None:
                self._cells[pos] = cell
                self.version += 1
                return cell
            self._index[cell.coord] = len(self._cells)

        self._cells.append(cell)
        self.version += 1
        return cell

    def clear_all(self) -> int:
        """Remove every voxel. Returns the number removed."""
        removed = len(self._cells)
        self._cells.clear()
        self._index.clear()
        if removed:
            self.version += 1
        logger.debug("Cleared %d voxels", removed)
        return removed

    def get_voxels(self) -> Tuple[VoxelCell, ...]:
        """Snapshot of the current cells in insertion order."""
        return tuple(self._cells)

    def update_all(self, fn: Callable[[VoxelCell], VoxelCell]) -> int:
        """
        Replace every cell with fn(cell).

        fn must keep each cell's coordinate; changing coordinates would break
        the OVERWRITE uniqueness invariant.

        Returns:
            Number of cells updated
        """
        updated = [fn(cell) for cell in self._cells]
        for old, new in zip(self._cells, updated):
            if new.coord != old.coord:
                raise ValueError(f"update_all may not move cells: {old.coord} -> {new.coord}")
        self._cells = updated
        if updated:
            self.version += 1
        return len(updated)

    def recolor_all(self, color_fn: Callable[[VoxelCell], str]) -> int:
        """Give every cell the color computed by color_fn(cell)."""
        return self.update_all(lambda cell: cell.with_color(color_fn(cell)))

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[VoxelCell]:
        return iter(self.get_voxels())
