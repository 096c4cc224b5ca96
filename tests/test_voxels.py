"""
Test cases for the sparse voxel store.
"""
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from airvoxel.types import DuplicatePolicy, VoxelCell, VoxelCoord
from airvoxel.voxels import VoxelStore


class TestVoxelStore(unittest.TestCase):
    """Test add, clear, snapshot and bulk update."""

    def setUp(self):
        self.store = VoxelStore(grid_size=40)

    def test_add_then_get(self):
        self.store.add_voxel(20, 20, 20, "hsl(180, 70%, 50%)")
        voxels = self.store.get_voxels()
        self.assertEqual(voxels, (VoxelCell(VoxelCoord(20, 20, 20), "hsl(180, 70%, 50%)"),))

    def test_insertion_order_preserved(self):
        coords = [(3, 1, 2), (0, 0, 0), (39, 5, 7)]
        for x, y, z in coords:
            self.store.add_voxel(x, y, z, "red")
        self.assertEqual([cell.coord.as_tuple() for cell in self.store.get_voxels()], coords)

    def test_append_policy_keeps_duplicates(self):
        self.store.add_voxel(1, 2, 3, "red")
        self.store.add_voxel(1, 2, 3, "blue")
        self.assertEqual(len(self.store), 2)

    def test_overwrite_policy_replaces_in_place(self):
        store = VoxelStore(grid_size=40, duplicate_policy="overwrite")
        store.add_voxel(1, 2, 3, "red")
        store.add_voxel(4, 5, 6, "green")
        store.add_voxel(1, 2, 3, "blue")

        voxels = store.get_voxels()
        self.assertEqual(len(voxels), 2)
        self.assertEqual(voxels[0], VoxelCell(VoxelCoord(1, 2, 3), "blue"))
        self.assertEqual(voxels[1].color, "green")

    def test_overwrite_index_reset_by_clear(self):
        store = VoxelStore(duplicate_policy=DuplicatePolicy.OVERWRITE)
        store.add_voxel(1, 1, 1, "red")
        store.clear_all()
        store.add_voxel(1, 1, 1, "blue")
        store.add_voxel(2, 2, 2, "blue")
        self.assertEqual(len(store), 2)

    def test_clear_all(self):
        for i in range(5):
            self.store.add_voxel(i, i, i, "red")
        self.assertEqual(self.store.clear_all(), 5)
        self.assertEqual(self.store.get_voxels(), ())

    def test_clear_empty_store(self):
        self.assertEqual(self.store.clear_all(), 0)
        self.assertEqual(self.store.get_voxels(), ())

    def test_snapshot_not_affected_by_later_mutation(self):
        self.store.add_voxel(1, 1, 1, "red")
        snapshot = self.store.get_voxels()

        self.store.recolor_all(lambda cell: "blue")
        self.store.add_voxel(2, 2, 2, "green")

        self.assertEqual(snapshot, (VoxelCell(VoxelCoord(1, 1, 1), "red"),))
        self.assertEqual(self.store.get_voxels()[0].color, "blue")

    def test_recolor_all(self):
        self.store.add_voxel(0, 0, 0, "red")
        self.store.add_voxel(9, 0, 0, "red")
        count = self.store.recolor_all(lambda cell: f"hue-{cell.coord.x}")
        self.assertEqual(count, 2)
        self.assertEqual([c.color for c in self.store], ["hue-0", "hue-9"])

    def test_update_all_cannot_move_cells(self):
        self.store.add_voxel(0, 0, 0, "red")
        with self.assertRaises(ValueError):
            self.store.update_all(lambda cell: VoxelCell(VoxelCoord(1, 1, 1), cell.color))
        # Store untouched after the failed update
        self.assertEqual(self.store.get_voxels()[0].coord, VoxelCoord(0, 0, 0))

    def test_version_increments_on_mutation(self):
        v0 = self.store.version
        self.store.add_voxel(0, 0, 0, "red")
        self.store.recolor_all(lambda cell: "blue")
        self.store.clear_all()
        self.assertEqual(self.store.version, v0 + 3)
        self.store.get_voxels()
        self.assertEqual(self.store.version, v0 + 3)

    def test_empty_store_bulk_ops_leave_version(self):
        v0 = self.store.version
        self.assertEqual(self.store.clear_all(), 0)
        self.assertEqual(self.store.recolor_all(lambda cell: "blue"), 0)
        self.assertEqual(self.store.version, v0)


if __name__ == '__main__':
    unittest.main()
