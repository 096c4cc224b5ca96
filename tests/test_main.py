"""
Test cases for application startup and camera source setup.
"""
import asyncio
import tempfile
import unittest
import sys
from pathlib import Path
from unittest import mock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from airvoxel import main as app_main
from airvoxel import tracker
from airvoxel.config import Cfg, CameraConfig, MediaPipeConfig


class TestMain(unittest.TestCase):
    """Test the command line entry point."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, text: str) -> str:
        path = Path(self.tmpdir.name) / "config.yaml"
        path.write_text(text)
        return str(path)

    def _run_main(self, argv):
        with mock.patch.object(app_main, "VoxelDrawingApp") as app_cls:
            with self.assertLogs("airvoxel.main", level="ERROR"):
                with self.assertRaises(SystemExit) as ctx:
                    asyncio.run(app_main.main(argv))
        return ctx.exception, app_cls

    def test_missing_config_exits_cleanly(self):
        exc, app_cls = self._run_main(["--config", str(Path(self.tmpdir.name) / "missing.yaml")])
        self.assertEqual(exc.code, 1)
        app_cls.assert_not_called()

    def test_invalid_config_exits_cleanly(self):
        exc, app_cls = self._run_main(["--config", self._write("grid:\n  size: big\n")])
        self.assertEqual(exc.code, 1)
        app_cls.assert_not_called()

    def test_config_loaded_once_and_passed_to_app(self):
        path = self._write("grid:\n  size: 16\n")
        with mock.patch.object(app_main, "VoxelDrawingApp") as app_cls, \
                mock.patch.object(app_main, "load_config", wraps=app_main.load_config) as loader:
            app_cls.return_value.run = mock.AsyncMock()
            asyncio.run(app_main.main(["--config", path]))

        loader.assert_called_once_with(path)
        cfg = app_cls.call_args.args[0]
        self.assertIsInstance(cfg, Cfg)
        self.assertEqual(cfg.grid.size, 16)
        app_cls.return_value.run.assert_awaited_once()


class TestCameraLandmarkSource(unittest.TestCase):
    """Test resource handling when the camera cannot be opened."""

    def test_camera_failure_releases_resources(self):
        with mock.patch.object(tracker, "HandsTracker") as tracker_cls, \
                mock.patch.object(tracker.cv2, "VideoCapture") as capture_cls:
            capture_cls.return_value.isOpened.return_value = False

            with self.assertRaises(RuntimeError):
                tracker.CameraLandmarkSource(CameraConfig(index=3), MediaPipeConfig())

        tracker_cls.return_value.close.assert_called_once()
        capture_cls.return_value.release.assert_called_once()


if __name__ == '__main__':
    unittest.main()
