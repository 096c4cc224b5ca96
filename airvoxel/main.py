"""
Main application for drawing voxels with hand gestures.
"""
import argparse
import asyncio
import logging
import time
from typing import Optional

import cv2

from .config import Cfg, load_config
from .exceptions import ConfigError
from .renderer_mock import MockRenderer
from .session import VoxelSession
from .tracker import CameraLandmarkSource, draw_landmarks
from .types import Gesture, RendererProto

logger = logging.getLogger(__name__)

# BGR overlay color per gesture label
GESTURE_COLORS = {
    Gesture.FIST: (0, 0, 255),
    Gesture.POINT: (0, 255, 0),
    Gesture.OPEN: (255, 200, 0),
    Gesture.THUMBS_UP: (0, 215, 255),
    Gesture.PARTIAL: (160, 160, 160),
}


def gesture_text(gesture: Optional[Gesture]) -> str:
    """Overlay label for the current gesture."""
    if gesture is None:
        return "Gesture: none"
    return f"Gesture: {gesture.value}"


class VoxelDrawingApp:
    """Main application class for gesture-driven voxel drawing."""

    def __init__(self, config: Cfg, renderer: Optional[RendererProto] = None):
        """Initialize the application with a loaded configuration."""
        self.config = config
        self.source = CameraLandmarkSource(self.config.camera, self.config.mediapipe)
        self.session = VoxelSession(self.config, source=self.source)
        self.renderer = renderer if renderer is not None else MockRenderer()

    async def run(self):
        """Run the main application loop."""
        logger.info("Starting %s", self.config.display.window_name)
        print("🎯 Gestures:")
        print("  - Point (index only) = Add voxel")
        print("  - Fist = Clear all voxels")
        print("  - Open palm = Recolor voxels")
        print(f"  - Thumbs up = Add {self.config.actions.burst_size} random voxels")
        print("Press 'q' to quit")

        await self.renderer.render(self.session.snapshot(), self.session.grid_size)

        try:
            while self.session.running:
                result = self.session.tick(time.monotonic() * 1000)

                if not self.source.camera_ok:
                    break

                if result is not None and result.changed:
                    await self.renderer.render(result.voxels, result.grid_size)

                self._draw_overlay()

                # Check for quit key
                if cv2.waitKey(1) & 0xFF == ord('q'):
                    self.session.stop()

                # Yield between frames
                await asyncio.sleep(0)
        finally:
            self.close()

    def _draw_overlay(self) -> None:
        frame = self.source.last_frame
        if frame is None:
            return

        if self.source.last_landmarks and self.config.display.show_landmarks:
            frame = draw_landmarks(frame, self.source.last_landmarks)

        gesture = self.session.gesture
        color = GESTURE_COLORS.get(gesture, (255, 255, 255))
        cv2.putText(frame, gesture_text(gesture), (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, color, 2)
        cv2.putText(frame, self.session.status, (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2)
        cv2.putText(frame, f"Voxels: {len(self.session.store)}", (10, 90),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

        cv2.imshow(self.config.display.window_name, frame)

    def close(self) -> None:
        """Stop the session and release camera and window resources."""
        self.session.stop()
        self.source.close()
        cv2.destroyAllWindows()


async def main(argv=None):
    """Entry point for the application."""
    parser = argparse.ArgumentParser(description="Draw voxels in the air with hand gestures")
    parser.add_argument("--config", help="Path to a YAML config file")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        logging.basicConfig(
            level=getattr(logging, config.logging.level, logging.INFO),
            format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )
        app = VoxelDrawingApp(config)
        await app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    except (ConfigError, RuntimeError, FileNotFoundError) as e:
        logger.error("Error: %s", e)
        raise SystemExit(1)


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
