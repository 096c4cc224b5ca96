"""
Hand landmark source backed by a webcam and MediaPipe HandLandmarker.
"""
import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision

from .config import CameraConfig, MediaPipeConfig
from .types import FrameSize, Landmark

logger = logging.getLogger(__name__)


class HandsTracker:
    """Hand landmark tracker using the MediaPipe Tasks HandLandmarker in VIDEO mode."""

    def __init__(self, model_path: str, min_detection_conf: float = 0.6,
                 min_tracking_conf: float = 0.6):
        """
        Initialize the hands tracker.

        Args:
            model_path: Path to the hand_landmarker.task model bundle
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        if not Path(model_path).exists():
            raise FileNotFoundError(f"Missing model file: {model_path}")

        options = vision.HandLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=1,
            min_hand_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )
        self.landmarker = vision.HandLandmarker.create_from_options(options)
        self.last_timestamp_ms = -1

    def process(self, frame_bgr: np.ndarray, timestamp_ms: int) -> Optional[List[Landmark]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format
            timestamp_ms: Frame timestamp in milliseconds

        Returns:
            List of 21 (x, y, z) coordinates, or None if no hand detected
        """
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        # VIDEO mode requires strictly increasing timestamps
        timestamp_ms = max(self.last_timestamp_ms + 1, int(timestamp_ms))
        self.last_timestamp_ms = timestamp_ms

        results = self.landmarker.detect_for_video(mp_image, timestamp_ms)

        if results.hand_landmarks:
            return [(lm.x, lm.y, lm.z) for lm in results.hand_landmarks[0]]

        return None

    def close(self) -> None:
        self.landmarker.close()


def draw_landmarks(frame: np.ndarray, landmarks: List[Landmark]) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: List of (x, y, z) coordinates with x, y in [0..1] range

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]

    for i, (x, y, _z) in enumerate(landmarks):
        px = int(x * width)
        py = int(y * height)
        cv2.circle(frame, (px, py), 3, (0, 255, 0), -1)
        cv2.putText(frame, str(i), (px + 5, py - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.3, (255, 255, 255), 1)

    return frame


class CameraLandmarkSource:
    """
    Landmark source polling an OpenCV camera and a HandsTracker.

    Keeps the last captured BGR frame around so the application can draw
    the overlay on it.
    """

    def __init__(self, camera: CameraConfig, mediapipe_cfg: MediaPipeConfig):
        self.tracker = HandsTracker(
            model_path=mediapipe_cfg.model_path,
            min_detection_conf=mediapipe_cfg.min_detection_confidence,
            min_tracking_conf=mediapipe_cfg.min_tracking_confidence
        )

        self.cap = cv2.VideoCapture(camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, camera.fps)

        if not self.cap.isOpened():
            self.cap.release()
            self.tracker.close()
            raise RuntimeError(f"Failed to open camera {camera.index}")

        self.last_frame: Optional[np.ndarray] = None
        self.last_landmarks: Optional[List[Landmark]] = None
        self.camera_ok = True

    def poll(self) -> Optional[Tuple[List[Landmark], FrameSize]]:
        """Read one camera frame and return its landmarks when a hand is visible."""
        ret, frame = self.cap.read()
        if not ret:
            logger.error("Failed to read frame from camera")
            self.camera_ok = False
            self.last_frame = None
            self.last_landmarks = None
            return None

        self.last_frame = frame
        self.last_landmarks = self.tracker.process(frame, int(time.monotonic() * 1000))
        if self.last_landmarks is None:
            return None

        frame_wh = (frame.shape[1], frame.shape[0])  # (width, height)
        return self.last_landmarks, frame_wh

    def close(self) -> None:
        """Release camera and model resources."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
