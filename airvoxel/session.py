"""
Per-frame orchestration: landmarks -> gesture -> gate -> voxel store.
"""
import logging
import random
from typing import Optional, Tuple

from .config import Cfg, default_config
from .exceptions import MalformedFrameError
from .gestures import ActionGate, classify
from .mapping import map_to_voxel, point_color, random_color, random_coord
from .types import (
    FrameResult, FrameSize, GateDecision, Gesture, LandmarkFrame, LandmarkSource, VoxelCell,
    VoxelCoord,
)
from .voxels import VoxelStore

logger = logging.getLogger(__name__)

NO_HAND_STATUS = "Show your hand!"
HAND_STATUS = "Hand detected!"


class VoxelSession:
    """
    Owns the gate and the voxel store for one drawing session.

    Advanced by tick(now_ms) once per display frame. All work for a frame
    happens synchronously inside tick(), so store mutations are applied in
    frame order and never interleave.
    """

    def __init__(self, cfg: Optional[Cfg] = None, source: Optional[LandmarkSource] = None,
                 store: Optional[VoxelStore] = None, gate: Optional[ActionGate] = None,
                 rng: Optional[random.Random] = None):
        self.cfg = cfg if cfg is not None else default_config()
        self.source = source
        self.store = store if store is not None else VoxelStore(
            grid_size=self.cfg.grid.size,
            duplicate_policy=self.cfg.grid.duplicate_policy
        )
        self.gate = gate if gate is not None else ActionGate.from_config(self.cfg)
        self.rng = rng if rng is not None else random.Random(self.cfg.actions.seed)

        self.gesture: Optional[Gesture] = None
        self.status = NO_HAND_STATUS
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def grid_size(self) -> int:
        return self.store.grid_size

    def stop(self) -> None:
        """Cancel the session; later ticks do nothing."""
        self._running = False

    def snapshot(self) -> Tuple[VoxelCell, ...]:
        return self.store.get_voxels()

    def tick(self, now_ms: float) -> Optional[FrameResult]:
        """
        Poll the landmark source and process its frame.

        Args:
            now_ms: Current timestamp in milliseconds

        Returns:
            FrameResult, or None if stopped, no hand is ready, or the frame is malformed
        """
        if not self._running:
            return None
        if self.source is None:
            raise RuntimeError("VoxelSession.tick() requires a landmark source")

        polled = self.source.poll()
        if polled is None:
            self.gesture = None
            self.status = NO_HAND_STATUS
            return None

        landmarks, frame_wh = polled
        try:
            return self.process_frame(landmarks, frame_wh, now_ms)
        except MalformedFrameError as e:
            logger.warning("Skipping malformed frame: %s", e)
            return None

    def process_frame(self, landmarks: LandmarkFrame, frame_wh: FrameSize,
                      now_ms: float) -> FrameResult:
        """
        Run one frame through classifier, gate and store.

        Raises:
            MalformedFrameError: if the landmarks are not 21 numeric triples
        """
        gesture = classify(
            landmarks,
            thumb_ratio=self.cfg.classifier.thumb_ratio,
            finger_ratio=self.cfg.classifier.finger_ratio
        )
        self.gesture = gesture
        if self.status == NO_HAND_STATUS:
            self.status = HAND_STATUS

        # Map before gating so a malformed frame cannot leave a half-updated gate
        coord = None
        if gesture is Gesture.POINT:
            coord = map_to_voxel(landmarks, frame_wh, self.grid_size, self.cfg.grid.out_of_range)

        version = self.store.version
        # A rejected point inserts nothing, so it must not consume the voxel interval
        rejected_point = gesture is Gesture.POINT and coord is None
        decision = self.gate.decide(gesture, now_ms, commit=not rejected_point)
        if decision is GateDecision.ADMITTED:
            self.status = self._apply(gesture, coord)
            logger.info("%s: %s", gesture.value, self.status)

        return FrameResult(
            gesture=gesture,
            decision=decision,
            status=self.status,
            voxels=self.store.get_voxels(),
            grid_size=self.grid_size,
            changed=self.store.version != version
        )

    def _apply(self, gesture: Gesture, coord: Optional[VoxelCoord]) -> str:
        """Perform the store action for an admitted gesture and describe it."""
        actions = self.cfg.actions

        if gesture is Gesture.POINT:
            if coord is None:
                return "Point outside grid"
            color = point_color(coord.x, self.grid_size, actions.saturation, actions.lightness)
            self.store.add_voxel(coord.x, coord.y, coord.z, color)
            return f"Added voxel at ({coord.x}, {coord.y}, {coord.z})"

        if gesture is Gesture.FIST:
            removed = self.store.clear_all()
            return f"Cleared {removed} voxels"

        if gesture is Gesture.OPEN:
            count = self.store.recolor_all(
                lambda cell: random_color(self.rng, actions.saturation, actions.lightness)
            )
            return f"Recolored {count} voxels"

        if gesture is Gesture.THUMBS_UP:
            for _ in range(actions.burst_size):
                c = random_coord(self.rng, self.grid_size)
                self.store.add_voxel(c.x, c.y, c.z,
                                     random_color(self.rng, actions.saturation, actions.lightness))
            return f"Added burst of {actions.burst_size} voxels"

        return self.status
