"""
Gesture classification and the debouncing gate that turns gestures into actions.
"""
import logging
from dataclasses import replace
from typing import Optional, Tuple

from .config import Cfg
from .landmarks import as_frame, extended_digits
from .types import Digit, Gesture, GateDecision, GateState, LandmarkFrame

logger = logging.getLogger(__name__)


# Gestures that fire a store action under the gesture-level interval
GESTURE_ACTIONS = frozenset({Gesture.FIST, Gesture.OPEN, Gesture.THUMBS_UP})


def classify(landmarks: LandmarkFrame, thumb_ratio: float = 0.7,
             finger_ratio: float = 0.5) -> Gesture:
    """
    Classify a single landmark frame.

    Rules, first match wins:
    - no digit extended -> fist
    - only the index extended -> point
    - four or more extended -> open
    - thumb and index extended, the other three curled -> thumbs_up
    - anything else -> partial

    Args:
        landmarks: 21 (x, y, z) hand landmarks
        thumb_ratio: Extension threshold for the thumb
        finger_ratio: Extension threshold for the other four digits

    Returns:
        Gesture label

    Raises:
        MalformedFrameError: if the frame is not 21 numeric triples
    """
    frame = as_frame(landmarks)
    extended = extended_digits(frame, thumb_ratio, finger_ratio)
    n = sum(extended.values())

    if n == 0:
        return Gesture.FIST
    if n == 1 and extended[Digit.INDEX]:
        return Gesture.POINT
    if n >= 4:
        return Gesture.OPEN
    if (extended[Digit.THUMB] and extended[Digit.INDEX] and
            not (extended[Digit.MIDDLE] or extended[Digit.RING] or extended[Digit.PINKY])):
        return Gesture.THUMBS_UP
    return Gesture.PARTIAL


def evaluate_gate(state: GateState, gesture: Gesture, now_ms: float,
                  gesture_threshold_ms: float = 1000.0,
                  voxel_threshold_ms: float = 500.0) -> Tuple[GateState, GateDecision]:
    """
    Decide whether a gesture may trigger its action.

    Pure function: the returned state replaces the input state only when the
    decision is ADMITTED; every other decision returns `state` unchanged.

    Args:
        state: Current gate state
        gesture: Gesture classified for this frame
        now_ms: Frame timestamp in milliseconds
        gesture_threshold_ms: Minimum interval between gesture actions
        voxel_threshold_ms: Minimum interval between point-triggered adds

    Returns:
        Tuple of (new_state, decision)
    """
    since_gesture = now_ms - state.last_gesture_time_ms

    # Switching gestures inside the window is flapping
    if since_gesture < gesture_threshold_ms and gesture != state.last_gesture:
        return state, GateDecision.DROPPED

    if gesture is Gesture.POINT:
        if now_ms - state.last_voxel_time_ms >= voxel_threshold_ms:
            return replace(state, last_voxel_time_ms=now_ms), GateDecision.ADMITTED
        return state, GateDecision.COOLDOWN

    if gesture in GESTURE_ACTIONS:
        if since_gesture >= gesture_threshold_ms:
            new_state = replace(state, last_gesture=gesture, last_gesture_time_ms=now_ms)
            return new_state, GateDecision.ADMITTED
        return state, GateDecision.COOLDOWN

    return state, GateDecision.LABEL_ONLY


class ActionGate:
    """
    Stateful wrapper around evaluate_gate().

    Features:
    - Gesture-level interval suppressing flapping between different gestures
    - Sustained identical gesture re-fires once the interval elapses
    - Separate, tighter interval for point-triggered voxel adds
    """

    def __init__(self, gesture_threshold_ms: float = 1000.0, voxel_threshold_ms: float = 500.0,
                 state: Optional[GateState] = None):
        self.gesture_threshold_ms = gesture_threshold_ms
        self.voxel_threshold_ms = voxel_threshold_ms
        self._state = state if state is not None else GateState()

    @classmethod
    def from_config(cls, cfg: Cfg) -> "ActionGate":
        return cls(
            gesture_threshold_ms=cfg.gate.gesture_threshold_ms,
            voxel_threshold_ms=cfg.gate.voxel_threshold_ms
        )

    @property
    def state(self) -> GateState:
        return self._state

    def decide(self, gesture: Gesture, now_ms: float, commit: bool = True) -> GateDecision:
        """
        Evaluate a gesture.

        Args:
            gesture: Gesture classified for this frame
            now_ms: Frame timestamp in milliseconds
            commit: Store the new state when admitted. Pass False when the
                action is known to be a no-op so its timer is not consumed.

        Returns:
            GateDecision
        """
        new_state, decision = evaluate_gate(
            self._state, gesture, now_ms,
            gesture_threshold_ms=self.gesture_threshold_ms,
            voxel_threshold_ms=self.voxel_threshold_ms
        )
        if commit:
            self._state = new_state
        if decision is not GateDecision.ADMITTED:
            logger.debug("Gate %s %s at %.0fms", decision.value, gesture.value, now_ms)
        return decision

    def admit(self, gesture: Gesture, now_ms: float) -> bool:
        """Return True if the gesture's action should fire now."""
        return self.decide(gesture, now_ms) is GateDecision.ADMITTED

    def reset(self) -> None:
        """Forget all previous actions."""
        self._state = GateState()
