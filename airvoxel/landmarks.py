"""
Hand landmark geometry: frame validation, distances and finger extension tests.
"""
import math
from typing import Dict

import numpy as np

from .exceptions import MalformedFrameError
from .types import Digit, Landmark, LandmarkFrame


NUM_LANDMARKS = 21

WRIST = 0
THUMB_IP = 3
THUMB_TIP = 4
INDEX_PIP = 6
INDEX_TIP = 8
MIDDLE_PIP = 10
MIDDLE_TIP = 12
RING_PIP = 14
RING_TIP = 16
PINKY_PIP = 18
PINKY_TIP = 20

# (tip, joint one step proximal to the tip)
DIGIT_JOINTS: Dict[Digit, tuple] = {
    Digit.THUMB: (THUMB_TIP, THUMB_IP),
    Digit.INDEX: (INDEX_TIP, INDEX_PIP),
    Digit.MIDDLE: (MIDDLE_TIP, MIDDLE_PIP),
    Digit.RING: (RING_TIP, RING_PIP),
    Digit.PINKY: (PINKY_TIP, PINKY_PIP),
}


def as_frame(landmarks: LandmarkFrame) -> np.ndarray:
    """
    Coerce landmarks into a read-only (21, 3) float array.

    Args:
        landmarks: 21 (x, y, z) points as a sequence or array

    Returns:
        Array of shape (21, 3)

    Raises:
        MalformedFrameError: if the input is not 21 numeric triples
    """
    try:
        frame = np.array(landmarks, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MalformedFrameError(f"Landmarks are not numeric triples: {e}") from e

    if frame.shape != (NUM_LANDMARKS, 3):
        raise MalformedFrameError(
            f"Expected {NUM_LANDMARKS} (x, y, z) landmarks, got array of shape {frame.shape}"
        )
    if not np.all(np.isfinite(frame)):
        raise MalformedFrameError("Landmarks contain NaN or infinite values")

    frame.setflags(write=False)
    return frame


def distance3(a: Landmark, b: Landmark) -> float:
    """Euclidean distance between two landmarks using x, y and z."""
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2)


def digit_extended(frame: np.ndarray, digit: Digit, ratio: float) -> bool:
    """
    Check whether a digit is straightened.

    A digit counts as extended when its tip-to-joint distance exceeds
    `ratio` times its joint-to-wrist distance. Curling folds the tip back
    toward the joint, shrinking the first distance.

    Args:
        frame: Landmark array from as_frame()
        digit: Which digit to test
        ratio: Extension threshold for this digit

    Returns:
        True if the digit is extended
    """
    tip, joint = DIGIT_JOINTS[digit]
    return distance3(frame[tip], frame[joint]) > ratio * distance3(frame[joint], frame[WRIST])


def extended_digits(frame: np.ndarray, thumb_ratio: float = 0.7,
                    finger_ratio: float = 0.5) -> Dict[Digit, bool]:
    """Extension state of every digit, thumb first."""
    return {
        digit: digit_extended(frame, digit, thumb_ratio if digit is Digit.THUMB else finger_ratio)
        for digit in Digit
    }


def fingers_extended(frame: np.ndarray, thumb_ratio: float = 0.7,
                     finger_ratio: float = 0.5) -> int:
    """Number of extended digits (0-5)."""
    return sum(extended_digits(frame, thumb_ratio, finger_ratio).values())
