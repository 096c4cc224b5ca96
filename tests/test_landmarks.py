"""
Test cases for landmark geometry and finger extension tests.
"""
import unittest
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from airvoxel.exceptions import MalformedFrameError
from airvoxel.landmarks import (
    as_frame, distance3, digit_extended, extended_digits, fingers_extended,
)
from airvoxel.types import Digit
from hand_fixtures import make_hand


class TestDistance(unittest.TestCase):
    """Test 3D Euclidean distance."""

    def test_uses_all_three_axes(self):
        self.assertAlmostEqual(distance3((0.0, 0.0, 0.0), (1.0, 2.0, 2.0)), 3.0)

    def test_symmetric_and_zero(self):
        a, b = (0.1, 0.2, 0.3), (0.4, 0.6, 0.3)
        self.assertAlmostEqual(distance3(a, b), distance3(b, a))
        self.assertEqual(distance3(a, a), 0.0)


class TestAsFrame(unittest.TestCase):
    """Test landmark frame coercion and validation."""

    def test_accepts_list_of_triples(self):
        frame = as_frame(make_hand())
        self.assertEqual(frame.shape, (21, 3))

    def test_accepts_array(self):
        frame = as_frame(np.zeros((21, 3), dtype=np.float32))
        self.assertEqual(frame.dtype, np.float64)

    def test_frame_is_read_only(self):
        frame = as_frame(make_hand())
        with self.assertRaises(ValueError):
            frame[0, 0] = 1.0

    def test_short_frame_rejected(self):
        with self.assertRaises(MalformedFrameError):
            as_frame(make_hand()[:20])

    def test_empty_frame_rejected(self):
        with self.assertRaises(MalformedFrameError):
            as_frame([])

    def test_two_dimensional_points_rejected(self):
        with self.assertRaises(MalformedFrameError):
            as_frame([(0.5, 0.5)] * 21)

    def test_non_numeric_rejected(self):
        with self.assertRaises(MalformedFrameError):
            as_frame([("a", "b", "c")] * 21)

    def test_nan_rejected(self):
        landmarks = make_hand()
        landmarks[8] = (float("nan"), 0.5, 0.0)
        with self.assertRaises(MalformedFrameError):
            as_frame(landmarks)

    def test_malformed_frame_is_value_error(self):
        with self.assertRaises(ValueError):
            as_frame(None)


class TestFingerExtension(unittest.TestCase):
    """Test per-digit extension ratios."""

    def test_all_curled(self):
        frame = as_frame(make_hand())
        self.assertEqual(fingers_extended(frame), 0)
        self.assertFalse(any(extended_digits(frame).values()))

    def test_each_digit_independent(self):
        for digit in Digit:
            with self.subTest(digit=digit):
                frame = as_frame(make_hand(**{digit.value: True}))
                extended = extended_digits(frame)
                self.assertTrue(extended[digit])
                self.assertEqual(sum(extended.values()), 1)

    def test_ratio_boundary_is_not_extended(self):
        # joint-to-wrist 0.5, tip-to-joint exactly 0.25 = 0.5 * 0.5
        landmarks = make_hand()
        landmarks[0] = (0.5, 0.75, 0.0)
        landmarks[6] = (0.5, 0.25, 0.0)
        landmarks[8] = (0.5, 0.0, 0.0)
        frame = as_frame(landmarks)
        self.assertFalse(digit_extended(frame, Digit.INDEX, 0.5))
        self.assertTrue(digit_extended(frame, Digit.INDEX, 0.49))

    def test_thumb_uses_its_own_ratio(self):
        # Thumb ratio in the fixture is 0.75: extended at 0.7, not at 0.8
        frame = as_frame(make_hand(thumb=True))
        self.assertTrue(extended_digits(frame, thumb_ratio=0.7)[Digit.THUMB])
        self.assertFalse(extended_digits(frame, thumb_ratio=0.8)[Digit.THUMB])

    def test_depth_counts_toward_distance(self):
        # Tip displaced only along z is still far from its joint
        landmarks = make_hand()
        jx, jy, jz = landmarks[6]
        landmarks[8] = (jx, jy, jz + 0.5)
        frame = as_frame(landmarks)
        self.assertTrue(digit_extended(frame, Digit.INDEX, 0.5))


if __name__ == '__main__':
    unittest.main()
