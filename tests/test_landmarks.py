import unittest

import numpy as np

from thumbstick.core.joint_extractor import JointExtractor
from thumbstick.core.types import HandJoint, HandSide
from thumbstick.tracking.landmarks import (
    side_from_handedness, skeleton_from_world_landmarks, update_from_results
)


# Mocks for the MediaPipe result structure
class MockLandmark:
    def __init__(self, x, y, z, presence=None):
        self.x, self.y, self.z = x, y, z
        self.presence = presence if presence is not None else 0.0
        self._has_presence = presence is not None

    def HasField(self, field_name):
        return field_name == "presence" and self._has_presence


class MockLandmarkList:
    def __init__(self, landmarks):
        self.landmark = landmarks


class MockClassification:
    def __init__(self, label):
        self.label = label
        self.score = 0.98


class MockHandedness:
    def __init__(self, label):
        self.classification = [MockClassification(label)]


class MockResults:
    def __init__(self, hands):
        self.multi_hand_world_landmarks = [lms for _, lms in hands] or None
        self.multi_handedness = [MockHandedness(lbl) for lbl, _ in hands] or None


def world_hand(thumb=(0.05, 0.0, 0.0), knuckle=(0.0, 0.0, 0.0), thumb_presence=None):
    lms = [MockLandmark(0.0, 0.0, 0.0) for _ in range(21)]
    lms[4] = MockLandmark(*thumb, presence=thumb_presence)
    lms[5] = MockLandmark(*knuckle)
    return MockLandmarkList(lms)


class TestLandmarkConversion(unittest.TestCase):
    def test_side_from_handedness(self):
        self.assertIs(side_from_handedness(MockHandedness("Left")), HandSide.LEFT)
        self.assertIs(side_from_handedness(MockHandedness("Right")), HandSide.RIGHT)
        self.assertIsNone(side_from_handedness(MockHandedness("Unknown")))
        self.assertIsNone(side_from_handedness(object()))

    def test_skeleton_has_all_joints(self):
        skeleton = skeleton_from_world_landmarks(world_hand())
        self.assertEqual(len(skeleton.joints), 21)
        np.testing.assert_allclose(skeleton.get(HandJoint.THUMB_TIP)[:3, 3], [0.05, 0.0, 0.0])

    def test_low_presence_joint_dropped(self):
        skeleton = skeleton_from_world_landmarks(world_hand(thumb_presence=0.1), min_presence=0.5)
        self.assertIsNone(skeleton.get(HandJoint.THUMB_TIP))
        self.assertIsNotNone(skeleton.get(HandJoint.INDEX_MCP))

    def test_no_hands(self):
        update = update_from_results(MockResults([]), timestamp=3.0)
        self.assertIsNone(update.left)
        self.assertIsNone(update.right)
        self.assertEqual(update.timestamp, 3.0)

    def test_hands_routed_by_handedness(self):
        update = update_from_results(MockResults([("Right", world_hand()), ("Left", world_hand())]))
        self.assertEqual(update.right.side, HandSide.RIGHT)
        self.assertEqual(update.left.side, HandSide.LEFT)

    def test_duplicate_side_first_wins(self):
        first = world_hand(thumb=(0.05, 0.0, 0.0))
        second = world_hand(thumb=(0.09, 0.0, 0.0))
        update = update_from_results(MockResults([("Right", first), ("Right", second)]))
        self.assertIsNone(update.left)
        np.testing.assert_allclose(update.right.skeleton.get(HandJoint.THUMB_TIP)[:3, 3], [0.05, 0.0, 0.0])

    def test_axes_converted_to_scene_frame(self):
        """MediaPipe y-down / z-away becomes y-up / z-toward-viewer."""
        update = update_from_results(MockResults([("Right", world_hand(thumb=(0.01, 0.02, 0.03)))]))
        sample = JointExtractor().extract(update.right)
        np.testing.assert_allclose(sample.thumb_tip, [0.01, -0.02, -0.03])


if __name__ == '__main__':
    unittest.main()
