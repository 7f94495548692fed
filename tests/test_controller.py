import unittest

import numpy as np

from thumbstick.control.controller import ThumbController
from thumbstick.core.errors import TrackingUnavailableError
from thumbstick.core.interfaces import IHandTrackingSource
from thumbstick.core.types import (
    HandJoint, HandSide, HandSkeleton, HandTrackingFrame, HandTrackingUpdate, ThumbControlConfig
)
from thumbstick.tracking.base import HandTrackingSource


# Mock tracker: frames are pushed by the test instead of a camera thread
class FakeTrackingSource(HandTrackingSource):
    def __init__(self, fail_with=None):
        super().__init__()
        self.fail_with = fail_with
        self.open_calls = 0
        self.close_calls = 0

    def _open(self):
        self.open_calls += 1
        if self.fail_with is not None:
            raise self.fail_with

    def _close(self):
        self.close_calls += 1

    def lose_sensor(self):
        """Simulates the camera dying mid-stream."""
        self._backend_lost()


# Third-party source built straight on the ABC (no error wrapping)
class BareTrackingSource(IHandTrackingSource):
    def __init__(self, error):
        self.error = error
        self.callbacks = []

    def subscribe(self, callback):
        self.callbacks.append(callback)

    def unsubscribe(self, callback):
        if callback in self.callbacks:
            self.callbacks.remove(callback)

    @property
    def has_subscribers(self):
        return bool(self.callbacks)

    def start(self):
        raise self.error

    def stop(self):
        pass

    @property
    def is_running(self):
        return False


def hand(side, thumb=(0.1, 0.0, 0.0), knuckle=(0.0, 0.0, 0.0)):
    positions = {}
    if thumb is not None:
        positions[HandJoint.THUMB_TIP] = thumb
    if knuckle is not None:
        positions[HandJoint.INDEX_MCP] = knuckle
    return HandTrackingFrame(side, np.eye(4), HandSkeleton.from_positions(positions))


class TestThumbController(unittest.TestCase):
    def setUp(self):
        self.source = FakeTrackingSource()
        self.config = ThumbControlConfig(HandSide.RIGHT, deadzone=0.02, max_distance=0.15, scale_factor=10)
        self.controller = ThumbController(self.config, self.source)

    def test_updates_flow_after_start(self):
        self.controller.start()
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        signal = self.controller.signal
        self.assertTrue(signal.active)
        np.testing.assert_allclose(signal.vector, [1.0, 0.0, 0.0], atol=1e-9)

    def test_no_updates_before_start(self):
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.assertFalse(self.controller.signal.active)

    def test_lost_hand_resets(self):
        self.controller.start()
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.source.publish(HandTrackingUpdate())
        self.assertFalse(self.controller.signal.active)

    def test_only_configured_side_used(self):
        self.controller.start()
        self.source.publish(HandTrackingUpdate(left=hand(HandSide.LEFT)))
        self.assertFalse(self.controller.signal.active)

    def test_missing_reference_joint_resets(self):
        signal = self.controller.process_update(HandTrackingUpdate(right=hand(HandSide.RIGHT, knuckle=None)))
        self.assertFalse(signal.active)

    def test_start_failure_propagates(self):
        source = FakeTrackingSource(fail_with=TrackingUnavailableError("permission denied"))
        controller = ThumbController(self.config, source)
        with self.assertRaises(TrackingUnavailableError):
            controller.start()
        self.assertFalse(source.has_subscribers)
        self.assertFalse(controller.is_running)

    def test_unexpected_open_error_is_wrapped(self):
        source = FakeTrackingSource(fail_with=OSError("no such device"))
        controller = ThumbController(self.config, source)
        with self.assertRaises(TrackingUnavailableError) as ctx:
            controller.start()
        self.assertIsInstance(ctx.exception.__cause__, OSError)

    def test_start_without_source(self):
        with self.assertRaises(TrackingUnavailableError):
            ThumbController(self.config).start()

    def test_stop_is_idempotent(self):
        self.controller.stop()  # never started
        self.controller.start()
        self.controller.stop()
        self.controller.stop()
        self.assertEqual(self.source.close_calls, 1)
        self.assertFalse(self.source.is_running)

    def test_no_updates_after_stop(self):
        self.controller.start()
        self.controller.stop()
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.assertFalse(self.controller.signal.active)

    def test_shared_source_outlives_first_stop(self):
        left = ThumbController(ThumbControlConfig(HandSide.LEFT), self.source)
        self.controller.start()
        left.start()
        self.assertEqual(self.source.open_calls, 1)

        self.controller.stop()
        self.assertTrue(self.source.is_running)
        self.source.publish(HandTrackingUpdate(left=hand(HandSide.LEFT)))
        self.assertTrue(left.signal.active)

        left.stop()
        self.assertFalse(self.source.is_running)

    def test_stop_resets_active_signal(self):
        """A stick that was pushed when stopped must not keep moving entities."""
        self.controller.start()
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.assertTrue(self.controller.signal.active)
        self.controller.stop()
        self.assertFalse(self.controller.signal.active)
        self.assertEqual(self.controller.signal.magnitude, 0.0)

    def test_hold_in_deadzone_still_resets_on_lost_hand(self):
        config = ThumbControlConfig(HandSide.RIGHT, deadzone=0.02, max_distance=0.15, hold_in_deadzone=True)
        controller = ThumbController(config, self.source)
        controller.start()
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT, thumb=(0.01, 0.0, 0.0))))
        self.assertTrue(controller.signal.active)  # held inside the deadzone
        self.source.publish(HandTrackingUpdate())
        self.assertFalse(controller.signal.active)

    def test_sensor_loss_resets_signal(self):
        self.controller.start()
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.source.lose_sensor()
        self.assertFalse(self.controller.signal.active)
        self.assertFalse(self.source.is_running)
        self.assertFalse(self.controller.is_running)

    def test_no_updates_after_sensor_loss(self):
        self.controller.start()
        self.source.lose_sensor()
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.assertFalse(self.controller.signal.active)

    def test_restart_after_sensor_loss_reopens(self):
        self.controller.start()
        self.source.lose_sensor()
        self.controller.start()
        self.assertEqual(self.source.close_calls, 1)
        self.assertEqual(self.source.open_calls, 2)
        self.assertTrue(self.controller.is_running)
        self.source.publish(HandTrackingUpdate(right=hand(HandSide.RIGHT)))
        self.assertTrue(self.controller.signal.active)

    def test_restart_after_sensor_loss_fails_loudly(self):
        """A dead sensor that cannot be reacquired must not look started."""
        self.controller.start()
        self.source.lose_sensor()
        self.source.fail_with = TrackingUnavailableError("camera unplugged")
        with self.assertRaises(TrackingUnavailableError):
            self.controller.start()
        self.assertFalse(self.controller.is_running)
        self.assertFalse(self.source.has_subscribers)

    def test_foreign_source_error_rolls_back_subscription(self):
        source = BareTrackingSource(PermissionError("camera access denied"))
        controller = ThumbController(self.config, source)
        with self.assertRaises(PermissionError):
            controller.start()
        self.assertFalse(source.has_subscribers)
        self.assertFalse(controller.is_running)
        controller.stop()  # nothing to undo

    def test_context_manager(self):
        with self.controller as controller:
            self.assertTrue(controller.is_running)
        self.assertFalse(self.controller.is_running)


if __name__ == '__main__':
    unittest.main()
