"""
Thumbstick Signal Processor (The Stick).
========================================

Turns the thumb's displacement from the reference joint into a bounded joystick signal.

Pipeline per frame: Select Hand -> Vector -> Deadzone -> Normalize -> Clamp -> Scale.

Two states only:
1. **Reset:** direction = 0, magnitude = 0, active = False. Initial state, and the
   state for lost hands, missing joints and thumbs resting inside the deadzone.
2. **Active:** direction = unit * min(distance, max_distance) * scale_factor,
   magnitude = min(distance, max_distance) / max_distance.

The signal is memoryless (fully determined by the latest frame) unless
`hold_in_deadzone` is set, in which case an active stick that drifts back into
the deadzone keeps its last value instead of snapping to zero.
"""

import logging
import threading
from typing import Optional

import numpy as np

from thumbstick.core.types import ControlSignal, HandSide, JointSample, ThumbControlConfig

logger = logging.getLogger(__name__)


class ThumbSignalProcessor:
    def __init__(self, config: ThumbControlConfig):
        self.config = config
        # Guards the whole snapshot. Writer = tracker thread, reader = render loop.
        self._lock = threading.Lock()
        self._signal = ControlSignal.neutral()

    @property
    def signal(self) -> ControlSignal:
        with self._lock:
            return self._signal

    def on_frame(self,
                 left_sample: Optional[JointSample],
                 right_sample: Optional[JointSample]) -> ControlSignal:
        """
        Ingests one tracking update and returns the published signal.
        None (hand not tracked) is a normal condition, not a failure.
        """
        sample = left_sample if self.config.hand_side is HandSide.LEFT else right_sample

        if sample is None or not sample.is_complete:
            return self.reset()

        vector = np.asarray(sample.thumb_tip, dtype=np.float64) - np.asarray(sample.reference, dtype=np.float64)
        distance = float(np.linalg.norm(vector))

        # 1. Deadzone (a zero-length vector has no direction either)
        if distance < self.config.deadzone or distance == 0.0:
            if self.config.hold_in_deadzone:
                with self._lock:
                    if self._signal.active:
                        return self._signal
            return self.reset()

        # 2. Normalize -> Clamp -> Scale
        normalized = vector / distance
        clamped = min(distance, self.config.max_distance)
        direction = normalized * clamped * self.config.scale_factor

        signal = ControlSignal(
            direction=(float(direction[0]), float(direction[1]), float(direction[2])),
            magnitude=clamped / self.config.max_distance,
            active=True,
        )
        self._publish(signal)
        return signal

    def reset(self) -> ControlSignal:
        """Forces the neutral state."""
        neutral = ControlSignal.neutral()
        self._publish(neutral)
        return neutral

    def _publish(self, signal: ControlSignal) -> None:
        with self._lock:
            previous = self._signal
            self._signal = signal
        if previous.active != signal.active:
            logger.debug("Thumbstick (%s) %s", self.config.hand_side.value,
                         "ENGAGED" if signal.active else "RESET")
