"""
Thumbstick: a virtual joystick driven by the thumb of a tracked hand.

The webcam tracker (thumbstick.tracking.mediapipe_source) and the HUD are not
imported here so the core stays usable without a camera stack.
"""

__version__ = "1.0.0"

from thumbstick.control.controller import ThumbController
from thumbstick.control.thumb_system import SceneEntity, ThumbControlledComponent, ThumbControlledSystem
from thumbstick.core.errors import ConfigurationError, TrackingUnavailableError
from thumbstick.core.joint_extractor import JointExtractor
from thumbstick.core.signal_processor import ThumbSignalProcessor
from thumbstick.core.types import (
    ControlSignal, HandJoint, HandSide, HandSkeleton, HandTrackingFrame,
    HandTrackingUpdate, JointSample, ReferenceJoint, ThumbControlConfig,
)
