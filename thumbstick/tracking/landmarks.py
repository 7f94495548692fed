"""
Thumbstick Landmark Conversion Utilities.
========================================

Translates MediaPipe Hands results into tracker-agnostic HandTrackingUpdates.

MediaPipe gives two landmark sets per hand:
1. `multi_hand_landmarks`: normalized image coordinates (0.0 - 1.0). Useless for
   a metric deadzone because they depend on how far the hand is from the camera.
2. `multi_hand_world_landmarks`: metres, origin at the hand's geometric center.

We use the world set. Its axes are image-aligned (x right, y down, z away from
the viewer), so the hand anchor rotates them into a right-handed y-up scene frame.

No mediapipe import here: everything is duck-typed so it can be tested with mocks.
"""

import numpy as np
from typing import Any, Dict, Optional

from thumbstick.core.types import HandJoint, HandSide, HandSkeleton, HandTrackingFrame, HandTrackingUpdate

# Image-aligned (y down, z away) -> scene (y up, z toward viewer). A proper rotation (det = +1).
MEDIAPIPE_TO_SCENE = np.diag([1.0, -1.0, -1.0, 1.0])


def side_from_handedness(handedness: Any) -> Optional[HandSide]:
    """Reads the top classification label ("Left"/"Right") of a handedness message."""
    try:
        label = handedness.classification[0].label
    except (AttributeError, IndexError):
        return None
    clean = str(label).strip().lower()
    for side in HandSide:
        if side.value == clean:
            return side
    return None


def skeleton_from_world_landmarks(landmark_list: Any, min_presence: float = 0.5) -> HandSkeleton:
    """
    Builds a HandSkeleton from one hand's world landmarks.
    Landmarks that explicitly report a low presence are dropped (untracked joint).
    """
    positions: Dict[HandJoint, tuple] = {}
    for idx, lm in enumerate(landmark_list.landmark):
        if idx >= len(HandJoint):
            break
        # Protobuf fields default to 0.0 when unset, so only trust them if present
        if hasattr(lm, "HasField") and lm.HasField("presence") and lm.presence < min_presence:
            continue
        positions[HandJoint(idx)] = (lm.x, lm.y, lm.z)
    return HandSkeleton.from_positions(positions)


def update_from_results(results: Any, timestamp: float = 0.0, min_presence: float = 0.5) -> HandTrackingUpdate:
    """
    Pipeline: Pair (world landmarks, handedness) -> Side -> Skeleton -> Update.
    If the model labels two hands with the same side, the first one wins.
    """
    frames: Dict[HandSide, HandTrackingFrame] = {}

    world_hands = getattr(results, "multi_hand_world_landmarks", None) or []
    handedness_list = getattr(results, "multi_handedness", None) or []

    for world_lms, handedness in zip(world_hands, handedness_list):
        side = side_from_handedness(handedness)
        if side is None or side in frames:
            continue
        frames[side] = HandTrackingFrame(
            side=side,
            origin_from_anchor=MEDIAPIPE_TO_SCENE.copy(),
            skeleton=skeleton_from_world_landmarks(world_lms, min_presence),
        )

    return HandTrackingUpdate(
        left=frames.get(HandSide.LEFT),
        right=frames.get(HandSide.RIGHT),
        timestamp=timestamp,
    )
