"""
Thumbstick Joint Extractor.
Pure, stateless, frame-local: raw skeleton -> two world-space joint positions.
"""
from typing import Optional

import numpy as np

from thumbstick.core.types import (
    HandJoint, HandSkeleton, HandTrackingFrame, JointSample, ReferenceJoint
)


class JointExtractor:
    def __init__(self, reference_joint: ReferenceJoint = ReferenceJoint.INDEX_KNUCKLE):
        self.reference_joint = ReferenceJoint.from_label(reference_joint)

    def extract(self, frame: Optional[HandTrackingFrame]) -> JointSample:
        """
        Returns the thumb tip and the reference joint in the origin frame.
        A missing skeleton or joint is reported as None, never raised.
        """
        if frame is None or frame.skeleton is None:
            return JointSample(None, None)

        anchor = np.asarray(frame.origin_from_anchor, dtype=np.float64)
        return JointSample(
            thumb_tip=self._world_position(anchor, frame.skeleton, HandJoint.THUMB_TIP),
            reference=self._world_position(anchor, frame.skeleton, self.reference_joint.joint),
        )

    @staticmethod
    def _world_position(origin_from_anchor: np.ndarray,
                        skeleton: HandSkeleton,
                        joint: HandJoint) -> Optional[np.ndarray]:
        anchor_from_joint = skeleton.get(joint)
        if anchor_from_joint is None:
            return None
        origin_from_joint = origin_from_anchor @ np.asarray(anchor_from_joint, dtype=np.float64)
        # Translation column of the composed pose
        return origin_from_joint[:3, 3].copy()
