"""
Thumbstick Types.
Central definition of Data Contracts to prevent circular imports.
"""
import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from thumbstick.core.errors import ConfigurationError

Vector3 = Tuple[float, float, float]


# --- HAND TYPES ---
class HandSide(Enum):
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def from_label(cls, raw_label: Any) -> "HandSide":
        """Accepts enum members, config strings and MediaPipe labels ("Left")."""
        if isinstance(raw_label, cls):
            return raw_label
        if isinstance(raw_label, str):
            clean = raw_label.strip().lower()
            for member in cls:
                if member.value == clean:
                    return member
        raise ConfigurationError(f"Unknown hand side: {raw_label!r}")


class HandJoint(IntEnum):
    """Hand skeleton joints, numbered like the MediaPipe landmark model."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


class ReferenceJoint(Enum):
    """Center of the virtual stick. The knuckle gives a wider throw than the tip."""
    INDEX_KNUCKLE = "index_knuckle"
    INDEX_TIP = "index_tip"

    @property
    def joint(self) -> HandJoint:
        if self is ReferenceJoint.INDEX_TIP:
            return HandJoint.INDEX_TIP
        return HandJoint.INDEX_MCP

    @classmethod
    def from_label(cls, raw_label: Any) -> "ReferenceJoint":
        if isinstance(raw_label, cls):
            return raw_label
        if isinstance(raw_label, str):
            clean = raw_label.strip().lower()
            for member in cls:
                if member.value == clean:
                    return member
        raise ConfigurationError(f"Unknown reference joint: {raw_label!r}")


@dataclass(frozen=True, eq=False)
class HandSkeleton:
    """
    Joint poses relative to the hand anchor.
    Each value is a 4x4 homogeneous anchor-from-joint transform.
    Untracked joints are simply absent from `joints`.
    """
    joints: Mapping[HandJoint, np.ndarray] = field(default_factory=dict)

    def get(self, joint: HandJoint) -> Optional[np.ndarray]:
        return self.joints.get(joint)

    @classmethod
    def from_positions(cls, positions: Mapping[HandJoint, Sequence[float]]) -> "HandSkeleton":
        """Builds translation-only joint transforms from raw xyz positions."""
        joints = {}
        for joint, pos in positions.items():
            transform = np.eye(4, dtype=np.float64)
            transform[:3, 3] = np.asarray(pos, dtype=np.float64)[:3]
            joints[HandJoint(joint)] = transform
        return cls(joints)


@dataclass(frozen=True, eq=False)
class HandTrackingFrame:
    """One hand's raw result for one tracking frame."""
    side: HandSide
    origin_from_anchor: np.ndarray = field(default_factory=lambda: np.eye(4))
    skeleton: Optional[HandSkeleton] = None


@dataclass(frozen=True, eq=False)
class HandTrackingUpdate:
    """A single push from the tracking source. Either hand may be missing."""
    left: Optional[HandTrackingFrame] = None
    right: Optional[HandTrackingFrame] = None
    timestamp: float = 0.0

    def for_side(self, side: HandSide) -> Optional[HandTrackingFrame]:
        return self.left if side is HandSide.LEFT else self.right


# --- SIGNAL TYPES ---
@dataclass(frozen=True, eq=False)
class JointSample:
    """World-space positions of the two joints that form the stick. None = untracked."""
    thumb_tip: Optional[np.ndarray] = None
    reference: Optional[np.ndarray] = None

    @property
    def is_complete(self) -> bool:
        return self.thumb_tip is not None and self.reference is not None


@dataclass(frozen=True)
class ControlSignal:
    """
    The published joystick state. Immutable: the processor swaps whole snapshots
    so a reader can never observe a torn (direction, magnitude, active) tuple.
    """
    direction: Vector3 = (0.0, 0.0, 0.0)
    magnitude: float = 0.0
    active: bool = False

    @classmethod
    def neutral(cls) -> "ControlSignal":
        return cls()

    @property
    def vector(self) -> np.ndarray:
        return np.array(self.direction, dtype=np.float64)


# --- CONFIGURATION ---
def _finite(value: float, name: str) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class ThumbControlConfig:
    """Immutable joystick configuration. Validated on construction (fail fast)."""
    hand_side: HandSide = HandSide.RIGHT
    deadzone: float = 0.02
    max_distance: float = 0.15
    scale_factor: float = 1.0
    reference_joint: ReferenceJoint = ReferenceJoint.INDEX_KNUCKLE
    hold_in_deadzone: bool = False

    def __post_init__(self):
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "hand_side", HandSide.from_label(self.hand_side))
        object.__setattr__(self, "reference_joint", ReferenceJoint.from_label(self.reference_joint))
        object.__setattr__(self, "hold_in_deadzone", bool(self.hold_in_deadzone))

        deadzone = _finite(self.deadzone, "deadzone")
        max_distance = _finite(self.max_distance, "max_distance")
        scale_factor = _finite(self.scale_factor, "scale_factor")

        if max_distance <= 0:
            raise ConfigurationError(f"max_distance must be > 0, got {max_distance}")
        if deadzone < 0:
            raise ConfigurationError(f"deadzone must be >= 0, got {deadzone}")
        if deadzone >= max_distance:
            raise ConfigurationError(
                f"deadzone ({deadzone}) must be smaller than max_distance ({max_distance})"
            )
        if scale_factor <= 0:
            raise ConfigurationError(f"scale_factor must be > 0, got {scale_factor}")

        object.__setattr__(self, "deadzone", deadzone)
        object.__setattr__(self, "max_distance", max_distance)
        object.__setattr__(self, "scale_factor", scale_factor)

    @classmethod
    def from_config(cls, config: Dict[str, Any], **overrides) -> "ThumbControlConfig":
        """Create a config from the layered CONFIG dict. Keyword overrides win."""
        values = {
            "hand_side": config.get("HAND_SIDE", HandSide.RIGHT),
            "deadzone": config.get("DEADZONE", 0.02),
            "max_distance": config.get("MAX_DISTANCE", 0.15),
            "scale_factor": config.get("SCALE_FACTOR", 1.0),
            "reference_joint": config.get("REFERENCE_JOINT", ReferenceJoint.INDEX_KNUCKLE),
            "hold_in_deadzone": config.get("HOLD_IN_DEADZONE", False),
        }
        values.update(overrides)
        return cls(**values)
