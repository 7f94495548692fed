"""
Thumbstick Scene Adapter.
=========================

Applies the joystick signal to scene entities once per render tick.

Key Logic: "Poll & Integrate"
1. The host registers entities with a per-entity movement speed.
2. Every tick, the signal is read ONCE (one consistent snapshot for all entities).
3. If active, each entity moves by direction * magnitude * speed * dt * K.
   K (motion gain) is empirical; 2.0 keeps a saturated stick at walking pace.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np

from thumbstick.config import CONFIG
from thumbstick.core.types import ControlSignal


@dataclass
class ThumbControlledComponent:
    movement_speed: float = 1.0


class SceneEntity:
    """Minimal entity for hosts without a scene graph (and for the demo)."""
    __slots__ = ['name', 'position']

    def __init__(self, name: str = "entity", position: Optional[Sequence[float]] = None):
        self.name = name
        self.position = np.zeros(3) if position is None else np.array(position, dtype=np.float64)

    def __repr__(self):
        return f"SceneEntity({self.name!r}, position={self.position.tolist()})"


class ThumbControlledSystem:
    """
    Attributes:
        signal_provider: Anything exposing a `signal` property (ThumbController, ThumbSignalProcessor).
        motion_gain (float): The K multiplier applied on every tick.
    """
    def __init__(self, signal_provider: Any, motion_gain: Optional[float] = None):
        self.signal_provider = signal_provider
        self.motion_gain = CONFIG["MOTION_GAIN"] if motion_gain is None else float(motion_gain)
        # Keyed by identity: entities only need a writable `position`
        self._components: Dict[int, tuple] = {}

    # --- REGISTRATION ---
    def add_thumb_control(self, entity: Any, movement_speed: Optional[float] = None) -> ThumbControlledComponent:
        speed = CONFIG["MOVEMENT_SPEED"] if movement_speed is None else float(movement_speed)
        component = ThumbControlledComponent(movement_speed=speed)
        self._components[id(entity)] = (entity, component)
        return component

    def remove_thumb_control(self, entity: Any) -> None:
        self._components.pop(id(entity), None)

    def has_thumb_control(self, entity: Any) -> bool:
        return id(entity) in self._components

    def component_for(self, entity: Any) -> Optional[ThumbControlledComponent]:
        entry = self._components.get(id(entity))
        return entry[1] if entry else None

    def __len__(self):
        return len(self._components)

    # --- TICK ---
    @staticmethod
    def entity_delta(signal: ControlSignal, movement_speed: float, delta_time: float, motion_gain: float) -> np.ndarray:
        if not signal.active:
            return np.zeros(3)
        return signal.vector * signal.magnitude * movement_speed * delta_time * motion_gain

    def update(self, delta_time: float) -> int:
        """Per-tick hook. Returns how many entities were moved."""
        signal = self.signal_provider.signal
        if not signal.active:
            return 0

        moved = 0
        for entity, component in list(self._components.values()):
            delta = self.entity_delta(signal, component.movement_speed, delta_time, self.motion_gain)
            entity.position = np.asarray(entity.position, dtype=np.float64) + delta
            moved += 1
        return moved
