"""
Thumbstick Core Interfaces.
Defines the abstract contract of the hand-tracking source the controller consumes.
"""

from abc import ABC, abstractmethod
from typing import Callable

from thumbstick.core.types import HandTrackingUpdate

UpdateCallback = Callable[[HandTrackingUpdate], None]


class IHandTrackingSource(ABC):
    """
    Abstract Protocol for a push-based hand tracker.
    Once started, every subscriber receives one HandTrackingUpdate per tracking frame,
    usually from the tracker's own thread.
    """

    # --- SUBSCRIPTION ---
    @abstractmethod
    def subscribe(self, callback: UpdateCallback) -> None: pass
    @abstractmethod
    def unsubscribe(self, callback: UpdateCallback) -> None: pass
    @property
    @abstractmethod
    def has_subscribers(self) -> bool: pass

    # --- LIFECYCLE ---
    @abstractmethod
    def start(self) -> None:
        """Acquire the sensor. Raises TrackingUnavailableError on failure."""
    @abstractmethod
    def stop(self) -> None:
        """Stop delivery. Synchronous and idempotent."""
    @property
    @abstractmethod
    def is_running(self) -> bool: pass
