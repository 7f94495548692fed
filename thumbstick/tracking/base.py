"""
Thumbstick Tracking Source Base.
Subscriber fan-out and an idempotent start/stop lifecycle shared by every tracker backend.
Backends only implement `_open` (acquire the sensor) and `_close` (release it),
and call `_backend_lost()` when the sensor dies on its own.
"""

import logging
import threading
import time
from abc import abstractmethod
from typing import List

from thumbstick.core.errors import TrackingUnavailableError
from thumbstick.core.interfaces import IHandTrackingSource, UpdateCallback
from thumbstick.core.types import HandTrackingUpdate

logger = logging.getLogger(__name__)


class HandTrackingSource(IHandTrackingSource):
    def __init__(self):
        self._subscribers: List[UpdateCallback] = []
        self._lock = threading.Lock()
        self._running = False
        self._lost = False

    # --- SUBSCRIPTION ---
    def subscribe(self, callback: UpdateCallback) -> None:
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def unsubscribe(self, callback: UpdateCallback) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    @property
    def has_subscribers(self) -> bool:
        with self._lock:
            return bool(self._subscribers)

    def publish(self, update: HandTrackingUpdate) -> None:
        """Delivers one update to every subscriber (called from the tracker thread)."""
        with self._lock:
            if not self._running or self._lost:
                return
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(update)

    # --- LIFECYCLE ---
    @property
    def is_running(self) -> bool:
        return self._running and not self._lost

    def start(self) -> None:
        if self.is_running:
            return
        name = type(self).__name__
        if self._running:
            # Backend died on its own: release what is left before reopening
            self._running = False
            self._close()
        self._lost = False
        try:
            self._open()
        except TrackingUnavailableError:
            logger.error("%s could not be started", name)
            raise
        except Exception as exc:
            logger.error("%s could not be started: %s", name, exc)
            raise TrackingUnavailableError(f"{name} could not be started: {exc}") from exc
        self._running = True
        logger.info("%s started", name)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._close()
        logger.info("%s stopped", type(self).__name__)

    def _backend_lost(self) -> None:
        """
        Called by the backend when the sensor stops delivering.
        Subscribers get one empty update (no hands) so every stick resets.
        """
        logger.error("%s lost its sensor", type(self).__name__)
        self.publish(HandTrackingUpdate(timestamp=time.time()))
        self._lost = True

    @abstractmethod
    def _open(self) -> None: pass

    @abstractmethod
    def _close(self) -> None: pass
