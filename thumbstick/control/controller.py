"""
Thumbstick Controller.
Thin public accessor: wires one tracking source -> extractor -> processor for ONE hand side.
Construct one per hand you care about and hand it to whatever consumes the signal.
"""

import logging
from typing import Optional

from thumbstick.core.errors import TrackingUnavailableError
from thumbstick.core.interfaces import IHandTrackingSource
from thumbstick.core.joint_extractor import JointExtractor
from thumbstick.core.signal_processor import ThumbSignalProcessor
from thumbstick.core.types import ControlSignal, HandSide, HandTrackingUpdate, ThumbControlConfig

logger = logging.getLogger(__name__)


class ThumbController:
    def __init__(self,
                 config: Optional[ThumbControlConfig] = None,
                 source: Optional[IHandTrackingSource] = None,
                 extractor: Optional[JointExtractor] = None):
        self.config = config or ThumbControlConfig()
        self.source = source
        self.extractor = extractor or JointExtractor(self.config.reference_joint)
        self.processor = ThumbSignalProcessor(self.config)
        self._subscribed = False

    @property
    def signal(self) -> ControlSignal:
        """Latest snapshot. Safe to poll from the render loop."""
        return self.processor.signal

    @property
    def is_running(self) -> bool:
        return self._subscribed and self.source is not None and self.source.is_running

    def process_update(self, update: HandTrackingUpdate) -> ControlSignal:
        """Tracker callback: extract the configured hand only and feed the processor."""
        frame = update.for_side(self.config.hand_side)
        sample = self.extractor.extract(frame) if frame is not None else None

        if self.config.hand_side is HandSide.LEFT:
            return self.processor.on_frame(sample, None)
        return self.processor.on_frame(None, sample)

    # --- LIFECYCLE ---
    def start(self) -> None:
        """
        Subscribes and starts the source.
        TrackingUnavailableError propagates; restart policy belongs to the host.
        """
        if self.source is None:
            raise TrackingUnavailableError("ThumbController has no tracking source")
        if self.is_running:
            return

        # Still subscribed but the backend died: the source reopens it below
        if not self._subscribed:
            self.source.subscribe(self.process_update)
            self._subscribed = True
        try:
            self.source.start()
        except Exception:
            self.source.unsubscribe(self.process_update)
            self._subscribed = False
            raise
        logger.info("Thumbstick controller online (%s hand)", self.config.hand_side.value)

    def stop(self) -> None:
        """Idempotent. The source is only stopped once nobody listens to it anymore."""
        if not self._subscribed:
            return
        self._subscribed = False
        self.source.unsubscribe(self.process_update)
        if not self.source.has_subscribers:
            self.source.stop()
        self.processor.reset()
        logger.info("Thumbstick controller offline (%s hand)", self.config.hand_side.value)

    def __enter__(self) -> "ThumbController":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
