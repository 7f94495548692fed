"""
Thumbstick Webcam Tracker (MediaPipe Hands).
============================================

High-Performance Camera + Tracker thread.

Why a thread:
Standard cv2.VideoCapture.read() is blocking, and Hands.process() takes a few
dozen milliseconds. Running both on the render loop would tie the joystick rate
to the frame rate and stall rendering. This source runs capture + inference in
a daemon thread and pushes one HandTrackingUpdate per processed frame to its
subscribers. The render loop only ever polls the controller's latest signal.
"""
import logging
import threading
import time
from typing import Any, Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np

from thumbstick.config import CONFIG
from thumbstick.core.errors import TrackingUnavailableError
from thumbstick.tracking.base import HandTrackingSource
from thumbstick.tracking.landmarks import update_from_results

logger = logging.getLogger(__name__)


class MediaPipeHandTrackingSource(HandTrackingSource):
    """
    Attributes:
        camera_index (int): OpenCV device ID.
        mirror (bool): Flip frames horizontally so "Left" means the user's left hand.
    """
    def __init__(self, camera_index: Optional[int] = None, mirror: Optional[bool] = None):
        super().__init__()
        self.camera_index = CONFIG["CAMERA_INDEX"] if camera_index is None else camera_index
        self.mirror = CONFIG["MIRROR_INPUT"] if mirror is None else mirror
        self.min_presence = CONFIG["MIN_JOINT_PRESENCE"]

        self.cap = None
        self.hands = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self.join_timeout = 2.0

        # Latest frame for the HUD. Lock ensures we don't read a half-written pair.
        self._frame_lock = threading.Lock()
        self._frame: Optional[np.ndarray] = None
        self._image_landmarks: Any = None

    def _open(self) -> None:
        self.cap = cv2.VideoCapture(self.camera_index)
        if not self.cap.isOpened():
            self.cap.release()
            self.cap = None
            raise TrackingUnavailableError(f"Camera {self.camera_index} could not be opened")
        # Force a high target FPS to minimize hardware buffering latency
        self.cap.set(cv2.CAP_PROP_FPS, CONFIG["TARGET_FPS"])

        try:
            self.hands = mp.solutions.hands.Hands(
                max_num_hands=CONFIG["MAX_NUM_HANDS"],
                min_detection_confidence=CONFIG["MIN_DETECTION_CONFIDENCE"],
                min_tracking_confidence=CONFIG["MIN_TRACKING_CONFIDENCE"],
                model_complexity=CONFIG["MODEL_COMPLEXITY"],
            )
        except Exception:
            self.cap.release()
            self.cap = None
            raise

        # One stop event per reader: an orphaned reader never picks up a newer start
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._reader, args=(self.cap, self.hands, self._stop_event),
            name="thumbstick-tracker", daemon=True
        )
        self._thread.start()

    def _reader(self, cap, hands, stop_event):
        """
        Background thread loop: grab -> track -> publish.
        The reader owns cap and hands: they are released here, once it can no longer touch them.
        """
        try:
            while not stop_event.is_set():
                ret, frame = cap.read()
                if not ret:
                    if not stop_event.is_set():
                        logger.error("Camera %s stopped delivering frames", self.camera_index)
                        self._backend_lost()
                    break

                # MediaPipe requires RGB; OpenCV uses BGR
                if self.mirror:
                    frame = cv2.flip(frame, 1)
                rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
                results = hands.process(rgb)
                if stop_event.is_set():
                    break

                with self._frame_lock:
                    self._frame = frame
                    self._image_landmarks = results.multi_hand_landmarks

                self.publish(update_from_results(results, time.time(), self.min_presence))
        finally:
            cap.release()
            hands.close()

    def _close(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self.join_timeout)
            if self._thread.is_alive():
                logger.warning("Tracker thread did not stop within %.1fs; it will release the camera on exit",
                               self.join_timeout)
        self._thread = None
        self._stop_event = None
        self.cap = None
        self.hands = None
        with self._frame_lock:
            self._frame = None
            self._image_landmarks = None

    def read(self) -> Tuple[Optional[np.ndarray], Any]:
        """
        Returns a copy of the most recent frame and its image landmarks (for drawing).
        Non-blocking.
        """
        with self._frame_lock:
            frame = self._frame.copy() if self._frame is not None else None
            return frame, self._image_landmarks
