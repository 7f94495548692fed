"""
Thumbstick - Demo Entry Point.
=============================

Wires the full loop end to end:
1. Perception: MediaPipe + camera thread (pushes tracking updates).
2. Control: ThumbController (tracker thread writes the signal).
3. Scene: ThumbControlledSystem (render loop polls the signal once per tick).
4. Feedback: HUD.

Usage:
    $ python -m thumbstick.main
    $ thumbstick-demo
"""
import time

import cv2

from thumbstick.config import CONFIG, init_logging
from thumbstick.control.controller import ThumbController
from thumbstick.control.thumb_system import SceneEntity, ThumbControlledSystem
from thumbstick.core.errors import TrackingUnavailableError
from thumbstick.core.types import ThumbControlConfig
from thumbstick.tracking.mediapipe_source import MediaPipeHandTrackingSource
from thumbstick.ui.hud import HUD


def main() -> int:
    """
    Main Event Loop.
    """
    # 1. Boot Sequence
    init_logging()
    print("🕹️ THUMBSTICK: BOOTING")
    print("   -> Press 'ESC' to Exit")
    print("   -> Press 'R' to Recenter the Entity")
    print("   -> Press 'V' to Toggle Visuals")

    # 2. Initialize Subsystems
    config = ThumbControlConfig.from_config(CONFIG)
    source = MediaPipeHandTrackingSource()
    controller = ThumbController(config, source)

    entity = SceneEntity("cursor")
    system = ThumbControlledSystem(controller)
    system.add_thumb_control(entity, CONFIG["MOVEMENT_SPEED"])

    try:
        controller.start()
    except TrackingUnavailableError as exc:
        print(f"❌ TRACKING UNAVAILABLE: {exc}")
        return 1

    hud = HUD()
    window_name = "Thumbstick"
    cv2.namedWindow(window_name)

    prev_time = time.time()
    show_visuals = True

    try:
        while source.is_running:
            frame, image_landmarks = source.read()
            if frame is None:
                time.sleep(0.01)
                continue

            # --- SCENE TICK ---
            curr = time.time()
            dt = curr - prev_time
            prev_time = curr
            system.update(dt)

            # --- FEEDBACK ---
            if show_visuals:
                hud.render(frame, controller.signal, config, image_landmarks, entity)
            hud.draw_fps(frame, 1/dt if dt > 0 else 0)
            cv2.imshow(window_name, frame)

            # Input Handling
            k = cv2.waitKey(1) & 0xFF
            if k == 27: break # ESC
            elif k == ord('r'): entity.position[:] = 0.0
            elif k == ord('v'): show_visuals = not show_visuals

    finally:
        # Graceful Shutdown
        controller.stop()
        cv2.destroyAllWindows()
        print("🔴 THUMBSTICK OFFLINE")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
