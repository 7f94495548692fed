import cv2
import sys
import os
import time

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from thumbstick.config import CONFIG, init_logging
from thumbstick.control.controller import ThumbController
from thumbstick.core.errors import ConfigurationError, TrackingUnavailableError
from thumbstick.core.types import ThumbControlConfig
from thumbstick.tracking.mediapipe_source import MediaPipeHandTrackingSource
from thumbstick.ui.hud import HUD

WINDOW = "Deadzone Lab"


def run_lab():
    print("🎚️ DEADZONE LAB (Joystick Feel)")
    print("   -> Tune 'DEADZONE' until a relaxed thumb reads RESET.")
    print("   -> Tune 'MAX DIST' until a comfortable stretch reads SATURATED.")
    print("   -> 'HOLD' = 1 keeps the last signal inside the deadzone.")

    init_logging()
    cv2.namedWindow(WINDOW, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW, 1000, 700)

    def nothing(x): pass

    # Sliders (millimetres / tenths)
    cv2.createTrackbar("DEADZONE (mm)", WINDOW, int(CONFIG["DEADZONE"]*1000), 100, nothing)
    cv2.createTrackbar("MAX DIST (mm)", WINDOW, int(CONFIG["MAX_DISTANCE"]*1000), 250, nothing)
    cv2.createTrackbar("SCALE (x10)", WINDOW, int(CONFIG["SCALE_FACTOR"]*10), 200, nothing)
    cv2.createTrackbar("HOLD", WINDOW, int(CONFIG["HOLD_IN_DEADZONE"]), 1, nothing)
    cv2.createTrackbar("TIP REF", WINDOW, int(CONFIG["REFERENCE_JOINT"] == "index_tip"), 1, nothing)

    source = MediaPipeHandTrackingSource()
    hud = HUD()
    config = ThumbControlConfig.from_config(CONFIG)
    controller = ThumbController(config, source)

    try:
        controller.start()
    except TrackingUnavailableError as exc:
        print(f"❌ TRACKING UNAVAILABLE: {exc}")
        return

    try:
        while source.is_running:
            # Live Update (config is immutable -> rebuild the controller on change)
            try:
                wanted = ThumbControlConfig.from_config(
                    CONFIG,
                    deadzone=cv2.getTrackbarPos("DEADZONE (mm)", WINDOW) / 1000.0,
                    max_distance=cv2.getTrackbarPos("MAX DIST (mm)", WINDOW) / 1000.0,
                    scale_factor=max(cv2.getTrackbarPos("SCALE (x10)", WINDOW), 1) / 10.0,
                    hold_in_deadzone=bool(cv2.getTrackbarPos("HOLD", WINDOW)),
                    reference_joint="index_tip" if cv2.getTrackbarPos("TIP REF", WINDOW) else "index_knuckle",
                )
            except ConfigurationError:
                wanted = config  # Keep the last valid config while sliders cross

            if wanted != config:
                config = wanted
                old = controller
                controller = ThumbController(config, source)
                # Subscribe the new one first so the shared source keeps running
                controller.start()
                old.stop()
                print(f"   -> {config}")

            frame, image_landmarks = source.read()
            if frame is None:
                time.sleep(0.01)
                continue

            hud.render(frame, controller.signal, config, image_landmarks)
            cv2.imshow(WINDOW, frame)
            if cv2.waitKey(1) & 0xFF == 27: break
    finally:
        controller.stop()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    run_lab()
