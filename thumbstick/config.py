"""
Thumbstick Configuration Management.
====================================

This module defines the tunable parameters of the thumb joystick.
The parameters are organized into the same "Layer Cake" model as the pipeline:
Input (camera + tracker) -> Joystick (signal shaping) -> Scene (entity motion).

! WARNING !
DEADZONE must stay strictly below MAX_DISTANCE. The controller refuses to
start with a degenerate range (always saturated or always reset).
All distances are in the tracker's length units (metres for MediaPipe world landmarks).
"""

import logging

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: INPUT SIGNAL (Camera + Hand Tracker)
    # =========================================================
    "CAMERA_INDEX": 0,                  # OpenCV device ID
    "TARGET_FPS": 30,                   # Hardware limit for Camera
    "MIRROR_INPUT": True,               # Flip frames so handedness matches the user
    "MAX_NUM_HANDS": 2,
    "MIN_DETECTION_CONFIDENCE": 0.5,
    "MIN_TRACKING_CONFIDENCE": 0.5,
    "MODEL_COMPLEXITY": 1,              # 0=Fast, 1=Balanced
    "MIN_JOINT_PRESENCE": 0.5,          # Joints reported below this are treated as untracked

    # =========================================================
    # LAYER 2: JOYSTICK FEEL (Signal Shaping)
    # =========================================================
    "HAND_SIDE": "right",               # Which hand drives the stick
    "REFERENCE_JOINT": "index_knuckle", # "index_knuckle" (wide range) or "index_tip" (short throw)
    "DEADZONE": 0.02,                   # Thumb travel ignored as noise (2 cm)
    "MAX_DISTANCE": 0.15,               # Thumb travel that saturates magnitude at 1.0
    "SCALE_FACTOR": 1.0,                # Multiplier on the published direction vector
    "HOLD_IN_DEADZONE": False,          # True = keep last active signal inside the deadzone

    # =========================================================
    # LAYER 3: SCENE MOTION (Entity Integration)
    # =========================================================
    "MOVEMENT_SPEED": 1.0,              # Default per-entity speed multiplier
    "MOTION_GAIN": 2.0,                 # Empirical K applied on every tick (2-10 feels sane)

    # =========================================================
    # LAYER 4: DIAGNOSTICS
    # =========================================================
    "LOG_LEVEL": "INFO",
    "LOG_FORMAT": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def init_logging(level=None):
    """
    Configures the root logger for the entry points (main, tools).
    Library modules only ever call logging.getLogger(__name__).
    """
    level = level or CONFIG["LOG_LEVEL"]
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=CONFIG["LOG_FORMAT"], datefmt="%H:%M:%S")
