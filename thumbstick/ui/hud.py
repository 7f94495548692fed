"""
Thumbstick HUD.
Visualizes the stick: Deadzone ring, Saturation ring, Knob and Depth bar.
"""

import cv2
import numpy as np
import mediapipe as mp

from thumbstick.core.types import ControlSignal, ThumbControlConfig


class HUD:
    def __init__(self):
        self.mp_draw = mp.solutions.drawing_utils
        self.mp_hands = mp.solutions.hands

        # --- THEME COLORS (BGR) ---
        self.C_CYAN   = (255, 255, 0)    # Standard UI
        self.C_RED    = (0, 0, 255)      # Reset / No Hand
        self.C_ORANGE = (0, 165, 255)    # Saturated
        self.C_GREEN  = (0, 255, 0)      # Active
        self.C_PURPLE = (255, 0, 255)    # Deadzone
        self.C_DARK   = (20, 20, 20)     # Backgrounds

        self.stick_radius = 80

    def _draw_glass_panel(self, img, x, y, w, h, color, alpha=0.6):
        """Draws a semi-transparent 'Glass' background."""
        # Safety check for image bounds
        if y+h > img.shape[0] or x+w > img.shape[1] or x < 0 or y < 0: return

        sub_img = img[y:y+h, x:x+w]
        rect = np.full(sub_img.shape, color, dtype=np.uint8)
        img[y:y+h, x:x+w] = cv2.addWeighted(sub_img, 1 - alpha, rect, alpha, 1.0)
        cv2.rectangle(img, (x, y), (x+w, y+h), color, 1)

    def render(self, frame, signal: ControlSignal, config: ThumbControlConfig, image_landmarks=None, entity=None):
        h, w, _ = frame.shape

        # 1. DETERMINE STATE & COLOR
        if not signal.active:
            ui_color, status_msg = self.C_RED, "STICK RESET // MOVE THUMB"
        elif signal.magnitude >= 1.0:
            ui_color, status_msg = self.C_ORANGE, "STICK SATURATED"
        else:
            ui_color, status_msg = self.C_GREEN, "STICK ACTIVE"

        # 2. DRAW SKELETON
        for lms in image_landmarks or []:
            self.mp_draw.draw_landmarks(
                frame, lms, self.mp_hands.HAND_CONNECTIONS,
                self.mp_draw.DrawingSpec(color=self.C_DARK, thickness=4, circle_radius=2),
                self.mp_draw.DrawingSpec(color=ui_color, thickness=2, circle_radius=2)
            )

        # 3. STICK WIDGET (bottom-left)
        r = self.stick_radius
        cx, cy = 30 + r, h - 30 - r
        self._draw_glass_panel(frame, cx - r - 10, cy - r - 10, 2*r + 20, 2*r + 20, self.C_DARK, 0.5)
        cv2.circle(frame, (cx, cy), r, self.C_CYAN, 1)
        dz_px = int(r * config.deadzone / config.max_distance)
        cv2.circle(frame, (cx, cy), dz_px, self.C_PURPLE, 1)

        # Knob: |vector| / (max_distance * scale) == magnitude, so the ring is saturation
        knob = signal.vector / (config.max_distance * config.scale_factor)
        kx = cx + int(knob[0] * r)
        ky = cy - int(knob[1] * r)  # Scene Y is up, image Y is down
        cv2.line(frame, (cx, cy), (kx, ky), ui_color, 2)
        cv2.circle(frame, (kx, ky), 8, ui_color, -1)

        # Depth bar (Z)
        bar_x, bar_h = cx + r + 20, 2 * r
        cv2.rectangle(frame, (bar_x, cy - r), (bar_x + 10, cy + r), self.C_CYAN, 1)
        z_px = int(np.clip(knob[2], -1.0, 1.0) * (bar_h // 2))
        cv2.rectangle(frame, (bar_x, min(cy, cy - z_px)), (bar_x + 10, max(cy, cy - z_px)), ui_color, -1)

        # 4. STATUS BAR
        self._draw_glass_panel(frame, 20, 20, 420, 80, self.C_DARK, 0.4)
        cv2.putText(frame, f"{config.hand_side.value.upper()} | MAG {signal.magnitude:.2f}", (35, 55),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, ui_color, 2)
        cv2.putText(frame, status_msg, (35, 85),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, ui_color, 1)

        if entity is not None:
            x, y, z = entity.position
            cv2.putText(frame, f"ENTITY ({x:+.2f}, {y:+.2f}, {z:+.2f})", (w - 330, h - 30),
                        cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_CYAN, 1)

    def draw_fps(self, frame, fps):
        cv2.putText(frame, f"{int(fps)} FPS", (frame.shape[1]-100, 40),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_GREEN, 1)
