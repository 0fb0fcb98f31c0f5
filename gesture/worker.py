# gesture/worker.py
import time
import threading
from dataclasses import replace
from typing import Callable

import cv2
import mediapipe as mp

from config import (
    MIRROR, SHOW_CAMERA, DETECTION_INTERVAL_SEC,
    MP_MAX_NUM_HANDS, MP_MODEL_COMPLEXITY,
    MP_MIN_DETECTION_CONFIDENCE, MP_MIN_TRACKING_CONFIDENCE,
)
from gesture.tracker import AimTracker
from gesture.types import GestureState
from gesture.utils import to_landmarks
from logger import get_logger

log = get_logger("GestureWorker")

PREVIEW_WINDOW = "Camera (press Q to close this window)"


def mediapipe_hands():
    return mp.solutions.hands.Hands(
        static_image_mode=False,
        max_num_hands=MP_MAX_NUM_HANDS,
        model_complexity=MP_MODEL_COMPLEXITY,
        min_detection_confidence=MP_MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence=MP_MIN_TRACKING_CONFIDENCE,
    )


class GestureWorker(threading.Thread):
    """
    Detection driver. Single writer of `state`; readers copy it via snapshot().
    """

    def __init__(self, state: GestureState, cap, cam_info: str = "",
                 interval: float = DETECTION_INTERVAL_SEC, show_camera: bool = SHOW_CAMERA,
                 hands_factory: Callable = mediapipe_hands):
        super().__init__(daemon=True)
        self.state = state
        self.cap = cap
        self.cam_info = cam_info
        self.interval = interval
        self.hands_factory = hands_factory
        self._stop_event = threading.Event()
        self.lock = threading.Lock()

        self.tracker = AimTracker()
        self.show_camera = show_camera
        self._seq = 0
        self._last_detection = 0.0

        with self.lock:
            self.state.cam_info = cam_info

    def stop(self):
        self._stop_event.set()

    def snapshot(self) -> GestureState:
        with self.lock:
            return replace(self.state)

    def publish(self, new_state: GestureState):
        self._seq += 1
        new_state.seq = self._seq
        new_state.cam_info = self.cam_info
        with self.lock:
            self.state.__dict__.update(new_state.__dict__)

    def _publish_label(self, label: str):
        # camera/detector trouble counts as no hand
        s = self.tracker.process(None)
        s.label = label
        self.publish(s)

    def run(self):
        hands = self.hands_factory()
        log.info(f"Started: {self.cam_info}")

        try:
            while not self._stop_event.is_set():
                try:
                    self._cycle(hands)
                except Exception:
                    log.exception("Detection cycle failed")
                    self._publish_label("DETECTION_ERROR")
                    self._stop_event.wait(0.01)
        finally:
            hands.close()
            self.cap.release()
            if self.show_camera:
                self._close_preview()
            log.info("Stopped")

    def _cycle(self, hands):
        ok, frame = self.cap.read()
        if not ok:
            self._publish_label("CAMERA_READ_FAILED")
            time.sleep(0.01)
            return

        now = time.monotonic()
        if now - self._last_detection < self.interval:
            time.sleep(0.002)
            return
        self._last_detection = now

        hand_landmarks = self._detect(hands, frame)
        if hand_landmarks is not None:
            new_state = self.tracker.process(to_landmarks(hand_landmarks.landmark))
        else:
            new_state = self.tracker.process(None)
        self.publish(new_state)

        if self.show_camera:
            try:
                self._show_preview(frame, hand_landmarks, new_state.label)
            except Exception:
                # no GUI backend, or the window went away
                log.exception("Camera preview failed; preview disabled")
                self.show_camera = False
                self._close_preview()

    def _detect(self, hands, frame):
        if MIRROR:
            frame[:] = cv2.flip(frame, 1)
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        result = hands.process(rgb)
        if result.multi_hand_landmarks:
            return result.multi_hand_landmarks[0]
        return None

    def _show_preview(self, frame, hand_landmarks, label):
        if hand_landmarks is not None:
            mp.solutions.drawing_utils.draw_landmarks(
                frame, hand_landmarks, mp.solutions.hands.HAND_CONNECTIONS)
        cv2.putText(frame, self.cam_info, (10, 24), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2)
        cv2.putText(frame, label, (10, 52), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2)
        cv2.imshow(PREVIEW_WINDOW, frame)
        k = cv2.waitKey(1) & 0xFF
        if k in (ord('q'), ord('Q')):
            cv2.destroyWindow(PREVIEW_WINDOW)
            self.show_camera = False

    def _close_preview(self):
        try:
            cv2.destroyAllWindows()
        except cv2.error as e:
            log.warning(f"Could not close preview window: {e}")
