# gesture/tracker.py
from typing import Optional

from config import AIM_SMOOTHING
from gesture.classifier import UNRECOGNIZED, classify, describe
from gesture.types import GestureState, LandmarkFrame
from gesture.utils import PositionSmoother


class AimTracker:
    """
    Detection-rate half of the pipeline: landmarks -> pose -> smoothed aim point.

    One call per detection cycle; `landmarks=None` is the explicit no-hand signal.
    """

    def __init__(self, smoothing: float = AIM_SMOOTHING):
        self.smoother = PositionSmoother(smoothing)

    def process(self, landmarks: Optional[LandmarkFrame]) -> GestureState:
        if landmarks is None:
            # keep the smoother where it is; is_aiming=False gates it downstream
            return GestureState(
                is_aiming=False,
                is_thumb_up=True,
                aim_point=self.smoother.value,
                confidence=0.0,
                label="NO_HAND",
                hand_seen=False,
            )

        pose = classify(landmarks)
        if pose is UNRECOGNIZED:
            # rejected frame: its fingertip is a placeholder, not a sample
            aim = self.smoother.value
        else:
            aim = self.smoother.update(pose.fingertip)
        return GestureState(
            is_aiming=pose.is_aim_gesture,
            is_thumb_up=pose.is_thumb_up,
            aim_point=aim,
            confidence=pose.confidence,
            label=describe(pose),
            hand_seen=True,
        )
