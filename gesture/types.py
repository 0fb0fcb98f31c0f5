# gesture/types.py
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence, Tuple


class HandLandmark(IntEnum):
    """MediaPipe Hands landmark order (21 points)."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_FINGER_MCP = 5
    INDEX_FINGER_PIP = 6
    INDEX_FINGER_DIP = 7
    INDEX_FINGER_TIP = 8
    MIDDLE_FINGER_MCP = 9
    MIDDLE_FINGER_PIP = 10
    MIDDLE_FINGER_DIP = 11
    MIDDLE_FINGER_TIP = 12
    RING_FINGER_MCP = 13
    RING_FINGER_PIP = 14
    RING_FINGER_DIP = 15
    RING_FINGER_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


NUM_LANDMARKS = 21


@dataclass(frozen=True)
class Landmark:
    x: float
    y: float
    z: float = 0.0


LandmarkFrame = Sequence[Landmark]
Point = Tuple[float, float]


@dataclass(frozen=True)
class HandPose:
    """Classifier verdict for one landmark frame."""
    is_aim_gesture: bool = False
    is_thumb_up: bool = True
    fingertip: Point = (0.5, 0.5)
    confidence: float = 0.0
    index_extended: bool = False
    middle_folded: bool = False
    ring_folded: bool = False
    pinky_folded: bool = False

    @property
    def folded_count(self) -> int:
        return int(self.middle_folded) + int(self.ring_folded) + int(self.pinky_folded)


@dataclass
class GestureState:
    is_aiming: bool = False
    is_thumb_up: bool = True
    aim_point: Point = (0.5, 0.5)   # normalized, smoothed
    confidence: float = 0.0
    label: str = "INIT"
    hand_seen: bool = False
    cam_info: str = ""
    seq: int = 0                     # bumped once per detection cycle

    @property
    def is_triggered(self) -> bool:
        return self.is_aiming and not self.is_thumb_up
