# gesture/classifier.py
"""
Gun-pose classification from one frame of 21 hand landmarks.

Aim gesture: index finger straight, at least two of middle/ring/pinky folded.
Trigger: thumb tip above (up) or below (down) its IP joint.
"""
import math

from config import INDEX_CURL_MIN, FOLD_CURL_MAX, MIN_FOLDED_FINGERS, THUMB_UP_OFFSET
from gesture.types import HandLandmark as HL, HandPose, LandmarkFrame, NUM_LANDMARKS
from gesture.utils import lm_xyz, dist, safe_ratio

FOLD_FINGERS = [
    ("middle", HL.MIDDLE_FINGER_TIP, HL.MIDDLE_FINGER_PIP),
    ("ring", HL.RING_FINGER_TIP, HL.RING_FINGER_PIP),
    ("pinky", HL.PINKY_TIP, HL.PINKY_PIP),
]

UNRECOGNIZED = HandPose()


def _finite(landmarks: LandmarkFrame) -> bool:
    return all(math.isfinite(v) for lm in landmarks for v in (lm.x, lm.y, lm.z))


def index_extended(pts, curl_min: float = INDEX_CURL_MIN) -> bool:
    tip, pip, mcp = pts[HL.INDEX_FINGER_TIP], pts[HL.INDEX_FINGER_PIP], pts[HL.INDEX_FINGER_MCP]
    curl = safe_ratio(dist(tip, pip), dist(pip, mcp))
    if curl is None:
        return False
    return bool(curl > curl_min and tip[1] < pip[1])  # smaller y is higher on screen


def finger_folded(pts, tip_i, pip_i, curl_max: float = FOLD_CURL_MAX) -> bool:
    """Curl against the wrist, with tip-below-pip as fallback for rotated hands."""
    wrist, tip, pip = pts[HL.WRIST], pts[tip_i], pts[pip_i]
    curl = safe_ratio(dist(tip, wrist), dist(pip, wrist))
    if curl is not None and curl < curl_max:
        return True
    return bool(tip[1] > pip[1])


def thumb_up(pts, offset: float = THUMB_UP_OFFSET) -> bool:
    return bool(pts[HL.THUMB_TIP][1] < pts[HL.THUMB_IP][1] - offset)


def classify(landmarks: LandmarkFrame,
             curl_min: float = INDEX_CURL_MIN,
             fold_max: float = FOLD_CURL_MAX,
             min_folded: int = MIN_FOLDED_FINGERS,
             thumb_offset: float = THUMB_UP_OFFSET) -> HandPose:
    if len(landmarks) != NUM_LANDMARKS or not _finite(landmarks):
        return UNRECOGNIZED

    pts = [lm_xyz(lm) for lm in landmarks]

    idx = index_extended(pts, curl_min)
    folded = {name: finger_folded(pts, tip, pip, fold_max) for name, tip, pip in FOLD_FINGERS}
    n_folded = sum(folded.values())

    # tenths keep the sum exact: 0.4 + 3 * 0.2 == 1.0
    confidence = min(1.0, (4 * int(idx) + 2 * n_folded) / 10.0)

    tip = landmarks[HL.INDEX_FINGER_TIP]
    return HandPose(
        is_aim_gesture=idx and n_folded >= min_folded,
        is_thumb_up=thumb_up(pts, thumb_offset),
        fingertip=(tip.x, tip.y),
        confidence=confidence,
        index_extended=idx,
        middle_folded=folded["middle"],
        ring_folded=folded["ring"],
        pinky_folded=folded["pinky"],
    )


def describe(pose: HandPose) -> str:
    """Short HUD label, e.g. 'GUN | M+ R+ P- | THUMB UP'."""
    marks = " ".join(f"{n}{'+' if f else '-'}" for n, f in
                     (("M", pose.middle_folded), ("R", pose.ring_folded), ("P", pose.pinky_folded)))
    head = "GUN" if pose.is_aim_gesture else ("POINT" if pose.index_extended else "RELAX")
    thumb = "THUMB UP" if pose.is_thumb_up else "THUMB DOWN"
    return f"{head} | {marks} | {thumb}"
