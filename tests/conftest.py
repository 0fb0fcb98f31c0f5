import random

import pytest

from gesture.types import Landmark, HandLandmark as HL

# Hand facing the camera, y grows downward. Coordinates are hand-tuned so each
# finger clearly passes or fails its curl test.
WRIST = (0.5, 0.8)
THUMB = {
    HL.THUMB_CMC: (0.45, 0.75),
    HL.THUMB_MCP: (0.42, 0.70),
    HL.THUMB_IP: (0.40, 0.65),
}
THUMB_TIP = {"up": (0.39, 0.60), "down": (0.40, 0.66)}

INDEX = {
    "extended": [(0.50, 0.60), (0.50, 0.50), (0.50, 0.45), (0.50, 0.40)],
    "curled": [(0.50, 0.60), (0.50, 0.55), (0.51, 0.60), (0.51, 0.63)],
}
OTHERS = {
    "middle": {
        "folded": [(0.55, 0.62), (0.56, 0.55), (0.56, 0.60), (0.55, 0.65)],
        "extended": [(0.55, 0.62), (0.56, 0.50), (0.56, 0.44), (0.56, 0.38)],
    },
    "ring": {
        "folded": [(0.60, 0.64), (0.61, 0.58), (0.61, 0.62), (0.60, 0.67)],
        "extended": [(0.60, 0.64), (0.61, 0.52), (0.61, 0.46), (0.61, 0.40)],
    },
    "pinky": {
        "folded": [(0.65, 0.67), (0.66, 0.62), (0.66, 0.65), (0.65, 0.69)],
        "extended": [(0.65, 0.67), (0.66, 0.56), (0.66, 0.50), (0.67, 0.44)],
    },
}
FIRST = {"middle": HL.MIDDLE_FINGER_MCP, "ring": HL.RING_FINGER_MCP, "pinky": HL.PINKY_MCP}


def make_hand(index="extended", middle="folded", ring="folded", pinky="folded", thumb="up",
              shift=(0.0, 0.0)):
    pts = [None] * 21
    pts[HL.WRIST] = WRIST
    for i, p in THUMB.items():
        pts[i] = p
    pts[HL.THUMB_TIP] = THUMB_TIP[thumb]
    for k, p in enumerate(INDEX[index]):
        pts[HL.INDEX_FINGER_MCP + k] = p
    for name, state in (("middle", middle), ("ring", ring), ("pinky", pinky)):
        for k, p in enumerate(OTHERS[name][state]):
            pts[FIRST[name] + k] = p
    dx, dy = shift
    return [Landmark(x + dx, y + dy, 0.0) for x, y in pts]


class RecordingAudio:
    def __init__(self):
        self.calls = []

    def shoot(self):
        self.calls.append("shoot")

    def hit(self):
        self.calls.append("hit")

    def perfect_hit(self):
        self.calls.append("perfect_hit")

    def miss(self):
        self.calls.append("miss")

    def combo(self, level):
        self.calls.append(("combo", level))

    def lock(self):
        self.calls.append("lock")


class RecordingScene:
    def __init__(self):
        self.created = []
        self.removed = []
        self.updated = 0

    def entity_created(self, target):
        self.created.append(target.id)

    def entity_removed(self, target_id):
        self.removed.append(target_id)

    def entity_updated(self, target):
        self.updated += 1


def simple_projector(world):
    """100 px per world unit, origin at the centre of a 1280x720 window."""
    return (640.0 + world[0] * 100.0, 360.0 - world[1] * 100.0)


@pytest.fixture
def hand():
    return make_hand


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def scene():
    return RecordingScene()
