# gesture/utils.py
import math
from typing import Optional, Sequence

import numpy as np

from config import DEGENERATE_EPS
from gesture.types import Landmark, Point


class PositionSmoother:
    """Exponential smoothing of a 2D point: s += (raw - s) * factor."""

    def __init__(self, factor: float, initial: Point = (0.5, 0.5)):
        self.factor = factor
        self.x, self.y = initial

    @property
    def value(self) -> Point:
        return (self.x, self.y)

    def update(self, raw: Point) -> Point:
        rx, ry = raw
        # a bad sample keeps the previous point
        if not (math.isfinite(rx) and math.isfinite(ry)):
            return self.value
        self.x += (rx - self.x) * self.factor
        self.y += (ry - self.y) * self.factor
        return self.value

    def snap(self, p: Point):
        self.x, self.y = p


def lm_xyz(lm) -> np.ndarray:
    return np.array([lm.x, lm.y, getattr(lm, "z", 0.0) or 0.0], dtype=np.float64)


def dist(a, b) -> float:
    return float(np.linalg.norm(a - b))


def safe_ratio(num: float, den: float, eps: float = DEGENERATE_EPS) -> Optional[float]:
    """num / den, or None when den is too small (or either side is not finite)."""
    if not (math.isfinite(num) and math.isfinite(den)) or den < eps:
        return None
    return num / den


def to_landmarks(points: Sequence) -> list:
    """Convert MediaPipe NormalizedLandmark objects (or x/y/z tuples) to Landmark."""
    out = []
    for p in points:
        if isinstance(p, Landmark):
            out.append(p)
        elif hasattr(p, "x"):
            out.append(Landmark(float(p.x), float(p.y), float(getattr(p, "z", 0.0) or 0.0)))
        else:
            x, y, *rest = p
            out.append(Landmark(float(x), float(y), float(rest[0]) if rest else 0.0))
    return out
