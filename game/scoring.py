# game/scoring.py
"""
Combo / score bookkeeping.

A hit inside the combo window extends the streak (capped), otherwise it
restarts at 1. Any miss restarts it. Points per hit are base * combo.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import COMBO_TIMEOUT_SEC, COMBO_MAX, PERFECT_COMBO
from game.session import Session


class ShotResult(Enum):
    HIT = "hit"
    PERFECT = "perfect"
    MISS = "miss"


@dataclass(frozen=True)
class ShotOutcome:
    result: ShotResult
    points: int = 0
    combo: int = 1
    target_id: Optional[int] = None


def accuracy_percent(hits: int, shots: int) -> Optional[int]:
    """round(100 * hits / shots), halves rounded up; None when there are no shots."""
    if shots <= 0:
        return None
    return (200 * hits + shots) // (2 * shots)


def register_hit(session: Session, base_points: int, now: float,
                 combo_timeout: float = COMBO_TIMEOUT_SEC,
                 combo_max: int = COMBO_MAX,
                 perfect_combo: int = PERFECT_COMBO) -> ShotOutcome:
    if session.last_hit_at is not None and now - session.last_hit_at < combo_timeout:
        session.combo = min(session.combo + 1, combo_max)
    else:
        session.combo = 1
    session.last_hit_at = now
    session.hits += 1
    session.max_combo = max(session.max_combo, session.combo)

    points = base_points * session.combo
    session.score += points
    result = ShotResult.PERFECT if session.combo >= perfect_combo else ShotResult.HIT
    return ShotOutcome(result, points, session.combo)


def register_miss(session: Session) -> ShotOutcome:
    session.combo = 1
    return ShotOutcome(ShotResult.MISS, 0, 1)


def update_accuracy(session: Session):
    acc = accuracy_percent(session.hits, session.shots)
    if acc is not None:
        session.accuracy = acc
