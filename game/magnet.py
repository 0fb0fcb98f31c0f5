# game/magnet.py
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from config import MAGNET_RANGE_PX, MAGNET_STRENGTH
from game.session import Session
from game.targets import Target

Point = Tuple[float, float]
Projector = Callable[[Tuple[float, float]], Point]


@dataclass(frozen=True)
class Candidate:
    target_id: int
    screen: Point
    distance: float


@dataclass(frozen=True)
class MagnetResult:
    aim: Point                       # effective aim point after the pull
    candidate: Optional[Candidate]
    lock_acquired: bool = False      # first frame of a lock


def pull_strength(distance: float, radius: float = MAGNET_RANGE_PX,
                  max_strength: float = MAGNET_STRENGTH) -> float:
    """Linear falloff: max_strength at the centre, exactly 0 at the radius."""
    if distance >= radius:
        return 0.0
    return (1.0 - distance / radius) * max_strength


def nearest_candidate(targets: Iterable[Target], aim: Point, project: Projector,
                      radius: float = MAGNET_RANGE_PX) -> Optional[Candidate]:
    """Closest projected target strictly inside radius; first one wins a tie."""
    best = None
    best_d = math.inf
    for t in targets:
        sx, sy = project(t.position)
        d = math.hypot(sx - aim[0], sy - aim[1])
        if d < best_d and d < radius:
            best_d = d
            best = Candidate(t.id, (sx, sy), d)
    return best


class MagneticAcquisition:
    """
    Per-frame aim assist. The lock is recomputed from scratch every frame,
    so two equally close targets may trade the lock between frames.
    """

    def __init__(self, radius: float = MAGNET_RANGE_PX, strength: float = MAGNET_STRENGTH):
        self.radius = radius
        self.strength = strength

    def update(self, session: Session, targets: Iterable[Target], aim: Point,
               is_aiming: bool, project: Projector) -> MagnetResult:
        cand = nearest_candidate(targets, aim, project, self.radius)

        if cand is None or not is_aiming:
            session.clear_lock()
            return MagnetResult(aim, cand)

        k = pull_strength(cand.distance, self.radius, self.strength)
        effective = (
            aim[0] + (cand.screen[0] - aim[0]) * k,
            aim[1] + (cand.screen[1] - aim[1]) * k,
        )
        session.locked_target_id = cand.target_id
        acquired = not session.was_locked
        session.was_locked = True
        return MagnetResult(effective, cand, acquired)
