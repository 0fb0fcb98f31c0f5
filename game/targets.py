# game/targets.py
import heapq
import itertools
import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Tuple

from config import (
    TARGET_MAX_COUNT, TARGET_BOUNDS, TARGET_MIN_SEPARATION, TARGET_SPAWN_ATTEMPTS,
    TARGET_DRIFT_SPEED, TARGET_SPIN_MAX, TARGET_LIFETIME_SEC, TARGET_POINTS,
    TARGET_SPAWN_SCALE, TARGET_SCALE_RATE, TARGET_RESPAWN_DELAY_SEC,
    TARGET_STAGGER_SEC, TARGET_COLORS,
)
from game.session import Session
from logger import get_logger

log = get_logger("Targets")

Vec2 = Tuple[float, float]


@dataclass
class Target:
    id: int
    origin: Vec2
    velocity: Vec2
    position: Vec2 = (0.0, 0.0)      # origin + float offset, what gets drawn and aimed at
    spin: float = 0.0
    rotation: float = 0.0
    float_phase: float = 0.0
    amplitude: float = 0.3
    frequency: float = 0.5
    color: Tuple[int, int, int] = (255, 255, 255)
    point_value: int = TARGET_POINTS
    created_at: float = 0.0
    spawn_scale: float = TARGET_SPAWN_SCALE


class SceneSink(Protocol):
    """Whatever draws targets; it only ever sees ids and Target values."""

    def entity_created(self, target: Target) -> None: ...

    def entity_removed(self, target_id: int) -> None: ...

    def entity_updated(self, target: Target) -> None: ...


class NullScene:
    def entity_created(self, target: Target) -> None:
        pass

    def entity_removed(self, target_id: int) -> None:
        pass

    def entity_updated(self, target: Target) -> None:
        pass


def float_offset(t: Target, now: float) -> Vec2:
    return (
        math.sin(now * t.frequency + t.float_phase) * t.amplitude,
        math.cos(now * t.frequency * 0.7 + t.float_phase) * t.amplitude * 0.6,
    )


@dataclass
class TargetRegistry:
    max_count: int = TARGET_MAX_COUNT
    bounds: Tuple[float, float, float, float] = TARGET_BOUNDS
    min_separation: float = TARGET_MIN_SEPARATION
    spawn_attempts: int = TARGET_SPAWN_ATTEMPTS
    drift_speed: float = TARGET_DRIFT_SPEED
    lifetime: float = TARGET_LIFETIME_SEC
    respawn_delay: float = TARGET_RESPAWN_DELAY_SEC
    stagger: float = TARGET_STAGGER_SEC
    rng: random.Random = field(default_factory=random.Random)
    scene: SceneSink = field(default_factory=NullScene)

    targets: Dict[int, Target] = field(default_factory=dict, init=False)
    _pending: List[float] = field(default_factory=list, init=False, repr=False)  # heap of due times
    _ids: "itertools.count" = field(default_factory=lambda: itertools.count(1), init=False, repr=False)

    def __len__(self) -> int:
        return len(self.targets)

    def __iter__(self):
        return iter(list(self.targets.values()))

    def get(self, target_id: Optional[int]) -> Optional[Target]:
        if target_id is None:
            return None
        return self.targets.get(target_id)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    # ---- placement ----
    def _random_point(self) -> Vec2:
        min_x, max_x, min_y, max_y = self.bounds
        return (self.rng.uniform(min_x, max_x), self.rng.uniform(min_y, max_y))

    def is_occupied(self, p: Vec2, exclude: Optional[int] = None) -> bool:
        for t in self.targets.values():
            if t.id == exclude:
                continue
            if math.hypot(t.position[0] - p[0], t.position[1] - p[1]) < self.min_separation:
                return True
        return False

    def find_free_position(self, exclude: Optional[int] = None) -> Vec2:
        """Best effort: after spawn_attempts draws the last one wins, overlap or not."""
        p = self._random_point()
        attempts = 1
        while self.is_occupied(p, exclude) and attempts < self.spawn_attempts:
            p = self._random_point()
            attempts += 1
        return p

    def _random_velocity(self) -> Vec2:
        angle = self.rng.uniform(0.0, 2 * math.pi)
        return (math.cos(angle) * self.drift_speed, math.sin(angle) * self.drift_speed)

    # ---- lifecycle ----
    def spawn(self, now: float) -> Target:
        pos = self.find_free_position()
        t = Target(
            id=next(self._ids),
            origin=pos,
            position=pos,
            velocity=self._random_velocity(),
            spin=self.rng.uniform(-TARGET_SPIN_MAX, TARGET_SPIN_MAX),
            float_phase=self.rng.uniform(0.0, 2 * math.pi),
            amplitude=0.3 + self.rng.random() * 0.2,
            frequency=0.5 + self.rng.random() * 0.5,
            color=self.rng.choice(TARGET_COLORS),
            created_at=now,
        )
        self.targets[t.id] = t
        self.scene.entity_created(t)
        log.debug(f"Spawned target {t.id} at ({pos[0]:.2f}, {pos[1]:.2f})")
        return t

    def relocate(self, t: Target, now: float):
        """Move a stale target somewhere new; id and point value stay."""
        pos = self.find_free_position(exclude=t.id)
        t.origin = pos
        t.position = pos
        t.created_at = now
        t.float_phase = self.rng.uniform(0.0, 2 * math.pi)
        t.velocity = self._random_velocity()
        log.debug(f"Relocated target {t.id} to ({pos[0]:.2f}, {pos[1]:.2f})")

    def remove(self, session: Session, target_id: int, now: float, respawn: bool = True) -> bool:
        t = self.targets.pop(target_id, None)
        if t is None:
            return False
        if session.locked_target_id == target_id:
            session.clear_lock()
        self.scene.entity_removed(target_id)
        if respawn:
            heapq.heappush(self._pending, now + self.respawn_delay)
        return True

    def start(self, now: float):
        """Staggered initial spawns."""
        self.clear()
        for i in range(self.max_count):
            heapq.heappush(self._pending, now + i * self.stagger)

    def clear(self):
        for target_id in list(self.targets):
            self.scene.entity_removed(target_id)
        self.targets.clear()
        self._pending.clear()

    def _step(self, t: Target, now: float, dt: float):
        if t.spawn_scale < 1.0:
            t.spawn_scale = min(1.0, t.spawn_scale + TARGET_SCALE_RATE * dt)
        t.rotation += t.spin * dt

        fx, fy = float_offset(t, now)
        t.position = (t.origin[0] + fx, t.origin[1] + fy)

        min_x, max_x, min_y, max_y = self.bounds
        ox, oy = t.origin[0] + t.velocity[0] * dt, t.origin[1] + t.velocity[1] * dt
        vx, vy = t.velocity
        if ox < min_x or ox > max_x:
            vx = -vx
            ox = max(min_x, min(max_x, ox))
        if oy < min_y or oy > max_y:
            vy = -vy
            oy = max(min_y, min(max_y, oy))
        t.origin = (ox, oy)
        t.velocity = (vx, vy)

        if now - t.created_at > self.lifetime:
            self.relocate(t, now)

    def update(self, session: Session, now: float, dt: float):
        for t in list(self.targets.values()):
            self._step(t, now, dt)
            self.scene.entity_updated(t)

        while self._pending and self._pending[0] <= now:
            heapq.heappop(self._pending)
            if len(self.targets) < self.max_count:
                self.spawn(now)

        # top up, counting spawns already queued
        while len(self.targets) + len(self._pending) < self.max_count:
            self.spawn(now)

        if session.locked_target_id is not None and session.locked_target_id not in self.targets:
            session.clear_lock()
