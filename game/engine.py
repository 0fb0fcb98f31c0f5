# game/engine.py
"""
Headless game core.

Two entry points share one Session:

* observe(gesture, now): called by the frame loop with the latest snapshot
  from the detection worker. Each new detection sample (new seq) goes through
  the trigger edge detector; a fire edge becomes a shot right away. Faults
  are isolated the same way as a frame (FrameLoop.guard).
* frame(now): one render tick. Aim assist, crosshair smoothing, target drift.

No pygame and no camera in here; projection and sound come in as collaborators.
"""
import time
from typing import Callable, Optional, Tuple

from config import WIN_W, WIN_H, CROSSHAIR_SMOOTHING
from game.audio import AudioSink, NullAudio
from game.loop import FrameLoop
from game.magnet import MagneticAcquisition, MagnetResult
from game.scoring import ShotOutcome, ShotResult, register_hit, register_miss, update_accuracy
from game.session import Session
from game.targets import TargetRegistry
from game.trigger import TriggerEdge
from gesture.types import GestureState
from gesture.utils import PositionSmoother
from logger import get_logger

log = get_logger("Engine")

Point = Tuple[float, float]


class ShooterEngine:
    def __init__(self,
                 project: Callable[[Point], Point],
                 screen_size: Tuple[int, int] = (WIN_W, WIN_H),
                 audio: Optional[AudioSink] = None,
                 registry: Optional[TargetRegistry] = None,
                 session: Optional[Session] = None,
                 trigger: Optional[TriggerEdge] = None,
                 magnet: Optional[MagneticAcquisition] = None,
                 crosshair_smoothing: float = CROSSHAIR_SMOOTHING,
                 clock: Callable[[], float] = time.monotonic):
        self.project = project
        self.screen_w, self.screen_h = screen_size
        self.audio = audio if audio is not None else NullAudio()
        self.registry = registry if registry is not None else TargetRegistry()
        self.session = session if session is not None else Session()
        self.trigger = trigger if trigger is not None else TriggerEdge()
        self.magnet = magnet if magnet is not None else MagneticAcquisition()
        self.clock = clock

        center = (self.screen_w / 2, self.screen_h / 2)
        self.crosshair = PositionSmoother(crosshair_smoothing, center)
        self.aim_target: Point = center      # raw aim point in pixels
        self.gesture = GestureState()
        self.loop = FrameLoop(self.update)

        self.last_seq = 0
        self.last_outcome: Optional[ShotOutcome] = None
        self.last_magnet: Optional[MagnetResult] = None

    # ---- session lifecycle ----
    @property
    def is_aiming(self) -> bool:
        return self.gesture.is_aiming

    def start(self, now: Optional[float] = None):
        now = self.clock() if now is None else now
        self.session.reset()
        self.session.running = True
        self.trigger.reset()
        self.registry.start(now)
        center = (self.screen_w / 2, self.screen_h / 2)
        self.crosshair.snap(center)
        self.aim_target = center
        self.gesture = GestureState()
        self.last_outcome = None
        self.last_magnet = None
        self.loop.start(now)
        log.info("Game started")

    def pause(self):
        self.loop.pause()
        self.session.running = False

    def resume(self, now: Optional[float] = None) -> bool:
        now = self.clock() if now is None else now
        if not self.loop.resume(now):
            return False
        self.session.running = True
        # thumb state from before the pause is stale
        self.trigger.lost(self.session, now)
        return True

    # ---- detection side ----
    def observe(self, gesture: GestureState, now: Optional[float] = None) -> Optional[ShotOutcome]:
        """Consume a worker snapshot; stale snapshots (same seq) are ignored."""
        if gesture.seq == self.last_seq or not self.loop.running:
            return None
        self.last_seq = gesture.seq
        now = self.clock() if now is None else now
        # a fault while scoring a shot costs this sample, not the session
        _, outcome = self.loop.guard(self._consume, gesture, now)
        return outcome

    def _consume(self, gesture: GestureState, now: float) -> Optional[ShotOutcome]:
        if not gesture.hand_seen:
            self.on_tracking_lost(gesture, now)
            return None
        return self.apply_gesture(gesture, now)

    def apply_gesture(self, gesture: GestureState, now: float) -> Optional[ShotOutcome]:
        self.gesture = gesture
        if gesture.is_aiming:
            ax, ay = gesture.aim_point
            self.aim_target = (ax * self.screen_w, ay * self.screen_h)
        if self.trigger.update(self.session, gesture.is_aiming, gesture.is_thumb_up, now):
            return self.shoot(now)
        return None

    def on_tracking_lost(self, gesture: Optional[GestureState] = None, now: Optional[float] = None):
        now = self.clock() if now is None else now
        self.gesture = gesture if gesture is not None else GestureState(label="NO_HAND")
        self.gesture.is_aiming = False
        self.trigger.lost(self.session, now)
        self.session.clear_lock()

    # ---- shots ----
    def shoot(self, now: float) -> ShotOutcome:
        s = self.session
        s.shots += 1
        self.audio.shoot()

        target = self.registry.get(s.locked_target_id)
        if target is not None:
            outcome = register_hit(s, target.point_value, now)
            outcome = ShotOutcome(outcome.result, outcome.points, outcome.combo, target.id)
            if outcome.result is ShotResult.PERFECT:
                self.audio.perfect_hit()
            else:
                self.audio.hit()
            if s.combo > 1:
                self.audio.combo(s.combo)
            self.registry.remove(s, target.id, now)
            log.debug(f"Hit target {target.id}: +{outcome.points} (x{outcome.combo})")
        else:
            outcome = register_miss(s)
            self.audio.miss()
            log.debug("Miss")

        update_accuracy(s)
        self.last_outcome = outcome
        return outcome

    # ---- render side ----
    def update(self, now: float, dt: float):
        """One frame; normally called through self.loop.tick()."""
        self.trigger.poll(self.session, now)

        result = self.magnet.update(self.session, self.registry, self.aim_target,
                                    self.is_aiming, self.project)
        if result.lock_acquired:
            self.audio.lock()
        self.last_magnet = result
        self.crosshair.update(result.aim)

        self.registry.update(self.session, now, dt)

    def frame(self, now: Optional[float] = None) -> bool:
        return self.loop.tick(self.clock() if now is None else now)
