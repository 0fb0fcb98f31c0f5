# game/trigger.py
from enum import Enum

from config import SHOOT_COOLDOWN_SEC
from game.session import Session


class TriggerPhase(Enum):
    IDLE = "idle"
    AIMING = "aiming"
    COOLDOWN = "cooldown"


class TriggerEdge:
    """
    Thumb up -> down edge detector with a shot cooldown.

    Fires once per edge, never while the session is shooting. Losing the
    aim pose (or the hand) drops back to IDLE with the thumb treated as up;
    the first aiming sample after that only arms the detector, so a
    thumb-down reading at re-acquisition cannot fire on its own.
    """

    def __init__(self, cooldown_sec: float = SHOOT_COOLDOWN_SEC):
        self.cooldown_sec = cooldown_sec
        self.was_thumb_up = True
        self.phase = TriggerPhase.IDLE

    def reset(self):
        self.was_thumb_up = True
        self.phase = TriggerPhase.IDLE

    def poll(self, session: Session, now: float):
        """Expire the cooldown; safe to call every frame."""
        if session.is_shooting and now >= session.shoot_cooldown_until:
            session.is_shooting = False
        if self.phase is TriggerPhase.COOLDOWN and not session.is_shooting:
            self.phase = TriggerPhase.AIMING

    def lost(self, session: Session, now: float):
        self.poll(session, now)
        self.was_thumb_up = True
        self.phase = TriggerPhase.IDLE

    def update(self, session: Session, is_aiming: bool, is_thumb_up: bool, now: float) -> bool:
        """Feed one detection sample; True means fire now."""
        if not is_aiming:
            self.lost(session, now)
            return False

        self.poll(session, now)
        if self.phase is TriggerPhase.IDLE:
            # the acquisition sample only arms; its thumb reading may be stale
            self.phase = TriggerPhase.COOLDOWN if session.is_shooting else TriggerPhase.AIMING
            self.was_thumb_up = is_thumb_up
            return False

        fire = (not is_thumb_up) and self.was_thumb_up and not session.is_shooting
        self.was_thumb_up = is_thumb_up

        if fire:
            session.is_shooting = True
            session.shoot_cooldown_until = now + self.cooldown_sec
            self.phase = TriggerPhase.COOLDOWN
        return fire
