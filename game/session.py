# game/session.py
from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class Session:
    """One play session. Created at start, reset on restart, passed to every update."""
    score: int = 0
    combo: int = 1
    max_combo: int = 1
    hits: int = 0
    shots: int = 0
    accuracy: Optional[int] = None       # percent; None until the first shot
    last_hit_at: Optional[float] = None
    locked_target_id: Optional[int] = None
    was_locked: bool = False
    is_shooting: bool = False
    shoot_cooldown_until: float = 0.0
    running: bool = False

    def reset(self):
        for f in fields(self):
            setattr(self, f.name, f.default)

    def clear_lock(self):
        self.locked_target_id = None
        self.was_locked = False
