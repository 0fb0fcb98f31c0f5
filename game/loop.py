# game/loop.py
from typing import Any, Callable, Optional, Tuple

from config import MAX_FRAME_DT
from logger import get_logger

log = get_logger("FrameLoop")


class FrameLoop:
    """
    Render-rate driver.

    tick() runs one frame update when the loop is running. A fault inside a
    frame is logged and counted; the next frame runs as usual.
    """

    def __init__(self, update: Callable[[float, float], None], max_dt: float = MAX_FRAME_DT):
        self.update = update
        self.max_dt = max_dt
        self.running = False
        self.error_count = 0
        self.frames = 0
        self._last: Optional[float] = None

    def start(self, now: float):
        self.running = True
        self._last = now

    def pause(self):
        if self.running:
            self.running = False
            log.info("Paused")

    def resume(self, now: float) -> bool:
        """Restart ticking. A no-op (False) when already running."""
        if self.running:
            return False
        self.running = True
        self._last = now
        log.info("Resumed")
        return True

    def guard(self, fn, *args) -> Tuple[bool, Any]:
        """Run fn(*args) under the same fault isolation as a frame; returns (ok, result)."""
        try:
            return True, fn(*args)
        except Exception:
            self.error_count += 1
            log.exception("Frame update failed; continuing")
            return False, None

    def tick(self, now: float) -> bool:
        if not self.running:
            return False
        dt = 0.0 if self._last is None else min(max(now - self._last, 0.0), self.max_dt)
        self._last = now
        ok, _ = self.guard(self.update, now, dt)
        if ok:
            self.frames += 1
        return ok
