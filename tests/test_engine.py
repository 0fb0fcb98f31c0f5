import random

import pytest

from game.engine import ShooterEngine
from game.scoring import ShotResult
from game.targets import TargetRegistry
from gesture.types import GestureState

from conftest import simple_projector

W, H = 1280, 720


class Feed:
    """Builds worker-style snapshots with increasing seq numbers."""

    def __init__(self):
        self.seq = 0

    def aim(self, px, py, thumb_up=True, aiming=True):
        self.seq += 1
        return GestureState(is_aiming=aiming, is_thumb_up=thumb_up, aim_point=(px / W, py / H),
                            confidence=1.0 if aiming else 0.4, label="GUN", hand_seen=True,
                            seq=self.seq)

    def lost(self):
        self.seq += 1
        return GestureState(label="NO_HAND", hand_seen=False, seq=self.seq)


@pytest.fixture
def engine(audio, scene):
    reg = TargetRegistry(rng=random.Random(42), max_count=1, scene=scene, drift_speed=0.0)
    e = ShooterEngine(simple_projector, (W, H), audio=audio, registry=reg, clock=lambda: 0.0)
    e.start(0.0)
    e.frame(0.0)          # first staggered spawn
    e.frame(0.0)          # settle displayed position
    return e


@pytest.fixture
def feed():
    return Feed()


def target_screen(engine):
    t = next(iter(engine.registry))
    return t, simple_projector(t.position)


def lock_on(engine, feed, now):
    t, (sx, sy) = target_screen(engine)
    engine.observe(feed.aim(sx, sy, thumb_up=True), now)
    engine.frame(now)
    assert engine.session.locked_target_id == t.id
    return t


def test_start_spawns_and_session_is_fresh(engine, scene):
    assert len(engine.registry) == 1
    assert scene.created == [1]
    s = engine.session
    assert s.running and s.score == 0 and s.combo == 1 and s.accuracy is None


def test_lock_plays_sound_once(engine, feed, audio):
    lock_on(engine, feed, 0.0)
    engine.frame(0.0)
    engine.frame(0.0)
    assert audio.calls.count("lock") == 1


def test_combo_three_then_hit_within_window(engine, feed, audio):
    t = lock_on(engine, feed, 0.0)
    s = engine.session
    s.combo, s.max_combo, s.last_hit_at, s.score = 3, 3, 0.05 - 1.5, 500

    out = engine.observe(feed.aim(*simple_projector(t.position), thumb_up=False), 0.05)

    assert out.result is ShotResult.HIT
    assert out.target_id == t.id
    assert s.combo == 4
    assert s.score == 500 + t.point_value * 4
    assert (s.hits, s.shots, s.accuracy) == (1, 1, 100)
    assert s.locked_target_id is None
    assert engine.registry.get(t.id) is None
    assert audio.calls[-3:] == ["shoot", "hit", ("combo", 4)]


def test_perfect_hit_routing(engine, feed, audio):
    t = lock_on(engine, feed, 0.0)
    engine.session.combo, engine.session.last_hit_at = 4, -0.5
    out = engine.observe(feed.aim(*simple_projector(t.position), thumb_up=False), 0.05)
    assert out.result is ShotResult.PERFECT
    assert "perfect_hit" in audio.calls and "hit" not in audio.calls


def test_fire_without_lock_is_a_miss(engine, feed, audio):
    s = engine.session
    s.combo = 5
    far = (10.0, 10.0)
    engine.observe(feed.aim(*far), 0.0)
    engine.frame(0.0)
    assert s.locked_target_id is None

    out = engine.observe(feed.aim(*far, thumb_up=False), 0.05)

    assert out.result is ShotResult.MISS
    assert (s.combo, s.hits, s.shots, s.accuracy) == (1, 0, 1, 0)
    assert audio.calls[-2:] == ["shoot", "miss"]
    assert len(engine.registry) == 1


def test_hit_target_respawns_after_delay(engine, feed, scene):
    t = lock_on(engine, feed, 0.0)
    engine.observe(feed.aim(*simple_projector(t.position), thumb_up=False), 0.05)
    engine.frame(0.1)
    assert len(engine.registry) == 0
    engine.frame(0.4)
    assert len(engine.registry) == 1
    assert scene.removed == [t.id]


def test_no_hand_mid_aim(engine, feed):
    lock_on(engine, feed, 0.0)
    s = engine.session
    assert s.was_locked

    engine.observe(feed.lost(), 0.05)
    assert not engine.is_aiming
    assert s.locked_target_id is None
    assert not s.was_locked

    engine.frame(0.06)
    assert s.locked_target_id is None

    # hand returns already pressing the thumb: no shot
    t, (sx, sy) = target_screen(engine)
    assert engine.observe(feed.aim(sx, sy, thumb_up=False), 0.1) is None
    assert s.shots == 0


def test_stale_snapshot_is_not_reprocessed(engine, feed):
    t, (sx, sy) = target_screen(engine)
    engine.observe(feed.aim(sx, sy, thumb_up=True), 0.0)
    engine.frame(0.0)
    down = feed.aim(sx, sy, thumb_up=False)
    assert engine.observe(down, 0.05) is not None
    assert engine.observe(down, 0.40) is None
    assert engine.session.shots == 1


def test_not_aiming_does_not_move_aim_target(engine, feed):
    engine.observe(feed.aim(100, 100), 0.0)
    engine.observe(feed.aim(900, 600, aiming=False), 0.03)
    assert engine.aim_target == pytest.approx((100, 100))


def test_crosshair_eases_toward_aim(engine, feed):
    engine.observe(feed.aim(10, 10), 0.0)
    before = engine.crosshair.value
    engine.frame(0.016)
    after = engine.crosshair.value
    assert after[0] < before[0] and after[0] > 10


def test_pause_ignores_gestures_and_resume_is_idempotent(engine, feed):
    t, (sx, sy) = target_screen(engine)
    engine.observe(feed.aim(sx, sy, thumb_up=True), 0.0)
    engine.pause()
    assert not engine.session.running
    assert engine.observe(feed.aim(sx, sy, thumb_up=False), 0.05) is None
    assert not engine.frame(0.06)

    assert engine.resume(0.5)
    assert not engine.resume(0.5)
    # first sample after resume only re-arms the trigger
    engine.frame(0.5)
    assert engine.observe(feed.aim(sx, sy, thumb_up=False), 0.55) is None
    assert engine.session.shots == 0


def test_restart_clears_cooldown_and_score(engine, feed):
    t = lock_on(engine, feed, 0.0)
    engine.observe(feed.aim(*simple_projector(t.position), thumb_up=False), 0.05)
    assert engine.session.is_shooting
    engine.start(0.1)
    s = engine.session
    assert not s.is_shooting and s.score == 0 and s.shots == 0
    assert len(engine.registry) == 0      # respawns are staggered again
    engine.frame(0.1)
    assert len(engine.registry) == 1


class BrokenAudio:
    def __getattr__(self, name):
        def fail(*args):
            raise RuntimeError("mixer gone")
        return fail


def test_fault_while_scoring_is_isolated(scene):
    reg = TargetRegistry(rng=random.Random(42), max_count=1, scene=scene, drift_speed=0.0)
    e = ShooterEngine(simple_projector, (W, H), audio=BrokenAudio(), registry=reg, clock=lambda: 0.0)
    e.start(0.0)
    e.frame(0.0)
    feed = Feed()

    e.observe(feed.aim(10, 10, thumb_up=True), 0.0)
    assert e.observe(feed.aim(10, 10, thumb_up=False), 0.05) is None
    assert e.loop.error_count == 1
    assert e.session.shots == 1

    # the session carries on
    assert e.frame(0.06)
    assert e.session.running
    e.observe(feed.lost(), 0.1)
    assert not e.is_aiming
