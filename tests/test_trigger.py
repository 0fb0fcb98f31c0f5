from game.session import Session
from game.trigger import TriggerEdge, TriggerPhase

UP, DOWN = True, False


def run(trigger, session, samples):
    """samples: (now, is_aiming, thumb_up); returns the times that fired."""
    return [now for now, aiming, thumb in samples
            if trigger.update(session, aiming, thumb, now)]


def test_initial_state():
    t = TriggerEdge()
    assert t.phase is TriggerPhase.IDLE
    assert t.was_thumb_up


def test_fires_once_per_thumb_drop():
    t, s = TriggerEdge(0.2), Session()
    fired = run(t, s, [(0.00, True, UP), (0.03, True, DOWN), (0.06, True, DOWN), (0.09, True, DOWN)])
    assert fired == [0.03]
    assert s.is_shooting
    assert s.shoot_cooldown_until == 0.03 + 0.2
    assert t.phase is TriggerPhase.COOLDOWN


def test_chatter_inside_cooldown_is_ignored():
    t, s = TriggerEdge(0.2), Session()
    fired = run(t, s, [
        (0.00, True, UP), (0.03, True, DOWN),      # fire
        (0.06, True, UP), (0.09, True, DOWN),      # inside cooldown
        (0.30, True, UP), (0.33, True, DOWN),      # cooldown over
    ])
    assert fired == [0.03, 0.33]


def test_cooldown_expires_on_poll():
    t, s = TriggerEdge(0.2), Session()
    run(t, s, [(0.0, True, UP), (0.1, True, DOWN)])
    t.poll(s, 0.2)
    assert s.is_shooting
    t.poll(s, 0.31)
    assert not s.is_shooting
    assert t.phase is TriggerPhase.AIMING


def test_acquisition_with_thumb_down_does_not_fire():
    t, s = TriggerEdge(), Session()
    assert run(t, s, [(0.0, True, DOWN), (0.03, True, DOWN)]) == []
    assert t.phase is TriggerPhase.AIMING


def test_losing_the_hand_cannot_fire_from_a_stale_thumb():
    t, s = TriggerEdge(0.2), Session()
    run(t, s, [(0.0, True, UP)])
    t.lost(s, 0.05)
    assert t.phase is TriggerPhase.IDLE
    assert t.was_thumb_up
    # hand comes back already pressing the thumb
    assert run(t, s, [(0.10, True, DOWN), (0.13, True, DOWN)]) == []
    # a fresh up -> down still works
    assert run(t, s, [(0.16, True, UP), (0.19, True, DOWN)]) == [0.19]


def test_not_aiming_resets_to_idle():
    t, s = TriggerEdge(), Session()
    fired = run(t, s, [(0.0, True, UP), (0.03, False, DOWN), (0.06, True, DOWN)])
    assert fired == []


def test_reset_after_session_reset_leaves_no_cooldown():
    t, s = TriggerEdge(0.2), Session()
    run(t, s, [(0.0, True, UP), (0.03, True, DOWN)])
    s.reset()
    t.reset()
    assert not s.is_shooting
    assert run(t, s, [(0.05, True, UP), (0.08, True, DOWN)]) == [0.08]
