import random

import pytest

from conftest import NO_DROPS, kinds, place_ball
from game.breakout.entities import Difficulty, EventKind, GamePhase, PowerupType
from game.breakout.physics import Controls
from game.breakout.powerups import activate
from game.breakout.session import GameSession


def test_new_session_is_idle():
    session = GameSession(rng=random.Random(0))
    assert session.phase is GamePhase.IDLE
    ball = (session.state.ball.x, session.state.ball.y)
    assert session.tick(Controls(right=True)) == []
    assert (session.state.ball.x, session.state.ball.y) == ball


def test_start_builds_fresh_run(session):
    state = session.state
    assert session.phase is GamePhase.RUNNING
    assert state.score == 0
    assert state.lives == 3
    assert len(state.blocks) == 40
    assert all(b.visible for b in state.blocks)
    assert [b.hits_required for b in state.blocks[-8:]] == [3] * 8
    assert all(b.hits_required == 1 for b in state.blocks[:-8])
    assert state.paddle.width == 100


def test_start_events_and_ignored_while_running():
    session = GameSession(rng=random.Random(0), settings=NO_DROPS)
    assert kinds(session.start()) == [EventKind.GAME_START]
    assert session.start() == []


def test_three_misses_end_the_run(session):
    state = session.state
    for expected_lives in (2, 1, 0):
        place_ball(state, 200, 595, 0, 5)
        events = session.tick()
        assert state.lives == expected_lives
        assert EventKind.LIFE_LOST in kinds(events)

    assert session.phase is GamePhase.GAME_OVER
    assert kinds(events)[-1] is EventKind.GAME_OVER

    frozen = (state.ball.x, state.ball.y, state.paddle.x)
    assert session.tick(Controls(left=True)) == []
    assert (state.ball.x, state.ball.y, state.paddle.x) == frozen


def test_level_complete_fires_once_for_simultaneous_clears(session):
    state = session.state
    keep = {0, 8}
    for i, block in enumerate(state.blocks):
        if i not in keep:
            block.visible = False
    place_ball(state, state.blocks[0].x + 40, 100, 0, -5)

    events = session.tick()
    assert kinds(events).count(EventKind.BLOCK_DESTROYED) == 2
    assert kinds(events).count(EventKind.LEVEL_CLEARED) == 1
    assert session.phase is GamePhase.LEVEL_COMPLETE
    assert session.tick() == []


def test_game_over_cancels_timers_and_laser_loop(session):
    state = session.state
    activate(state, PowerupType.BLASTERS, [])
    activate(state, PowerupType.BIG, [])
    state.lives = 1
    place_ball(state, 200, 595, 0, 5)

    events = session.tick()
    assert kinds(events) == [EventKind.LIFE_LOST, EventKind.LASER_LOOP_STOP, EventKind.GAME_OVER]
    assert all(t is None for t in state.active.expires_at.values())
    assert state.guaranteed_spawn_at is None
    assert state.next_random_spawn_at is None


def test_restart_resets_everything(session):
    state = session.state
    activate(state, PowerupType.BLASTERS, [])
    activate(state, PowerupType.SMALL, [])
    state.score = 120
    state.lives = 1
    place_ball(state, 200, 595, 0, 5)
    session.tick()
    assert session.phase is GamePhase.GAME_OVER

    session.start()
    state = session.state
    assert session.phase is GamePhase.RUNNING
    assert state.score == 0 and state.lives == 3
    assert state.clock == 0.0
    assert state.paddle.width == 100
    assert not (state.active.blasters or state.active.small or state.active.big)
    assert state.active.blaster_level == 0
    assert state.powerups == [] and state.lasers == []


def test_difficulty_only_changes_between_runs(session):
    assert session.set_difficulty(Difficulty.HARD) is False
    assert session.state.ball_speed == 5

    session.state.lives = 1
    place_ball(session.state, 200, 595, 0, 5)
    session.tick()
    assert session.set_difficulty("hard") is True

    session.start()
    assert session.state.ball.dx == 7
    assert session.state.ball.dy == -7


def test_unknown_difficulty_is_rejected():
    with pytest.raises(ValueError):
        GameSession(difficulty="insane")


def test_expiry_runs_at_start_of_tick(session):
    state = session.state
    activate(state, PowerupType.BIG, [])
    events = session.tick(dt=10.0)
    assert not state.active.big
    assert state.paddle.width == 100
    assert EventKind.POWERUP_EXPIRED in kinds(events)


def test_guaranteed_powerup_after_three_seconds(session):
    events = session.tick(dt=2.5)
    assert EventKind.POWERUP_SPAWNED not in kinds(events)
    events = session.tick(dt=0.5)
    assert kinds(events).count(EventKind.POWERUP_SPAWNED) == 1
    assert len(session.state.powerups) == 1
