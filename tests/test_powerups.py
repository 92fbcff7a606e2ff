import random

import pytest

from conftest import kinds, pairs
from game.breakout.config import DIFFICULTY_SETTINGS, DifficultySettings
from game.breakout.entities import Difficulty, EventKind, Powerup, PowerupType
from game.breakout.physics import hit_block
from game.breakout.powerups import (
    activate, advance_powerups, expire_due, roll_powerup, run_scheduled_spawns,
)
from game.breakout.session import GameSession


class ScriptedRandom(random.Random):
    """random() returns queued values"""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


MEDIUM = DIFFICULTY_SETTINGS[Difficulty.MEDIUM].spawn_chances


@pytest.mark.parametrize("draw, expected", [
    (0.01, PowerupType.BLASTERS),
    (0.04, PowerupType.SMALL),
    (0.07, PowerupType.BIG),
    (0.09, None),
    (0.5, None),
])
def test_roll_powerup_weighted_selection(draw, expected):
    assert roll_powerup(ScriptedRandom([draw]), MEDIUM) is expected


def test_blasters_upgrade_and_never_downgrade(state):
    events = []
    activate(state, PowerupType.BLASTERS, events)
    assert state.active.blasters
    assert state.active.blaster_level == 1
    assert kinds(events) == [EventKind.LASER_LOOP_START]
    assert state.active.expires_at[PowerupType.BLASTERS] == 10.0

    events = []
    state.clock = 4.0
    activate(state, PowerupType.BLASTERS, events)
    assert state.active.blaster_level == 2
    assert events == []
    assert state.active.expires_at[PowerupType.BLASTERS] == 14.0

    state.clock = 6.0
    activate(state, PowerupType.BLASTERS, events)
    assert state.active.blaster_level == 2
    assert state.active.expires_at[PowerupType.BLASTERS] == 16.0


def test_blasters_expire(state):
    events = []
    activate(state, PowerupType.BLASTERS, events)
    activate(state, PowerupType.BLASTERS, events)

    state.clock = 9.5
    events = []
    expire_due(state, events)
    assert state.active.blasters
    assert events == []

    state.clock = 10.0
    expire_due(state, events)
    assert not state.active.blasters
    assert state.active.blaster_level == 0
    assert not state.laser_loop
    assert kinds(events) == [EventKind.LASER_LOOP_STOP, EventKind.POWERUP_EXPIRED]
    assert state.active.expires_at[PowerupType.BLASTERS] is None


def test_small_then_big_are_exclusive(state):
    events = []
    activate(state, PowerupType.SMALL, events)
    assert state.active.small and not state.active.big
    assert state.paddle.width == 60

    activate(state, PowerupType.BIG, events)
    assert state.active.big and not state.active.small
    assert state.paddle.width == 150
    assert state.active.expires_at[PowerupType.SMALL] is None

    activate(state, PowerupType.SMALL, events)
    assert state.active.small and not state.active.big
    assert state.paddle.width == 60
    assert state.active.expires_at[PowerupType.BIG] is None


@pytest.mark.parametrize("kind, single, double", [
    (PowerupType.SMALL, 60, 40),
    (PowerupType.BIG, 150, 200),
])
def test_same_size_escalates_once(state, kind, single, double):
    events = []
    activate(state, kind, events)
    assert state.paddle.width == single
    activate(state, kind, events)
    assert state.paddle.width == double
    state.clock = 3.0
    activate(state, kind, events)
    assert state.paddle.width == double
    assert state.active.expires_at[kind] == 13.0


def test_size_expiry_restores_normal_width(state):
    events = []
    activate(state, PowerupType.BIG, events)
    activate(state, PowerupType.BIG, events)
    state.clock = 10.0
    expire_due(state, events)
    assert not state.active.big
    assert state.paddle.width == 100
    assert pairs(events)[-1] == (EventKind.POWERUP_EXPIRED, PowerupType.BIG)


def test_big_paddle_stays_inside_playfield(state):
    state.paddle.x = state.width - 100
    activate(state, PowerupType.BIG, [])
    assert state.paddle.x == state.width - 150


def test_paddle_catches_powerup(state):
    paddle = state.paddle
    state.powerups.append(Powerup(x=paddle.x + 10, y=paddle.y - 31, type=PowerupType.BIG))
    events = []
    advance_powerups(state, events)
    assert state.powerups == []
    assert state.active.big
    assert pairs(events) == [(EventKind.POWERUP_COLLECTED, PowerupType.BIG)]


def test_powerup_falls_and_leaves_playfield(state):
    state.powerups.append(Powerup(x=0, y=500, type=PowerupType.SMALL))
    advance_powerups(state, [])
    assert state.powerups[0].y == 502

    state.powerups[0].y = 599
    events = []
    advance_powerups(state, events)
    assert state.powerups == []
    assert not state.active.small
    assert events == []


def test_scheduled_spawns(state):
    assert state.guaranteed_spawn_at == 3.0
    assert state.next_random_spawn_at == 8.0

    events = []
    state.clock = 3.0
    run_scheduled_spawns(state, events)
    assert kinds(events) == [EventKind.POWERUP_SPAWNED]
    assert state.guaranteed_spawn_at is None
    block_xs = {b.x + 25 for b in state.blocks}
    assert state.powerups[0].x in block_xs

    events = []
    state.clock = 5.0
    run_scheduled_spawns(state, events)
    assert events == []

    state.clock = 8.0
    run_scheduled_spawns(state, events)
    assert len(state.powerups) == 2
    assert 13.0 <= state.next_random_spawn_at < 23.0


def test_periodic_spawn_reschedules_without_blocks(state):
    for block in state.blocks:
        block.visible = False
    state.guaranteed_spawn_at = None
    state.clock = 8.0
    events = []
    run_scheduled_spawns(state, events)
    assert events == []
    assert state.powerups == []
    assert state.next_random_spawn_at >= 13.0


def test_destroyed_block_drops_powerup():
    always_blasters = {
        d: DifficultySettings(ball_speed=s.ball_speed,
                              spawn_chances={PowerupType.BLASTERS: 1.0,
                                             PowerupType.SMALL: 0.0,
                                             PowerupType.BIG: 0.0})
        for d, s in DIFFICULTY_SETTINGS.items()
    }
    session = GameSession(rng=random.Random(7), settings=always_blasters)
    session.start()
    state = session.state
    block = state.blocks[0]
    events = []
    hit_block(state, block, events)
    assert len(state.powerups) == 1
    powerup = state.powerups[0]
    assert powerup.type is PowerupType.BLASTERS
    assert (powerup.x, powerup.y) == (block.x + 25, block.y)
