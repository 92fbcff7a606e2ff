import random

import pytest

from game.breakout.config import DIFFICULTY_SETTINGS, DifficultySettings
from game.breakout.entities import PowerupType
from game.breakout.session import GameSession

# Same speeds as the real table, but blocks never drop power-ups
NO_DROPS = {
    difficulty: DifficultySettings(
        ball_speed=settings.ball_speed,
        spawn_chances={kind: 0.0 for kind in PowerupType},
    )
    for difficulty, settings in DIFFICULTY_SETTINGS.items()
}


def place_ball(state, x, y, dx, dy):
    state.ball.x = x
    state.ball.y = y
    state.ball.dx = dx
    state.ball.dy = dy


def kinds(events):
    return [e.kind for e in events]


def pairs(events):
    return [(e.kind, e.powerup) for e in events]


@pytest.fixture
def session():
    s = GameSession(rng=random.Random(1234), settings=NO_DROPS)
    s.start()
    return s


@pytest.fixture
def state(session):
    return session.state
