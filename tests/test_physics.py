import math

import pytest

from conftest import kinds, place_ball
from game.breakout.entities import EventKind, GamePhase
from game.breakout.physics import Controls, advance_ball, hit_block, move_paddle
from game.breakout.utils import launch_angle, launch_velocity, rects_overlap


def test_side_wall_reflects_dx(state):
    place_ball(state, 775, 400, 5, -5)
    events = []
    advance_ball(state, events)
    assert state.ball.dx == -5
    assert state.ball.dy == -5
    assert EventKind.WALL_BOUNCE in kinds(events)

    place_ball(state, 5, 400, -3, 2)
    advance_ball(state, events)
    assert state.ball.dx == 3


def test_top_wall_reflects_dy(state):
    place_ball(state, 20, 12, 0, -4)
    events = []
    advance_ball(state, events)
    assert state.ball.dy == 4
    assert kinds(events) == [EventKind.WALL_BOUNCE]


def test_launch_angle_endpoints():
    assert launch_angle(0.0) == -60
    assert launch_angle(1.0) == 60
    assert launch_angle(0.5) == 0


def test_launch_velocity_is_always_upwards():
    for i in range(101):
        dx, dy = launch_velocity(i / 100, 5)
        assert dy < 0
        assert math.hypot(dx, dy) == pytest.approx(5)

    dx, dy = launch_velocity(0.5, 5)
    assert dx == pytest.approx(0)
    assert dy == pytest.approx(-5)


def test_paddle_hit_aims_by_hit_position(state):
    paddle = state.paddle
    # lands a quarter of the way along the paddle -> -30 degrees
    place_ball(state, paddle.x + 25, paddle.y - 13, 0, 5)
    events = []
    advance_ball(state, events)
    assert EventKind.PADDLE_HIT in kinds(events)
    assert state.ball.dx == pytest.approx(-2.5)
    assert state.ball.dy == pytest.approx(-5 * math.cos(math.radians(30)))


def test_ball_destroys_single_block(state):
    block = state.blocks[0]
    place_ball(state, block.x + 40, 85, 0, -5)
    events = []
    advance_ball(state, events)
    assert not block.visible
    assert block.hits == 1
    assert state.ball.dy == 5
    assert state.score == 10
    assert kinds(events) == [EventKind.BLOCK_DESTROYED]


def test_ball_overlapping_two_blocks_hits_both(state):
    upper, lower = state.blocks[0], state.blocks[8]
    place_ball(state, upper.x + 40, 100, 0, -5)
    events = []
    advance_ball(state, events)
    assert not upper.visible and not lower.visible
    assert state.score == 20
    # reflected once per block
    assert state.ball.dy == -5
    assert kinds(events).count(EventKind.BLOCK_DESTROYED) == 2


def test_tough_block_scoring(state):
    block = state.blocks[-1]
    assert block.hits_required == 3
    events = []

    assert hit_block(state, block, events) is False
    assert state.score == 2
    assert hit_block(state, block, events) is False
    assert state.score == 4
    assert block.visible

    assert hit_block(state, block, events) is True
    assert state.score == 34
    assert not block.visible
    assert kinds(events) == [EventKind.BLOCK_HIT, EventKind.BLOCK_HIT, EventKind.BLOCK_DESTROYED]


def test_bottom_miss_respawns_ball(state):
    state.paddle.x = 0
    place_ball(state, 200, 595, 0, 5)
    events = []
    advance_ball(state, events)
    assert state.lives == 2
    assert kinds(events) == [EventKind.LIFE_LOST]
    assert state.ball.x == state.width / 2
    assert state.ball.y == state.paddle.y - state.ball.radius
    assert abs(state.ball.dx) == state.ball_speed
    assert state.ball.dy == -state.ball_speed
    assert state.paddle.x == state.width / 2 - state.paddle.width / 2


def test_last_life_ends_run(state):
    state.lives = 1
    place_ball(state, 200, 595, 0, 5)
    events = []
    advance_ball(state, events)
    assert state.lives == 0
    assert state.phase is GamePhase.GAME_OVER
    assert kinds(events) == [EventKind.LIFE_LOST, EventKind.GAME_OVER]


def test_clearing_every_block_completes_level_once(state):
    events = []
    for block in state.blocks:
        while block.visible:
            hit_block(state, block, events)
    assert state.phase is GamePhase.LEVEL_COMPLETE
    assert kinds(events).count(EventKind.LEVEL_CLEARED) == 1
    # 32 single-hit blocks, 8 three-hit blocks (two cracks + destroy each)
    assert state.score == 32 * 10 + 8 * (2 + 2 + 30)


def test_paddle_keys_and_clamp(state):
    x0 = state.paddle.x
    move_paddle(state, Controls(right=True))
    assert state.paddle.x == x0 + 7
    move_paddle(state, Controls(left=True))
    assert state.paddle.x == x0

    state.paddle.x = state.width - state.paddle.width - 3
    move_paddle(state, Controls(right=True))
    assert state.paddle.x == state.width - state.paddle.width

    state.paddle.x = 2
    move_paddle(state, Controls(left=True))
    assert state.paddle.x == 0


def test_paddle_follows_pointer(state):
    move_paddle(state, Controls(pointer_x=200))
    assert state.paddle.x == 200 - state.paddle.width / 2

    move_paddle(state, Controls(pointer_x=10))
    assert state.paddle.x == 0

    # outside the playfield: ignored
    move_paddle(state, Controls(pointer_x=-50))
    assert state.paddle.x == 0


def test_rects_overlap_is_strict():
    assert rects_overlap(0, 0, 10, 10, 5, 5, 10, 10)
    assert not rects_overlap(0, 0, 10, 10, 10, 0, 10, 10)
