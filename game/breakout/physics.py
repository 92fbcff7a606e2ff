"""
Per-tick motion and collision resolution for the paddle, ball and blocks.

Collision response is deliberately simple: wall and block contacts reflect one
velocity component, and paddle contacts re-aim the ball by where it landed on
the paddle. Every visible block overlapping the ball in a tick is handled on
its own, so a ball touching two blocks reflects twice and scores both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import SCORE_PER_DESTROY, SCORE_PER_HIT
from .entities import Block, EventKind, GameEvent, GamePhase
from .powerups import roll_powerup, spawn_at_block
from .state import GameState, finish_run, serve_ball
from .utils import ball_box_overlap, clamp, launch_velocity

logger = logging.getLogger(__name__)


@dataclass
class Controls:
    """Input snapshot for one tick"""
    left: bool = False
    right: bool = False
    pointer_x: Optional[float] = None  # absolute mouse/touch x, overrides keys


def move_paddle(state: GameState, controls: Controls):
    paddle = state.paddle
    if controls.pointer_x is not None and 0 < controls.pointer_x < state.width:
        paddle.x = controls.pointer_x - paddle.width / 2
    elif controls.right:
        paddle.x += paddle.step
    elif controls.left:
        paddle.x -= paddle.step
    paddle.x = clamp(paddle.x, 0, state.width - paddle.width)


def hit_block(state: GameState, block: Block, events: List[GameEvent]) -> bool:
    """Register one hit on a visible block. Returns True if it was destroyed."""
    block.hits += 1
    if block.hits < block.hits_required:
        state.score += SCORE_PER_HIT
        events.append(GameEvent(EventKind.BLOCK_HIT))
        return False

    block.visible = False
    state.score += SCORE_PER_DESTROY * block.hits_required
    events.append(GameEvent(EventKind.BLOCK_DESTROYED))

    kind = roll_powerup(state.rng, state.settings.spawn_chances)
    if kind is not None:
        spawn_at_block(state, block, kind, events)

    if state.all_cleared():
        finish_run(state, GamePhase.LEVEL_COMPLETE, events)
    return True


def _lose_life(state: GameState, events: List[GameEvent]):
    state.lives -= 1
    events.append(GameEvent(EventKind.LIFE_LOST))
    logger.info("Life lost, %d remaining", state.lives)
    if state.lives <= 0:
        finish_run(state, GamePhase.GAME_OVER, events)
        return
    paddle = state.paddle
    paddle.x = state.width / 2 - paddle.width / 2
    serve_ball(state, direction=1 if state.rng.random() > 0.5 else -1)


def advance_ball(state: GameState, events: List[GameEvent]):
    ball = state.ball
    ball.x += ball.dx
    ball.y += ball.dy
    r = ball.radius

    if ball.x + r > state.width or ball.x - r < 0:
        ball.dx = -ball.dx
        events.append(GameEvent(EventKind.WALL_BOUNCE))

    if ball.y - r < 0:
        ball.dy = -ball.dy
        events.append(GameEvent(EventKind.WALL_BOUNCE))

    if ball.y + r > state.height:
        _lose_life(state, events)
        if state.phase is not GamePhase.RUNNING:
            return

    paddle = state.paddle
    if (ball.y + r > paddle.y and ball.y - r < paddle.y + paddle.height
            and paddle.x < ball.x < paddle.x + paddle.width):
        hit_position = (ball.x - paddle.x) / paddle.width
        ball.dx, ball.dy = launch_velocity(hit_position, state.ball_speed)
        events.append(GameEvent(EventKind.PADDLE_HIT))

    for block in state.blocks:
        if block.visible and ball_box_overlap(ball, block):
            ball.dy = -ball.dy
            hit_block(state, block, events)
