"""
Laser projectiles fired from the paddle while blasters are active
"""

from __future__ import annotations

from typing import List

from .config import (
    DOUBLE_BLASTERS, LASER_COOLDOWN, LASER_EDGE_INSET, LASER_HEIGHT, LASER_SPEED, LASER_WIDTH,
)
from .entities import EventKind, GameEvent, Laser
from .physics import hit_block
from .state import GameState
from .utils import rects_overlap


def laser_positions(paddle_x: float, paddle_width: float, blaster_level: int) -> List[float]:
    """Left x of each laser in one volley"""
    xs = [
        paddle_x + LASER_EDGE_INSET,
        paddle_x + paddle_width - LASER_EDGE_INSET - LASER_WIDTH,
    ]
    if blaster_level == DOUBLE_BLASTERS:
        xs.append(paddle_x + paddle_width / 3 - LASER_WIDTH / 2)
        xs.append(paddle_x + 2 * paddle_width / 3 - LASER_WIDTH / 2)
    return xs


def fire_lasers(state: GameState, events: List[GameEvent]) -> int:
    """Fire a volley if blasters are up and the cooldown has passed. Returns lasers fired."""
    active = state.active
    if not active.blasters:
        return 0
    if state.last_fire_at is not None and state.clock - state.last_fire_at <= LASER_COOLDOWN:
        return 0

    paddle = state.paddle
    xs = laser_positions(paddle.x, paddle.width, active.blaster_level)
    for x in xs:
        state.lasers.append(Laser(x=x, y=paddle.y, width=LASER_WIDTH,
                                  height=LASER_HEIGHT, speed=LASER_SPEED))
    state.last_fire_at = state.clock
    events.append(GameEvent(EventKind.LASER_FIRED))
    return len(xs)


def advance_lasers(state: GameState, events: List[GameEvent]):
    """Move lasers up; each one breaks on the first visible block it touches"""
    remaining = []
    for laser in state.lasers:
        laser.y -= laser.speed
        if laser.y + laser.height < 0:
            continue
        target = None
        for block in state.blocks:
            if block.visible and rects_overlap(laser.x, laser.y, laser.width, laser.height,
                                               block.x, block.y, block.width, block.height):
                target = block
                break
        if target is None:
            remaining.append(laser)
        else:
            hit_block(state, target, events)
    state.lasers = remaining
