"""
Power-up lifecycle: spawn rolls, scheduled spawns, collection, activation and expiry
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional

from .config import (
    DOUBLE_BLASTERS, PADDLE_NORMAL_WIDTH, POWERUP_DURATION, POWERUP_SIZE,
    POWERUP_SPEED, RANDOM_SPAWN_INTERVAL, SINGLE_BLASTERS, SIZE_WIDTHS,
)
from .entities import Block, EventKind, GameEvent, Powerup, PowerupType
from .state import GameState
from .utils import clamp, rects_overlap

logger = logging.getLogger(__name__)

_OPPOSITE_SIZE = {PowerupType.SMALL: PowerupType.BIG, PowerupType.BIG: PowerupType.SMALL}


def roll_powerup(rng: random.Random, chances: Dict[PowerupType, float]) -> Optional[PowerupType]:
    """
    Decide whether a destroyed block drops a power-up, and which one.

    A single uniform draw is gated by the summed chance; below the gate, the
    same draw picks a type by cumulative weight in PowerupType order.
    """
    r = rng.random()
    if r >= sum(chances.values()):
        return None
    cumulative = 0.0
    for kind in PowerupType:
        cumulative += chances.get(kind, 0.0)
        if r < cumulative:
            return kind
    # float rounding at the top of the range
    return list(PowerupType)[-1]


def spawn_at_block(state: GameState, block: Block, kind: PowerupType, events: List[GameEvent]):
    powerup = Powerup(
        x=block.x + block.width / 2 - POWERUP_SIZE / 2,
        y=block.y,
        type=kind,
        width=POWERUP_SIZE,
        height=POWERUP_SIZE,
        speed=POWERUP_SPEED,
    )
    state.powerups.append(powerup)
    events.append(GameEvent(EventKind.POWERUP_SPAWNED, kind))
    logger.debug("Spawned %s power-up at (%.0f, %.0f)", kind.value, powerup.x, powerup.y)


def spawn_random(state: GameState, events: List[GameEvent]) -> bool:
    """Drop a uniformly random power-up from a uniformly random visible block"""
    visible = state.visible_blocks()
    if not visible:
        return False
    block = state.rng.choice(visible)
    kind = state.rng.choice(list(PowerupType))
    spawn_at_block(state, block, kind, events)
    return True


def run_scheduled_spawns(state: GameState, events: List[GameEvent]):
    """Fire the one-off guaranteed spawn and the self-rescheduling periodic spawn when due"""
    now = state.clock
    if state.guaranteed_spawn_at is not None and now >= state.guaranteed_spawn_at:
        state.guaranteed_spawn_at = None
        spawn_random(state, events)

    if state.next_random_spawn_at is not None and now >= state.next_random_spawn_at:
        spawn_random(state, events)
        lo, hi = RANDOM_SPAWN_INTERVAL
        state.next_random_spawn_at = now + state.rng.uniform(lo, hi)


def advance_powerups(state: GameState, events: List[GameEvent]):
    """Let power-ups fall; activate the ones caught by the paddle"""
    paddle = state.paddle
    remaining = []
    for p in state.powerups:
        p.y += p.speed
        if rects_overlap(p.x, p.y, p.width, p.height,
                         paddle.x, paddle.y, paddle.width, paddle.height):
            events.append(GameEvent(EventKind.POWERUP_COLLECTED, p.type))
            activate(state, p.type, events)
        elif p.y > state.height:
            continue
        else:
            remaining.append(p)
    state.powerups = remaining


def activate(state: GameState, kind: PowerupType, events: List[GameEvent]):
    active = state.active
    if kind is PowerupType.BLASTERS:
        if active.blasters and active.blaster_level == SINGLE_BLASTERS:
            active.blaster_level = DOUBLE_BLASTERS
        elif not active.blasters:
            active.blasters = True
            active.blaster_level = SINGLE_BLASTERS
            if not state.laser_loop:
                state.laser_loop = True
                events.append(GameEvent(EventKind.LASER_LOOP_START))
    else:
        _apply_size(state, kind)
    active.expires_at[kind] = state.clock + POWERUP_DURATION
    logger.debug("Activated %s (blaster_level=%d, width=%.0f)",
                 kind.value, active.blaster_level, state.paddle.width)


def _set_paddle_width(state: GameState, width: float):
    paddle = state.paddle
    paddle.width = width
    paddle.x = clamp(paddle.x, 0, state.width - width)


def _size_flag(state: GameState, kind: PowerupType, value: bool):
    if kind is PowerupType.SMALL:
        state.active.small = value
    else:
        state.active.big = value


def _apply_size(state: GameState, kind: PowerupType):
    active = state.active
    opposite = _OPPOSITE_SIZE[kind]
    if active.is_active(opposite):
        _set_paddle_width(state, PADDLE_NORMAL_WIDTH)
        active.expires_at[opposite] = None
        _size_flag(state, opposite, False)

    single, double = SIZE_WIDTHS[kind]
    width = state.paddle.width
    if active.is_active(kind):
        if width == single:
            _set_paddle_width(state, double)
        elif width != double:
            _set_paddle_width(state, single)
    else:
        _set_paddle_width(state, single)
    _size_flag(state, kind, True)


def expire_due(state: GameState, events: List[GameEvent]):
    """Deactivate every effect whose expiry time has been reached"""
    active = state.active
    for kind in PowerupType:
        expires_at = active.expires_at[kind]
        if expires_at is None or state.clock < expires_at:
            continue
        active.expires_at[kind] = None
        if kind is PowerupType.BLASTERS:
            active.blasters = False
            active.blaster_level = 0
            if state.laser_loop:
                state.laser_loop = False
                events.append(GameEvent(EventKind.LASER_LOOP_STOP))
        else:
            _size_flag(state, kind, False)
            if not active.is_active(_OPPOSITE_SIZE[kind]):
                _set_paddle_width(state, PADDLE_NORMAL_WIDTH)
        events.append(GameEvent(EventKind.POWERUP_EXPIRED, kind))
        logger.debug("%s power-up expired", kind.value)
