"""
Run state owned by a GameSession, plus board construction helpers
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .config import (
    BALL_RADIUS, BLOCK_COLUMNS, BLOCK_HEIGHT, BLOCK_OFFSET_LEFT, BLOCK_OFFSET_TOP,
    BLOCK_PADDING, BLOCK_ROWS, BLOCK_WIDTH, DifficultySettings, FALLBACK_ROW_COLOR,
    PADDLE_BOTTOM_MARGIN, PADDLE_HEIGHT, PADDLE_NORMAL_WIDTH, PADDLE_STEP, ROW_COLORS,
    STARTING_LIVES,
)
from .entities import (
    ActivePowerups, Ball, Block, Difficulty, EventKind, GameEvent, GamePhase,
    Laser, Paddle, Powerup,
)

logger = logging.getLogger(__name__)


@dataclass
class GameState:
    width: float
    height: float
    difficulty: Difficulty
    settings: DifficultySettings
    max_block_hits: int
    rng: random.Random
    paddle: Paddle
    ball: Ball
    blocks: List[Block] = field(default_factory=list)
    powerups: List[Powerup] = field(default_factory=list)
    lasers: List[Laser] = field(default_factory=list)
    active: ActivePowerups = field(default_factory=ActivePowerups)
    score: int = 0
    lives: int = STARTING_LIVES
    phase: GamePhase = GamePhase.IDLE
    clock: float = 0.0  # seconds since the run started
    last_fire_at: Optional[float] = None
    guaranteed_spawn_at: Optional[float] = None
    next_random_spawn_at: Optional[float] = None
    laser_loop: bool = False  # looping laser sound requested

    @property
    def ball_speed(self) -> float:
        return self.settings.ball_speed

    def visible_blocks(self) -> List[Block]:
        return [b for b in self.blocks if b.visible]

    def all_cleared(self) -> bool:
        return not any(b.visible for b in self.blocks)


def build_blocks(rows: int = BLOCK_ROWS, columns: int = BLOCK_COLUMNS,
                 max_block_hits: int = 3) -> List[Block]:
    """Lay out the block grid; the last row needs max_block_hits hits"""
    blocks = []
    for r in range(rows):
        color = ROW_COLORS[r] if r < len(ROW_COLORS) else FALLBACK_ROW_COLOR
        hits_required = max_block_hits if r == rows - 1 else 1
        for c in range(columns):
            blocks.append(Block(
                x=c * (BLOCK_WIDTH + BLOCK_PADDING) + BLOCK_OFFSET_LEFT,
                y=r * (BLOCK_HEIGHT + BLOCK_PADDING) + BLOCK_OFFSET_TOP,
                width=BLOCK_WIDTH,
                height=BLOCK_HEIGHT,
                color=color,
                hits_required=hits_required,
            ))
    return blocks


def make_paddle(width: float, height: float) -> Paddle:
    return Paddle(
        x=width / 2 - PADDLE_NORMAL_WIDTH / 2,
        y=height - PADDLE_HEIGHT - PADDLE_BOTTOM_MARGIN,
        width=PADDLE_NORMAL_WIDTH,
        height=PADDLE_HEIGHT,
        step=PADDLE_STEP,
    )


def serve_ball(state: GameState, direction: int = 1):
    """Place the ball above the paddle at the playfield centre, moving up"""
    state.ball.x = state.width / 2
    state.ball.y = state.paddle.y - state.ball.radius
    state.ball.dx = state.ball_speed * direction
    state.ball.dy = -state.ball_speed


def new_state(width: float, height: float, difficulty: Difficulty,
              settings: DifficultySettings, max_block_hits: int,
              rng: random.Random) -> GameState:
    paddle = make_paddle(width, height)
    ball = Ball(x=width / 2, y=paddle.y - BALL_RADIUS, dx=0.0, dy=0.0, radius=BALL_RADIUS)
    state = GameState(
        width=width,
        height=height,
        difficulty=difficulty,
        settings=settings,
        max_block_hits=max_block_hits,
        rng=rng,
        paddle=paddle,
        ball=ball,
        blocks=build_blocks(max_block_hits=max_block_hits),
    )
    serve_ball(state)
    return state


def finish_run(state: GameState, phase: GamePhase, events: List[GameEvent]):
    """Enter a terminal phase once; cancels all timers and the laser loop"""
    if state.phase is not GamePhase.RUNNING:
        return
    state.phase = phase
    state.active.cancel_timers()
    state.guaranteed_spawn_at = None
    state.next_random_spawn_at = None
    if state.laser_loop:
        state.laser_loop = False
        events.append(GameEvent(EventKind.LASER_LOOP_STOP))
    if phase is GamePhase.GAME_OVER:
        events.append(GameEvent(EventKind.GAME_OVER))
    else:
        events.append(GameEvent(EventKind.LEVEL_CLEARED))
    logger.info("Run finished: %s (score=%d, difficulty=%s)",
                phase.value, state.score, state.difficulty.value)
