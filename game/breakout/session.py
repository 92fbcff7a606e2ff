"""
GameSession - the breakout state machine
----------------------------------------
- Owns one GameState (board, ball, paddle, power-ups, lasers, score, lives)
- Idle -> Running -> GameOver | LevelComplete; start() re-enters Running
- tick(controls, dt) advances one frame and returns the events it produced
- Timed effects are timestamps on the session clock, checked at the top of each tick
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Union

from .config import (
    DIFFICULTY_SETTINGS, DifficultySettings, FIRST_RANDOM_SPAWN_DELAY,
    GUARANTEED_SPAWN_DELAY, HEIGHT, MAX_BLOCK_HITS, WIDTH,
)
from .entities import Difficulty, EventKind, GameEvent, GamePhase
from .lasers import advance_lasers, fire_lasers
from .physics import Controls, advance_ball, move_paddle
from .powerups import advance_powerups, expire_due, run_scheduled_spawns
from .state import GameState, new_state

logger = logging.getLogger(__name__)


class GameSession:
    """A single restartable breakout run"""

    def __init__(
        self,
        width: float = WIDTH,
        height: float = HEIGHT,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        max_block_hits: int = MAX_BLOCK_HITS,
        rng: Optional[random.Random] = None,
        settings: Optional[Dict[Difficulty, DifficultySettings]] = None,
    ):
        self.width = width
        self.height = height
        self.max_block_hits = max_block_hits
        self.rng = rng if rng is not None else random.Random()
        self.settings = dict(settings) if settings is not None else dict(DIFFICULTY_SETTINGS)
        self.difficulty = Difficulty(difficulty)

        # Idle board so there is something to draw before the first start
        self.state: GameState = self._fresh_state()

    def _fresh_state(self) -> GameState:
        return new_state(self.width, self.height, self.difficulty,
                         self.settings[self.difficulty], self.max_block_hits, self.rng)

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def running(self) -> bool:
        return self.state.phase is GamePhase.RUNNING

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> bool:
        """Change difficulty between runs; ignored while a run is in progress"""
        if self.running:
            return False
        self.difficulty = Difficulty(difficulty)
        self.state.difficulty = self.difficulty
        self.state.settings = self.settings[self.difficulty]
        logger.info("Difficulty set to %s", self.difficulty.value)
        return True

    def start(self) -> List[GameEvent]:
        """Begin a new run from any non-running phase"""
        if self.running:
            return []
        self.state = self._fresh_state()
        state = self.state
        state.phase = GamePhase.RUNNING
        state.guaranteed_spawn_at = GUARANTEED_SPAWN_DELAY
        state.next_random_spawn_at = FIRST_RANDOM_SPAWN_DELAY
        logger.info("Run started (difficulty=%s, ball_speed=%g)",
                    self.difficulty.value, state.ball_speed)
        return [GameEvent(EventKind.GAME_START)]

    def tick(self, controls: Optional[Controls] = None, dt: float = 1 / 60) -> List[GameEvent]:
        """Advance one frame. Does nothing outside the Running phase."""
        if not self.running:
            return []
        if controls is None:
            controls = Controls()
        state = self.state
        events: List[GameEvent] = []

        state.clock += dt
        expire_due(state, events)
        run_scheduled_spawns(state, events)

        move_paddle(state, controls)
        advance_ball(state, events)
        if not self.running:
            return events

        advance_powerups(state, events)
        advance_lasers(state, events)
        if not self.running:
            return events

        fire_lasers(state, events)
        return events
