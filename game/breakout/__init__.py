"""Breakout module - paddle, ball, blocks, power-ups and lasers"""

from .entities import Difficulty, EventKind, GameEvent, GamePhase, PowerupType
from .physics import Controls
from .session import GameSession
from .breakout_env import BreakoutEnv, run_random_episode

__all__ = [
    'Difficulty', 'EventKind', 'GameEvent', 'GamePhase', 'PowerupType',
    'Controls', 'GameSession', 'BreakoutEnv', 'run_random_episode',
]
