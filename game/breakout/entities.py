"""
Game entity dataclasses and enumerations
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class PowerupType(Enum):
    """Kinds of falling power-ups"""
    BLASTERS = "blasters"
    SMALL = "small"
    BIG = "big"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    MASTER = "master"


class GamePhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"
    LEVEL_COMPLETE = "level_complete"


class EventKind(Enum):
    """Things that happened during a tick, for audio/render adapters"""
    GAME_START = "game_start"
    WALL_BOUNCE = "wall_bounce"
    PADDLE_HIT = "paddle_hit"
    BLOCK_HIT = "block_hit"  # cracked, not destroyed
    BLOCK_DESTROYED = "block_destroyed"
    LIFE_LOST = "life_lost"
    GAME_OVER = "game_over"
    LEVEL_CLEARED = "level_cleared"
    POWERUP_SPAWNED = "powerup_spawned"
    POWERUP_COLLECTED = "powerup_collected"
    POWERUP_EXPIRED = "powerup_expired"
    LASER_FIRED = "laser_fired"
    LASER_LOOP_START = "laser_loop_start"
    LASER_LOOP_STOP = "laser_loop_stop"


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    powerup: Optional[PowerupType] = None


@dataclass
class Paddle:
    """Player paddle; (x, y) is the top-left corner"""
    x: float
    y: float
    width: float = 100.0
    height: float = 15.0
    step: float = 7.0  # px per tick while a direction key is held


@dataclass
class Ball:
    x: float
    y: float
    dx: float
    dy: float
    radius: float = 10.0


@dataclass
class Block:
    """Destructible grid block"""
    x: float
    y: float
    width: float = 80.0
    height: float = 30.0
    color: Tuple[int, int, int] = (255, 255, 255)
    visible: bool = True
    hits: int = 0
    hits_required: int = 1


@dataclass
class Powerup:
    """Falling power-up capsule"""
    x: float
    y: float
    type: PowerupType
    width: float = 30.0
    height: float = 30.0
    speed: float = 2.0  # px per tick, downwards


@dataclass
class Laser:
    x: float
    y: float
    width: float = 4.0
    height: float = 15.0
    speed: float = 7.0  # px per tick, upwards


def _no_timers() -> Dict[PowerupType, Optional[float]]:
    return {kind: None for kind in PowerupType}


@dataclass
class ActivePowerups:
    """Currently applied power-up effects and their expiry times (session clock, seconds)"""
    blasters: bool = False
    blaster_level: int = 0  # 0 none, 1 single (2 lasers), 2 double (4 lasers)
    small: bool = False
    big: bool = False
    expires_at: Dict[PowerupType, Optional[float]] = field(default_factory=_no_timers)

    def is_active(self, kind: PowerupType) -> bool:
        if kind is PowerupType.BLASTERS:
            return self.blasters
        if kind is PowerupType.SMALL:
            return self.small
        return self.big

    def cancel_timers(self):
        self.expires_at = _no_timers()
