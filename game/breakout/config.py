"""
Gameplay constants and per-difficulty settings
"""

from dataclasses import dataclass
from typing import Dict

from .entities import Difficulty, PowerupType

# Playfield
WIDTH = 780
HEIGHT = 600

# Paddle
PADDLE_HEIGHT = 15
PADDLE_STEP = 7
PADDLE_BOTTOM_MARGIN = 10

PADDLE_DOUBLE_SMALL_WIDTH = 40
PADDLE_SMALL_WIDTH = 60
PADDLE_NORMAL_WIDTH = 100
PADDLE_BIG_WIDTH = 150
PADDLE_DOUBLE_BIG_WIDTH = 200

# (single, double) width per size power-up
SIZE_WIDTHS = {
    PowerupType.SMALL: (PADDLE_SMALL_WIDTH, PADDLE_DOUBLE_SMALL_WIDTH),
    PowerupType.BIG: (PADDLE_BIG_WIDTH, PADDLE_DOUBLE_BIG_WIDTH),
}

# Ball
BALL_RADIUS = 10
MAX_BOUNCE_ANGLE = 60.0  # degrees either side of vertical

# Blocks
BLOCK_ROWS = 5
BLOCK_COLUMNS = 8
BLOCK_WIDTH = 80
BLOCK_HEIGHT = 30
BLOCK_PADDING = 10
BLOCK_OFFSET_TOP = 60
BLOCK_OFFSET_LEFT = 35
MAX_BLOCK_HITS = 3  # hits required by the last row

ROW_COLORS = [
    (255, 82, 82),    # red
    (255, 152, 0),    # orange
    (255, 235, 59),   # yellow
    (76, 175, 80),    # green
    (33, 150, 243),   # blue
]
FALLBACK_ROW_COLOR = (156, 39, 176)  # purple

SCORE_PER_HIT = 2
SCORE_PER_DESTROY = 10  # multiplied by hits_required

STARTING_LIVES = 3

# Power-ups (times in seconds on the session clock)
POWERUP_SIZE = 30
POWERUP_SPEED = 2
POWERUP_DURATION = 10.0
GUARANTEED_SPAWN_DELAY = 3.0
FIRST_RANDOM_SPAWN_DELAY = 8.0
RANDOM_SPAWN_INTERVAL = (5.0, 15.0)

# Lasers
LASER_WIDTH = 4
LASER_HEIGHT = 15
LASER_SPEED = 7
LASER_COOLDOWN = 0.5
LASER_EDGE_INSET = 10
SINGLE_BLASTERS = 1
DOUBLE_BLASTERS = 2


@dataclass(frozen=True)
class DifficultySettings:
    ball_speed: float
    spawn_chances: Dict[PowerupType, float]

    @property
    def total_spawn_chance(self) -> float:
        """Gate for any power-up spawning on a block destruction"""
        return sum(self.spawn_chances.values())


DIFFICULTY_SETTINGS: Dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(
        ball_speed=2,
        spawn_chances={PowerupType.BLASTERS: 0.05, PowerupType.SMALL: 0.03, PowerupType.BIG: 0.05},
    ),
    Difficulty.MEDIUM: DifficultySettings(
        ball_speed=5,
        spawn_chances={PowerupType.BLASTERS: 0.03, PowerupType.SMALL: 0.02, PowerupType.BIG: 0.03},
    ),
    Difficulty.HARD: DifficultySettings(
        ball_speed=7,
        spawn_chances={PowerupType.BLASTERS: 0.01, PowerupType.SMALL: 0.02, PowerupType.BIG: 0.01},
    ),
    Difficulty.MASTER: DifficultySettings(
        ball_speed=9,
        spawn_chances={PowerupType.BLASTERS: 0.005, PowerupType.SMALL: 0.01, PowerupType.BIG: 0.005},
    ),
}


def describe_difficulty(difficulty: Difficulty, settings: DifficultySettings) -> str:
    """One-line summary shown in the HUD, e.g. 'MEDIUM - Ball Speed: 5, Total Powerup: 8.0% (...)'"""
    chances = settings.spawn_chances
    return (f"{difficulty.value.upper()} - Ball Speed: {settings.ball_speed:g}, "
            f"Total Powerup: {settings.total_spawn_chance * 100:.1f}% "
            f"(B:{chances[PowerupType.BLASTERS] * 100:.1f}% "
            f"S:{chances[PowerupType.SMALL] * 100:.1f}% "
            f"L:{chances[PowerupType.BIG] * 100:.1f}%)")
