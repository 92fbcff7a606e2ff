"""
BreakoutEnv - the breakout simulation as a Gymnasium environment
-----------------------------------------------------------------
- Wraps a headless GameSession; one env step = one game tick
- Discrete action space: 0 stay, 1 left, 2 right
- Vector observation: paddle, ball, power-up state, lives, per-block
  remaining hits, nearest falling power-ups
- Arcade window for render_mode="human"

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.breakout.breakout_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import (
    BLOCK_COLUMNS, BLOCK_ROWS, DOUBLE_BLASTERS, MAX_BLOCK_HITS,
    PADDLE_DOUBLE_BIG_WIDTH, STARTING_LIVES,
)
from .entities import Difficulty, EventKind, GamePhase, PowerupType
from .physics import Controls
from .session import GameSession
from .utils import clamp, seed_everything

DEFAULT_REWARD_CONFIG = {
    "R_SCORE": 0.1,      # per point scored
    "R_PADDLE": 0.05,    # per paddle hit, keeps the ball in play early on
    "R_POWERUP": 0.2,    # per power-up caught
    "R_LIFE": 1.0,       # penalty per life lost
    "R_CLEAR": 10.0,     # level cleared bonus
    "R_TIME": 0.0005,    # small per-step penalty
}

_ACTIONS = [
    Controls(),
    Controls(left=True),
    Controls(right=True),
]


class BreakoutEnv(gym.Env):
    """Breakout environment driven by a GameSession"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        difficulty: str = "medium",
        dt: float = 1 / 60,
        max_steps: int = 18000,  # 5 minutes at 60 FPS
        m_powerups: int = 2,
        max_block_hits: int = MAX_BLOCK_HITS,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.render_mode = render_mode
        self.difficulty = Difficulty(difficulty)
        self.dt = dt
        self.max_steps = max_steps
        self.m_powerups = m_powerups
        self.max_block_hits = max_block_hits
        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(reward_config)

        self.action_space = spaces.Discrete(len(_ACTIONS))

        # Paddle: x(1) width(1)
        # Ball: pos(2) vel(2)
        # Power-up state: blaster level(1) small(1) big(1)
        # Lives(1)
        # Each block: remaining-hits fraction(1)
        # Each falling power-up: rel pos(2) type(1)
        self.n_blocks = BLOCK_ROWS * BLOCK_COLUMNS
        obs_dim = 2 + 4 + 3 + 1 + self.n_blocks + self.m_powerups * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.session: Optional[GameSession] = None
        self._step_count = 0
        self._events: Dict[str, float] = {}

        # Episode tallies reported through info
        self._blocks_destroyed = 0
        self._lives_lost = 0
        self._powerups_caught = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.session = GameSession(
            difficulty=self.difficulty,
            max_block_hits=self.max_block_hits,
            rng=rng,
        )
        self.session.start()

        self._step_count = 0
        self._blocks_destroyed = 0
        self._lives_lost = 0
        self._powerups_caught = 0

        if self._window is not None:
            self._window.session = self.session

        return self._get_obs(), self._get_info()

    def step(self, action):
        prev_score = self.session.state.score
        events = self.session.tick(_ACTIONS[int(action)], self.dt)

        self._events = {"score": float(self.session.state.score - prev_score),
                        "paddle": 0.0, "powerup": 0.0, "life": 0.0, "clear": 0.0}
        for event in events:
            if event.kind is EventKind.PADDLE_HIT:
                self._events["paddle"] += 1.0
            elif event.kind is EventKind.POWERUP_COLLECTED:
                self._events["powerup"] += 1.0
                self._powerups_caught += 1
            elif event.kind is EventKind.LIFE_LOST:
                self._events["life"] += 1.0
                self._lives_lost += 1
            elif event.kind is EventKind.LEVEL_CLEARED:
                self._events["clear"] += 1.0
            elif event.kind is EventKind.BLOCK_DESTROYED:
                self._blocks_destroyed += 1

        reward = self._compute_reward()

        terminated = not self.session.running
        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.session.state
        w, h = state.width, state.height
        speed = max(1e-6, state.ball_speed)

        paddle = state.paddle
        ball = state.ball
        active = state.active

        obs_parts = [
            (paddle.x / w) * 2 - 1,
            (paddle.width / PADDLE_DOUBLE_BIG_WIDTH) * 2 - 1,
            (ball.x / w) * 2 - 1,
            (ball.y / h) * 2 - 1,
            ball.dx / speed,
            ball.dy / speed,
            active.blaster_level / DOUBLE_BLASTERS,
            1.0 if active.small else 0.0,
            1.0 if active.big else 0.0,
            state.lives / STARTING_LIVES,
        ]

        for block in state.blocks[:self.n_blocks]:
            remaining = 0.0
            if block.visible:
                remaining = (block.hits_required - block.hits) / max(1, block.hits_required)
            obs_parts.append(remaining)
        obs_parts += [0.0] * (self.n_blocks - min(self.n_blocks, len(state.blocks)))

        # Falling power-ups: nearest M by distance to the paddle centre
        px = paddle.x + paddle.width / 2
        powerups_sorted = sorted(
            state.powerups,
            key=lambda p: (p.x - px) ** 2 + (p.y - paddle.y) ** 2
        )
        type_codes = {PowerupType.BLASTERS: 1.0, PowerupType.SMALL: -1.0, PowerupType.BIG: 0.5}
        for i in range(self.m_powerups):
            if i < len(powerups_sorted):
                p = powerups_sorted[i]
                obs_parts += [(p.x - px) / w, (p.y - paddle.y) / h, type_codes[p.type]]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array([clamp(v, -1.0, 1.0) for v in obs_parts], dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        reward = 0.0
        reward += rc["R_SCORE"] * self._events.get("score", 0.0)
        reward += rc["R_PADDLE"] * self._events.get("paddle", 0.0)
        reward += rc["R_POWERUP"] * self._events.get("powerup", 0.0)
        reward -= rc["R_LIFE"] * self._events.get("life", 0.0)
        reward += rc["R_CLEAR"] * self._events.get("clear", 0.0)
        reward -= rc["R_TIME"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        state = self.session.state
        return {
            "score": state.score,
            "lives": state.lives,
            "phase": state.phase.value,
            "level_cleared": state.phase is GamePhase.LEVEL_COMPLETE,
            "blocks_left": len(state.visible_blocks()),
            "blocks_destroyed": self._blocks_destroyed,
            "lives_lost": self._lives_lost,
            "powerups_caught": self._powerups_caught,
            "blaster_level": state.active.blaster_level,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import BreakoutWindow
            self._window = BreakoutWindow(self.session, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run one episode with random actions and return its total reward"""
    env = BreakoutEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f} "
          f"(score {info['score']}, blocks destroyed {info['blocks_destroyed']}, "
          f"phase {info['phase']})")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
