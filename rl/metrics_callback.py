"""
Custom callback for tracking breakout metrics during training.
Records: score, blocks destroyed, lives lost, power-ups caught, level clears.
"""

import os
import csv
from typing import Dict, List, Any, Optional
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log task-specific metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[int] = []
        self.episode_blocks: List[int] = []
        self.episode_clears: List[bool] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length", "score",
            "blocks_destroyed", "lives_lost", "powerups_caught", "level_cleared"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds episode info on the final step
            if done and "episode" in info:
                ep_info = info["episode"]
                self.episode_rewards.append(ep_info["r"])
                self.episode_lengths.append(ep_info["l"])
                self.episode_scores.append(info.get("score", 0))
                self.episode_blocks.append(info.get("blocks_destroyed", 0))
                self.episode_clears.append(bool(info.get("level_cleared", False)))

                if self.csv_writer:
                    self.csv_writer.writerow([
                        self.num_timesteps,
                        len(self.episode_rewards),
                        ep_info["r"],
                        ep_info["l"],
                        info.get("score", 0),
                        info.get("blocks_destroyed", 0),
                        info.get("lives_lost", 0),
                        info.get("powerups_caught", 0),
                        int(bool(info.get("level_cleared", False))),
                    ])
                    self.csv_file.flush()

                if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                    avg_score = sum(self.episode_scores[-10:]) / 10
                    print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                          f"Timestep {self.num_timesteps}, "
                          f"Avg Score (10 ep): {avg_score:.1f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        import numpy as np
        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "mean_blocks": np.mean(self.episode_blocks),
            "clear_rate": np.mean(self.episode_clears),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs breakout metrics to TensorBoard.
    """

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info:
                self.logger.record("custom/episode_reward", info["episode"]["r"])
                self.logger.record("custom/score", info.get("score", 0))
                self.logger.record("custom/blocks_destroyed", info.get("blocks_destroyed", 0))
                self.logger.record("custom/level_cleared", float(info.get("level_cleared", False)))

        return True
