"""
Plotting script for breakout training runs.
Reads the CSV written by MetricsCallback and draws learning curves.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from typing import Dict, Optional


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
                     os.path.join(log_dir, f"{algo}_metrics.csv")):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50) -> str:
    """Reward, score, blocks destroyed and clear rate against timesteps."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        ("reward", "Episode Reward"),
        ("score", "Score"),
        ("blocks_destroyed", "Blocks Destroyed"),
        ("level_cleared", "Level Clear Rate"),
    ]
    timesteps = df["timestep"].values
    for ax, (column, label) in zip(axes.flat, panels):
        values = smooth(df[column].values.astype(float), window)
        ax.plot(timesteps[:len(values)], values, linewidth=2)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    os.makedirs(output_dir, exist_ok=True)
    out_path = os.path.join(output_dir, f"{algo}_learning_curves.png")
    plt.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def summarize(data: Dict[str, pd.DataFrame], last_n: int = 100) -> pd.DataFrame:
    """Mean metrics over the last N episodes per algorithm."""
    rows = []
    for algo, df in data.items():
        tail = df.tail(last_n)
        rows.append({
            "algorithm": algo,
            "episodes": len(df),
            "mean_reward": tail["reward"].mean(),
            "mean_score": tail["score"].mean(),
            "mean_blocks": tail["blocks_destroyed"].mean(),
            "clear_rate": tail["level_cleared"].mean(),
        })
    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description="Plot breakout training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory with metrics CSVs")
    parser.add_argument("--output-dir", type=str, default="./figures", help="Where to write plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window (episodes)")
    args = parser.parse_args()

    data = {}
    for algo in ("ppo", "dqn"):
        df = load_metrics(args.log_dir, algo)
        if df is None or df.empty:
            print(f"No metrics found for {algo}")
            continue
        data[algo] = df
        print(f"Saved {plot_learning_curve(df, algo, args.output_dir, args.window)}")

    if data:
        print(summarize(data).to_string(index=False))


if __name__ == "__main__":
    main()
