"""
Training configuration for the breakout environment
Reward shaping variants and algorithm hyperparameters
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "difficulty": "medium",
    "dt": 1/60,
    "max_steps": 18000,  # 5 minutes at 60 FPS
    "m_powerups": 2,
    "max_block_hits": 3,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (score driven, same as the env defaults)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Score driven with a mild life penalty",
    "R_SCORE": 0.1,      # Per point scored
    "R_PADDLE": 0.05,    # Per paddle hit
    "R_POWERUP": 0.2,    # Per power-up caught
    "R_LIFE": 1.0,       # Penalty per life lost
    "R_CLEAR": 10.0,     # Level cleared bonus
    "R_TIME": 0.0005,    # Small time penalty
}

# Reward Config 2: KEEP_ALIVE (return the ball above all else)
REWARD_CONFIG_KEEP_ALIVE = {
    "name": "keep_alive",
    "description": "Prioritize returning the ball - large life penalty, paddle bonus",
    "R_SCORE": 0.05,
    "R_PADDLE": 0.5,
    "R_POWERUP": 0.1,
    "R_LIFE": 5.0,
    "R_CLEAR": 10.0,
    "R_TIME": 0.0,
}

# Reward Config 3: COLLECTOR (chase power-ups)
REWARD_CONFIG_COLLECTOR = {
    "name": "collector",
    "description": "Reward catching power-ups, accept some risk",
    "R_SCORE": 0.1,
    "R_PADDLE": 0.05,
    "R_POWERUP": 2.0,
    "R_LIFE": 0.5,
    "R_CLEAR": 10.0,
    "R_TIME": 0.001,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "keep_alive": REWARD_CONFIG_KEEP_ALIVE,
    "collector": REWARD_CONFIG_COLLECTOR,
}


def reward_weights(name: str) -> dict:
    """Reward config without its descriptive keys, ready for BreakoutEnv"""
    return {k: v for k, v in REWARD_CONFIGS[name].items() if k.startswith("R_")}


# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 5000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 50_000,
    "eval_freq": 20_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
