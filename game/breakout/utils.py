"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np

from .config import MAX_BOUNCE_ANGLE


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Strict axis-aligned box overlap (touching edges do not count)"""
    return ax + aw > bx and ax < bx + bw and ay + ah > by and ay < by + bh


def ball_box_overlap(ball, box) -> bool:
    """Check the ball's bounding box against a block/paddle-like box"""
    r = ball.radius
    return rects_overlap(ball.x - r, ball.y - r, 2 * r, 2 * r,
                         box.x, box.y, box.width, box.height)


def launch_angle(hit_position: float) -> float:
    """Map a paddle hit position in [0, 1] to a launch angle in degrees from vertical"""
    return -MAX_BOUNCE_ANGLE + 2 * MAX_BOUNCE_ANGLE * hit_position


def launch_velocity(hit_position: float, speed: float):
    """Velocity after a paddle hit; dy is always upwards (negative)"""
    rad = math.radians(launch_angle(hit_position))
    dx = speed * math.sin(rad)
    dy = -speed * math.cos(rad)
    if dy > 0:
        dy = -dy
    return dx, dy


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
