"""
Arcade window: draws a GameSession and feeds it keyboard/mouse input.

Controls:
    Left/Right or A/D   move paddle (mouse movement also works)
    Space/Enter         start a run
    1-4                 difficulty (easy, medium, hard, master) between runs
    M                   toggle sound

Run:
    python -m game.breakout.window --difficulty hard
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import arcade

from .audio import ArcadeAudio, AudioAdapter, SilentAudio
from .config import DOUBLE_BLASTERS, PADDLE_BIG_WIDTH, PADDLE_SMALL_WIDTH, describe_difficulty
from .entities import Difficulty, GamePhase, PowerupType
from .physics import Controls
from .session import GameSession

HUD_HEIGHT = 60

DIFFICULTY_KEYS = {
    arcade.key.KEY_1: Difficulty.EASY,
    arcade.key.KEY_2: Difficulty.MEDIUM,
    arcade.key.KEY_3: Difficulty.HARD,
    arcade.key.KEY_4: Difficulty.MASTER,
}

POWERUP_STYLE = {
    PowerupType.BLASTERS: ((255, 0, 255), "B"),
    PowerupType.SMALL: ((255, 153, 0), "S"),
    PowerupType.BIG: ((0, 255, 0), "L"),
}


class BreakoutWindow(arcade.Window):
    """Arcade window for playing (interactive) or watching a session"""

    def __init__(self, session: GameSession, audio: Optional[AudioAdapter] = None,
                 interactive: bool = True):
        super().__init__(int(session.width), int(session.height) + HUD_HEIGHT, "Breakout - Arcade")
        self.session = session
        self.audio = audio if audio is not None else SilentAudio()
        self.interactive = interactive
        self.controls = Controls()

        # Colors
        self.BG = (18, 18, 22)
        self.PADDLE_C = (0, 149, 221)
        self.BALL_C = (0, 149, 221)
        self.LASER_C = (255, 0, 0)
        self.CRACK_C = (255, 255, 255)
        self.HUD_C = (220, 220, 220)

    # ----------------------------
    # Coordinate helpers (simulation is y-down from the playfield top)
    # ----------------------------

    def _rect(self, x, y, w, h, color):
        top = self.session.height - y
        arcade.draw_lrbt_rectangle_filled(x, x + w, top - h, top, color)

    def _outline(self, x, y, w, h, color, border=1):
        top = self.session.height - y
        arcade.draw_lrbt_rectangle_outline(x, x + w, top - h, top, color, border)

    def _line(self, x1, y1, x2, y2, color, width=1):
        h = self.session.height
        arcade.draw_line(x1, h - y1, x2, h - y2, color, width)

    # ----------------------------
    # Drawing
    # ----------------------------

    def on_draw(self):
        self.clear()
        arcade.set_background_color(self.BG)
        state = self.session.state

        self._draw_paddle(state)
        arcade.draw_circle_filled(state.ball.x, state.height - state.ball.y,
                                  state.ball.radius, self.BALL_C)
        for block in state.blocks:
            if block.visible:
                self._draw_block(block)
        for p in state.powerups:
            color, letter = POWERUP_STYLE[p.type]
            self._rect(p.x, p.y, p.width, p.height, color)
            self._outline(p.x, p.y, p.width, p.height, (255, 255, 255))
            arcade.draw_text(letter, p.x + p.width / 2, state.height - p.y - p.height / 2,
                             (255, 255, 255), 16, anchor_x="center", anchor_y="center")
        for laser in state.lasers:
            self._rect(laser.x, laser.y, laser.width, laser.height, self.LASER_C)

        self._draw_hud(state)
        if state.phase is GamePhase.GAME_OVER:
            self._draw_overlay("GAME OVER", (255, 82, 82), f"Final Score: {state.score}",
                               'Press SPACE to play again')
        elif state.phase is GamePhase.LEVEL_COMPLETE:
            self._draw_overlay("LEVEL COMPLETE!", (76, 175, 80), f"Score: {state.score}",
                               'Press SPACE to play next level')
        elif state.phase is GamePhase.IDLE:
            arcade.draw_text("Press SPACE to start", state.width / 2, state.height / 2,
                             self.HUD_C, 24, anchor_x="center", anchor_y="center")

    def _draw_paddle(self, state):
        paddle = state.paddle
        self._rect(paddle.x, paddle.y, paddle.width, paddle.height, self.PADDLE_C)
        active = state.active
        if not active.blasters:
            return
        nubs = [paddle.x + 10, paddle.x + paddle.width - 15]
        if active.blaster_level == DOUBLE_BLASTERS:
            nubs += [paddle.x + paddle.width / 3 - 2.5, paddle.x + 2 * paddle.width / 3 - 2.5]
        for x in nubs:
            self._rect(x, paddle.y - 5, 5, 5, self.LASER_C)

    def _draw_block(self, block):
        self._rect(block.x, block.y, block.width, block.height, block.color)
        self._outline(block.x, block.y, block.width, block.height, (0, 0, 0))
        if not 0 < block.hits < block.hits_required:
            return

        # First impact: spider web crack
        cx = block.x + block.width * 0.3
        cy = block.y + block.height * 0.4
        self._line(cx - 15, cy, cx + 25, cy, self.CRACK_C)
        self._line(cx, cy, cx + 20, cy - 15, self.CRACK_C)
        self._line(cx, cy, cx + 15, cy + 12, self.CRACK_C)
        self._line(cx, cy, cx - 10, cy - 10, self.CRACK_C)

        if block.hits >= 2:
            cx2 = block.x + block.width * 0.7
            cy2 = block.y + block.height * 0.6
            self._line(cx2, cy2, cx2 + 25, cy2 + 10, self.CRACK_C, 1.5)
            self._line(cx2, cy2, cx2 - 20, cy2 + 5, self.CRACK_C, 1.5)
            self._line(cx2, cy2, cx2 - 10, cy2 - 15, self.CRACK_C, 1.5)
            self._line(cx2, cy2, cx2 + 5, cy2 - 10, self.CRACK_C, 1.5)
            self._line(cx + 15, cy, cx2 - 15, cy2, self.CRACK_C, 1.5)

    def _draw_hud(self, state):
        base = state.height
        arcade.draw_lrbt_rectangle_filled(0, state.width, base, base + HUD_HEIGHT, (40, 40, 48))
        sound = "ON" if self.audio.enabled else "OFF"
        arcade.draw_text(f"Score: {state.score}   Lives: {state.lives}   Sound: {sound}",
                         12, base + 36, self.HUD_C, 14)
        arcade.draw_text(describe_difficulty(state.difficulty, state.settings),
                         12, base + 12, self.HUD_C, 11)

        indicators = []
        active = state.active
        if active.blasters:
            indicators.append("DOUBLE BLASTERS ACTIVE!" if active.blaster_level == DOUBLE_BLASTERS
                              else "BLASTERS ACTIVE!")
        if active.small:
            indicators.append("DOUBLE SMALL PADDLE!" if state.paddle.width < PADDLE_SMALL_WIDTH else "SMALL PADDLE!")
        if active.big:
            indicators.append("DOUBLE BIG PADDLE!" if state.paddle.width > PADDLE_BIG_WIDTH else "BIG PADDLE!")
        if indicators:
            arcade.draw_text("  ".join(indicators), state.width - 12, base + 36,
                             (255, 210, 80), 12, anchor_x="right")

    def _draw_overlay(self, title, color, score_line, hint):
        state = self.session.state
        arcade.draw_lrbt_rectangle_filled(0, state.width, 0, state.height, (0, 0, 0, 128))
        cx, cy = state.width / 2, state.height / 2
        arcade.draw_text(title, cx, cy, color, 40, anchor_x="center", anchor_y="center")
        arcade.draw_text(score_line, cx, cy - 50, (255, 255, 255), 20, anchor_x="center")
        arcade.draw_text(f"Difficulty: {state.difficulty.value.upper()}", cx, cy - 80,
                         (255, 255, 255), 20, anchor_x="center")
        arcade.draw_text(hint, cx, cy - 120, (255, 255, 255), 20, anchor_x="center")

    # ----------------------------
    # Loop and input
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        events = self.session.tick(self.controls, delta_time)
        self.audio.handle(events)
        # pointer position is absolute; only apply it on the tick it moved
        self.controls.pointer_x = None

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol in (arcade.key.LEFT, arcade.key.A):
            self.controls.left = True
        elif symbol in (arcade.key.RIGHT, arcade.key.D):
            self.controls.right = True
        elif symbol in (arcade.key.SPACE, arcade.key.ENTER):
            self.audio.handle(self.session.start())
        elif symbol in DIFFICULTY_KEYS:
            self.session.set_difficulty(DIFFICULTY_KEYS[symbol])
        elif symbol == arcade.key.M:
            self.audio.set_enabled(not self.audio.enabled,
                                   blasters_active=self.session.state.active.blasters)

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol in (arcade.key.LEFT, arcade.key.A):
            self.controls.left = False
        elif symbol in (arcade.key.RIGHT, arcade.key.D):
            self.controls.right = False

    def on_mouse_motion(self, x: float, y: float, dx: float, dy: float):
        if self.interactive and self.session.running:
            self.controls.pointer_x = x


def main():
    parser = argparse.ArgumentParser(description="Play breakout")
    parser.add_argument(
        "--difficulty",
        type=str,
        default="medium",
        choices=[d.value for d in Difficulty],
        help="Starting difficulty (default: medium)",
    )
    parser.add_argument("--mute", action="store_true", help="Start with sound off")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    session = GameSession(difficulty=args.difficulty, rng=random.Random(args.seed))
    audio = ArcadeAudio(enabled=not args.mute)
    BreakoutWindow(session, audio)
    arcade.run()


if __name__ == "__main__":
    main()
