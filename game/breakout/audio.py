"""
Audio adapter: turns game events into sound cues.

Playback problems (missing audio device, bad file) are logged and dropped so
they never reach the simulation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from .entities import EventKind, GameEvent, PowerupType

logger = logging.getLogger(__name__)

EVENT_CUES = {
    EventKind.PADDLE_HIT: "paddle_hit",
    EventKind.BLOCK_HIT: "block_crack",
    EventKind.BLOCK_DESTROYED: "block_break",
    EventKind.GAME_START: "game_start",
    EventKind.GAME_OVER: "game_over",
    EventKind.LIFE_LOST: "life_lost",
    EventKind.LEVEL_CLEARED: "level_won",
}

POWERUP_CUES = {
    PowerupType.BLASTERS: "got_blasters",
    PowerupType.SMALL: "paddle_shrink",
    PowerupType.BIG: "paddle_grow",
}

LASER_CUE = "laser_shoot"

# arcade's bundled sound resources
ARCADE_SOUNDS = {
    "paddle_hit": ":resources:sounds/hit1.wav",
    "block_crack": ":resources:sounds/hit3.wav",
    "block_break": ":resources:sounds/explosion1.wav",
    "laser_shoot": ":resources:sounds/laser1.wav",
    "paddle_shrink": ":resources:sounds/fall1.wav",
    "paddle_grow": ":resources:sounds/upgrade1.wav",
    "got_blasters": ":resources:sounds/upgrade4.wav",
    "game_start": ":resources:sounds/coin1.wav",
    "game_over": ":resources:sounds/gameover1.wav",
    "life_lost": ":resources:sounds/lose1.wav",
    "level_won": ":resources:sounds/secret2.wav",
}


class AudioAdapter:
    """Base adapter; subclasses implement _play/_start_loop/_stop_loop"""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.looping = False

    def handle(self, events: Iterable[GameEvent]):
        for event in events:
            if event.kind in (EventKind.LASER_LOOP_START, EventKind.LASER_FIRED):
                self.start_loop()
            elif event.kind is EventKind.LASER_LOOP_STOP:
                self.stop_loop()
            elif event.kind is EventKind.POWERUP_COLLECTED and event.powerup is not None:
                self.play(POWERUP_CUES[event.powerup])
            elif event.kind in EVENT_CUES:
                self.play(EVENT_CUES[event.kind])

    def play(self, cue: str):
        if not self.enabled:
            return
        try:
            self._play(cue)
        except Exception as e:
            logger.warning("Sound play error (%s): %s", cue, e)

    def start_loop(self):
        if not self.enabled or self.looping:
            return
        self.looping = True
        try:
            self._start_loop(LASER_CUE)
        except Exception as e:
            logger.warning("Laser sound loop error: %s", e)

    def stop_loop(self):
        if not self.looping:
            return
        self.looping = False
        try:
            self._stop_loop()
        except Exception as e:
            logger.warning("Laser sound stop error: %s", e)

    def set_enabled(self, enabled: bool, blasters_active: bool = False):
        """Sound toggle; the laser loop follows the blaster state when re-enabled"""
        self.enabled = enabled
        if not enabled:
            self.stop_loop()
        elif blasters_active:
            self.start_loop()

    def _play(self, cue: str):
        raise NotImplementedError

    def _start_loop(self, cue: str):
        raise NotImplementedError

    def _stop_loop(self):
        raise NotImplementedError


class SilentAudio(AudioAdapter):
    """No-op backend for headless runs"""

    def _play(self, cue: str):
        pass

    def _start_loop(self, cue: str):
        pass

    def _stop_loop(self):
        pass


class ArcadeAudio(AudioAdapter):
    """Plays arcade's bundled sounds"""

    def __init__(self, enabled: bool = True, sound_files: Optional[Dict[str, str]] = None):
        super().__init__(enabled)
        import arcade
        self._arcade = arcade
        self._sounds: Dict[str, Any] = {}
        self._loop_player = None
        for cue, path in (sound_files or ARCADE_SOUNDS).items():
            try:
                self._sounds[cue] = arcade.load_sound(path)
            except Exception as e:
                logger.warning("Could not load sound %s from %s: %s", cue, path, e)

    def _play(self, cue: str):
        sound = self._sounds.get(cue)
        if sound is not None:
            self._arcade.play_sound(sound)

    def _start_loop(self, cue: str):
        sound = self._sounds.get(cue)
        if sound is not None:
            self._loop_player = self._arcade.play_sound(sound, loop=True)

    def _stop_loop(self):
        if self._loop_player is not None:
            self._arcade.stop_sound(self._loop_player)
            self._loop_player = None
