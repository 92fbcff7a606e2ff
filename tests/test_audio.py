import logging

from game.breakout.audio import AudioAdapter
from game.breakout.entities import EventKind, GameEvent, PowerupType


class RecordingAudio(AudioAdapter):
    def __init__(self, enabled=True):
        super().__init__(enabled)
        self.played = []
        self.loop_starts = 0
        self.loop_stops = 0

    def _play(self, cue):
        self.played.append(cue)

    def _start_loop(self, cue):
        self.loop_starts += 1

    def _stop_loop(self):
        self.loop_stops += 1


class BrokenAudio(RecordingAudio):
    def _play(self, cue):
        raise RuntimeError("no audio device")

    def _start_loop(self, cue):
        raise RuntimeError("no audio device")


def test_events_map_to_cues():
    audio = RecordingAudio()
    audio.handle([
        GameEvent(EventKind.GAME_START),
        GameEvent(EventKind.PADDLE_HIT),
        GameEvent(EventKind.BLOCK_HIT),
        GameEvent(EventKind.BLOCK_DESTROYED),
        GameEvent(EventKind.WALL_BOUNCE),
        GameEvent(EventKind.POWERUP_COLLECTED, PowerupType.SMALL),
        GameEvent(EventKind.LIFE_LOST),
    ])
    assert audio.played == [
        "game_start", "paddle_hit", "block_crack", "block_break", "paddle_shrink", "life_lost",
    ]


def test_laser_loop_starts_once_and_stops():
    audio = RecordingAudio()
    audio.handle([GameEvent(EventKind.LASER_LOOP_START), GameEvent(EventKind.LASER_FIRED),
                  GameEvent(EventKind.LASER_FIRED)])
    assert audio.loop_starts == 1
    audio.handle([GameEvent(EventKind.LASER_LOOP_STOP)])
    assert audio.loop_stops == 1
    assert not audio.looping


def test_sound_toggle_follows_blasters():
    audio = RecordingAudio()
    audio.handle([GameEvent(EventKind.LASER_LOOP_START)])

    audio.set_enabled(False)
    assert audio.loop_stops == 1
    audio.handle([GameEvent(EventKind.PADDLE_HIT), GameEvent(EventKind.LASER_FIRED)])
    assert audio.played == []
    assert audio.loop_starts == 1

    audio.set_enabled(True, blasters_active=True)
    assert audio.loop_starts == 2

    audio.set_enabled(False)
    audio.set_enabled(True, blasters_active=False)
    assert audio.loop_starts == 2


def test_playback_failures_are_logged_not_raised(caplog):
    audio = BrokenAudio()
    with caplog.at_level(logging.WARNING, logger="game.breakout.audio"):
        audio.handle([GameEvent(EventKind.PADDLE_HIT), GameEvent(EventKind.LASER_LOOP_START)])
    assert "Sound play error" in caplog.text
    assert "Laser sound loop error" in caplog.text
