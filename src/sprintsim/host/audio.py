"""Audio collaborator injected at the host boundary.

The race core never plays sound; hosts pass an :class:`AudioSink` to
whatever drives the race.
"""

from enum import Enum
from typing import Protocol


class AudioKey(str, Enum):
    """Sounds a race host can trigger."""

    TAP = "tap"
    CORRECT = "correct"
    WRONG = "wrong"
    FINISH = "finish"
    RACE_MUSIC = "race_music"


class AudioSink(Protocol):
    """Playback surface a host provides."""

    volume: float

    def play_sfx(self, key: AudioKey) -> None: ...

    def play_music(self, key: AudioKey) -> None: ...

    def stop_music(self, fade: bool = False) -> None: ...


def clamp_volume(volume: float) -> float:
    return min(1.0, max(0.0, volume))


class NullAudio:
    """Silent sink for headless runs."""

    def __init__(self, volume: float = 0.7):
        self.volume = clamp_volume(volume)

    def play_sfx(self, key: AudioKey) -> None:
        pass

    def play_music(self, key: AudioKey) -> None:
        pass

    def stop_music(self, fade: bool = False) -> None:
        pass


class RecordingAudio:
    """Keeps every call so a run can be inspected afterwards."""

    def __init__(self, volume: float = 0.7):
        self.volume = clamp_volume(volume)
        self.calls: list[tuple[str, AudioKey | None]] = []
        self.music: AudioKey | None = None

    def set_volume(self, volume: float) -> None:
        self.volume = clamp_volume(volume)

    def play_sfx(self, key: AudioKey) -> None:
        self.calls.append(("sfx", key))

    def play_music(self, key: AudioKey) -> None:
        self.music = key
        self.calls.append(("music", key))

    def stop_music(self, fade: bool = False) -> None:
        self.music = None
        self.calls.append(("stop", None))

    def sfx_played(self, key: AudioKey) -> int:
        return sum(1 for kind, k in self.calls if kind == "sfx" and k == key)
