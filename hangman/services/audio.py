from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple

from hangman.config import Settings
from hangman.core.state import SessionEvent

logger = logging.getLogger(__name__)


# Short cues on every guess; longer clips when the round ends.
CUE_NAMES: Dict[SessionEvent, str] = {
    SessionEvent.CORRECT_GUESS: "tap_correct",
    SessionEvent.INCORRECT_GUESS: "tap_wrong",
    SessionEvent.GAME_WON: "correct",
    SessionEvent.GAME_LOST: "wrong",
}

# The final guess still gets its short cue, ahead of the clip.
LEAD_CUES: Dict[SessionEvent, SessionEvent] = {
    SessionEvent.GAME_WON: SessionEvent.CORRECT_GUESS,
    SessionEvent.GAME_LOST: SessionEvent.INCORRECT_GUESS,
}

_FORMATS = {".mp3": "audio/mpeg", ".wav": "audio/wav"}


def cue_sequence(event: SessionEvent) -> Tuple[SessionEvent, ...]:
    """Cues to play for `event`, in order."""
    lead = LEAD_CUES.get(event)
    return (lead, event) if lead is not None else (event,)


class AudioCue(Protocol):
    """Plays a sound for a session event. Must never raise."""

    def play(self, event: SessionEvent) -> None: ...

    def stop(self) -> None: ...


class NullAudioCue:
    """Silent fallback used when sound is off or no assets are available."""

    def play(self, event: SessionEvent) -> None:
        return None

    def stop(self) -> None:
        return None


def resolve_cue_path(sound_dir: Optional[Path], event: SessionEvent) -> Optional[Path]:
    """Return `<sound_dir>/<cue>.mp3` (or `.wav`) if present, else None."""
    if sound_dir is None:
        return None
    name = CUE_NAMES.get(event)
    if name is None:
        return None
    for ext in _FORMATS:
        path = Path(sound_dir) / f"{name}{ext}"
        if path.is_file():
            return path
    return None


class StreamlitAudioCue:
    """
    Emits an autoplaying `st.audio` element for each cue; a finished round
    gets the short guess cue and then the win/lose clip.

    Missing or unreadable files are silently skipped.
    """

    def __init__(self, sound_dir: Path, st_module=None) -> None:
        self.sound_dir = Path(sound_dir)
        self._st = st_module
        self.last_played: Optional[Path] = None

    def _streamlit(self):
        if self._st is None:
            import streamlit as st

            self._st = st
        return self._st

    def play(self, event: SessionEvent) -> None:
        for cue in cue_sequence(event):
            self._play_one(cue)

    def _play_one(self, event: SessionEvent) -> None:
        path = resolve_cue_path(self.sound_dir, event)
        if path is None:
            logger.debug("No sound file for %s under %s", event.value, self.sound_dir)
            return
        try:
            data = path.read_bytes()
        except OSError:
            logger.debug("Could not read sound file %s", path, exc_info=True)
            return
        try:
            self._streamlit().audio(data, format=_FORMATS[path.suffix], autoplay=True)
        except Exception:
            logger.debug("Audio playback failed for %s", path, exc_info=True)
            return
        self.last_played = path

    def stop(self) -> None:
        # The audio element disappears on the next rerun; only forget it here.
        if self.last_played is not None:
            logger.debug("Stopping %s", self.last_played.name)
        self.last_played = None


def build_audio_cue(settings: Settings, st_module=None):
    """Pick the audio implementation for the given settings."""
    if not settings.sound_enabled or settings.sound_dir is None or not settings.sound_dir.is_dir():
        return NullAudioCue()
    return StreamlitAudioCue(settings.sound_dir, st_module=st_module)
