"""UI-side presenter that renders the player's state as a title line."""

from __future__ import annotations

from player.audio_player import AudioPlayer
from player.models import Track
from player.observers import add_observer


class NowPlayingPresenter:
    """Keeps the current title line and a history of rendered lines."""

    IDLE_TITLE = "Not playing"

    def __init__(self) -> None:
        self.title = self.IDLE_TITLE
        self.history: list[str] = []

    def attach(self, player: AudioPlayer) -> None:
        add_observer(player, self)

    def did_start_playing(self, player: AudioPlayer, track: Track) -> None:
        self._render(f"Playing: {track.display_name()}")

    def did_pause_playback_of(self, player: AudioPlayer, track: Track) -> None:
        self._render(f"Paused: {track.display_name()}")

    def did_stop_playback(self, player: AudioPlayer) -> None:
        self._render(self.IDLE_TITLE)

    def _render(self, title: str) -> None:
        self.title = title
        self.history.append(title)
