"""Protocol-style observation of an :class:`AudioPlayer`.

Observers implement any subset of the :class:`PlaybackObserver` hooks.
``add_observer`` binds each implemented hook weakly, so an observer that is
garbage collected simply stops receiving events.
"""

from __future__ import annotations

from typing import Any, Protocol

from observation.tokens import CancellationToken
from player.audio_player import AudioPlayer
from player.channels import PAUSED, STARTED, STOPPED
from player.models import Track


class PlaybackObserver(Protocol):
    """All hooks are optional; implement the ones you need."""

    def did_start_playing(self, player: AudioPlayer, track: Track) -> None: ...

    def did_pause_playback_of(self, player: AudioPlayer, track: Track) -> None: ...

    def did_stop_playback(self, player: AudioPlayer) -> None: ...


def add_observer(player: AudioPlayer, observer: Any) -> list[CancellationToken]:
    """Subscribe every hook ``observer`` implements; returns their tokens."""
    tokens: list[CancellationToken] = []
    events = player.events
    # Closures below must not capture ``observer``; it arrives as the owner.
    if callable(getattr(observer, "did_start_playing", None)):
        tokens.append(
            events.subscribe(
                STARTED, lambda obs, track: obs.did_start_playing(player, track), owner=observer
            )
        )
    if callable(getattr(observer, "did_pause_playback_of", None)):
        tokens.append(
            events.subscribe(
                PAUSED, lambda obs, track: obs.did_pause_playback_of(player, track), owner=observer
            )
        )
    if callable(getattr(observer, "did_stop_playback", None)):
        tokens.append(
            events.subscribe(STOPPED, lambda obs, _: obs.did_stop_playback(player), owner=observer)
        )
    return tokens


def remove_observer(player: AudioPlayer, observer: Any) -> int:
    """Detach ``observer`` from every player channel."""
    return player.events.unsubscribe_all(observer)
