"""AudioPlayer and protocol observer tests."""

from __future__ import annotations

import gc
from typing import Any

from observation.registry import EventRegistry
from player.audio_player import AudioPlayer
from player.channels import PAUSED, STARTED, STOPPED
from player.models import PlaybackState, Track
from player.observers import add_observer, remove_observer
from ui.now_playing import NowPlayingPresenter

TRACK = Track(title="So What", artist="Miles Davis")


class StartOnlyObserver:
    def __init__(self) -> None:
        self.started: list[str] = []

    def did_start_playing(self, player: AudioPlayer, track: Track) -> None:
        self.started.append(track.title)


def test_transitions_dispatch_after_state_update() -> None:
    player = AudioPlayer()
    seen: list[tuple[str, Any]] = []
    player.on_started(lambda track: seen.append(("started", player.state)))
    player.on_paused(lambda track: seen.append(("paused", player.state)))
    player.on_stopped(lambda _: seen.append(("stopped", player.state)))

    player.play(TRACK)
    player.pause()
    player.resume()
    player.stop()

    assert seen == [
        ("started", PlaybackState.PLAYING),
        ("paused", PlaybackState.PAUSED),
        ("started", PlaybackState.PLAYING),
        ("stopped", PlaybackState.IDLE),
    ]
    assert player.current_track is None


def test_noop_transitions_dispatch_nothing() -> None:
    player = AudioPlayer()
    calls: list[str] = []
    player.on_paused(lambda track: calls.append("paused"))
    player.on_stopped(lambda _: calls.append("stopped"))

    player.pause()
    player.resume()
    player.stop()

    assert calls == []
    assert player.state is PlaybackState.IDLE


def test_player_uses_injected_registry() -> None:
    registry = EventRegistry()
    player = AudioPlayer(registry)
    player.on_started(lambda track: None)

    assert registry.subscriber_count(STARTED) == 1


def test_protocol_observer_only_binds_implemented_hooks() -> None:
    player = AudioPlayer()
    observer = StartOnlyObserver()

    tokens = add_observer(player, observer)
    player.play(TRACK)
    player.pause()

    assert len(tokens) == 1
    assert observer.started == ["So What"]
    assert player.events.subscriber_count(PAUSED) == 0


def test_released_observer_stops_receiving() -> None:
    player = AudioPlayer()
    observer = StartOnlyObserver()
    add_observer(player, observer)

    del observer
    gc.collect()
    player.play(TRACK)

    assert player.events.subscriber_count(STARTED) == 0


def test_presenter_tracks_now_playing_title() -> None:
    player = AudioPlayer()
    presenter = NowPlayingPresenter()
    presenter.attach(player)

    player.play(TRACK)
    assert presenter.title == "Playing: Miles Davis - So What"
    player.pause()
    assert presenter.title == "Paused: Miles Davis - So What"
    player.stop()
    assert presenter.title == NowPlayingPresenter.IDLE_TITLE


def test_remove_observer_detaches_all_hooks() -> None:
    player = AudioPlayer()
    presenter = NowPlayingPresenter()
    presenter.attach(player)

    assert remove_observer(player, presenter) == 3
    player.play(TRACK)

    assert presenter.history == []
    assert player.events.subscriber_count(STOPPED) == 0
