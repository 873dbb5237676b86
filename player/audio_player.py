"""Audio player state machine that publishes its transitions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from observation.registry import EventRegistry
from observation.tokens import CancellationToken
from player.channels import PAUSED, STARTED, STOPPED
from player.models import PlaybackState, Track

logger = logging.getLogger("po.player")


class AudioPlayer:
    """Minimal playback state machine.

    State is updated first, then the matching channel is dispatched exactly
    once. Transitions that change nothing (pausing while idle, stopping
    while idle) dispatch nothing.
    """

    def __init__(self, registry: EventRegistry | None = None) -> None:
        self.events = registry if registry is not None else EventRegistry()
        self._state = PlaybackState.IDLE
        self._track: Track | None = None

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_track(self) -> Track | None:
        return self._track

    def play(self, track: Track) -> None:
        self._state = PlaybackState.PLAYING
        self._track = track
        logger.info("Playing %s", track.display_name())
        self.events.dispatch(STARTED, track)

    def pause(self) -> None:
        if self._state is not PlaybackState.PLAYING or self._track is None:
            logger.debug("pause() ignored in state %s", self._state.value)
            return
        self._state = PlaybackState.PAUSED
        logger.info("Paused %s", self._track.display_name())
        self.events.dispatch(PAUSED, self._track)

    def resume(self) -> None:
        if self._state is not PlaybackState.PAUSED or self._track is None:
            logger.debug("resume() ignored in state %s", self._state.value)
            return
        self.play(self._track)

    def stop(self) -> None:
        if self._state is PlaybackState.IDLE:
            logger.debug("stop() ignored while idle")
            return
        self._state = PlaybackState.IDLE
        self._track = None
        logger.info("Stopped playback")
        self.events.dispatch(STOPPED, None)

    # ── Closure-based observation ────────────────────────────────────

    def on_started(
        self, callback: Callable[..., Any], owner: Any | None = None
    ) -> CancellationToken:
        return self.events.subscribe(STARTED, callback, owner=owner)

    def on_paused(
        self, callback: Callable[..., Any], owner: Any | None = None
    ) -> CancellationToken:
        return self.events.subscribe(PAUSED, callback, owner=owner)

    def on_stopped(
        self, callback: Callable[..., Any], owner: Any | None = None
    ) -> CancellationToken:
        return self.events.subscribe(STOPPED, callback, owner=owner)
