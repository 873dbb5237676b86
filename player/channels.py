"""Channels emitted by :class:`player.audio_player.AudioPlayer`."""

from __future__ import annotations

from observation.channels import Channel
from player.models import Track

STARTED: Channel[Track] = Channel("started", Track)
PAUSED: Channel[Track] = Channel("paused", Track)
STOPPED: Channel[None] = Channel("stopped")
