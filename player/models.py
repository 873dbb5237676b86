"""Playback models shared by the player and its observers."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Track(BaseModel):
    """A playable item."""

    model_config = {"frozen": True}

    title: str
    artist: str = ""
    duration_seconds: float | None = Field(default=None, ge=0)

    def display_name(self) -> str:
        return f"{self.artist} - {self.title}" if self.artist else self.title


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
