"""Typer command handlers."""

from __future__ import annotations

import gc
import logging
from dataclasses import dataclass
from pathlib import Path

import typer

from observation.policy_runtime import RuntimeSettings, configure_logging, load_effective_config
from observation.registry import EventRegistry
from player.audio_player import AudioPlayer
from player.models import Track
from ui.now_playing import NowPlayingPresenter

logger = logging.getLogger("po.cli")

DEMO_TRACKS = (
    Track(title="Blue in Green", artist="Miles Davis", duration_seconds=337),
    Track(title="Naima", artist="John Coltrane", duration_seconds=261),
)


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    settings: RuntimeSettings
    registry: EventRegistry
    player: AudioPlayer


def _default_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _runtime(root: Path | None = None) -> RuntimeBundle:
    settings = load_effective_config((root or _default_root()).resolve())
    configure_logging(settings.logging)
    registry = EventRegistry.from_settings(settings.registry)
    return RuntimeBundle(settings=settings, registry=registry, player=AudioPlayer(registry))


def run_demo(root: Path | None = None) -> list[str]:
    """Run a scripted playback session and return the invocation log."""
    bundle = _runtime(root)
    player = bundle.player
    log: list[str] = []

    player.on_started(lambda track: log.append(f"closure: started {track.title}"))
    player.on_stopped(lambda _: log.append("closure: stopped"))

    presenter = NowPlayingPresenter()
    presenter.attach(player)
    player.on_started(
        lambda view, track: log.append(f"presenter: {view.title}"), owner=presenter
    )

    first, second = DEMO_TRACKS
    player.play(first)
    player.pause()
    player.resume()
    player.stop()

    log.append(f"presenter history: {' | '.join(presenter.history)}")
    del presenter
    gc.collect()
    logger.info("Presenter released; %d entries before next dispatch", len(bundle.registry))

    player.play(second)
    return log


def demo(root: Path | None = None) -> None:
    for line in run_demo(root):
        typer.echo(line)


def config_show(root: Path | None = None) -> None:
    """Show effective runtime config."""
    bundle = _runtime(root)
    typer.echo(bundle.settings.model_dump_json(indent=2))
