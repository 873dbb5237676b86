"""CLI entrypoint for playback-observers."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Lifecycle-bound observer registry demos")
config_app = typer.Typer(help="Configuration commands")


@app.command("demo")
def demo_cmd(
    root: Path | None = typer.Option(None, help="Project root containing config/"),
) -> None:
    """Run a scripted playback session and print what observers saw."""
    commands.demo(root=root)


@config_app.command("show")
def config_show_cmd(
    root: Path | None = typer.Option(None, help="Project root containing config/"),
) -> None:
    """Show effective configuration."""
    commands.config_show(root=root)


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
