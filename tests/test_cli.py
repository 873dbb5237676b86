"""CLI smoke tests."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from ui.cli.cli import app
from ui.cli.commands import run_demo

runner = CliRunner()


def test_demo_log_shows_pruned_presenter(tmp_path: Path) -> None:
    log = run_demo(root=tmp_path)

    assert log[0] == "closure: started Blue in Green"
    assert log[1] == "presenter: Playing: Miles Davis - Blue in Green"
    assert "closure: stopped" in log
    assert log[-1] == "closure: started Naima"
    assert not any("Naima" in line for line in log if line.startswith("presenter:"))


def test_demo_command_prints_log(tmp_path: Path) -> None:
    result = runner.invoke(app, ["demo", "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert "closure: started Naima" in result.output


def test_config_show_outputs_json(tmp_path: Path) -> None:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "default.yaml").write_text("registry:\n  callback_errors: collect\n", encoding="utf-8")

    result = runner.invoke(app, ["config", "show", "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert json.loads(result.output)["registry"]["callback_errors"] == "collect"
