"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from observation.policy_runtime import load_effective_config, load_yaml, merge_dicts
from observation.registry import EventRegistry


def write_config(root: Path, name: str, text: str) -> None:
    config_dir = root / "config"
    config_dir.mkdir(exist_ok=True)
    (config_dir / name).write_text(text, encoding="utf-8")


def test_missing_config_yields_defaults(tmp_path: Path) -> None:
    settings = load_effective_config(tmp_path)

    assert settings.registry.callback_errors == "log"
    assert settings.logging.level == "WARNING"


def test_local_config_overrides_default(tmp_path: Path) -> None:
    write_config(tmp_path, "default.yaml", "registry:\n  callback_errors: log\nlogging:\n  level: INFO\n")
    write_config(tmp_path, "local.yaml", "registry:\n  callback_errors: raise\n")

    settings = load_effective_config(tmp_path)
    registry = EventRegistry.from_settings(settings.registry)

    assert settings.logging.level == "INFO"
    assert registry.callback_errors == "raise"


def test_invalid_policy_is_rejected(tmp_path: Path) -> None:
    write_config(tmp_path, "default.yaml", "registry:\n  callback_errors: ignore\n")

    with pytest.raises(ValidationError):
        load_effective_config(tmp_path)


def test_non_mapping_yaml_raises(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_yaml(path)


def test_merge_dicts_is_recursive() -> None:
    merged = merge_dicts({"a": {"b": 1, "c": 2}, "d": 3}, {"a": {"c": 4}})

    assert merged == {"a": {"b": 1, "c": 4}, "d": 3}
