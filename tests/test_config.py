"""Tests for TOML-based game-night config loading."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from domain.ratings.elo.config import default_config, load_gamenight_config


def test_load_gamenight_config_reads_every_section(tmp_path: Path) -> None:
    config_path = tmp_path / "gamenight.toml"
    config_path.write_text(
        """
[system]
name = "friday"
description = "Friday night league"

[elo]
initial_rating = 1200.0
scale_factor = 420.0
new_player_games = 3
new_player_k_factor = 48
veteran_games = 20
veteran_k_factor = 16
high_rating_threshold = 1800.0
high_rating_k_factor = 8
default_k_factor = 24

[kda]
enabled = true
min_gain_on_loss = 3.0

[teams]
stored_teams_ttl_hours = 12
""".strip()
    )

    config = load_gamenight_config(config_path)

    assert config.name == "friday"
    assert config.description == "Friday night league"
    assert config.file_path == config_path
    assert config.parameters.initial_rating == pytest.approx(1200.0)
    assert config.parameters.scale_factor == pytest.approx(420.0)
    assert config.parameters.new_player_games == 3
    assert config.parameters.new_player_k_factor == 48
    assert config.parameters.veteran_games == 20
    assert config.parameters.high_rating_threshold == pytest.approx(1800.0)
    assert config.parameters.default_k_factor == 24
    assert config.kda.enabled is True
    assert config.kda.min_gain_on_loss == pytest.approx(3.0)
    assert config.kda.max_loss_for_strong == pytest.approx(5.0)
    assert config.stored_teams_ttl == timedelta(hours=12)
    assert config.as_config_json()["kda_enabled"] is True


def test_defaults_apply_when_sections_omitted(tmp_path: Path) -> None:
    config_path = tmp_path / "minimal.toml"
    config_path.write_text('[system]\nname = "minimal"\n')

    config = load_gamenight_config(config_path)

    assert config.description is None
    assert config.parameters == default_config().parameters
    assert config.kda.enabled is False
    assert config.stored_teams_ttl == timedelta(hours=48)


def test_missing_system_name_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "nameless.toml"
    config_path.write_text("[elo]\ninitial_rating = 1000.0\n")

    with pytest.raises(ValueError, match="name"):
        load_gamenight_config(config_path)


@pytest.mark.parametrize(
    ("section", "body", "message"),
    [
        ("elo", "scale_factor = 0", r"\[elo\]\.scale_factor must be > 0"),
        ("elo", "default_k_factor = -1", r"\[elo\]\.default_k_factor must be > 0"),
        ("elo", "new_player_games = 10\nveteran_games = 5", r"veteran_games must be >= new_player_games"),
        ("kda", "min_gain_on_loss = -1.0", r"\[kda\]\.min_gain_on_loss must be >= 0"),
        ("teams", "stored_teams_ttl_hours = 0", r"stored_teams_ttl_hours must be > 0"),
    ],
)
def test_invalid_values_are_rejected(tmp_path: Path, section: str, body: str, message: str) -> None:
    config_path = tmp_path / "bad.toml"
    config_path.write_text(f'[system]\nname = "bad"\n\n[{section}]\n{body}\n')

    with pytest.raises(ValueError, match=message):
        load_gamenight_config(config_path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_gamenight_config(tmp_path / "absent.toml")


def test_shipped_config_loads() -> None:
    config_path = Path(__file__).resolve().parents[1] / "configs" / "gamenight.toml"
    config = load_gamenight_config(config_path)
    assert config.name == "default"
    assert config.parameters == default_config().parameters
