"""Load game-night settings (Elo, KDA, stored teams) from a TOML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_config, parse_system_section
from domain.ratings.elo.calculator import EloParameters, KdaParameters

DEFAULT_STORED_TEAMS_TTL_HOURS = 48.0


@dataclass(frozen=True)
class GameNightConfig(BaseSystemConfig):
    """Everything the engine reads from configuration."""

    parameters: EloParameters = field(default_factory=EloParameters)
    kda: KdaParameters = field(default_factory=KdaParameters)
    stored_teams_ttl_hours: float = DEFAULT_STORED_TEAMS_TTL_HOURS

    @property
    def stored_teams_ttl(self) -> timedelta:
        return timedelta(hours=self.stored_teams_ttl_hours)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "initial_rating": self.parameters.initial_rating,
            "scale_factor": self.parameters.scale_factor,
            "new_player_games": self.parameters.new_player_games,
            "new_player_k_factor": self.parameters.new_player_k_factor,
            "veteran_games": self.parameters.veteran_games,
            "veteran_k_factor": self.parameters.veteran_k_factor,
            "high_rating_threshold": self.parameters.high_rating_threshold,
            "high_rating_k_factor": self.parameters.high_rating_k_factor,
            "default_k_factor": self.parameters.default_k_factor,
            "kda_enabled": self.kda.enabled,
            "kda_min_gain_on_loss": self.kda.min_gain_on_loss,
            "kda_strong_kda_threshold": self.kda.strong_kda_threshold,
            "kda_max_loss_for_strong": self.kda.max_loss_for_strong,
            "stored_teams_ttl_hours": self.stored_teams_ttl_hours,
        }


def default_config() -> GameNightConfig:
    """Built-in settings used when no config file is given."""
    return GameNightConfig(name="default", description=None, file_path=Path("<defaults>"))


def load_gamenight_config(file_path: Path) -> GameNightConfig:
    """Load and validate one game-night TOML config file."""
    return load_system_config(file_path, _parse_gamenight_config)


def _parse_gamenight_config(raw: dict[str, Any], file_path: Path) -> GameNightConfig:
    name, description = parse_system_section(raw, file_path)
    elo_raw = raw.get("elo", {})
    kda_raw = raw.get("kda", {})
    teams_raw = raw.get("teams", {})

    parameters = EloParameters(
        initial_rating=float(elo_raw.get("initial_rating", 1000.0)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        new_player_games=int(elo_raw.get("new_player_games", 5)),
        new_player_k_factor=int(elo_raw.get("new_player_k_factor", 40)),
        veteran_games=int(elo_raw.get("veteran_games", 15)),
        veteran_k_factor=int(elo_raw.get("veteran_k_factor", 20)),
        high_rating_threshold=float(elo_raw.get("high_rating_threshold", 2000.0)),
        high_rating_k_factor=int(elo_raw.get("high_rating_k_factor", 10)),
        default_k_factor=int(elo_raw.get("default_k_factor", 32)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    kda = KdaParameters(
        enabled=bool(kda_raw.get("enabled", False)),
        min_gain_on_loss=float(kda_raw.get("min_gain_on_loss", 5.0)),
        strong_kda_threshold=float(kda_raw.get("strong_kda_threshold", 1.5)),
        max_loss_for_strong=float(kda_raw.get("max_loss_for_strong", 5.0)),
    )
    if kda.min_gain_on_loss < 0.0:
        raise ValueError(f"{file_path}: [kda].min_gain_on_loss must be >= 0")
    if kda.strong_kda_threshold < 0.0:
        raise ValueError(f"{file_path}: [kda].strong_kda_threshold must be >= 0")
    if kda.max_loss_for_strong < 0.0:
        raise ValueError(f"{file_path}: [kda].max_loss_for_strong must be >= 0")

    ttl_hours = float(teams_raw.get("stored_teams_ttl_hours", DEFAULT_STORED_TEAMS_TTL_HOURS))
    if ttl_hours <= 0.0:
        raise ValueError(f"{file_path}: [teams].stored_teams_ttl_hours must be > 0")

    return GameNightConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        kda=kda,
        stored_teams_ttl_hours=ttl_hours,
    )


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    if parameters.initial_rating <= 0.0:
        raise ValueError(f"{file_path}: [elo].initial_rating must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if parameters.new_player_games < 0:
        raise ValueError(f"{file_path}: [elo].new_player_games must be >= 0")
    if parameters.veteran_games < parameters.new_player_games:
        raise ValueError(f"{file_path}: [elo].veteran_games must be >= new_player_games")
    if parameters.high_rating_threshold <= 0.0:
        raise ValueError(f"{file_path}: [elo].high_rating_threshold must be > 0")
    for key in (
        "new_player_k_factor",
        "veteran_k_factor",
        "high_rating_k_factor",
        "default_k_factor",
    ):
        if getattr(parameters, key) <= 0:
            raise ValueError(f"{file_path}: [elo].{key} must be > 0")


__all__ = [
    "DEFAULT_STORED_TEAMS_TTL_HOURS",
    "GameNightConfig",
    "default_config",
    "load_gamenight_config",
]
