"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    KdaParameters,
    MatchEloCalculator,
    PlayerRatingEvent,
    calculate_expected_score,
    calculate_k_factor,
)
from domain.ratings.elo.config import GameNightConfig, default_config, load_gamenight_config

__all__ = [
    "EloParameters",
    "GameNightConfig",
    "KdaParameters",
    "MatchEloCalculator",
    "PlayerRatingEvent",
    "calculate_expected_score",
    "calculate_k_factor",
    "default_config",
    "load_gamenight_config",
]
