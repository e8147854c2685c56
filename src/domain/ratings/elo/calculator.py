"""Player Elo logic for 5v5 team matches."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from domain.common import DEFAULT_INITIAL_RATING, Match, Player, PlayerPerformance, Stat, Team
from domain.errors import InvalidInput


@dataclass(frozen=True)
class EloParameters:
    initial_rating: float = DEFAULT_INITIAL_RATING
    scale_factor: float = 400.0
    new_player_games: int = 5
    new_player_k_factor: int = 40
    veteran_games: int = 15
    veteran_k_factor: int = 20
    high_rating_threshold: float = 2000.0
    high_rating_k_factor: int = 10
    default_k_factor: int = 32


@dataclass(frozen=True)
class KdaParameters:
    """Optional KDA-weighted adjustment; disabled by default."""

    enabled: bool = False
    min_gain_on_loss: float = 5.0
    strong_kda_threshold: float = 1.5
    max_loss_for_strong: float = 5.0


@dataclass(frozen=True)
class PlayerRatingEvent:
    player_id: str
    team_index: int
    won: bool
    actual_score: float
    expected_score: float
    team_rating: float
    opponent_rating: float
    pre_rating: float
    rating_delta: float
    post_rating: float
    k_factor: int
    kda_factor: float


def calculate_expected_score(
    rating: float,
    opponent_rating: float,
    scale_factor: float = 400.0,
) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def calculate_k_factor(stat: Stat, params: EloParameters | None = None) -> int:
    """Pick the K-factor for a player; the first matching rule wins.

    New players move fastest, high-rated players slowest, veterans in between.
    """
    params = params or EloParameters()
    if stat.games_played < params.new_player_games:
        return params.new_player_k_factor
    if stat.rating > params.high_rating_threshold:
        return params.high_rating_k_factor
    if stat.games_played > params.veteran_games:
        return params.veteran_k_factor
    return params.default_k_factor


def calculate_rating_delta(
    team_rating: float,
    opponent_rating: float,
    actual_score: float,
    k_factor: float,
    scale_factor: float = 400.0,
) -> float:
    """Rating change for one side; positive for a win, negative for a loss."""
    expected = calculate_expected_score(team_rating, opponent_rating, scale_factor)
    return k_factor * (actual_score - expected)


def team_rating(players: Iterable[Player]) -> float:
    """Average rating of a team."""
    ratings = [player.rating for player in players]
    if not ratings:
        raise InvalidInput("cannot rate an empty team")
    return sum(ratings) / float(len(ratings))


def calculate_kda_factor(stat: Stat, kda: float) -> float:
    """Scale applied to the K-factor contribution based on match KDA."""
    if stat.games_played < 5:
        return max(0.5, kda / 4.0)
    if stat.games_played <= 10:
        return min(kda / 2.0, 1.2)
    return min(kda / 2.0, 1.5)


def apply_kda_adjustment(
    base_delta: float,
    *,
    kda_factor: float,
    player_kda: float,
    team_kda: float,
    won: bool,
    params: KdaParameters,
) -> float:
    """Fold the KDA factor into a delta and clamp it for strong performers."""
    delta = base_delta * kda_factor

    # Outperforming the team never costs rating, and a loss still earns a little.
    if player_kda > team_kda:
        delta = max(delta, 0.0)
        if not won:
            delta = max(delta, params.min_gain_on_loss)

    if not won and player_kda > params.strong_kda_threshold:
        delta = max(delta, -params.max_loss_for_strong)

    return delta


def _team_kda(team: Team, performances: Mapping[str, PlayerPerformance]) -> float:
    values = [performances.get(player_id, PlayerPerformance()).kda for player_id in team.player_ids]
    return sum(values) / float(len(values))


class MatchEloCalculator:
    """Stateless per-match calculator producing one event per player."""

    def __init__(
        self,
        params: EloParameters | None = None,
        *,
        kda_params: KdaParameters | None = None,
    ) -> None:
        self.params = params or EloParameters()
        self.kda_params = kda_params or KdaParameters()

    def process_match(
        self,
        match: Match,
        winning_team_index: int,
        performances: Mapping[str, PlayerPerformance] | None = None,
    ) -> list[PlayerRatingEvent]:
        if winning_team_index not in (0, 1):
            raise InvalidInput(
                f"winning_team_index={winning_team_index} must be 0 or 1"
            )
        performances = performances or {}
        use_kda = self.kda_params.enabled and bool(performances)

        team_ratings = (
            team_rating(match.teams[0].players),
            team_rating(match.teams[1].players),
        )

        events: list[PlayerRatingEvent] = []
        for team_index, team in enumerate(match.teams):
            won = team_index == winning_team_index
            actual = 1.0 if won else 0.0
            own_rating = team_ratings[team_index]
            opponent_rating = team_ratings[1 - team_index]
            expected = calculate_expected_score(
                own_rating,
                opponent_rating,
                self.params.scale_factor,
            )
            team_kda = _team_kda(team, performances) if use_kda else 0.0

            for player in team.players:
                k_factor = calculate_k_factor(player.stat, self.params)
                delta = calculate_rating_delta(
                    own_rating,
                    opponent_rating,
                    actual,
                    k_factor,
                    self.params.scale_factor,
                )
                kda_factor = 1.0
                if use_kda:
                    player_kda = performances.get(player.player_id, PlayerPerformance()).kda
                    kda_factor = calculate_kda_factor(player.stat, player_kda)
                    delta = apply_kda_adjustment(
                        delta,
                        kda_factor=kda_factor,
                        player_kda=player_kda,
                        team_kda=team_kda,
                        won=won,
                        params=self.kda_params,
                    )

                events.append(
                    PlayerRatingEvent(
                        player_id=player.player_id,
                        team_index=team_index,
                        won=won,
                        actual_score=actual,
                        expected_score=expected,
                        team_rating=own_rating,
                        opponent_rating=opponent_rating,
                        pre_rating=player.rating,
                        rating_delta=delta,
                        post_rating=player.rating + delta,
                        k_factor=k_factor,
                        kda_factor=kda_factor,
                    )
                )

        return events


__all__ = [
    "EloParameters",
    "KdaParameters",
    "MatchEloCalculator",
    "PlayerRatingEvent",
    "apply_kda_adjustment",
    "calculate_expected_score",
    "calculate_k_factor",
    "calculate_kda_factor",
    "calculate_rating_delta",
    "team_rating",
]
