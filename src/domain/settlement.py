"""Apply a reported match result to the roster."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from domain.common import TEAM_SIZE, Match, Player, PlayerPerformance, RatingHistoryEntry, Team
from domain.errors import InvalidInput, MissingPlayers
from domain.protocol import MatchRepository, RosterRepository
from domain.ratings.elo.calculator import (
    EloParameters,
    KdaParameters,
    MatchEloCalculator,
    PlayerRatingEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementResult:
    """Outcome of one settled match."""

    match_id: int
    events: tuple[PlayerRatingEvent, ...]
    players: tuple[Player, ...]


def validate_match(match: Match) -> None:
    """Raise InvalidInput unless the match is two disjoint teams of five."""
    if len(match.teams) != 2:
        raise InvalidInput(f"a match needs exactly 2 teams, got {len(match.teams)}")
    for index, team in enumerate(match.teams):
        if len(team.players) != TEAM_SIZE:
            raise InvalidInput(
                f"team {index + 1} has {len(team.players)} players, expected {TEAM_SIZE}"
            )
    player_ids = match.player_ids
    if len(set(player_ids)) != len(player_ids):
        raise InvalidInput(f"duplicate players in match: {list(player_ids)}")


def _apply_event(
    player: Player,
    event: PlayerRatingEvent,
    performance: PlayerPerformance | None,
) -> Player:
    stat = player.stat
    stat = replace(
        stat,
        rating=event.post_rating,
        games_played=stat.games_played + 1,
        wins=stat.wins + (1 if event.won else 0),
    )
    if performance is not None:
        stat = replace(
            stat,
            kills=stat.kills + performance.kills,
            assists=stat.assists + performance.assists,
            deaths=stat.deaths + performance.deaths,
        )
    return replace(player, stat=stat)


def settle_match(
    roster: RosterRepository,
    matches: MatchRepository,
    match: Match,
    winning_team_index: int,
    *,
    params: EloParameters | None = None,
    kda_params: KdaParameters | None = None,
    performances: Mapping[str, PlayerPerformance] | None = None,
    recorded_at: datetime | None = None,
) -> SettlementResult:
    """Update ratings and statistics for every player of a finished match.

    Player records are re-read inside the transaction so the update starts from
    current values, and everything (player rows, match record, rating history)
    is written all-or-nothing. Calling this twice for the same match applies the
    result twice; deduplication belongs to the caller.
    """
    validate_match(match)
    if winning_team_index not in (0, 1):
        raise InvalidInput(f"winning_team_index={winning_team_index} must be 0 or 1")

    performances = dict(performances or {})
    unknown = sorted(set(performances) - set(match.player_ids))
    if unknown:
        raise InvalidInput(f"performances given for players outside the match: {unknown}")
    for player_id, performance in performances.items():
        if min(performance.kills, performance.assists, performance.deaths) < 0:
            raise InvalidInput(f"negative performance values for player_id={player_id!r}")

    recorded_at = recorded_at or datetime.now(UTC).replace(tzinfo=None)
    calculator = MatchEloCalculator(params, kda_params=kda_params)

    with roster.transaction():
        current = {player.player_id: player for player in roster.list(match.player_ids, lock=True)}
        missing = [player_id for player_id in match.player_ids if player_id not in current]
        if missing:
            raise MissingPlayers(missing)

        fresh_match = Match(
            teams=(
                Team(players=tuple(current[player_id] for player_id in match.teams[0].player_ids)),
                Team(players=tuple(current[player_id] for player_id in match.teams[1].player_ids)),
            )
        )
        events = calculator.process_match(fresh_match, winning_team_index, performances)

        updated = tuple(
            _apply_event(current[event.player_id], event, performances.get(event.player_id))
            for event in events
        )
        roster.update(*updated)

        match_id = matches.record_match(
            fresh_match,
            winning_team_index,
            performances=performances,
            recorded_at=recorded_at,
        )
        matches.record_rating_history(
            [
                RatingHistoryEntry(
                    player_id=player.player_id,
                    rating=player.rating,
                    match_id=match_id,
                    recorded_at=recorded_at,
                )
                for player in updated
            ]
        )

    logger.info(
        "settled match_id=%s winner=team%d team1_avg=%.2f team2_avg=%.2f",
        match_id,
        winning_team_index + 1,
        fresh_match.teams[0].average_rating,
        fresh_match.teams[1].average_rating,
    )
    return SettlementResult(match_id=match_id, events=tuple(events), players=updated)


__all__ = ["SettlementResult", "settle_match", "validate_match"]
