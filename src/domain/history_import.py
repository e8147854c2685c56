"""Replay historical match exports into the roster."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from domain.common import TEAM_SIZE, Match, PlayerPerformance, Team
from domain.errors import InvalidInput
from domain.protocol import MatchRepository, RosterRepository
from domain.ratings.elo.calculator import EloParameters, KdaParameters
from domain.roster import new_player
from domain.settlement import SettlementResult, settle_match

logger = logging.getLogger(__name__)

WINNER_KEY = "winner"
LOSER_KEYS = ("looser", "loser")


@dataclass(frozen=True)
class HistoricalMatch:
    day: str
    game_id: str
    winners: dict[str, PlayerPerformance]
    losers: dict[str, PlayerPerformance]


def _parse_side(raw: Any, *, day: str, game_id: str, side: str) -> dict[str, PlayerPerformance]:
    if not isinstance(raw, Mapping):
        raise InvalidInput(f"day={day} game={game_id}: '{side}' must be an object")
    side_players: dict[str, PlayerPerformance] = {}
    for player_id, stats in raw.items():
        stats = stats or {}
        side_players[str(player_id)] = PlayerPerformance(
            kills=int(stats.get("kills", 0)),
            assists=int(stats.get("assists", 0)),
            deaths=int(stats.get("deaths", 0)),
        )
    if len(side_players) != TEAM_SIZE:
        raise InvalidInput(
            f"day={day} game={game_id}: '{side}' has {len(side_players)} players, expected {TEAM_SIZE}"
        )
    return side_players


def parse_historical_matches(payload: Mapping[str, Any]) -> list[HistoricalMatch]:
    """Flatten ``{day: {game_id: {"winner": ..., "looser": ...}}}`` in key order."""
    matches: list[HistoricalMatch] = []
    for day in sorted(payload):
        games = payload[day]
        if not isinstance(games, Mapping):
            raise InvalidInput(f"day={day}: expected an object of games")
        for game_id in sorted(games):
            game = games[game_id]
            if not isinstance(game, Mapping):
                raise InvalidInput(f"day={day} game={game_id}: expected an object with both teams")
            loser_key = next((key for key in LOSER_KEYS if key in game), None)
            if WINNER_KEY not in game or loser_key is None:
                raise InvalidInput(f"day={day} game={game_id}: needs 'winner' and 'looser' teams")
            winners = _parse_side(game[WINNER_KEY], day=day, game_id=game_id, side=WINNER_KEY)
            losers = _parse_side(game[loser_key], day=day, game_id=game_id, side=loser_key)
            overlap = sorted(set(winners) & set(losers))
            if overlap:
                raise InvalidInput(f"day={day} game={game_id}: players on both teams: {overlap}")
            matches.append(
                HistoricalMatch(
                    day=str(day),
                    game_id=str(game_id),
                    winners=winners,
                    losers=losers,
                )
            )
    return matches


def load_historical_matches(file_path: Path) -> list[HistoricalMatch]:
    with file_path.open("r", encoding="utf-8") as file:
        payload = json.load(file)
    if not isinstance(payload, Mapping):
        raise InvalidInput(f"{file_path}: top level must be an object keyed by day")
    return parse_historical_matches(payload)


def import_historical_matches(
    roster: RosterRepository,
    matches: MatchRepository,
    history: list[HistoricalMatch],
    *,
    params: EloParameters | None = None,
    kda_params: KdaParameters | None = None,
    recorded_at: datetime | None = None,
) -> list[SettlementResult]:
    """Settle each historical game in order, creating unknown players on the way.

    The whole import is one transaction: a bad game rolls back every game
    before it, so a corrected file can be imported again without double counting.
    """
    params = params or EloParameters()
    results: list[SettlementResult] = []

    with roster.transaction():
        for historical in history:
            player_ids = list(historical.winners) + list(historical.losers)
            known = {player.player_id: player for player in roster.list(player_ids)}
            for player_id in player_ids:
                if player_id not in known:
                    player = new_player(player_id, player_id, params=params)
                    roster.create(player)
                    known[player_id] = player
                    logger.debug("created player_id=%s from history", player_id)

            match = Match(
                teams=(
                    Team(players=tuple(known[player_id] for player_id in historical.winners)),
                    Team(players=tuple(known[player_id] for player_id in historical.losers)),
                )
            )
            result = settle_match(
                roster,
                matches,
                match,
                0,
                params=params,
                kda_params=kda_params,
                performances={**historical.winners, **historical.losers},
                recorded_at=recorded_at,
            )
            results.append(result)
            logger.info(
                "imported day=%s game=%s as match_id=%s",
                historical.day,
                historical.game_id,
                result.match_id,
            )

    return results


__all__ = [
    "HistoricalMatch",
    "import_historical_matches",
    "load_historical_matches",
    "parse_historical_matches",
]
