"""Pick ten players for a match from everyone present."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence

from domain.balancing import balance_teams
from domain.common import MATCH_SIZE, Match, Player, SelectTeamsRequest, Team
from domain.errors import MissingPlayers, NotEnoughPlayers
from domain.protocol import RosterRepository

logger = logging.getLogger(__name__)


def _unique(ids: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for player_id in ids:
        if player_id not in seen:
            seen.add(player_id)
            result.append(player_id)
    return result


def select_players(roster: RosterRepository, request: SelectTeamsRequest) -> list[Player]:
    """Return exactly ten players, core members and required players first.

    Non-reserved players are ranked by ascending games played so less
    experienced players get match time; ties keep presence order.
    """
    omitted = set(request.omit_ids)
    present_ids = [player_id for player_id in _unique(request.present_ids) if player_id not in omitted]
    if len(present_ids) < MATCH_SIZE:
        raise NotEnoughPlayers(len(present_ids), MATCH_SIZE)

    players_by_id = {player.player_id: player for player in roster.list(present_ids)}
    missing = [player_id for player_id in present_ids if player_id not in players_by_id]
    if missing:
        raise MissingPlayers(missing)

    candidates = [players_by_id[player_id] for player_id in present_ids]

    required = set(request.required_ids)
    if required:
        candidates = [player for player in candidates if player.player_id in required]
        if len(candidates) < MATCH_SIZE:
            raise NotEnoughPlayers(len(candidates), MATCH_SIZE)

    if len(candidates) == MATCH_SIZE:
        return candidates

    reserved = [player for player in candidates if player.core_member or player.player_id in required]
    remaining = [player for player in candidates if not (player.core_member or player.player_id in required)]

    if len(reserved) >= MATCH_SIZE:
        # sorted() is stable, so core members stay ahead of others with equal games played
        reserved = sorted(reserved, key=lambda player: (not player.core_member, player.games_played))
        selected = reserved[:MATCH_SIZE]
    else:
        remaining = sorted(remaining, key=lambda player: player.games_played)
        selected = reserved + remaining[: MATCH_SIZE - len(reserved)]

    logger.debug(
        "selected players=%s from present=%d reserved=%d",
        [player.player_id for player in selected],
        len(present_ids),
        len(reserved),
    )
    return selected


def select_teams(
    roster: RosterRepository,
    request: SelectTeamsRequest,
    *,
    rng: random.Random | None = None,
) -> Match:
    """Select ten players and balance them into two teams."""
    players = select_players(roster, request)
    match = balance_teams(players, rng=rng)
    logger.info(
        "teams selected team1_avg=%.2f team2_avg=%.2f",
        match.teams[0].average_rating,
        match.teams[1].average_rating,
    )
    return match


def match_from_ids(
    roster: RosterRepository,
    team1_ids: Sequence[str],
    team2_ids: Sequence[str],
) -> Match:
    """Rebuild a match from stored player ids, keeping seating order."""
    ids = list(team1_ids) + list(team2_ids)
    players_by_id = {player.player_id: player for player in roster.list(ids)}
    missing = [player_id for player_id in ids if player_id not in players_by_id]
    if missing:
        raise MissingPlayers(missing)
    return Match(
        teams=(
            Team(players=tuple(players_by_id[player_id] for player_id in team1_ids)),
            Team(players=tuple(players_by_id[player_id] for player_id in team2_ids)),
        )
    )


__all__ = ["match_from_ids", "select_players", "select_teams"]
