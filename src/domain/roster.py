"""Roster administration: registration, core flag, stat lookups."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from domain.common import Player, Stat
from domain.errors import InvalidInput, MissingPlayers
from domain.protocol import RosterRepository
from domain.ratings.elo.calculator import EloParameters

logger = logging.getLogger(__name__)


def new_player(
    player_id: str,
    name: str,
    *,
    steam_id: str | None = None,
    params: EloParameters | None = None,
) -> Player:
    params = params or EloParameters()
    return Player(
        player_id=player_id,
        name=name,
        steam_id=steam_id,
        stat=Stat(rating=params.initial_rating),
    )


def register_player(
    roster: RosterRepository,
    player_id: str,
    name: str,
    *,
    steam_id: str | None = None,
    params: EloParameters | None = None,
) -> Player:
    """Create a player, or refresh name and Steam ID of an existing one."""
    player_id = player_id.strip()
    name = name.strip()
    if not player_id:
        raise InvalidInput("player_id must not be empty")
    if not name:
        raise InvalidInput("name must not be empty")

    with roster.transaction():
        existing = roster.list([player_id])
        if not existing:
            player = new_player(player_id, name, steam_id=steam_id, params=params)
            roster.create(player)
            logger.info("registered player_id=%s name=%s", player_id, name)
            return player

        player = replace(
            existing[0],
            name=name,
            steam_id=steam_id if steam_id is not None else existing[0].steam_id,
        )
        roster.update(player)
        logger.info("updated registration player_id=%s name=%s", player_id, name)
        return player


def toggle_core(roster: RosterRepository, player_id: str) -> bool:
    """Flip the core-member flag and return the new value."""
    with roster.transaction():
        player = roster.get(player_id)
        player = replace(player, core_member=not player.core_member)
        roster.update(player)
    logger.info("core member player_id=%s set=%s", player_id, player.core_member)
    return player.core_member


def player_stats(roster: RosterRepository, player_ids: Sequence[str] = ()) -> list[Player]:
    """Look up players; an empty id list returns the whole roster by rating."""
    players = roster.list(list(player_ids))
    if not player_ids:
        return sorted(players, key=lambda player: (-player.rating, player.name))

    players_by_id = {player.player_id: player for player in players}
    missing = [player_id for player_id in player_ids if player_id not in players_by_id]
    if missing:
        raise MissingPlayers(missing)
    return [players_by_id[player_id] for player_id in player_ids]


__all__ = ["new_player", "player_stats", "register_player", "toggle_core"]
