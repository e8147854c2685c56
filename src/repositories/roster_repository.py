"""SQLAlchemy implementation of the roster repository."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select

from domain.common import Player, Stat
from domain.errors import PlayerNotFound
from models import PlayerRow
from repositories.base import BaseSqlRepository


def _row_to_player(row: PlayerRow) -> Player:
    return Player(
        player_id=row.player_id,
        name=row.name,
        core_member=bool(row.core_member),
        steam_id=row.steam_id,
        stat=Stat(
            rating=float(row.rating),
            games_played=int(row.games_played),
            wins=int(row.wins),
            kills=int(row.kills),
            assists=int(row.assists),
            deaths=int(row.deaths),
        ),
    )


def _apply_player(row: PlayerRow, player: Player) -> None:
    row.name = player.name
    row.steam_id = player.steam_id
    row.core_member = player.core_member
    row.rating = player.stat.rating
    row.games_played = player.stat.games_played
    row.wins = player.stat.wins
    row.kills = player.stat.kills
    row.assists = player.stat.assists
    row.deaths = player.stat.deaths


class SqlRosterRepository(BaseSqlRepository):
    """Players keyed by chat-platform identifier."""

    def get(self, player_id: str) -> Player:
        with self._translate_errors(f"get player_id={player_id!r}"):
            row = self.session.get(PlayerRow, player_id, populate_existing=True)
        if row is None:
            raise PlayerNotFound(player_id)
        return _row_to_player(row)

    def list(self, player_ids: Sequence[str], *, lock: bool = False) -> list[Player]:
        """Return known players; unknown ids are silently absent.

        An empty id list returns the whole roster. ``lock`` selects the rows
        FOR UPDATE where the dialect supports it.
        """
        statement = select(PlayerRow).execution_options(populate_existing=True)
        if player_ids:
            statement = statement.where(PlayerRow.player_id.in_(list(player_ids)))
        statement = statement.order_by(PlayerRow.player_id)
        if lock:
            statement = statement.with_for_update()

        with self._translate_errors("list players"):
            rows = self.session.execute(statement).scalars().all()
        return [_row_to_player(row) for row in rows]

    def create(self, player: Player) -> None:
        with self.transaction():
            row = PlayerRow(player_id=player.player_id)
            _apply_player(row, player)
            self.session.add(row)

    def update(self, *players: Player) -> None:
        """Write mutable fields of existing players in one transaction."""
        if not players:
            return
        with self.transaction():
            for player in players:
                row = self.session.get(PlayerRow, player.player_id)
                if row is None:
                    raise PlayerNotFound(player.player_id)
                _apply_player(row, player)


__all__ = ["SqlRosterRepository"]
