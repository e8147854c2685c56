"""Persistence for settled matches and the rating history."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict
from datetime import datetime

from sqlalchemy import func, insert, select

from domain.common import Match, PlayerPerformance, RatingHistoryEntry
from models import MatchRow, RatingHistoryRow
from repositories.base import BaseSqlRepository


class SqlMatchRepository(BaseSqlRepository):
    def record_match(
        self,
        match: Match,
        winning_team_index: int,
        *,
        performances: Mapping[str, PlayerPerformance] | None = None,
        recorded_at: datetime,
    ) -> int:
        """Insert the permanent match row and return its id."""
        row = MatchRow(
            team1_ids=list(match.teams[0].player_ids),
            team2_ids=list(match.teams[1].player_ids),
            winning_team=winning_team_index,
            team1_rating=match.teams[0].average_rating,
            team2_rating=match.teams[1].average_rating,
            performances_json={
                player_id: asdict(performance)
                for player_id, performance in (performances or {}).items()
            },
            recorded_at=recorded_at,
        )
        with self.transaction():
            self.session.add(row)
            self.session.flush()
        return int(row.id)

    def record_rating_history(self, entries: Sequence[RatingHistoryEntry]) -> None:
        """Bulk insert rating snapshots."""
        if not entries:
            return

        payload = [
            {
                "player_id": entry.player_id,
                "match_id": entry.match_id,
                "rating": entry.rating,
                "recorded_at": entry.recorded_at,
            }
            for entry in entries
        ]
        with self.transaction():
            self.session.execute(insert(RatingHistoryRow), payload)

    def rating_history(self, player_id: str) -> list[RatingHistoryEntry]:
        """Rating trend for one player, oldest first."""
        statement = (
            select(RatingHistoryRow)
            .where(RatingHistoryRow.player_id == player_id)
            .order_by(RatingHistoryRow.recorded_at, RatingHistoryRow.match_id, RatingHistoryRow.id)
        )
        with self._translate_errors(f"rating history for player_id={player_id!r}"):
            rows = self.session.execute(statement).scalars().all()
        return [
            RatingHistoryEntry(
                player_id=row.player_id,
                rating=float(row.rating),
                match_id=int(row.match_id),
                recorded_at=row.recorded_at,
            )
            for row in rows
        ]

    def count_matches(self) -> int:
        with self._translate_errors("count matches"):
            result = self.session.scalar(select(func.count(MatchRow.id)))
        return int(result or 0)


__all__ = ["SqlMatchRepository"]
