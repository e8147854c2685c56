"""Per-channel storage of balanced teams awaiting a result."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from domain.common import Match, StoredTeams
from domain.errors import NoStoredTeams, StoredTeamsExpired
from models import StoredTeamsRow
from repositories.base import BaseSqlRepository

DEFAULT_TTL = timedelta(hours=48)


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def _naive_utc(value: datetime | None) -> datetime:
    """Stored timestamps are naive UTC; aware values are converted to match."""
    if value is None:
        return _utcnow()
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


class SqlTeamStore(BaseSqlRepository):
    """Keeps the last teams per channel; entries older than the TTL are dropped on read."""

    def __init__(self, session: Session, *, ttl: timedelta = DEFAULT_TTL) -> None:
        super().__init__(session)
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self.ttl = ttl

    def store(self, channel_key: str, match: Match, *, now: datetime | None = None) -> None:
        stored_at = _naive_utc(now)
        with self.transaction():
            row = self.session.get(StoredTeamsRow, channel_key)
            if row is None:
                row = StoredTeamsRow(channel_key=channel_key)
                self.session.add(row)
            row.team1_ids = list(match.teams[0].player_ids)
            row.team2_ids = list(match.teams[1].player_ids)
            row.stored_at = stored_at

    def load(self, channel_key: str, *, now: datetime | None = None) -> StoredTeams:
        now = _naive_utc(now)
        with self._translate_errors(f"load stored teams channel={channel_key!r}"):
            row = self.session.get(StoredTeamsRow, channel_key, populate_existing=True)
        if row is None:
            raise NoStoredTeams(channel_key)

        if now - row.stored_at > self.ttl:
            self.clear(channel_key)
            raise StoredTeamsExpired(channel_key)

        return StoredTeams(
            channel_key=row.channel_key,
            team1_ids=tuple(row.team1_ids),
            team2_ids=tuple(row.team2_ids),
            stored_at=row.stored_at,
        )

    def clear(self, channel_key: str) -> None:
        with self.transaction():
            row = self.session.get(StoredTeamsRow, channel_key)
            if row is not None:
                self.session.delete(row)


__all__ = ["DEFAULT_TTL", "SqlTeamStore"]
