"""Contracts for the persistence collaborators the engine depends on."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Protocol, runtime_checkable

from domain.common import Match, Player, PlayerPerformance, RatingHistoryEntry, StoredTeams


@runtime_checkable
class RosterRepository(Protocol):
    """Player lookup and mutation by stable identifier."""

    def get(self, player_id: str) -> Player: ...

    def list(self, player_ids: Sequence[str], *, lock: bool = False) -> list[Player]: ...

    def create(self, player: Player) -> None: ...

    def update(self, *players: Player) -> None: ...

    def transaction(self) -> AbstractContextManager[None]: ...


@runtime_checkable
class MatchRepository(Protocol):
    """Permanent match records and the append-only rating history."""

    def record_match(
        self,
        match: Match,
        winning_team_index: int,
        *,
        performances: Mapping[str, PlayerPerformance] | None = None,
        recorded_at: datetime,
    ) -> int: ...

    def record_rating_history(self, entries: Sequence[RatingHistoryEntry]) -> None: ...

    def rating_history(self, player_id: str) -> list[RatingHistoryEntry]: ...


@runtime_checkable
class TeamStore(Protocol):
    """Holds the last balanced teams per channel until a result is reported."""

    def store(self, channel_key: str, match: Match, *, now: datetime | None = None) -> None: ...

    def load(self, channel_key: str, *, now: datetime | None = None) -> StoredTeams: ...

    def clear(self, channel_key: str) -> None: ...


__all__ = [
    "MatchRepository",
    "RosterRepository",
    "TeamStore",
]
