"""Failure taxonomy surfaced by the engine and its repositories."""

from __future__ import annotations

from collections.abc import Iterable


class GameNightError(Exception):
    """Base class for all engine errors."""


class NotEnoughPlayers(GameNightError):
    """Fewer than ten eligible players are available for a match."""

    def __init__(self, available: int, needed: int = 10) -> None:
        self.available = available
        self.needed = needed
        super().__init__(
            f"not enough players to start a match: {available} available, {needed} needed"
        )


class MissingPlayers(GameNightError):
    """One or more identifiers do not resolve to a registered player."""

    def __init__(self, player_ids: Iterable[str]) -> None:
        self.player_ids = tuple(player_ids)
        super().__init__(
            "missing players are required to register: " + ", ".join(self.player_ids)
        )


class PlayerNotFound(GameNightError, LookupError):
    """A single-player lookup did not match any roster entry."""

    def __init__(self, player_id: str) -> None:
        self.player_id = player_id
        super().__init__(f"player_id={player_id!r} not found")


class RepositoryFailure(GameNightError):
    """The persistence collaborator failed; the caller decides whether to retry."""


class InvalidInput(GameNightError, ValueError):
    """A contract violation by the caller, e.g. a team that is not five players."""


class NoStoredTeams(GameNightError):
    """No teams are waiting for a result in this channel."""

    def __init__(self, channel_key: str) -> None:
        self.channel_key = channel_key
        super().__init__(f"no stored teams found for channel={channel_key!r}")


class StoredTeamsExpired(GameNightError):
    """Stored teams outlived their TTL; selection has to run again."""

    def __init__(self, channel_key: str) -> None:
        self.channel_key = channel_key
        super().__init__(f"stored teams have expired for channel={channel_key!r}")


__all__ = [
    "GameNightError",
    "InvalidInput",
    "MissingPlayers",
    "NoStoredTeams",
    "NotEnoughPlayers",
    "PlayerNotFound",
    "RepositoryFailure",
    "StoredTeamsExpired",
]
