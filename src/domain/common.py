"""Shared types for the roster, team-formation and rating engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

TEAM_SIZE = 5
MATCH_SIZE = TEAM_SIZE * 2
DEFAULT_INITIAL_RATING = 1000.0


@dataclass(frozen=True)
class Stat:
    """Cumulative statistics for one player."""

    rating: float = DEFAULT_INITIAL_RATING
    games_played: int = 0
    wins: int = 0
    kills: int = 0
    assists: int = 0
    deaths: int = 0

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.wins / float(self.games_played)

    @property
    def kda(self) -> float:
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / float(self.deaths)


@dataclass(frozen=True)
class Player:
    """A roster entry keyed by a stable chat-platform identifier."""

    player_id: str
    name: str
    core_member: bool = False
    steam_id: str | None = None
    stat: Stat = field(default_factory=Stat)

    @property
    def rating(self) -> float:
        return self.stat.rating

    @property
    def games_played(self) -> int:
        return self.stat.games_played


@dataclass(frozen=True)
class Team:
    """Five players in seating order."""

    players: tuple[Player, ...]

    @property
    def player_ids(self) -> tuple[str, ...]:
        return tuple(player.player_id for player in self.players)

    @property
    def total_rating(self) -> float:
        return sum(player.rating for player in self.players)

    @property
    def average_rating(self) -> float:
        return self.total_rating / float(len(self.players))

    def __str__(self) -> str:
        return ", ".join(player.name for player in self.players)


@dataclass(frozen=True)
class Match:
    """Two opposing teams; index 0 is "Team 1" and index 1 is "Team 2"."""

    teams: tuple[Team, Team]

    @property
    def player_ids(self) -> tuple[str, ...]:
        return self.teams[0].player_ids + self.teams[1].player_ids

    def __str__(self) -> str:
        return f"{self.teams[0]} vs {self.teams[1]}"


@dataclass(frozen=True)
class PlayerPerformance:
    """Per-match scoreboard line for one player."""

    kills: int = 0
    assists: int = 0
    deaths: int = 0

    @property
    def kda(self) -> float:
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / float(self.deaths)


@dataclass(frozen=True)
class SelectTeamsRequest:
    """Candidate pool for one selection round."""

    present_ids: Sequence[str]
    required_ids: Sequence[str] = ()
    omit_ids: Sequence[str] = ()


@dataclass(frozen=True)
class RatingHistoryEntry:
    """Rating value of one player right after one settled match."""

    player_id: str
    rating: float
    match_id: int
    recorded_at: datetime


@dataclass(frozen=True)
class StoredTeams:
    """Last balanced teams for one channel, waiting for a reported result."""

    channel_key: str
    team1_ids: tuple[str, ...]
    team2_ids: tuple[str, ...]
    stored_at: datetime


__all__ = [
    "DEFAULT_INITIAL_RATING",
    "MATCH_SIZE",
    "Match",
    "Player",
    "PlayerPerformance",
    "RatingHistoryEntry",
    "SelectTeamsRequest",
    "Stat",
    "StoredTeams",
    "TEAM_SIZE",
    "Team",
]
