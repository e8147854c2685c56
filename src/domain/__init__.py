"""Game-night domain: roster, team formation and rating logic."""

from domain.common import Match, Player, PlayerPerformance, SelectTeamsRequest, Stat, Team
from domain.protocol import MatchRepository, RosterRepository, TeamStore

__all__ = [
    "Match",
    "MatchRepository",
    "Player",
    "PlayerPerformance",
    "RosterRepository",
    "SelectTeamsRequest",
    "Stat",
    "Team",
    "TeamStore",
]
