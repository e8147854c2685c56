"""Database repository helpers."""

from repositories.base import BaseSqlRepository
from repositories.match_repository import SqlMatchRepository
from repositories.roster_repository import SqlRosterRepository
from repositories.team_storage_repository import DEFAULT_TTL, SqlTeamStore

__all__ = [
    "BaseSqlRepository",
    "DEFAULT_TTL",
    "SqlMatchRepository",
    "SqlRosterRepository",
    "SqlTeamStore",
]
