"""ORM models."""

from models.base import Base
from models.match import MatchRow
from models.player import PlayerRow
from models.rating_history import RatingHistoryRow
from models.stored_teams import StoredTeamsRow

__all__ = [
    "Base",
    "MatchRow",
    "PlayerRow",
    "RatingHistoryRow",
    "StoredTeamsRow",
]
