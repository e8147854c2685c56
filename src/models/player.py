"""players table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class PlayerRow(Base):
    """One roster entry with its cumulative statistics."""

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("games_played >= 0", name="ck_players_games_played"),
        CheckConstraint("wins >= 0 AND wins <= games_played", name="ck_players_wins"),
        CheckConstraint(
            "kills >= 0 AND assists >= 0 AND deaths >= 0",
            name="ck_players_kda_counts",
        ),
        Index("idx_players_rating", "rating"),
    )

    player_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    steam_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    core_member: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    games_played: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kills: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    assists: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deaths: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
