"""matches table model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, Float, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class MatchRow(Base):
    """Permanent record of one settled match."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("winning_team IN (0, 1)", name="ck_matches_winning_team"),
        Index("idx_matches_recorded_at", "recorded_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    team1_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    team2_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    winning_team: Mapped[int] = mapped_column(Integer, nullable=False)
    team1_rating: Mapped[float] = mapped_column(Float, nullable=False)
    team2_rating: Mapped[float] = mapped_column(Float, nullable=False)
    performances_json: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    recorded_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
