"""stored_teams table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class StoredTeamsRow(Base):
    """Last balanced teams per channel, pending a reported winner."""

    __tablename__ = "stored_teams"

    channel_key: Mapped[str] = mapped_column(String(128), primary_key=True)
    team1_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    team2_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    stored_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
