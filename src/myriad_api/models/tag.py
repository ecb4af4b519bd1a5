# src/myriad_api/models/tag.py
"""SQLAlchemy model for hashtags."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base
from myriad_api.db.time import utcnow


class Tag(Base):
    """Hashtag keyed by its normalized text with a usage counter."""

    __tablename__ = "tag"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
