# src/myriad_api/models/activity_log.py
"""SQLAlchemy model for the per-user activity trail."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow


class ActivityLog(Base):
    __tablename__ = "activity_log"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    user_id: Mapped[str] = mapped_column(String(66), nullable=False, index=True)
    reference_type: Mapped[str] = mapped_column(String(16), nullable=False)
    reference_id: Mapped[str | None] = mapped_column(String(66), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
