# src/myriad_api/models/notification.py
"""SQLAlchemy model for in-app notifications."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow


class Notification(Base):
    """Message delivered to ``to_user_id`` about an event."""

    __tablename__ = "notification"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    from_user_id: Mapped[str | None] = mapped_column(String(66), nullable=True)
    to_user_id: Mapped[str] = mapped_column(String(66), nullable=False, index=True)
    reference_id: Mapped[str | None] = mapped_column(String(66), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
