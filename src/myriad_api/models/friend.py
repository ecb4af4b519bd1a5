# src/myriad_api/models/friend.py
"""SQLAlchemy model for friendships and blocks between users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow
from myriad_api.enums import FriendStatus


class Friend(Base):
    """Directed relationship; for blocks the requestor is the blocker."""

    __tablename__ = "friend"
    __table_args__ = (
        Index("ix_friend_pair", "requestor_id", "requestee_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    requestor_id: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    requestee_id: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=FriendStatus.PENDING.value
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
