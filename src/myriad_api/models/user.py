# src/myriad_api/models/user.py
"""SQLAlchemy model for platform users."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base
from myriad_api.db.time import utcnow


class User(Base):
    """Account identified by the hex public key of its signing key."""

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(String(66), primary_key=True)
    name: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_picture_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # One-time value a wallet signs to prove ownership; rotated after each link.
    nonce: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    metric: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
