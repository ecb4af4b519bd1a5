# src/myriad_api/models/post.py
"""SQLAlchemy model for posts."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow
from myriad_api.enums import PlatformType, PostStatus


class Post(Base):
    """Primary content entity, either written natively or imported."""

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    platform: Mapped[str] = mapped_column(
        String(32), nullable=False, default=PlatformType.MYRIAD.value
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=PostStatus.PUBLISHED.value
    )
    created_by: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    # Imported posts share the identifier of the post on its origin platform.
    original_post_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    mentions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    metric: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    popular_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # experience id -> membership flag
    experience_index: Mapped[dict[str, int]] = mapped_column(JSON, nullable=False, default=dict)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
