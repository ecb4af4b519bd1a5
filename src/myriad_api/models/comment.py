# src/myriad_api/models/comment.py
"""SQLAlchemy model for comments on posts and on other comments."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow
from myriad_api.enums import SectionType


class Comment(Base):
    """Reply to a post (``type=post``) or to another comment (``type=comment``)."""

    __tablename__ = "comment"
    __table_args__ = (
        Index("ix_comment_reference", "user_id", "reference_id", "type", "section"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    section: Mapped[str] = mapped_column(
        String(16), nullable=False, default=SectionType.DISCUSSION.value
    )
    reference_id: Mapped[str] = mapped_column(String(32), nullable=False)
    # Root post of the thread, regardless of nesting depth.
    post_id: Mapped[str] = mapped_column(String(32), ForeignKey("post.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    metric: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
