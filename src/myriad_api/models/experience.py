# src/myriad_api/models/experience.py
"""Models for curated experiences and the posts attached to them."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow


class Experience(Base):
    """User-curated timeline."""

    __tablename__ = "experience"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class ExperiencePost(Base):
    """Join row placing a post inside an experience."""

    __tablename__ = "experience_post"
    __table_args__ = (
        UniqueConstraint("experience_id", "post_id", name="uq_experience_post"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    experience_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("experience.id", ondelete="CASCADE"), nullable=False
    )
    post_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
