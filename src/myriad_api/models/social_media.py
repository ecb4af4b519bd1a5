# src/myriad_api/models/social_media.py
"""SQLAlchemy model linking users to their off-platform profiles."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id


class UserSocialMedia(Base):
    """Claim that a user owns a profile (``people_id``) on another platform."""

    __tablename__ = "user_social_media"
    __table_args__ = (
        UniqueConstraint("platform", "people_id", name="uq_social_media_people"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    people_id: Mapped[str] = mapped_column(String(128), nullable=False)
    platform: Mapped[str] = mapped_column(String(32), nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
