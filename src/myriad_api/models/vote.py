# src/myriad_api/models/vote.py
"""Models capturing votes on posts and comments."""

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id


class Vote(Base):
    """Per-user up/down vote on a post or a comment.

    ``state`` is True for an upvote and False for a downvote.
    """

    __tablename__ = "vote"
    __table_args__ = (
        # A user holds a single vote per target; voting again replaces the state.
        UniqueConstraint("user_id", "type", "reference_id", name="uq_vote_user_reference"),
        Index("ix_vote_reference", "type", "reference_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    reference_id: Mapped[str] = mapped_column(String(32), nullable=False)
    post_id: Mapped[str] = mapped_column(String(32), ForeignKey("post.id"), nullable=False)
    section: Mapped[str | None] = mapped_column(String(16), nullable=True)
    state: Mapped[bool] = mapped_column(Boolean, nullable=False)
    user_id: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    to_user_id: Mapped[str] = mapped_column(String(66), nullable=False)
