"""Engagement counters recomputed from source rows.

Counters are always rebuilt from the votes, comments, tips and friendships
that back them, never patched by deltas, so running a recomputation twice
without intervening writes yields the same values.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from myriad_api.enums import FriendStatus, PostStatus, ReferenceType, SectionType
from myriad_api.models import Comment, Friend, Post, Vote
from myriad_api.repositories import (
    CommentRepository,
    ExperienceRepository,
    FriendRepository,
    PostRepository,
    TransactionRepository,
    UserRepository,
    VoteRepository,
)

logger = logging.getLogger(__name__)


class MetricService:
    """Service computing public and per-user metrics."""

    def __init__(self, db: Session) -> None:
        self.post_repository = PostRepository(db)
        self.comment_repository = CommentRepository(db)
        self.vote_repository = VoteRepository(db)
        self.transaction_repository = TransactionRepository(db)
        self.friend_repository = FriendRepository(db)
        self.experience_repository = ExperienceRepository(db)
        self.user_repository = UserRepository(db)

    def _vote_counts(self, reference_type: str, reference_id: str) -> dict[str, int]:
        return {
            "upvotes": self.vote_repository.count(
                type=reference_type, reference_id=reference_id, state=True
            ),
            "downvotes": self.vote_repository.count(
                type=reference_type, reference_id=reference_id, state=False
            ),
        }

    def public_metric(self, reference_type: ReferenceType | str, reference_id: str) -> dict[str, int]:
        """Compute the public counters of a post or comment.

        Args:
            reference_type: ``post`` or ``comment``.
            reference_id: Identifier of the target.

        Returns:
            Counter values keyed by name. Unknown reference types yield an empty dict.
        """
        kind = ReferenceType(reference_type)
        if kind is ReferenceType.POST:
            live_comments = (Comment.post_id == reference_id, Comment.deleted_at.is_(None))
            return {
                **self._vote_counts(kind.value, reference_id),
                "discussions": self.comment_repository.count(
                    *live_comments, section=SectionType.DISCUSSION.value
                ),
                "debates": self.comment_repository.count(
                    *live_comments, section=SectionType.DEBATE.value
                ),
                "comments": self.comment_repository.count(*live_comments),
                "tips": self.transaction_repository.count(
                    type=kind.value, reference_id=reference_id
                ),
            }

        if kind is ReferenceType.COMMENT:
            return {
                **self._vote_counts(kind.value, reference_id),
                "comments": self.comment_repository.count(
                    Comment.deleted_at.is_(None),
                    type=ReferenceType.COMMENT.value,
                    reference_id=reference_id,
                ),
                "tips": self.transaction_repository.count(
                    type=kind.value, reference_id=reference_id
                ),
            }

        return {}

    def refresh_public_metric(
        self, reference_type: ReferenceType | str, reference_id: str
    ) -> dict[str, Any] | None:
        """Recompute a target's public counters and write them back.

        Post metrics are merged into the stored mapping so fields owned by
        other writers survive; comment metrics are replaced.

        Returns:
            The stored metric, or None when the target no longer exists.
        """
        metric = self.public_metric(reference_type, reference_id)
        kind = ReferenceType(reference_type)

        if kind is ReferenceType.POST:
            post = self.post_repository.get(reference_id)
            if post is None:
                return None
            merged = {**(post.metric or {}), **metric}
            self.post_repository.update_by_id(reference_id, metric=merged)
            return merged

        if kind is ReferenceType.COMMENT:
            if self.comment_repository.get(reference_id) is None:
                return None
            self.comment_repository.update_by_id(reference_id, metric=metric)
            return metric

        return None

    def count_popular_post(self, post_id: str) -> int:
        """Return the popularity score of a post: upvotes plus live comments."""
        upvotes = self.vote_repository.count(
            type=ReferenceType.POST.value, reference_id=post_id, state=True
        )
        comments = self.comment_repository.count(
            Comment.deleted_at.is_(None), post_id=post_id
        )
        return upvotes + comments

    def refresh_popular_post(self, post_id: str) -> int | None:
        if self.post_repository.get(post_id) is None:
            return None
        popular_count = self.count_popular_post(post_id)
        self.post_repository.update_by_id(post_id, popular_count=popular_count)
        return popular_count

    def user_metric(self, user_id: str) -> dict[str, int] | None:
        """Recompute and store the aggregate metric of a user."""
        if self.user_repository.get(user_id) is None:
            logger.debug("Skipping metric for unknown user %s", user_id)
            return None

        metric = {
            "total_posts": self.post_repository.count(
                Post.deleted_at.is_(None),
                created_by=user_id,
                status=PostStatus.PUBLISHED.value,
            ),
            "total_kudos": self.vote_repository.count(
                Vote.to_user_id == user_id, state=True
            ),
            "total_friends": self.friend_repository.count(
                or_(Friend.requestor_id == user_id, Friend.requestee_id == user_id),
                status=FriendStatus.APPROVED.value,
            ),
            "total_experiences": self.experience_repository.count(
                created_by=user_id, deleted_at=None
            ),
        }
        self.user_repository.update_by_id(user_id, metric=metric)
        return metric
