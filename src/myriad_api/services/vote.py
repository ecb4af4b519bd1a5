"""Vote target resolution and counter maintenance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy.orm import Session

from myriad_api.core.errors import CommentFirstError, ValidationRejection
from myriad_api.enums import ReferenceType, SectionType
from myriad_api.models import Comment, Post
from myriad_api.repositories import CommentRepository, PostRepository
from myriad_api.services.metric import MetricService


class VoteRequest(Protocol):
    user_id: str
    type: str
    reference_id: str
    state: bool
    section: str | None
    post_id: str | None
    to_user_id: str | None


@dataclass(frozen=True)
class VoteTarget:
    """What a vote points at, kept so after-effects survive a delete."""

    type: str
    reference_id: str
    to_user_id: str
    post_id: str | None = None


class VoteService:
    """Service validating votes and recomputing the counters they affect."""

    def __init__(self, db: Session) -> None:
        self.post_repository = PostRepository(db)
        self.comment_repository = CommentRepository(db)
        self.metric_service = MetricService(db)

    def has_debate_comment(self, user_id: str, reference_id: str) -> bool:
        return (
            self.comment_repository.find_one(
                user_id=user_id,
                reference_id=reference_id,
                type=ReferenceType.POST.value,
                section=SectionType.DEBATE.value,
            )
            is not None
        )

    def validate_post_vote(self, vote: VoteRequest) -> Post:
        """Return the voted post, enforcing the downvote gate.

        Raises:
            NotFoundError: If the post does not exist.
            CommentFirstError: If a downvote has no debate comment behind it.
        """
        post = self.post_repository.find_by_id(vote.reference_id)
        if vote.state is False and not self.has_debate_comment(vote.user_id, post.id):
            raise CommentFirstError()
        return post

    def validate_comment_vote(self, vote: VoteRequest) -> Comment:
        if not vote.section:
            raise ValidationRejection("Section cannot empty when you upvote/downvote comment")
        return self.comment_repository.find_by_id(vote.reference_id)

    def resolve_target(self, vote: VoteRequest) -> VoteTarget:
        """Validate ``vote`` and fill in its owner and root post in place."""
        if vote.type == ReferenceType.POST.value:
            post = self.validate_post_vote(vote)
            vote.to_user_id = post.created_by
            vote.post_id = post.id
            vote.section = None
        elif vote.type == ReferenceType.COMMENT.value:
            comment = self.validate_comment_vote(vote)
            vote.to_user_id = comment.user_id
            vote.post_id = comment.post_id
        else:
            raise ValidationRejection("Type not found")

        return VoteTarget(
            type=vote.type,
            reference_id=vote.reference_id,
            to_user_id=vote.to_user_id,
            post_id=vote.post_id,
        )

    def update_vote_counter(self, vote: dict[str, Any]) -> None:
        """Recompute every counter a stored vote contributes to."""
        self.metric_service.refresh_public_metric(vote["type"], vote["reference_id"])
        self.metric_service.user_metric(vote["to_user_id"])
        if vote.get("post_id"):
            self.metric_service.refresh_popular_post(vote["post_id"])
