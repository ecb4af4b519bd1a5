"""Friendship rules shared by friend requests and visibility checks."""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.orm import Session

from myriad_api.core.errors import ConflictRejection, ValidationRejection
from myriad_api.enums import FriendStatus
from myriad_api.models import Friend
from myriad_api.repositories import FriendRepository, UserRepository


class FriendRequest(Protocol):
    requestor_id: str
    requestee_id: str
    status: str


class FriendService:
    """Service resolving friend requests against existing relationships."""

    def __init__(self, db: Session) -> None:
        self.friend_repository = FriendRepository(db)
        self.user_repository = UserRepository(db)

    def is_blocked(self, first_user_id: str, second_user_id: str) -> bool:
        """Return True when either user has blocked the other."""
        friend = self.friend_repository.find_between(first_user_id, second_user_id)
        return friend is not None and friend.status == FriendStatus.BLOCKED.value

    def get_importer_ids(self, user_id: str) -> list[str]:
        """Return the users whose imports of a post are shown to ``user_id``'s audience."""
        return [user_id, *self.friend_repository.approved_friend_ids(user_id)]

    def handle_pending_blocked_request(self, request: FriendRequest) -> Friend | None:
        """Validate a friend request or block against the existing relationship.

        Returns:
            The existing relationship the request should update instead of
            inserting a new row, or None when a fresh row is required.

        Raises:
            ValidationRejection: For requests to oneself or unsupported statuses.
            ConflictRejection: When the relationship already has the requested shape.
        """
        requestor_id, requestee_id = request.requestor_id, request.requestee_id
        if requestor_id == requestee_id:
            raise ValidationRejection("Cannot request to yourself")

        status = FriendStatus(request.status)
        if status not in (FriendStatus.PENDING, FriendStatus.BLOCKED):
            raise ValidationRejection("Status must be pending or blocked")

        self.user_repository.find_by_id(requestee_id)
        existing = self.friend_repository.find_between(requestor_id, requestee_id)
        if existing is None:
            return None

        current = FriendStatus(existing.status)
        if current is FriendStatus.BLOCKED:
            if existing.requestor_id == requestor_id and status is FriendStatus.BLOCKED:
                raise ConflictRejection("You already blocked this user")
            raise ValidationRejection("Cannot request to this user")

        if status is FriendStatus.BLOCKED:
            # Blocking replaces any other relationship between the two users.
            return existing

        if current is FriendStatus.APPROVED:
            raise ConflictRejection("You already friends")
        if current is FriendStatus.PENDING:
            if existing.requestor_id == requestor_id:
                raise ConflictRejection("Please wait for this user to approve your request")
            raise ConflictRejection("This user has already sent you a friend request")

        # A rejected request may be sent again.
        return existing
