"""Data access helpers for users and their relationships."""
from __future__ import annotations

from sqlalchemy import and_, or_

from myriad_api.models import ActivityLog, Friend, Notification, User, UserSocialMedia

from .base import Repository

__all__ = [
    "ActivityLogRepository",
    "FriendRepository",
    "NotificationRepository",
    "UserRepository",
    "UserSocialMediaRepository",
]


class UserRepository(Repository[User]):
    model = User


class FriendRepository(Repository[Friend]):
    model = Friend

    def find_between(self, first_user_id: str, second_user_id: str) -> Friend | None:
        """Return the relationship linking two users in either direction."""
        return self.find_one(
            or_(
                and_(
                    Friend.requestor_id == first_user_id,
                    Friend.requestee_id == second_user_id,
                ),
                and_(
                    Friend.requestor_id == second_user_id,
                    Friend.requestee_id == first_user_id,
                ),
            )
        )

    def approved_friend_ids(self, user_id: str) -> list[str]:
        """Return the ids of every user with an approved friendship to ``user_id``."""
        rows = self.find(
            or_(Friend.requestor_id == user_id, Friend.requestee_id == user_id),
            status="approved",
        )
        return [
            row.requestee_id if row.requestor_id == user_id else row.requestor_id
            for row in rows
        ]


class UserSocialMediaRepository(Repository[UserSocialMedia]):
    model = UserSocialMedia


class NotificationRepository(Repository[Notification]):
    model = Notification


class ActivityLogRepository(Repository[ActivityLog]):
    model = ActivityLog
