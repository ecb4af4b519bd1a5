"""Notification fan-out for platform events."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from myriad_api.enums import NotificationType, ReferenceType
from myriad_api.models import Notification
from myriad_api.repositories import (
    CommentRepository,
    CurrencyRepository,
    FriendRepository,
    NotificationRepository,
    PostRepository,
    ReportRepository,
    TransactionRepository,
    UserReportRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


class NotificationService:
    """Create in-app notifications, one per recipient and event."""

    def __init__(self, db: Session) -> None:
        self.notification_repository = NotificationRepository(db)
        self.user_repository = UserRepository(db)
        self.post_repository = PostRepository(db)
        self.comment_repository = CommentRepository(db)
        self.friend_repository = FriendRepository(db)
        self.transaction_repository = TransactionRepository(db)
        self.currency_repository = CurrencyRepository(db)
        self.report_repository = ReportRepository(db)
        self.user_report_repository = UserReportRepository(db)

    def _notify(
        self,
        notification_type: NotificationType,
        to_user_id: str,
        *,
        from_user_id: str | None = None,
        reference_id: str | None = None,
        message: str = "",
    ) -> Notification | None:
        if from_user_id is not None and from_user_id == to_user_id:
            return None
        return self.notification_repository.create(
            type=notification_type.value,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            reference_id=reference_id,
            message=message,
        )

    def send_post_comment(self, comment_id: str) -> list[Notification]:
        """Notify the post owner, and the parent comment owner for replies."""
        comment = self.comment_repository.find_by_id(comment_id)
        post = self.post_repository.find_by_id(comment.post_id)

        recipients = [post.created_by]
        if comment.type == ReferenceType.COMMENT.value:
            parent = self.comment_repository.get(comment.reference_id)
            if parent is not None and parent.user_id not in recipients:
                recipients.append(parent.user_id)

        sent = []
        for recipient in recipients:
            notification = self._notify(
                NotificationType.POST_COMMENT,
                recipient,
                from_user_id=comment.user_id,
                reference_id=comment.id,
                message="commented",
            )
            if notification is not None:
                sent.append(notification)
        return sent

    def send_friend_request(self, friend_id: str) -> Notification | None:
        friend = self.friend_repository.find_by_id(friend_id)
        return self._notify(
            NotificationType.FRIEND_REQUEST,
            friend.requestee_id,
            from_user_id=friend.requestor_id,
            reference_id=friend.id,
            message="sent you a friend request",
        )

    def send_friend_accept(self, friend_id: str) -> Notification | None:
        friend = self.friend_repository.find_by_id(friend_id)
        return self._notify(
            NotificationType.FRIEND_ACCEPT,
            friend.requestor_id,
            from_user_id=friend.requestee_id,
            reference_id=friend.id,
            message="accepted your friend request",
        )

    def send_tips_success(self, transaction_id: str) -> list[Notification]:
        """Notify the sender that the tip went through and the recipient that it arrived."""
        transaction = self.transaction_repository.find_by_id(transaction_id)
        currency = self.currency_repository.find_by_id(transaction.currency_id)
        amount = f"{transaction.amount:g} {currency.symbol}"

        sent = self.notification_repository.create(
            type=NotificationType.TIPS_SENT.value,
            from_user_id=transaction.from_,
            to_user_id=transaction.from_,
            reference_id=transaction.id,
            message=f"{amount} sent",
        )
        received = self.notification_repository.create(
            type=NotificationType.TIPS_RECEIVED.value,
            from_user_id=transaction.from_,
            to_user_id=transaction.to,
            reference_id=transaction.id,
            message=f"{amount} received",
        )
        return [sent, received]

    def send_mention(self, post_id: str, mentions: Iterable[str]) -> list[Notification]:
        """Notify every existing user mentioned in a post, once each."""
        post = self.post_repository.find_by_id(post_id)
        sent = []
        for user_id in dict.fromkeys(mentions):
            if not self.user_repository.exists(user_id):
                logger.debug("Skipping mention of unknown user %s", user_id)
                continue
            notification = self._notify(
                NotificationType.POST_MENTION,
                user_id,
                from_user_id=post.created_by,
                reference_id=post.id,
                message="mentioned you",
            )
            if notification is not None:
                sent.append(notification)
        return sent

    def send_report_response_to_user(self, report_id: str) -> Notification | None:
        """Tell the owner of reported content how the report was resolved."""
        report = self.report_repository.find_by_id(report_id)
        owner_id = self._reference_owner(report.reference_type, report.reference_id)
        if owner_id is None:
            return None
        return self._notify(
            NotificationType.REPORT_RESPONSE,
            owner_id,
            reference_id=report.id,
            message=f"your {report.reference_type} was {report.status}",
        )

    def send_report_response_to_reporters(self, report_id: str) -> list[Notification]:
        report = self.report_repository.find_by_id(report_id)
        reporters = self.user_report_repository.find(report_id=report.id)
        return [
            self.notification_repository.create(
                type=NotificationType.REPORT_RESPONSE_REPORTER.value,
                to_user_id=row.reported_by,
                reference_id=report.id,
                message=f"the {report.reference_type} you reported was {report.status}",
            )
            for row in reporters
        ]

    def _reference_owner(self, reference_type: str, reference_id: str) -> str | None:
        if reference_type == ReferenceType.USER.value:
            return reference_id
        if reference_type == ReferenceType.POST.value:
            post = self.post_repository.get(reference_id)
            return post.created_by if post else None
        if reference_type == ReferenceType.COMMENT.value:
            comment = self.comment_repository.get(reference_id)
            return comment.user_id if comment else None
        return None
