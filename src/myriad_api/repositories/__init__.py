"""Repositories wrapping storage access per entity type."""

from .base import Repository
from .post_repo import (
    CommentRepository,
    ExperiencePostRepository,
    ExperienceRepository,
    PostRepository,
    TagRepository,
)
from .report_repo import ReportRepository, UserReportRepository
from .user_repo import (
    ActivityLogRepository,
    FriendRepository,
    NotificationRepository,
    UserRepository,
    UserSocialMediaRepository,
)
from .vote_repo import UpsertResult, VoteRepository
from .wallet_repo import (
    CurrencyRepository,
    NetworkRepository,
    TransactionRepository,
    UserCurrencyRepository,
    WalletRepository,
)

__all__ = [
    "ActivityLogRepository",
    "CommentRepository",
    "CurrencyRepository",
    "ExperiencePostRepository",
    "ExperienceRepository",
    "FriendRepository",
    "NetworkRepository",
    "NotificationRepository",
    "PostRepository",
    "ReportRepository",
    "Repository",
    "TagRepository",
    "TransactionRepository",
    "UpsertResult",
    "UserCurrencyRepository",
    "UserReportRepository",
    "UserRepository",
    "UserSocialMediaRepository",
    "VoteRepository",
    "WalletRepository",
]
