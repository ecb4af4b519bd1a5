# src/myriad_api/models/__init__.py
"""SQLAlchemy models for the Myriad API."""

from .activity_log import ActivityLog
from .comment import Comment
from .currency import Currency, UserCurrency
from .experience import Experience, ExperiencePost
from .friend import Friend
from .network import Network
from .notification import Notification
from .post import Post
from .report import Report, UserReport
from .social_media import UserSocialMedia
from .tag import Tag
from .transaction import Transaction
from .user import User
from .vote import Vote
from .wallet import Wallet

__all__ = [
    "ActivityLog",
    "Comment",
    "Currency", "UserCurrency",
    "Experience", "ExperiencePost",
    "Friend",
    "Network",
    "Notification",
    "Post",
    "Report", "UserReport",
    "UserSocialMedia",
    "Tag",
    "Transaction",
    "User",
    "Vote",
    "Wallet",
]
