"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .experiences import router as experiences_router
from .friends import router as friends_router
from .networks import router as networks_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .reports import router as reports_router
from .tags import router as tags_router
from .transactions import router as transactions_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "comments_router",
    "experiences_router",
    "friends_router",
    "networks_router",
    "notifications_router",
    "posts_router",
    "reports_router",
    "tags_router",
    "transactions_router",
    "users_router",
    "votes_router",
]
