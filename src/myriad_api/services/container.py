"""Bundle of domain services bound to one database session."""

from __future__ import annotations

import httpx
from sqlalchemy.orm import Session

from .activity_log import ActivityLogService
from .currency import CurrencyService
from .friend import FriendService
from .metric import MetricService
from .network import NetworkService
from .notification import NotificationService
from .post import PostService
from .report import ReportService
from .tag import TagService
from .vote import VoteService


class ServiceContainer:
    """Services sharing a session, handed to interceptors and side effects."""

    def __init__(self, db: Session, rpc_transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.db = db
        self.rpc_transport = rpc_transport
        self.activity_logs = ActivityLogService(db)
        self.currencies = CurrencyService(db)
        self.friends = FriendService(db)
        self.metrics = MetricService(db)
        self.networks = NetworkService(db, transport=rpc_transport)
        self.notifications = NotificationService(db)
        self.posts = PostService(db)
        self.reports = ReportService(db)
        self.tags = TagService(db)
        self.votes = VoteService(db)
