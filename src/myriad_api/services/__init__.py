"""Business logic services for the Myriad API."""

from .activity_log import ActivityLogService
from .container import ServiceContainer
from .crypto import same_address, validate_account
from .currency import CurrencyService
from .fanout import FanoutQueue, get_fanout_queue
from .friend import FriendService
from .metric import MetricService
from .network import NetworkService
from .notification import NotificationService
from .post import PostService
from .report import ReportService
from .tag import TagService
from .vote import VoteService, VoteTarget

__all__ = [
    "ActivityLogService",
    "CurrencyService",
    "FanoutQueue",
    "FriendService",
    "MetricService",
    "NetworkService",
    "NotificationService",
    "PostService",
    "ReportService",
    "ServiceContainer",
    "TagService",
    "VoteService",
    "VoteTarget",
    "get_fanout_queue",
    "same_address",
    "validate_account",
]
