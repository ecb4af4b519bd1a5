"""Enumerations shared by models, schemas and the interception pipeline."""

from __future__ import annotations

from enum import Enum


class EntityKind(str, Enum):
    """Kind of entity a controller operation mutates or reads."""

    TRANSACTION = "transaction"
    COMMENT = "comment"
    FRIEND = "friend"
    VOTE = "vote"
    TAG = "tag"
    EXPERIENCE = "experience"
    EXPERIENCE_POST = "experience_post"
    USER_WALLET = "user_wallet"
    NETWORK_CURRENCY = "network_currency"
    USER_REPORT = "user_report"
    USER_SOCIAL_MEDIA = "user_social_media"
    POST = "post"
    USER = "user"


class MethodType(str, Enum):
    """Operation invoked on a controller."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    CREATE_VOTE = "create_vote"
    DELETE_BY_ID = "delete_by_id"
    FIND_BY_ID = "find_by_id"


class ReferenceType(str, Enum):
    POST = "post"
    COMMENT = "comment"
    USER = "user"
    TRANSACTION = "transaction"


class SectionType(str, Enum):
    DISCUSSION = "discussion"
    DEBATE = "debate"


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class FriendStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    BLOCKED = "blocked"


class ReportStatus(str, Enum):
    PENDING = "pending"
    REMOVED = "removed"
    IGNORED = "ignored"


class ActivityLogType(str, Enum):
    SENDTIP = "sendtip"
    CREATEPOST = "createpost"
    CREATECOMMENT = "createcomment"
    FRIENDREQUEST = "friendrequest"
    GIVEVOTE = "givevote"


class NotificationType(str, Enum):
    POST_COMMENT = "post_comment"
    POST_MENTION = "post_mention"
    FRIEND_REQUEST = "friend_request"
    FRIEND_ACCEPT = "friend_accept"
    TIPS_SENT = "tips_sent"
    TIPS_RECEIVED = "tips_received"
    REPORT_RESPONSE = "report_response"
    REPORT_RESPONSE_REPORTER = "report_response_reporter"


class PlatformType(str, Enum):
    MYRIAD = "myriad"
    TWITTER = "twitter"
    REDDIT = "reddit"
