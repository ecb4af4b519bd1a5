"""Invocation context passed through the interception pipeline.

Controllers describe the mutation they are about to run with an
:class:`InvocationContext`. Before-rules may rewrite ``args`` in place, so
each entity kind carries its own mutable argument object.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from myriad_api.enums import EntityKind, MethodType


@dataclass
class InvocationContext:
    kind: EntityKind
    method: MethodType
    args: Any


Next = Callable[[InvocationContext], Awaitable[Any]]


@dataclass
class TransactionArgs:
    from_: str
    to: str
    hash: str
    amount: float
    currency_id: str
    type: str | None = None
    reference_id: str | None = None


@dataclass
class CommentArgs:
    user_id: str
    post_id: str
    reference_id: str
    type: str
    text: str
    section: str


@dataclass
class FriendArgs:
    requestor_id: str
    requestee_id: str
    status: str
    # Set when the request updates an existing relationship.
    existing_id: str | None = None


@dataclass
class VoteArgs:
    user_id: str
    type: str
    reference_id: str
    state: bool
    section: str | None = None
    post_id: str | None = None
    to_user_id: str | None = None


@dataclass
class VoteDeleteArgs:
    vote_id: str


@dataclass
class TagArgs:
    id: str


@dataclass
class PostArgs:
    created_by: str
    text: str
    title: str | None = None
    platform: str = "myriad"
    status: str = "published"
    original_post_id: str | None = None
    url: str | None = None
    tags: list[str] = field(default_factory=list)
    mentions: list[str] = field(default_factory=list)


@dataclass
class ExperiencePostArgs:
    experience_id: str
    post_id: str
    experience_index: dict[str, int] = field(default_factory=dict)


@dataclass
class WalletLinkArgs:
    """Wallet ownership proof plus the wallet it should create.

    ``nonce``, ``signature`` and ``public_address`` make this usable directly
    as a credential for signature verification.
    """

    user_id: str
    nonce: int
    signature: str
    public_address: str
    wallet_type: str
    network_type: str
    data: dict[str, Any] | None = None
    wallet: dict[str, Any] | None = None


@dataclass
class NetworkCurrencyArgs:
    network_id: str
    reference_id: str | None
    image: str | None = None
    exchange_rate: float = 0.0
    currency: dict[str, Any] | None = None


@dataclass
class UserReportArgs:
    reported_by: str
    reference_type: str
    reference_id: str
    type: str | None = None
    description: str = ""


@dataclass
class SocialMediaArgs:
    user_id: str
    platform: str
    people_id: str
