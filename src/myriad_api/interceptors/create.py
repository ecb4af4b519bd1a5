"""Business rules wrapped around entity-creating operations.

Every rule pair is keyed by :class:`EntityKind`. The before-rule validates
and may rewrite ``ctx.args``; the after-rule sees the stored result,
schedules side effects on the fan-out queue and may reshape the value
returned to the client.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from myriad_api.core.errors import (
    COMMENT_FIRST_MESSAGE,
    CommentFirstError,
    ConflictRejection,
    MyriadError,
    ValidationRejection,
    VerificationFailure,
)
from myriad_api.enums import (
    ActivityLogType,
    EntityKind,
    FriendStatus,
    PostStatus,
    ReferenceType,
)
from myriad_api.models import Comment, Friend, Post, Transaction, Wallet
from myriad_api.repositories import (
    CommentRepository,
    CurrencyRepository,
    ExperiencePostRepository,
    ExperienceRepository,
    NetworkRepository,
    PostRepository,
    UpsertResult,
    UserRepository,
    WalletRepository,
)
from myriad_api.services.container import ServiceContainer
from myriad_api.services.crypto import same_address, validate_account
from myriad_api.services.fanout import FanoutQueue

from .context import InvocationContext, Next

logger = logging.getLogger(__name__)

# Upper bound for freshly issued wallet nonces.
NONCE_LIMIT = 2**53

Rule = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class RulePair:
    before: Rule | None = None
    after: Rule | None = None


def public_vote(value: dict[str, Any]) -> dict[str, Any]:
    """Expose a stored vote document with ``id`` in place of ``_id``."""
    document = {key: item for key, item in value.items() if key != "_id"}
    document["id"] = value["_id"]
    return document


class CreateInterceptor:
    """Run the before/after rules registered for an entity kind."""

    RULES: dict[EntityKind, RulePair] = {}

    def __init__(self, db: Session, fanout: FanoutQueue, services: ServiceContainer) -> None:
        self.db = db
        self.fanout = fanout
        self.services = services

    async def intercept(self, ctx: InvocationContext, next_: Next) -> Any:
        """Run ``next_`` between the rules registered for ``ctx.kind``.

        The primary write is committed before the after-rule runs so that
        side effects scheduled there observe it.

        Raises:
            ValidationRejection: With the debate message when a post downvote
                has no debate comment behind it.
            MyriadError: Any other rejection raised by a rule, unchanged.
        """
        rule = self.RULES.get(ctx.kind, RulePair())
        try:
            if rule.before is not None:
                await rule.before(self, ctx)
            result = await next_(ctx)
            self.db.commit()
            if rule.after is not None:
                result = await rule.after(self, ctx, result)
                self.db.commit()
        except CommentFirstError as err:
            self.db.rollback()
            logger.info("Rejected %s %s: debate comment required", ctx.method.value, ctx.kind.value)
            raise ValidationRejection(COMMENT_FIRST_MESSAGE) from err
        except MyriadError as err:
            self.db.rollback()
            logger.info("Rejected %s %s: %s", ctx.method.value, ctx.kind.value, err.message)
            raise
        except Exception:
            self.db.rollback()
            raise
        return result

    def fan_out(self, name: str, call: Callable[[ServiceContainer], Any]) -> None:
        """Schedule ``call`` against a fresh service container, best effort."""
        transport = self.services.rpc_transport

        def effect(db: Session) -> Any:
            return call(ServiceContainer(db, rpc_transport=transport))

        self.fanout.submit(name, effect)

    # Transaction

    async def before_transaction(self, ctx: InvocationContext) -> None:
        args = ctx.args
        if args.from_ == args.to:
            raise ValidationRejection("From and to address cannot be the same!")
        if args.type in (ReferenceType.POST.value, ReferenceType.COMMENT.value):
            if not args.reference_id:
                raise ValidationRejection("Please insert referenceId")
        CurrencyRepository(self.db).find_by_id(args.currency_id)

    async def after_transaction(self, ctx: InvocationContext, result: Transaction) -> Transaction:
        transaction_id, sender = result.id, result.from_
        reference_type, reference_id = result.type, result.reference_id

        self.fan_out("tips", lambda s: s.notifications.send_tips_success(transaction_id))
        if reference_type in (ReferenceType.POST.value, ReferenceType.COMMENT.value):
            self.fan_out(
                "tip-metric",
                lambda s: s.metrics.refresh_public_metric(reference_type, reference_id),
            )
        self.fan_out(
            "tip-log",
            lambda s: s.activity_logs.create_log(
                ActivityLogType.SENDTIP, sender, ReferenceType.TRANSACTION, transaction_id
            ),
        )
        return result

    # Comment

    async def before_comment(self, ctx: InvocationContext) -> None:
        PostRepository(self.db).find_by_id(ctx.args.post_id)

    async def after_comment(self, ctx: InvocationContext, result: Comment) -> Comment:
        comment_id, user_id, post_id = result.id, result.user_id, result.post_id
        reference_type, reference_id = result.type, result.reference_id

        self.fan_out("comment-notify", lambda s: s.notifications.send_post_comment(comment_id))
        self.fan_out("comment-popular", lambda s: s.metrics.refresh_popular_post(post_id))
        self.fan_out(
            "comment-post-metric",
            lambda s: s.metrics.refresh_public_metric(ReferenceType.POST, post_id),
        )
        if reference_type == ReferenceType.COMMENT.value:
            self.fan_out(
                "comment-reference-metric",
                lambda s: s.metrics.refresh_public_metric(reference_type, reference_id),
            )
        self.fan_out(
            "comment-log",
            lambda s: s.activity_logs.create_log(
                ActivityLogType.CREATECOMMENT, user_id, ReferenceType.COMMENT, comment_id
            ),
        )
        return result

    # Friend

    async def before_friend(self, ctx: InvocationContext) -> None:
        existing = self.services.friends.handle_pending_blocked_request(ctx.args)
        if existing is not None:
            ctx.args.existing_id = existing.id

    async def after_friend(self, ctx: InvocationContext, result: Friend) -> Friend:
        friend_id, requestor_id, requestee_id = result.id, result.requestor_id, result.requestee_id

        if result.status == FriendStatus.PENDING.value:
            self.fan_out("friend-notify", lambda s: s.notifications.send_friend_request(friend_id))
            self.fan_out(
                "friend-log",
                lambda s: s.activity_logs.create_log(
                    ActivityLogType.FRIENDREQUEST, requestor_id, ReferenceType.USER, requestee_id
                ),
            )
        elif result.status == FriendStatus.BLOCKED.value and ctx.args.existing_id:
            # Blocking may end an approved friendship.
            for user_id in (requestor_id, requestee_id):
                self.fan_out(
                    "friend-metric", lambda s, user_id=user_id: s.metrics.user_metric(user_id)
                )
        return result

    # Vote

    async def before_vote(self, ctx: InvocationContext) -> None:
        self.services.votes.resolve_target(ctx.args)

    async def after_vote(self, ctx: InvocationContext, result: UpsertResult) -> dict[str, Any]:
        value = dict(result.value)
        user_id = ctx.args.user_id

        self.fan_out("vote-counter", lambda s: s.votes.update_vote_counter(value))
        self.fan_out(
            "vote-log",
            lambda s: s.activity_logs.create_log(
                ActivityLogType.GIVEVOTE,
                user_id,
                ReferenceType(value["type"]),
                value["reference_id"],
            ),
        )
        return public_vote(value)

    # Tag

    async def before_tag(self, ctx: InvocationContext) -> None:
        ctx.args.id = self.services.tags.ensure_available(ctx.args.id)

    # Post

    async def after_post(self, ctx: InvocationContext, result: Post) -> Post:
        if result.status != PostStatus.PUBLISHED.value:
            return result

        result = self.services.posts.create_publish_post(result)
        post_id, created_by = result.id, result.created_by
        tags, mentions = list(result.tags or []), list(result.mentions or [])

        if tags:
            self.fan_out("post-tags", lambda s: s.tags.create_tags(tags))
        if mentions:
            self.fan_out("post-mentions", lambda s: s.notifications.send_mention(post_id, mentions))
        self.fan_out("post-user-metric", lambda s: s.metrics.user_metric(created_by))
        self.fan_out(
            "post-log",
            lambda s: s.activity_logs.create_log(
                ActivityLogType.CREATEPOST, created_by, ReferenceType.POST, post_id
            ),
        )
        return result

    # Experience post

    async def before_experience_post(self, ctx: InvocationContext) -> None:
        args = ctx.args
        ExperienceRepository(self.db).find_by_id(args.experience_id)
        post = PostRepository(self.db).find_by_id(args.post_id)
        if ExperiencePostRepository(self.db).find_one(
            experience_id=args.experience_id, post_id=args.post_id
        ):
            raise ConflictRejection("Already added to experience")
        args.experience_index = {**(post.experience_index or {}), args.experience_id: 1}

    async def after_experience_post(self, ctx: InvocationContext, result: Any) -> Any:
        PostRepository(self.db).update_by_id(
            ctx.args.post_id, experience_index=ctx.args.experience_index
        )
        return result

    # Wallet

    async def before_wallet(self, ctx: InvocationContext) -> None:
        args = ctx.args
        if not args.data:
            raise ValidationRejection("Data cannot be empty")
        if not NetworkRepository(self.db).exists(args.network_type):
            raise ValidationRejection("Network not exists")

        wallet_id = args.data.get("id")
        if not wallet_id:
            raise ValidationRejection("Id must included")

        wallets = WalletRepository(self.db)
        if wallets.exists(wallet_id):
            raise ConflictRejection("Wallet Id already exist")
        if wallets.find_one(user_id=args.user_id, type=args.wallet_type):
            raise ConflictRejection("Wallet already connected")

        # The wallet id must be the key that signed the user's current nonce.
        user = UserRepository(self.db).find_by_id(args.user_id)
        if (
            args.nonce != user.nonce
            or not same_address(wallet_id, args.public_address)
            or not validate_account(args)
        ):
            raise VerificationFailure("Failed to verify")

        args.wallet = {
            "id": wallet_id,
            "type": args.wallet_type,
            "network_id": args.network_type,
            "user_id": args.user_id,
            "primary": False,
        }

    async def after_wallet(self, ctx: InvocationContext, result: Wallet) -> Wallet:
        wallet_id, wallet_type = result.id, result.type
        user_id, network_id = result.user_id, result.network_id

        # The signed nonce is spent; the next link needs a fresh one.
        UserRepository(self.db).update_by_id(user_id, nonce=secrets.randbelow(NONCE_LIMIT))

        self.fan_out(
            "wallet-connect",
            lambda s: s.networks.connect_account(wallet_type, user_id, wallet_id),
        )
        self.fan_out(
            "wallet-currencies",
            lambda s: s.currencies.add_user_currencies(user_id, network_id),
        )
        return result

    # Network currency

    async def before_network_currency(self, ctx: InvocationContext) -> None:
        args = ctx.args
        network = NetworkRepository(self.db).find_by_id(args.network_id)
        if args.reference_id and self.services.currencies.find_by_reference(
            args.network_id, args.reference_id
        ):
            raise ConflictRejection("Currency already exist")
        args.currency = await self.services.networks.verify_contract_address(
            network.id, network.rpc_url, args.reference_id
        )

    # User report

    async def after_user_report(self, ctx: InvocationContext, result: Any) -> Any:
        args = ctx.args
        return self.services.reports.add_reporter(
            result.id, args.reported_by, args.reference_type, args.description
        )

    # Social media

    async def after_social_media(self, ctx: InvocationContext, result: Any) -> Any:
        user_id, people_id = result.user_id, result.people_id
        self.fan_out(
            "social-connect",
            lambda s: s.networks.connect_social_media(user_id, people_id),
        )
        return result


CreateInterceptor.RULES = {
    EntityKind.TRANSACTION: RulePair(
        CreateInterceptor.before_transaction, CreateInterceptor.after_transaction
    ),
    EntityKind.COMMENT: RulePair(CreateInterceptor.before_comment, CreateInterceptor.after_comment),
    EntityKind.FRIEND: RulePair(CreateInterceptor.before_friend, CreateInterceptor.after_friend),
    EntityKind.VOTE: RulePair(CreateInterceptor.before_vote, CreateInterceptor.after_vote),
    EntityKind.TAG: RulePair(before=CreateInterceptor.before_tag),
    EntityKind.POST: RulePair(after=CreateInterceptor.after_post),
    EntityKind.EXPERIENCE_POST: RulePair(
        CreateInterceptor.before_experience_post, CreateInterceptor.after_experience_post
    ),
    EntityKind.USER_WALLET: RulePair(CreateInterceptor.before_wallet, CreateInterceptor.after_wallet),
    EntityKind.NETWORK_CURRENCY: RulePair(before=CreateInterceptor.before_network_currency),
    EntityKind.USER_REPORT: RulePair(after=CreateInterceptor.after_user_report),
    EntityKind.USER_SOCIAL_MEDIA: RulePair(after=CreateInterceptor.after_social_media),
}
