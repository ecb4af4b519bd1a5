"""Vote rules keyed by the invoked method rather than the entity kind."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from myriad_api.core.errors import COMMENT_FIRST_MESSAGE, CommentFirstError, ValidationRejection
from myriad_api.enums import MethodType
from myriad_api.repositories import VoteRepository
from myriad_api.services.container import ServiceContainer
from myriad_api.services.vote import VoteTarget

from .context import InvocationContext, Next
from .create import public_vote

logger = logging.getLogger(__name__)


class ValidateVoteInterceptor:
    """Validate votes on create and keep counters exact on create and delete.

    Unlike the create pipeline, counters are recomputed inside the request so
    the response reflects them.
    """

    METHODS = frozenset({MethodType.CREATE_VOTE, MethodType.DELETE_BY_ID})

    def __init__(self, db: Session, services: ServiceContainer) -> None:
        self.db = db
        self.services = services

    async def intercept(self, ctx: InvocationContext, next_: Next) -> Any:
        if ctx.method not in self.METHODS:
            return await next_(ctx)

        try:
            if ctx.method is MethodType.DELETE_BY_ID:
                target = self._before_delete(ctx)
            else:
                target = self._before_create(ctx)

            result = await next_(ctx)
            self._refresh_counters(target)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        if ctx.method is MethodType.CREATE_VOTE:
            return public_vote(result.value)
        return result

    def _before_delete(self, ctx: InvocationContext) -> VoteTarget:
        vote = VoteRepository(self.db).find_by_id(ctx.args.vote_id)
        return VoteTarget(
            type=vote.type,
            reference_id=vote.reference_id,
            to_user_id=vote.to_user_id,
            post_id=vote.post_id,
        )

    def _before_create(self, ctx: InvocationContext) -> VoteTarget:
        try:
            return self.services.votes.resolve_target(ctx.args)
        except CommentFirstError as err:
            logger.info("Rejected vote on %s: debate comment required", ctx.args.reference_id)
            raise ValidationRejection(COMMENT_FIRST_MESSAGE) from err

    def _refresh_counters(self, target: VoteTarget) -> None:
        metrics = self.services.metrics
        metrics.refresh_public_metric(target.type, target.reference_id)
        metrics.user_metric(target.to_user_id)
        if target.post_id:
            metrics.refresh_popular_post(target.post_id)
