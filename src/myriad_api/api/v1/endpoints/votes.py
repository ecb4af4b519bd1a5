"""Vote endpoints with counters recomputed inside the request."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Response, status

from myriad_api.enums import EntityKind, MethodType
from myriad_api.interceptors.context import InvocationContext, VoteArgs, VoteDeleteArgs
from myriad_api.repositories import VoteRepository
from myriad_api.schemas.vote import VoteCreate, VoteResponse

from ..dependencies import CurrentUserDep, SessionDep, ValidateVoteDep

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", response_model=VoteResponse)
async def create_vote(
    payload: VoteCreate,
    current_user: CurrentUserDep,
    interceptor: ValidateVoteDep,
    db: SessionDep,
) -> dict:
    """Cast or replace a vote on a post or comment."""

    async def upsert(ctx: InvocationContext):
        return VoteRepository(db).upsert(**asdict(ctx.args))

    args = VoteArgs(
        user_id=current_user.id,
        type=payload.type.value,
        reference_id=payload.reference_id,
        state=payload.state,
        section=payload.section.value if payload.section else None,
    )
    ctx = InvocationContext(EntityKind.VOTE, MethodType.CREATE_VOTE, args)
    return await interceptor.intercept(ctx, upsert)


@router.delete("/{vote_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vote(
    vote_id: str,
    current_user: CurrentUserDep,
    interceptor: ValidateVoteDep,
    db: SessionDep,
) -> Response:
    """Withdraw one of the current user's votes."""
    votes = VoteRepository(db)

    async def delete(ctx: InvocationContext) -> None:
        vote = votes.find_by_id(ctx.args.vote_id)
        if vote.user_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cannot delete another user's vote",
            )
        votes.delete_by_id(vote.id)

    ctx = InvocationContext(EntityKind.VOTE, MethodType.DELETE_BY_ID, VoteDeleteArgs(vote_id))
    await interceptor.intercept(ctx, delete)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
