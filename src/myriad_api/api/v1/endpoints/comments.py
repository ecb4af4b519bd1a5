"""Comment endpoints for the Myriad API."""

from dataclasses import asdict

from fastapi import APIRouter, Query, status

from myriad_api.enums import EntityKind, MethodType, ReferenceType
from myriad_api.interceptors.context import CommentArgs, InvocationContext, VoteArgs
from myriad_api.models import Comment
from myriad_api.repositories import CommentRepository, VoteRepository
from myriad_api.schemas.post import CommentCreate, CommentResponse
from myriad_api.schemas.vote import VoteBody, VoteResponse

from ..dependencies import CreateInterceptorDep, CurrentUserDep, DeletedDocumentDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: CommentCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Comment:
    async def create(ctx: InvocationContext) -> Comment:
        return CommentRepository(db).create(**asdict(ctx.args))

    args = CommentArgs(
        user_id=current_user.id,
        post_id=payload.post_id,
        reference_id=payload.reference_id,
        type=payload.type.value,
        text=payload.text,
        section=payload.section.value,
    )
    ctx = InvocationContext(EntityKind.COMMENT, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    db: SessionDep,
    interceptor: DeletedDocumentDep,
    post_id: str = Query(..., alias="postId"),
) -> list[dict]:
    """List a post's comments, oldest first, with removed ones redacted."""
    comments = CommentRepository(db).find(post_id=post_id, order_by=Comment.created_at)
    return [interceptor.present(EntityKind.COMMENT, comment) for comment in comments]


@router.get("/{comment_id}", response_model=CommentResponse | None)
async def get_comment(comment_id: str, db: SessionDep, interceptor: DeletedDocumentDep) -> dict | None:
    async def find(ctx: InvocationContext) -> Comment:
        return CommentRepository(db).find_by_id(ctx.args)

    ctx = InvocationContext(EntityKind.COMMENT, MethodType.FIND_BY_ID, comment_id)
    return await interceptor.intercept(ctx, find)


@router.post("/{comment_id}/votes", response_model=VoteResponse)
async def vote_comment(
    comment_id: str,
    payload: VoteBody,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> dict:
    """Vote on a comment; the section the comment lives in is required."""

    async def upsert(ctx: InvocationContext):
        return VoteRepository(db).upsert(**asdict(ctx.args))

    args = VoteArgs(
        user_id=current_user.id,
        type=ReferenceType.COMMENT.value,
        reference_id=comment_id,
        state=payload.state,
        section=payload.section.value if payload.section else None,
    )
    ctx = InvocationContext(EntityKind.VOTE, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, upsert)
