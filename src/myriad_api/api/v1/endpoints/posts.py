"""Post endpoints for the Myriad API."""

from dataclasses import asdict

from fastapi import APIRouter, Query, status

from myriad_api.enums import EntityKind, MethodType, ReferenceType
from myriad_api.interceptors.context import InvocationContext, PostArgs, VoteArgs
from myriad_api.models import Post
from myriad_api.repositories import PostRepository, VoteRepository
from myriad_api.schemas.post import PostCreate, PostResponse
from myriad_api.schemas.vote import VoteBody, VoteResponse

from ..dependencies import CreateInterceptorDep, CurrentUserDep, DeletedDocumentDep, SessionDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: PostCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Post:
    """Create a post authored by the current user."""

    async def create(ctx: InvocationContext) -> Post:
        return PostRepository(db).create(**asdict(ctx.args))

    args = PostArgs(
        created_by=current_user.id,
        text=payload.text,
        title=payload.title,
        platform=payload.platform.value,
        status=payload.status.value,
        original_post_id=payload.original_post_id,
        url=payload.url,
        tags=list(payload.tags),
        mentions=list(payload.mentions),
    )
    ctx = InvocationContext(EntityKind.POST, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    interceptor: DeletedDocumentDep,
    viewer_id: str | None = Query(None, alias="userId"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
    offset: int = Query(0, ge=0),
) -> list[dict]:
    """List published posts, newest first, as seen by ``userId``."""
    posts = PostRepository(db).list_visible(limit=limit, offset=offset)
    documents = (interceptor.present(EntityKind.POST, post, viewer_id) for post in posts)
    return [document for document in documents if document is not None]


@router.get("/{post_id}", response_model=PostResponse | None)
async def get_post(
    post_id: str,
    db: SessionDep,
    interceptor: DeletedDocumentDep,
    viewer_id: str | None = Query(None, alias="userId"),
) -> dict | None:
    """Get a post as seen by ``userId``; null when its author is blocked."""

    async def find(ctx: InvocationContext) -> Post:
        return PostRepository(db).find_by_id(ctx.args)

    ctx = InvocationContext(EntityKind.POST, MethodType.FIND_BY_ID, post_id)
    return await interceptor.intercept(ctx, find, viewer_id=viewer_id)


@router.post("/{post_id}/votes", response_model=VoteResponse)
async def vote_post(
    post_id: str,
    payload: VoteBody,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> dict:
    """Upvote or downvote a post; voting again replaces the previous state."""

    async def upsert(ctx: InvocationContext):
        return VoteRepository(db).upsert(**asdict(ctx.args))

    args = VoteArgs(
        user_id=current_user.id,
        type=ReferenceType.POST.value,
        reference_id=post_id,
        state=payload.state,
        section=payload.section.value if payload.section else None,
    )
    ctx = InvocationContext(EntityKind.VOTE, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, upsert)
