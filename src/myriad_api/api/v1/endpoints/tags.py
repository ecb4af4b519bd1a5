"""Tag endpoints."""

from fastapi import APIRouter, Query, status

from myriad_api.enums import EntityKind, MethodType
from myriad_api.interceptors.context import InvocationContext, TagArgs
from myriad_api.models import Tag
from myriad_api.repositories import TagRepository
from myriad_api.schemas.experience import TagCreate, TagResponse

from ..dependencies import CreateInterceptorDep, CurrentUserDep, SessionDep

router = APIRouter(prefix="/tags", tags=["tags"])


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Tag:
    async def create(ctx: InvocationContext) -> Tag:
        return TagRepository(db).create(id=ctx.args.id, count=1)

    ctx = InvocationContext(EntityKind.TAG, MethodType.CREATE, TagArgs(id=payload.id))
    return await interceptor.intercept(ctx, create)


@router.get("", response_model=list[TagResponse])
async def list_tags(
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100),
) -> list[Tag]:
    """List tags, most used first."""
    return TagRepository(db).find(order_by=Tag.count.desc(), limit=limit)
