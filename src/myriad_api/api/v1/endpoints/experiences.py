"""Experience endpoints: curated post collections."""

from fastapi import APIRouter, HTTPException, status

from myriad_api.enums import EntityKind, MethodType
from myriad_api.interceptors.context import ExperiencePostArgs, InvocationContext
from myriad_api.models import Experience, ExperiencePost
from myriad_api.repositories import ExperiencePostRepository, ExperienceRepository
from myriad_api.schemas.experience import (
    ExperienceCreate,
    ExperiencePostResponse,
    ExperienceResponse,
)

from ..dependencies import CreateInterceptorDep, CurrentUserDep, DeletedDocumentDep, SessionDep

router = APIRouter(prefix="/experiences", tags=["experiences"])


@router.post("", response_model=ExperienceResponse, status_code=status.HTTP_201_CREATED)
async def create_experience(
    payload: ExperienceCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Experience:
    async def create(ctx: InvocationContext) -> Experience:
        return ExperienceRepository(db).create(**ctx.args)

    args = {**payload.model_dump(), "created_by": current_user.id}
    ctx = InvocationContext(EntityKind.EXPERIENCE, MethodType.CREATE, args)
    experience = await interceptor.intercept(ctx, create)

    created_by = experience.created_by
    interceptor.fan_out("experience-metric", lambda s: s.metrics.user_metric(created_by))
    return experience


@router.get("/{experience_id}", response_model=ExperienceResponse | None)
async def get_experience(
    experience_id: str, db: SessionDep, interceptor: DeletedDocumentDep
) -> dict | None:
    """Get an experience; null once it has been deleted."""

    async def find(ctx: InvocationContext) -> Experience:
        return ExperienceRepository(db).find_by_id(ctx.args)

    ctx = InvocationContext(EntityKind.EXPERIENCE, MethodType.FIND_BY_ID, experience_id)
    return await interceptor.intercept(ctx, find)


@router.post(
    "/{experience_id}/posts/{post_id}",
    response_model=ExperiencePostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_post(
    experience_id: str,
    post_id: str,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> ExperiencePost:
    """Add a post to one of the current user's experiences."""
    experience = ExperienceRepository(db).find_by_id(experience_id)
    if experience.created_by != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the creator can add posts to an experience",
        )

    async def create(ctx: InvocationContext) -> ExperiencePost:
        return ExperiencePostRepository(db).create(
            experience_id=ctx.args.experience_id, post_id=ctx.args.post_id
        )

    args = ExperiencePostArgs(experience_id=experience_id, post_id=post_id)
    ctx = InvocationContext(EntityKind.EXPERIENCE_POST, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)
