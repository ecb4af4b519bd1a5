"""User endpoints: registration, profiles, wallets, social accounts and reports."""

import secrets

from fastapi import APIRouter, HTTPException, Query, status

from myriad_api.core.errors import ConflictRejection
from myriad_api.enums import EntityKind, MethodType
from myriad_api.interceptors.context import (
    InvocationContext,
    SocialMediaArgs,
    UserReportArgs,
    WalletLinkArgs,
)
from myriad_api.interceptors.create import NONCE_LIMIT
from myriad_api.models import User, UserSocialMedia, Wallet
from myriad_api.repositories import UserRepository, UserSocialMediaRepository, WalletRepository
from myriad_api.schemas.report import ReportResponse, UserReportCreate
from myriad_api.schemas.user import NonceResponse, UserCreate, UserResponse
from myriad_api.schemas.wallet import (
    SocialMediaCreate,
    SocialMediaResponse,
    WalletCredential,
    WalletResponse,
)

from ..dependencies import (
    CreateInterceptorDep,
    CurrentUserDep,
    DeletedDocumentDep,
    ServicesDep,
    SessionDep,
)

router = APIRouter(prefix="/users", tags=["users"])


def _ensure_self(current_user: User, user_id: str) -> None:
    if current_user.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot act on behalf of another user",
        )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, db: SessionDep) -> User:
    """Register a user under their public key with a fresh login nonce."""
    users = UserRepository(db)
    if users.exists(payload.id):
        raise ConflictRejection("User already exist")
    if users.find_one(name=payload.name):
        raise ConflictRejection("Name already taken")

    user = users.create(**payload.model_dump(), nonce=secrets.randbelow(NONCE_LIMIT))
    db.commit()
    return user


@router.get("/{user_id}", response_model=UserResponse | None)
async def get_user(
    user_id: str,
    interceptor: DeletedDocumentDep,
    db: SessionDep,
    viewer_id: str | None = Query(None, alias="userId"),
) -> dict | None:
    """Get a user profile as seen by ``userId``; null when hidden from them."""

    async def find(ctx: InvocationContext) -> User:
        return UserRepository(db).find_by_id(ctx.args)

    ctx = InvocationContext(EntityKind.USER, MethodType.FIND_BY_ID, user_id)
    return await interceptor.intercept(ctx, find, viewer_id=viewer_id)


@router.get("/{user_id}/nonce", response_model=NonceResponse)
async def get_nonce(user_id: str, db: SessionDep) -> NonceResponse:
    """Return the nonce the user's key must sign next."""
    return NonceResponse(nonce=UserRepository(db).find_by_id(user_id).nonce)


@router.post(
    "/{user_id}/wallets",
    response_model=WalletResponse,
    status_code=status.HTTP_201_CREATED,
)
async def link_wallet(
    user_id: str,
    credential: WalletCredential,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Wallet:
    """Link a wallet proven by a signature over the user's nonce."""
    _ensure_self(current_user, user_id)

    async def create(ctx: InvocationContext) -> Wallet:
        return WalletRepository(db).create(**ctx.args.wallet)

    args = WalletLinkArgs(user_id=user_id, **credential.model_dump())
    ctx = InvocationContext(EntityKind.USER_WALLET, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)


@router.get("/{user_id}/wallets", response_model=list[WalletResponse])
async def list_wallets(user_id: str, db: SessionDep) -> list[Wallet]:
    return WalletRepository(db).find(user_id=user_id, order_by=Wallet.id)


@router.post(
    "/{user_id}/social-medias",
    response_model=SocialMediaResponse,
    status_code=status.HTTP_201_CREATED,
)
async def claim_social_media(
    user_id: str,
    payload: SocialMediaCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> UserSocialMedia:
    """Claim a social media profile; verification completes in the background."""
    _ensure_self(current_user, user_id)

    async def create(ctx: InvocationContext) -> UserSocialMedia:
        links = UserSocialMediaRepository(db)
        args = ctx.args
        if links.find_one(platform=args.platform, people_id=args.people_id):
            raise ConflictRejection("Social media already claimed")
        return links.create(
            user_id=args.user_id,
            platform=args.platform,
            people_id=args.people_id,
            verified=False,
            primary=False,
        )

    args = SocialMediaArgs(user_id=user_id, platform=payload.platform, people_id=payload.people_id)
    ctx = InvocationContext(EntityKind.USER_SOCIAL_MEDIA, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)


@router.post(
    "/{user_id}/reports",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report(
    user_id: str,
    payload: UserReportCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    services: ServicesDep,
):
    """File a report against a user, post or comment."""
    _ensure_self(current_user, user_id)

    async def open_report(ctx: InvocationContext):
        args = ctx.args
        return services.reports.open_report(args.reference_type, args.reference_id, args.type)

    args = UserReportArgs(
        reported_by=user_id,
        reference_type=payload.reference_type.value,
        reference_id=payload.reference_id,
        type=payload.type,
        description=payload.description,
    )
    ctx = InvocationContext(EntityKind.USER_REPORT, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, open_report)
