"""Friend request endpoints."""

from fastapi import APIRouter, HTTPException, Response, status

from myriad_api.enums import EntityKind, FriendStatus, MethodType
from myriad_api.interceptors.context import FriendArgs, InvocationContext
from myriad_api.models import Friend
from myriad_api.repositories import FriendRepository
from myriad_api.schemas.friend import FriendCreate, FriendResponse, FriendUpdate

from ..dependencies import CreateInterceptorDep, CurrentUserDep, SessionDep

router = APIRouter(prefix="/friends", tags=["friends"])


@router.post("", response_model=FriendResponse, status_code=status.HTTP_201_CREATED)
async def create_friend(
    payload: FriendCreate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Friend:
    """Send a friend request or block a user."""
    friends = FriendRepository(db)

    async def create(ctx: InvocationContext) -> Friend:
        args = ctx.args
        values = {
            "requestor_id": args.requestor_id,
            "requestee_id": args.requestee_id,
            "status": args.status,
        }
        if args.existing_id is not None:
            return friends.update_by_id(args.existing_id, **values)
        return friends.create(**values)

    args = FriendArgs(
        requestor_id=current_user.id,
        requestee_id=payload.requestee_id,
        status=payload.status.value,
    )
    ctx = InvocationContext(EntityKind.FRIEND, MethodType.CREATE, args)
    return await interceptor.intercept(ctx, create)


@router.patch("/{friend_id}", response_model=FriendResponse)
async def respond_friend(
    friend_id: str,
    payload: FriendUpdate,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Friend:
    """Approve or reject a pending request addressed to the current user."""
    friends = FriendRepository(db)
    friend = friends.find_by_id(friend_id)
    if friend.requestee_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the requestee can respond to a friend request",
        )
    if friend.status != FriendStatus.PENDING.value or payload.status not in (
        FriendStatus.APPROVED,
        FriendStatus.REJECTED,
    ):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Only pending requests can be approved or rejected",
        )

    friend = friends.update_by_id(friend_id, status=payload.status.value)
    db.commit()

    if payload.status is FriendStatus.APPROVED:
        requestor_id, requestee_id = friend.requestor_id, friend.requestee_id
        interceptor.fan_out(
            "friend-accept", lambda s: s.notifications.send_friend_accept(friend_id)
        )
        for user_id in (requestor_id, requestee_id):
            interceptor.fan_out(
                "friend-metric", lambda s, user_id=user_id: s.metrics.user_metric(user_id)
            )
    return friend


@router.delete("/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_friend(
    friend_id: str,
    current_user: CurrentUserDep,
    interceptor: CreateInterceptorDep,
    db: SessionDep,
) -> Response:
    """Remove a friendship, cancel a request or lift a block."""
    friends = FriendRepository(db)
    friend = friends.find_by_id(friend_id)
    if current_user.id not in (friend.requestor_id, friend.requestee_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not part of this friendship",
        )

    was_approved = friend.status == FriendStatus.APPROVED.value
    requestor_id, requestee_id = friend.requestor_id, friend.requestee_id
    friends.delete_by_id(friend_id)
    db.commit()

    if was_approved:
        for user_id in (requestor_id, requestee_id):
            interceptor.fan_out(
                "friend-metric", lambda s, user_id=user_id: s.metrics.user_metric(user_id)
            )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
