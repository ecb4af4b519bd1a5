"""Notification endpoints for the current user."""

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy import update

from myriad_api.models import Notification
from myriad_api.repositories import NotificationRepository
from myriad_api.schemas.report import CountResponse, NotificationReadMany, NotificationResponse

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _own_notification(db, notification_id: str, user_id: str) -> Notification:
    notification = NotificationRepository(db).find_by_id(notification_id)
    if notification.to_user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not your notification",
        )
    return notification


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[Notification]:
    return NotificationRepository(db).find(
        to_user_id=current_user.id,
        order_by=Notification.created_at.desc(),
        limit=limit,
        offset=offset,
    )


@router.get("/count", response_model=CountResponse)
async def count_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    unread: bool = Query(False, description="Only count unread notifications"),
) -> CountResponse:
    where = {"read": False} if unread else {}
    return CountResponse(
        count=NotificationRepository(db).count(to_user_id=current_user.id, **where)
    )


@router.get("/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: str, current_user: CurrentUserDep, db: SessionDep
) -> Notification:
    return _own_notification(db, notification_id, current_user.id)


@router.patch("/read", status_code=status.HTTP_204_NO_CONTENT)
async def read_notifications(
    payload: NotificationReadMany, current_user: CurrentUserDep, db: SessionDep
) -> Response:
    """Mark several of the current user's notifications as read."""
    db.execute(
        update(Notification)
        .where(
            Notification.id.in_(payload.ids),
            Notification.to_user_id == current_user.id,
        )
        .values(read=True)
    )
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def read_notification(
    notification_id: str, current_user: CurrentUserDep, db: SessionDep
) -> Response:
    notification = _own_notification(db, notification_id, current_user.id)
    notification.read = True
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: str, current_user: CurrentUserDep, db: SessionDep
) -> Response:
    _own_notification(db, notification_id, current_user.id)
    NotificationRepository(db).delete_by_id(notification_id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
