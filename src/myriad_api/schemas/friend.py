"""Friendship schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from myriad_api.enums import FriendStatus


class FriendCreate(BaseModel):
    requestee_id: str
    status: FriendStatus = FriendStatus.PENDING


class FriendUpdate(BaseModel):
    """Answer to a pending request addressed to the authenticated user."""

    status: FriendStatus


class FriendResponse(BaseModel):
    id: str
    requestor_id: str
    requestee_id: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
