"""User-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for registering a user under their public key."""

    id: str = Field(..., min_length=1, max_length=66, description="Hex public key of the user")
    name: str = Field(..., min_length=1, max_length=30)
    bio: str | None = Field(None, max_length=1000)
    profile_picture_url: str = ""


class UserResponse(BaseModel):
    id: str
    name: str
    bio: str | None = None
    profile_picture_url: str = ""
    metric: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NonceResponse(BaseModel):
    nonce: int


class LoginRequest(BaseModel):
    """Signature over the user's current nonce, made with the key behind ``id``."""

    id: str
    nonce: int
    signature: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
