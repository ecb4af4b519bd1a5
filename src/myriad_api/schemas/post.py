"""Post and comment Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from myriad_api.enums import PlatformType, PostStatus, ReferenceType, SectionType


class PostCreate(BaseModel):
    """Schema for creating a post, natively or by importing one."""

    text: str = Field("", max_length=20000)
    title: str | None = None
    platform: PlatformType = PlatformType.MYRIAD
    status: PostStatus = PostStatus.PUBLISHED
    original_post_id: str | None = None
    url: str | None = None
    tags: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)


class Importer(BaseModel):
    id: str
    name: str


class PostResponse(BaseModel):
    id: str
    title: str | None = None
    text: str
    platform: str
    status: str
    created_by: str
    original_post_id: str | None = None
    url: str | None = None
    tags: list[str] = Field(default_factory=list)
    mentions: list[str] = Field(default_factory=list)
    metric: dict[str, Any] = Field(default_factory=dict)
    popular_count: int = 0
    experience_index: dict[str, int] = Field(default_factory=dict)
    published_at: datetime | None = None
    created_at: datetime | None = None
    deleted_at: datetime | None = None
    importers: list[Importer] | None = None
    total_importer: int | None = None

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    """Schema for commenting on a post or replying to a comment."""

    text: str = Field(..., min_length=1, max_length=10000)
    type: ReferenceType = ReferenceType.POST
    reference_id: str
    post_id: str
    section: SectionType = SectionType.DISCUSSION


class CommentResponse(BaseModel):
    id: str
    text: str
    type: str
    section: str
    reference_id: str
    post_id: str
    user_id: str
    metric: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
