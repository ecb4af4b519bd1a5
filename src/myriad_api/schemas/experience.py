"""Tag and experience schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)


class TagResponse(BaseModel):
    id: str
    count: int

    model_config = ConfigDict(from_attributes=True)


class ExperienceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None


class ExperienceResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    created_by: str
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ExperiencePostResponse(BaseModel):
    id: str
    experience_id: str
    post_id: str

    model_config = ConfigDict(from_attributes=True)
