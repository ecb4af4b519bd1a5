"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict

from myriad_api.enums import ReferenceType, SectionType


class VoteBody(BaseModel):
    """Vote cast through a post or comment route; the target comes from the path."""

    state: bool
    section: SectionType | None = None


class VoteCreate(VoteBody):
    type: ReferenceType
    reference_id: str


class VoteResponse(BaseModel):
    id: str
    type: str
    reference_id: str
    post_id: str | None = None
    section: str | None = None
    state: bool
    user_id: str
    to_user_id: str | None = None

    model_config = ConfigDict(from_attributes=True)
