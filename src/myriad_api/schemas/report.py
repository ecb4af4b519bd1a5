"""Report and notification schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from myriad_api.enums import ReferenceType, ReportStatus


class UserReportCreate(BaseModel):
    reference_type: ReferenceType
    reference_id: str
    type: str | None = None
    description: str = Field("", max_length=2000)


class ReportUpdate(BaseModel):
    status: ReportStatus


class ReportResponse(BaseModel):
    id: str
    reference_type: str
    reference_id: str
    type: str | None = None
    status: str
    total_reported: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationResponse(BaseModel):
    id: str
    type: str
    from_user_id: str | None = None
    to_user_id: str
    reference_id: str | None = None
    message: str
    read: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationReadMany(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class CountResponse(BaseModel):
    count: int
