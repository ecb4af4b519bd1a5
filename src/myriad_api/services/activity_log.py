"""Append-only activity trail."""

from __future__ import annotations

from sqlalchemy.orm import Session

from myriad_api.enums import ActivityLogType, ReferenceType
from myriad_api.models import ActivityLog
from myriad_api.repositories import ActivityLogRepository


class ActivityLogService:
    def __init__(self, db: Session) -> None:
        self.activity_log_repository = ActivityLogRepository(db)

    def create_log(
        self,
        log_type: ActivityLogType,
        user_id: str,
        reference_type: ReferenceType,
        reference_id: str | None = None,
    ) -> ActivityLog:
        """Record that ``user_id`` performed ``log_type``."""
        return self.activity_log_repository.create(
            type=log_type.value,
            user_id=user_id,
            reference_type=reference_type.value,
            reference_id=reference_id,
        )
