"""Report handling: aggregating reporters and applying moderation outcomes."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from myriad_api.core.errors import ConflictRejection, ValidationRejection
from myriad_api.db.time import utcnow
from myriad_api.enums import ReferenceType, ReportStatus
from myriad_api.models import Report
from myriad_api.repositories import (
    CommentRepository,
    PostRepository,
    ReportRepository,
    Repository,
    UserReportRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


class ReportService:
    """Service collecting reports and soft-deleting or restoring reported content."""

    def __init__(self, db: Session) -> None:
        self.report_repository = ReportRepository(db)
        self.user_report_repository = UserReportRepository(db)
        self._reference_repositories: dict[str, Repository] = {
            ReferenceType.USER.value: UserRepository(db),
            ReferenceType.POST.value: PostRepository(db),
            ReferenceType.COMMENT.value: CommentRepository(db),
        }

    def _reference_repository(self, reference_type: str) -> Repository:
        repository = self._reference_repositories.get(reference_type)
        if repository is None:
            raise ValidationRejection("Reference type not supported")
        return repository

    def open_report(
        self, reference_type: str, reference_id: str, report_type: str | None = None
    ) -> Report:
        """Return the report aggregate for a target, creating it on first report.

        Raises:
            NotFoundError: If the reported user, post or comment does not exist.
        """
        self._reference_repository(reference_type).find_by_id(reference_id)
        report = self.report_repository.find_one(
            reference_type=reference_type, reference_id=reference_id
        )
        if report is None:
            report = self.report_repository.create(
                reference_type=reference_type,
                reference_id=reference_id,
                type=report_type,
                status=ReportStatus.PENDING.value,
                total_reported=0,
            )
        return report

    def add_reporter(
        self, report_id: str, reported_by: str, reference_type: str, description: str = ""
    ) -> Report:
        """Attach one reporter's submission and recount the aggregate.

        Raises:
            ConflictRejection: If the user already reported this target.
        """
        if self.user_report_repository.find_one(reported_by=reported_by, report_id=report_id):
            raise ConflictRejection(f"You have report this {reference_type}")

        self.user_report_repository.create(
            report_id=report_id,
            reported_by=reported_by,
            reference_type=reference_type,
            description=description,
        )
        total = self.user_report_repository.count(report_id=report_id)
        return self.report_repository.update_by_id(report_id, total_reported=total)

    def update_status(self, report_id: str, status: ReportStatus) -> Report:
        """Resolve a report; ``removed`` soft-deletes the reported entity."""
        report = self.report_repository.find_by_id(report_id)
        repository = self._reference_repository(report.reference_type)
        entity = repository.get(report.reference_id)

        if entity is not None:
            if status is ReportStatus.REMOVED and entity.deleted_at is None:
                repository.update_by_id(report.reference_id, deleted_at=utcnow())
            elif status is not ReportStatus.REMOVED and entity.deleted_at is not None:
                repository.update_by_id(report.reference_id, deleted_at=None)

        logger.info("Report %s resolved as %s", report_id, status.value)
        return self.report_repository.update_by_id(report_id, status=status.value)

    def restore(self, report_id: str) -> None:
        """Undo a report: restore the reported entity and drop the report."""
        report = self.report_repository.find_by_id(report_id)
        repository = self._reference_repository(report.reference_type)
        if repository.get(report.reference_id) is not None:
            repository.update_by_id(report.reference_id, deleted_at=None)
        for row in self.user_report_repository.find(report_id=report_id):
            self.user_report_repository.delete_by_id(row.id)
        self.report_repository.delete_by_id(report_id)
