"""Data access helpers for reports."""
from __future__ import annotations

from myriad_api.models import Report, UserReport

from .base import Repository

__all__ = ["ReportRepository", "UserReportRepository"]


class ReportRepository(Repository[Report]):
    model = Report


class UserReportRepository(Repository[UserReport]):
    model = UserReport
