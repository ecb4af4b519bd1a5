# src/myriad_api/models/report.py
"""Models aggregating user reports against content and accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow
from myriad_api.enums import ReportStatus


class Report(Base):
    """Aggregate of every report filed against one user, post or comment."""

    __tablename__ = "report"
    __table_args__ = (
        UniqueConstraint("reference_type", "reference_id", name="uq_report_reference"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    reference_type: Mapped[str] = mapped_column(String(16), nullable=False)
    reference_id: Mapped[str] = mapped_column(String(66), nullable=False)
    type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=ReportStatus.PENDING.value
    )
    total_reported: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


class UserReport(Base):
    """A single reporter's submission against a report aggregate."""

    __tablename__ = "user_report"
    __table_args__ = (
        UniqueConstraint("reported_by", "report_id", name="uq_user_report_reporter"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    report_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("report.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reported_by: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    reference_type: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
