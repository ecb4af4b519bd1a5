# src/myriad_api/models/transaction.py
"""SQLAlchemy model for tips sent between users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id
from myriad_api.db.time import utcnow


class Transaction(Base):
    """On-chain transfer recorded against optional platform content."""

    __tablename__ = "transaction"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    hash: Mapped[str] = mapped_column(String(128), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    from_: Mapped[str] = mapped_column("from", String(66), nullable=False, index=True)
    to: Mapped[str] = mapped_column(String(66), nullable=False, index=True)
    currency_id: Mapped[str] = mapped_column(String(32), ForeignKey("currency.id"), nullable=False)
    type: Mapped[str | None] = mapped_column(String(16), nullable=True)
    reference_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
