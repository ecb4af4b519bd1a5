# src/myriad_api/models/wallet.py
"""SQLAlchemy model for blockchain wallets linked to users."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base


class Wallet(Base):
    """External account owned by exactly one user.

    The primary key is the external wallet id, so it is globally unique.
    """

    __tablename__ = "wallet"
    __table_args__ = (
        UniqueConstraint("user_id", "type", name="uq_wallet_user_type"),
    )

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    network_id: Mapped[str] = mapped_column(String(64), ForeignKey("network.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
