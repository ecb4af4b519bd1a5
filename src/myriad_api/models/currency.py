# src/myriad_api/models/currency.py
"""Models for currencies and the balances users track."""

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base, new_id


class Currency(Base):
    """Native coin or contract token available on a network."""

    __tablename__ = "currency"
    __table_args__ = (
        UniqueConstraint("network_id", "symbol", name="uq_currency_network_symbol"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    symbol: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    decimal: Mapped[int] = mapped_column(Integer, nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    native: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    network_id: Mapped[str] = mapped_column(String(64), ForeignKey("network.id"), nullable=False)
    # Contract address for tokens; None for the network's native coin.
    reference_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    exchange_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)


class UserCurrency(Base):
    """Currency shown in a user's balance list for a network."""

    __tablename__ = "user_currency"
    __table_args__ = (
        UniqueConstraint("user_id", "currency_id", name="uq_user_currency"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(66), ForeignKey("user.id"), nullable=False)
    currency_id: Mapped[str] = mapped_column(String(32), ForeignKey("currency.id"), nullable=False)
    network_id: Mapped[str] = mapped_column(String(64), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
