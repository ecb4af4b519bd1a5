# src/myriad_api/models/network.py
"""SQLAlchemy model for supported blockchain networks."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from myriad_api.db.session import Base


class Network(Base):
    """Blockchain network keyed by a readable slug such as ``ethereum``."""

    __tablename__ = "network"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    chain_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    rpc_url: Mapped[str] = mapped_column(Text, nullable=False)
    explorer_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
