"""Tip transaction schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from myriad_api.enums import ReferenceType


class TransactionCreate(BaseModel):
    """Tip sent from the authenticated user to ``to``."""

    hash: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    to: str
    currency_id: str
    type: ReferenceType | None = None
    reference_id: str | None = None


class TransactionResponse(BaseModel):
    id: str
    hash: str
    amount: float
    from_: str = Field(
        validation_alias=AliasChoices("from_", "from"),
        serialization_alias="from",
    )
    to: str
    currency_id: str
    type: str | None = None
    reference_id: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
