"""Wallet, network and currency schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WalletCredential(BaseModel):
    """Proof that the caller controls ``public_address``.

    ``signature`` is the wallet's signature over the hex form of ``nonce``.
    """

    nonce: int
    signature: str
    public_address: str
    wallet_type: str
    network_type: str
    data: dict[str, Any] | None = None


class WalletResponse(BaseModel):
    id: str
    type: str
    network_id: str
    user_id: str
    primary: bool

    model_config = ConfigDict(from_attributes=True)


class NetworkCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    chain_id: str | None = None
    rpc_url: str
    explorer_url: str | None = None
    image: str | None = None


class NetworkResponse(NetworkCreate):
    model_config = ConfigDict(from_attributes=True)


class CurrencyCreate(BaseModel):
    """Token to add to a network, identified by its contract address."""

    reference_id: str | None = None
    image: str | None = None
    exchange_rate: float = 0.0


class CurrencyUpdate(BaseModel):
    image: str | None = None
    exchange_rate: float | None = None


class CurrencyResponse(BaseModel):
    id: str
    symbol: str
    name: str
    decimal: int
    image: str = ""
    native: bool
    network_id: str
    reference_id: str | None = None
    exchange_rate: float = 0.0

    model_config = ConfigDict(from_attributes=True)


class SocialMediaCreate(BaseModel):
    platform: str
    people_id: str


class SocialMediaResponse(BaseModel):
    id: str
    user_id: str
    people_id: str
    platform: str
    verified: bool
    primary: bool

    model_config = ConfigDict(from_attributes=True)
