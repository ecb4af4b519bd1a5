"""Network integration: contract verification and account connection.

Contract verification talks JSON-RPC to the network's node over HTTP using
``httpx``; every other operation is local bookkeeping.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from sqlalchemy.orm import Session

from myriad_api.core.errors import ValidationRejection, VerificationFailure
from myriad_api.core.settings import settings
from myriad_api.models import UserSocialMedia, Wallet
from myriad_api.repositories import (
    NetworkRepository,
    UserSocialMediaRepository,
    WalletRepository,
)

# Configure logger for this module
logger = logging.getLogger(__name__)

# ERC-20 function selectors
SELECTOR_NAME = "0x06fdde03"
SELECTOR_SYMBOL = "0x95d89b41"
SELECTOR_DECIMALS = "0x313ce567"

ABI_WORD_BYTES = 32
EMPTY_CODE = {None, "", "0x", "0x0"}


class RpcError(RuntimeError):
    """Raised when a node answers a JSON-RPC call with an error object."""


def decode_abi_string(result: str) -> str:
    """Decode an ABI-encoded ``string`` (or legacy ``bytes32``) return value."""
    raw = bytes.fromhex(result[2:] if result.startswith("0x") else result)
    if len(raw) == ABI_WORD_BYTES:
        return raw.rstrip(b"\x00").decode("utf-8", errors="ignore")
    if len(raw) < 2 * ABI_WORD_BYTES:
        raise ValueError("ABI string result is too short")

    offset = int.from_bytes(raw[:ABI_WORD_BYTES], "big")
    length = int.from_bytes(raw[offset:offset + ABI_WORD_BYTES], "big")
    start = offset + ABI_WORD_BYTES
    return raw[start:start + length].decode("utf-8")


class NetworkService:
    """Service connecting users' external accounts and verifying tokens."""

    def __init__(self, db: Session, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize the service.

        Args:
            db: Database session.
            transport: Optional httpx transport used for JSON-RPC calls.
        """
        self.network_repository = NetworkRepository(db)
        self.wallet_repository = WalletRepository(db)
        self.user_social_media_repository = UserSocialMediaRepository(db)
        self._transport = transport

    async def _rpc(self, rpc_url: str, method: str, params: list[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=settings.rpc_timeout_seconds,
        ) as client:
            response = await client.post(rpc_url, json=payload)
            response.raise_for_status()

        body = response.json()
        if body.get("error"):
            raise RpcError(str(body["error"].get("message", body["error"])))
        return body.get("result")

    async def _call(self, rpc_url: str, address: str, selector: str) -> str:
        return await self._rpc(
            rpc_url, "eth_call", [{"to": address, "data": selector}, "latest"]
        )

    async def verify_contract_address(
        self,
        network_id: str,
        rpc_url: str,
        reference_id: str | None,
    ) -> dict[str, Any]:
        """Check that ``reference_id`` is a token contract and read its metadata.

        Args:
            network_id: Network the currency belongs to.
            rpc_url: JSON-RPC endpoint of the network.
            reference_id: Contract address supplied by the client.

        Returns:
            Normalized currency values ready for persistence.

        Raises:
            ValidationRejection: If no contract address was supplied.
            VerificationFailure: If the node is unreachable or the address holds no token.
        """
        if not reference_id:
            raise ValidationRejection("Contract address cannot be empty")

        try:
            code = await self._rpc(rpc_url, "eth_getCode", [reference_id, "latest"])
            if code in EMPTY_CODE:
                raise VerificationFailure("Contract address not found")
            symbol = decode_abi_string(await self._call(rpc_url, reference_id, SELECTOR_SYMBOL))
            name = decode_abi_string(await self._call(rpc_url, reference_id, SELECTOR_NAME))
            decimals = int(await self._call(rpc_url, reference_id, SELECTOR_DECIMALS), 16)
        except (httpx.HTTPError, RpcError, ValueError, TypeError) as err:
            logger.warning(
                "Contract verification failed for %s on %s: %s", reference_id, network_id, err
            )
            raise VerificationFailure("Failed to verify contract address") from err

        if not symbol:
            raise VerificationFailure("Contract has no symbol")

        return {
            "symbol": symbol.upper(),
            "name": name or symbol,
            "decimal": decimals,
            "reference_id": reference_id,
            "network_id": network_id,
            "native": False,
        }

    def connect_account(self, wallet_type: str, user_id: str, wallet_id: str) -> Wallet:
        """Attach a newly linked wallet, making it primary for wallet-less users."""
        wallet = self.wallet_repository.find_by_id(wallet_id)
        primary = self.wallet_repository.find_one(user_id=user_id, primary=True)
        if primary is None:
            wallet = self.wallet_repository.update_by_id(wallet_id, primary=True)
        logger.info("Connected %s wallet %s to user %s", wallet_type, wallet_id, user_id)
        return wallet

    def connect_social_media(self, user_id: str, people_id: str) -> UserSocialMedia:
        """Mark a claimed social profile as verified for its user."""
        link = self.user_social_media_repository.find_one(user_id=user_id, people_id=people_id)
        if link is None:
            raise ValidationRejection("Social media not found")

        has_primary = self.user_social_media_repository.find_one(
            user_id=user_id, platform=link.platform, primary=True
        )
        return self.user_social_media_repository.update_by_id(
            link.id,
            verified=True,
            primary=link.primary or has_primary is None,
        )
