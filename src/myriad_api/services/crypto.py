# src/myriad_api/services/crypto.py
"""Wallet credential verification."""

from __future__ import annotations

from typing import Protocol

from myriad_api.core.security import nonce_message, verify_signature


class Credential(Protocol):
    nonce: int
    signature: str
    public_address: str


def validate_account(credential: Credential) -> bool:
    """Return True when the credential's signature over its nonce is valid.

    The wallet proves ownership by signing the hex form of the nonce issued
    to the user with the key behind ``public_address``.
    """
    if not credential.signature or not credential.public_address:
        return False
    return verify_signature(
        credential.public_address,
        nonce_message(credential.nonce),
        credential.signature,
    )


def same_address(first: str, second: str) -> bool:
    """Compare two hex addresses ignoring case and a ``0x`` prefix."""
    return first.lower().removeprefix("0x") == second.lower().removeprefix("0x")
