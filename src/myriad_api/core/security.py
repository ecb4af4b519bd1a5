"""Token and signature utilities."""
from __future__ import annotations

import binascii
from datetime import UTC, datetime, timedelta

from jose import jwt
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from myriad_api.core.settings import settings


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    """Issue a signed JWT whose subject is the user id."""
    minutes = expires_minutes or settings.access_token_expire_minutes
    expire = datetime.now(UTC) + timedelta(minutes=minutes)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def _strip_hex_prefix(value: str) -> str:
    return value[2:] if value.startswith("0x") else value


def verify_signature(pubkey_hex: str, message: bytes, signature_hex: str) -> bool:
    """Verify an Ed25519 signature.

    Args:
        pubkey_hex: Hex-encoded 32-byte public key, optionally ``0x`` prefixed.
        message: Exact bytes that were signed on the client.
        signature_hex: Hex-encoded 64-byte signature, optionally ``0x`` prefixed.

    Returns:
        True if the signature is valid for `message` under `pubkey_hex`; False otherwise.
    """
    try:
        pubkey = VerifyKey(binascii.unhexlify(_strip_hex_prefix(pubkey_hex)))
        signature = binascii.unhexlify(_strip_hex_prefix(signature_hex))
        pubkey.verify(message, signature)
        return True
    except (BadSignatureError, binascii.Error, ValueError, TypeError):
        return False


def nonce_message(nonce: int) -> bytes:
    """Return the bytes a wallet signs to prove ownership for ``nonce``."""
    return hex(nonce).encode("utf-8")
