"""Authentication endpoints."""

import logging
import secrets

from fastapi import APIRouter, HTTPException, status

from myriad_api.core.security import create_access_token, nonce_message, verify_signature
from myriad_api.interceptors.create import NONCE_LIMIT
from myriad_api.models import User
from myriad_api.schemas.user import LoginRequest, TokenResponse

from ..dependencies import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange a signature over the user's current nonce for an access token.

    The user id is the hex public key that must have produced the signature.
    The nonce is rotated on success so a signature cannot be replayed.
    """
    user = db.get(User, payload.id)
    if user is None or user.deleted_at is not None or user.nonce != payload.nonce:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    if not verify_signature(user.id, nonce_message(payload.nonce), payload.signature):
        logger.info("Rejected login signature for %s", user.id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    user.nonce = secrets.randbelow(NONCE_LIMIT)
    db.commit()
    return TokenResponse(access_token=create_access_token(user.id))
