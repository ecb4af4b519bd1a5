"""Shared API dependencies for authentication and the interception pipeline."""

from typing import Annotated

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from myriad_api.core.settings import settings
from myriad_api.db.session import get_db
from myriad_api.interceptors import (
    CreateInterceptor,
    DeletedDocumentInterceptor,
    ValidateVoteInterceptor,
)
from myriad_api.models import User
from myriad_api.services.container import ServiceContainer
from myriad_api.services.fanout import FanoutQueue, get_fanout_queue

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_rpc_transport() -> httpx.AsyncBaseTransport | None:
    """Transport for JSON-RPC calls; None selects httpx's network transport."""
    return None


def get_fanout() -> FanoutQueue:
    return get_fanout_queue()


FanoutDep = Annotated[FanoutQueue, Depends(get_fanout)]
RpcTransportDep = Annotated[httpx.AsyncBaseTransport | None, Depends(get_rpc_transport)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = db.get(User, user_id)
    if user is None or user.deleted_at is not None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_services(db: SessionDep, transport: RpcTransportDep) -> ServiceContainer:
    return ServiceContainer(db, rpc_transport=transport)


ServicesDep = Annotated[ServiceContainer, Depends(get_services)]


def get_create_interceptor(
    db: SessionDep, fanout: FanoutDep, services: ServicesDep
) -> CreateInterceptor:
    return CreateInterceptor(db, fanout, services)


def get_validate_vote_interceptor(db: SessionDep, services: ServicesDep) -> ValidateVoteInterceptor:
    return ValidateVoteInterceptor(db, services)


def get_deleted_document_interceptor(
    db: SessionDep, services: ServicesDep
) -> DeletedDocumentInterceptor:
    return DeletedDocumentInterceptor(db, services)


CreateInterceptorDep = Annotated[CreateInterceptor, Depends(get_create_interceptor)]
ValidateVoteDep = Annotated[ValidateVoteInterceptor, Depends(get_validate_vote_interceptor)]
DeletedDocumentDep = Annotated[
    DeletedDocumentInterceptor, Depends(get_deleted_document_interceptor)
]
