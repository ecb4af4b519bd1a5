"""Versioned API router wiring for v1.

Composes the version 1 API surface from the endpoint modules. Holds no
endpoint definitions of its own.
"""
from __future__ import annotations

from typing import Final

from fastapi import APIRouter

from .endpoints import (
    auth_router,
    comments_router,
    experiences_router,
    friends_router,
    networks_router,
    notifications_router,
    posts_router,
    reports_router,
    tags_router,
    transactions_router,
    users_router,
    votes_router,
)

api_v1: Final[APIRouter] = APIRouter()
for _router in (
    auth_router,
    users_router,
    posts_router,
    comments_router,
    votes_router,
    transactions_router,
    friends_router,
    tags_router,
    experiences_router,
    networks_router,
    reports_router,
    notifications_router,
):
    api_v1.include_router(_router)

__all__ = ["api_v1"]
