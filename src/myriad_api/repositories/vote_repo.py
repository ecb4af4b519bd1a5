"""Data access helpers for votes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from myriad_api.models import Vote

from .base import Repository

__all__ = ["UpsertResult", "VoteRepository"]


@dataclass
class UpsertResult:
    """Raw outcome of an upsert, shaped like a document-store reply.

    ``value`` is the stored document with its internal ``_id`` key.
    """

    value: dict[str, Any]
    created: bool


def vote_document(vote: Vote) -> dict[str, Any]:
    return {
        "_id": vote.id,
        "type": vote.type,
        "reference_id": vote.reference_id,
        "post_id": vote.post_id,
        "section": vote.section,
        "state": vote.state,
        "user_id": vote.user_id,
        "to_user_id": vote.to_user_id,
    }


class VoteRepository(Repository[Vote]):
    model = Vote

    def upsert(self, **values: Any) -> UpsertResult:
        """Create the user's vote on a target or replace its state."""
        existing = self.find_one(
            user_id=values["user_id"],
            type=values["type"],
            reference_id=values["reference_id"],
        )
        if existing is None:
            return UpsertResult(value=vote_document(self.create(**values)), created=True)

        for key, value in values.items():
            setattr(existing, key, value)
        self.session.flush()
        return UpsertResult(value=vote_document(existing), created=False)
