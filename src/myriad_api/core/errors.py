"""Domain errors raised by repositories, services and interceptors.

Every error carries the HTTP status it maps to so the API layer can render
it the same way it renders ``HTTPException``.
"""

from __future__ import annotations

from fastapi import status


class MyriadError(RuntimeError):
    """Base exception for client-facing domain failures."""

    status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationRejection(MyriadError):
    """Client input violates a domain invariant."""


class ConflictRejection(MyriadError):
    """A uniqueness rule would be violated by the mutation."""


class VerificationFailure(MyriadError):
    """An external cryptographic or contract check failed."""


class NotFoundError(MyriadError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"Entity not found: {entity} with id {entity_id!r}")
        self.entity = entity
        self.entity_id = entity_id


class CommentFirstError(RuntimeError):
    """Internal signal: a post downvote needs a debate comment first.

    Raised deep inside vote validation and translated into a
    :class:`ValidationRejection` by the create interceptor.
    """

    def __init__(self) -> None:
        super().__init__("CommentFirst")


COMMENT_FIRST_MESSAGE = (
    "Please comment first in debate sections, before you downvote this post"
)
