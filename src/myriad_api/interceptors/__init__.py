"""Interception pipeline wrapped around controller operations."""

from .context import InvocationContext
from .create import CreateInterceptor, RulePair
from .deleted_document import DeletedDocumentInterceptor
from .validate_vote import ValidateVoteInterceptor

__all__ = [
    "CreateInterceptor",
    "DeletedDocumentInterceptor",
    "InvocationContext",
    "RulePair",
    "ValidateVoteInterceptor",
]
