"""Read-path visibility: blocked authors and redaction of soft-deleted records."""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from myriad_api.core.settings import settings
from myriad_api.enums import EntityKind
from myriad_api.services.container import ServiceContainer

from .context import InvocationContext, Next

# Field overwritten in responses for soft-deleted records, and its placeholder.
PLACEHOLDERS: dict[EntityKind, tuple[str, str]] = {
    EntityKind.USER: ("name", "[user banned]"),
    EntityKind.POST: ("text", "[post removed]"),
    EntityKind.COMMENT: ("text", "[comment removed]"),
}


def to_document(entity: Any) -> dict[str, Any]:
    """Copy an ORM instance's column values into a plain dict."""
    return {
        attribute.key: getattr(entity, attribute.key)
        for attribute in sa_inspect(entity).mapper.column_attrs
    }


class DeletedDocumentInterceptor:
    """Shape read responses without ever touching stored values."""

    def __init__(self, db: Session, services: ServiceContainer) -> None:
        self.db = db
        self.services = services

    async def intercept(
        self, ctx: InvocationContext, next_: Next, viewer_id: str | None = None
    ) -> dict[str, Any] | None:
        """Load a record through ``next_`` and return its visible form.

        ``ctx.args`` is the id of the record being read. Returns None when the
        viewer may not see the record at all.
        """
        if ctx.kind is EntityKind.USER and viewer_id and ctx.args != viewer_id:
            if self.services.friends.is_blocked(viewer_id, ctx.args):
                return None

        entity = await next_(ctx)
        if entity is None:
            return None
        return self.present(ctx.kind, entity, viewer_id)

    def present(
        self, kind: EntityKind, entity: Any, viewer_id: str | None = None
    ) -> dict[str, Any] | None:
        """Return the redacted response copy of ``entity``, or None if hidden."""
        if kind is EntityKind.POST and viewer_id and viewer_id != entity.created_by:
            if self.services.friends.is_blocked(viewer_id, entity.created_by):
                return None

        document = to_document(entity)
        if getattr(entity, "deleted_at", None) is not None:
            placeholder = PLACEHOLDERS.get(kind)
            if placeholder is None:
                return None
            field, text = placeholder
            document[field] = text

        if kind is EntityKind.POST and entity.platform != settings.native_platform:
            importer_ids = self.services.friends.get_importer_ids(entity.created_by)
            document.update(self.services.posts.get_detail_importers(entity, importer_ids))
        return document
