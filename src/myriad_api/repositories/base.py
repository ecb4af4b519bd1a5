"""Generic data access helpers shared by every entity repository."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from myriad_api.core.errors import NotFoundError
from myriad_api.db.session import Base

ModelT = TypeVar("ModelT", bound=Base)

__all__ = ["Repository"]


class Repository(Generic[ModelT]):
    """Thin wrapper around database access for one entity type.

    Exposes the primitives the business rules rely on: ``find_by_id``,
    ``find_one``, ``create``, ``update_by_id``, ``count`` and ``exists``.
    Writes are flushed, never committed; the caller owns the transaction.
    """

    model: ClassVar[type[Any]]

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _where(self, criteria: Sequence[ColumnElement[bool]], where: dict[str, Any]) -> list[Any]:
        clauses = list(criteria)
        clauses.extend(getattr(self.model, key) == value for key, value in where.items())
        return clauses

    def get(self, entity_id: Any) -> ModelT | None:
        """Return the entity with ``entity_id`` or None."""
        if entity_id is None:
            return None
        return self.session.get(self.model, entity_id)

    def find_by_id(self, entity_id: Any) -> ModelT:
        """Return the entity with ``entity_id``.

        Raises:
            NotFoundError: If no such entity exists.
        """
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return entity

    def find_one(self, *criteria: ColumnElement[bool], **where: Any) -> ModelT | None:
        """Return the first entity matching the predicate."""
        stmt = select(self.model).where(*self._where(criteria, where)).limit(1)
        return self.session.execute(stmt).scalars().first()

    def find(
        self,
        *criteria: ColumnElement[bool],
        order_by: Any = None,
        limit: int | None = None,
        offset: int | None = None,
        **where: Any,
    ) -> list[ModelT]:
        """Return every entity matching the predicate."""
        stmt = select(self.model).where(*self._where(criteria, where))
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars())

    def count(self, *criteria: ColumnElement[bool], **where: Any) -> int:
        """Return how many entities match the predicate."""
        stmt = select(func.count()).select_from(self.model).where(*self._where(criteria, where))
        return int(self.session.execute(stmt).scalar_one())

    def exists(self, entity_id: Any) -> bool:
        return self.get(entity_id) is not None

    def create(self, **values: Any) -> ModelT:
        """Insert a new entity and return the persisted ORM instance."""
        entity = self.model(**values)
        self.session.add(entity)
        self.session.flush()
        return entity

    def update_by_id(self, entity_id: Any, **values: Any) -> ModelT:
        """Apply ``values`` to the entity with ``entity_id``."""
        entity = self.find_by_id(entity_id)
        for key, value in values.items():
            setattr(entity, key, value)
        self.session.flush()
        return entity

    def delete_by_id(self, entity_id: Any) -> None:
        entity = self.find_by_id(entity_id)
        self.session.delete(entity)
        self.session.flush()
