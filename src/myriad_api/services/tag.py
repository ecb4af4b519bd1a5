"""Hashtag normalization and counting."""

from __future__ import annotations

import re
from collections.abc import Iterable

from sqlalchemy.orm import Session

from myriad_api.core.errors import ConflictRejection, ValidationRejection
from myriad_api.models import Tag
from myriad_api.repositories import TagRepository

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


class TagService:
    def __init__(self, db: Session) -> None:
        self.tag_repository = TagRepository(db)

    @staticmethod
    def normalize_id(raw_id: str) -> str:
        """Lowercase, keep the first whitespace-delimited token, drop non-alphanumerics.

        >>> TagService.normalize_id("  Crypto-Currency news")
        'cryptocurrency'
        """
        tokens = raw_id.lower().split()
        if not tokens:
            return ""
        return _NON_ALPHANUMERIC.sub("", tokens[0])

    def ensure_available(self, tag_id: str) -> str:
        """Normalize ``tag_id`` and reject it when it collides with an existing tag.

        Raises:
            ValidationRejection: If nothing is left after normalization.
            ConflictRejection: If a tag with the same id exists in any case variant.
        """
        normalized = self.normalize_id(tag_id)
        if not normalized:
            raise ValidationRejection("Tag cannot be empty")
        raw = tag_id.split()[0]
        for candidate in dict.fromkeys([raw, normalized]):
            if self.tag_repository.find_any_case(candidate) is not None:
                raise ConflictRejection("Tag already exist")
        return normalized

    def create_tags(self, tags: Iterable[str]) -> list[Tag]:
        """Create unseen tags with a count of one and increment the rest."""
        touched = []
        for raw in dict.fromkeys(tags):
            tag_id = self.normalize_id(raw)
            if not tag_id:
                continue
            found = self.tag_repository.find_any_case(tag_id)
            if found is None:
                touched.append(self.tag_repository.create(id=tag_id, count=1))
            else:
                touched.append(
                    self.tag_repository.update_by_id(found.id, count=found.count + 1)
                )
        return touched
