"""Post publishing and importer details."""

from __future__ import annotations

import re
from typing import Any

from sqlalchemy.orm import Session

from myriad_api.db.time import utcnow
from myriad_api.models import Post
from myriad_api.repositories import PostRepository, UserRepository
from myriad_api.services.tag import TagService

_HASHTAG = re.compile(r"#(\w+)")
MAX_IMPORTERS_SHOWN = 5


class PostService:
    def __init__(self, db: Session) -> None:
        self.post_repository = PostRepository(db)
        self.user_repository = UserRepository(db)

    def create_publish_post(self, post: Post) -> Post:
        """Finalize a freshly published post.

        Stamps the publication time and folds hashtags written in the text
        into the post's tag list.
        """
        tags = [TagService.normalize_id(tag) for tag in post.tags or []]
        tags.extend(TagService.normalize_id(tag) for tag in _HASHTAG.findall(post.text or ""))
        tags = [tag for tag in dict.fromkeys(tags) if tag]
        return self.post_repository.update_by_id(
            post.id,
            tags=tags,
            published_at=post.published_at or utcnow(),
        )

    def get_detail_importers(self, post: Post, importer_ids: list[str]) -> dict[str, Any]:
        """Describe who else imported the same original post.

        Args:
            post: An imported post.
            importer_ids: Users whose imports may be listed by name.

        Returns:
            ``importers`` (a few named importers) and ``total_importer`` (all imports).
        """
        imports = self.post_repository.find_imports(post)
        allowed = set(importer_ids)
        importers = []
        for imported in imports:
            if imported.created_by not in allowed:
                continue
            user = self.user_repository.get(imported.created_by)
            if user is None or user.deleted_at is not None:
                continue
            importers.append({"id": user.id, "name": user.name})
            if len(importers) >= MAX_IMPORTERS_SHOWN:
                break
        return {"importers": importers, "total_importer": len(imports)}
