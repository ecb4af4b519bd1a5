"""Data access helpers for posts, comments, tags and experiences."""
from __future__ import annotations

from myriad_api.models import Comment, Experience, ExperiencePost, Post, Tag

from .base import Repository

__all__ = [
    "CommentRepository",
    "ExperiencePostRepository",
    "ExperienceRepository",
    "PostRepository",
    "TagRepository",
]


class PostRepository(Repository[Post]):
    model = Post

    def list_visible(self, limit: int, offset: int = 0) -> list[Post]:
        """Return published, non-deleted posts, newest first."""
        return self.find(
            Post.deleted_at.is_(None),
            status="published",
            order_by=Post.created_at.desc(),
            limit=limit,
            offset=offset,
        )

    def find_imports(self, post: Post) -> list[Post]:
        """Return every copy of ``post``'s original imported by other users."""
        if not post.original_post_id:
            return []
        return self.find(
            Post.id != post.id,
            Post.deleted_at.is_(None),
            original_post_id=post.original_post_id,
            platform=post.platform,
        )


class CommentRepository(Repository[Comment]):
    model = Comment


class TagRepository(Repository[Tag]):
    model = Tag

    def find_any_case(self, tag_id: str) -> Tag | None:
        """Return a tag whose id matches ``tag_id`` as given, lowered or uppered."""
        return self.find_one(Tag.id.in_([tag_id, tag_id.lower(), tag_id.upper()]))


class ExperienceRepository(Repository[Experience]):
    model = Experience


class ExperiencePostRepository(Repository[ExperiencePost]):
    model = ExperiencePost
