"""
In-memory content source (dev/tests).

Implementation of ContentSourcePort that keeps posts in a dict.
Used for local development without a Hygraph project and as the test
double for components and routes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from uuid import uuid4

from blogfront.domain.entities import (
    Post,
    PostBody,
    PostDraft,
    PostPage,
    PostSummary,
    PublishedPost,
)
from blogfront.ports.content_source import ContentSourceError

logger = logging.getLogger(__name__)


class InMemoryContentSource:
    """
    In-memory content source.

    This adapter satisfies the ContentSourcePort protocol.
    """

    def __init__(
        self,
        posts: Iterable[Post] = (),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._posts: dict[str, Post] = {post.slug: post for post in posts}
        self._clock = clock or (lambda: datetime.now(UTC))

    def get_post(self, slug: str) -> Post | None:
        with self._lock:
            return self._posts.get(slug)

    def list_posts(self, first: int, skip: int) -> PostPage:
        if first < 0 or skip < 0:
            raise ContentSourceError("first and skip must be non-negative")

        with self._lock:
            ordered = sorted(self._posts.values(), key=_published_sort_key, reverse=True)
            window = ordered[skip : skip + first]
            return PostPage(
                posts=[PostSummary.model_validate(p.model_dump(exclude={"body"})) for p in window],
                total=len(ordered),
            )

    def create_post(self, draft: PostDraft, stages: list[str]) -> PublishedPost:
        with self._lock:
            if draft.slug in self._posts:
                raise ContentSourceError(f"A post with slug '{draft.slug}' already exists")

            published = "PUBLISHED" in stages
            post = Post(
                id=str(uuid4()),
                slug=draft.slug,
                title=draft.title,
                author=draft.author,
                excerpt=draft.excerpt,
                published_at=self._clock() if published else None,
                body=PostBody(json=draft.body),
            )
            self._posts[post.slug] = post

        logger.info("Created post %s (stages=%s)", draft.slug, ",".join(stages))
        return PublishedPost(slug=post.slug, stage="PUBLISHED" if published else "DRAFT")


def _published_sort_key(post: Post) -> tuple[bool, datetime]:
    # Unpublished posts sort last in descending order
    published_at = post.published_at
    if published_at is None:
        return (False, datetime.min.replace(tzinfo=UTC))
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=UTC)
    return (True, published_at)
