from typing import Protocol

from blogfront.domain.entities import Post, PostDraft, PostPage, PublishedPost


class ContentSourceError(Exception):
    """The content source could not complete a request."""


class ContentSourcePort(Protocol):
    def get_post(self, slug: str) -> Post | None:
        """Fetch one post by slug. Returns None if it does not exist."""
        ...

    def list_posts(self, first: int, skip: int) -> PostPage:
        """Fetch a page of summaries, newest published first, with the total count."""
        ...

    def create_post(self, draft: PostDraft, stages: list[str]) -> PublishedPost:
        """Create a post and publish it to the given stages."""
        ...
