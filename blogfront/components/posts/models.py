"""
Posts component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from blogfront.domain.entities import Post, PostSummary, PublishedPost
from blogfront.domain.state import ViewState

# --- Validation Error ---


@dataclass(frozen=True)
class PostsValidationError:
    """Posts validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ListPostsInput:
    """Input for listing one page of the feed (1-based page)."""

    page: int = 1
    per_page: int | None = None


@dataclass(frozen=True)
class GetPostInput:
    """Input for retrieving a post by slug."""

    slug: str


@dataclass(frozen=True)
class CreatePostInput:
    """Input for creating and publishing a post from the authoring form."""

    title: str
    author: str
    excerpt: str
    body: str


# --- Output Models ---


@dataclass(frozen=True)
class PostFeedOutput:
    """One page of the feed plus pagination arithmetic."""

    posts: list[PostSummary] = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 5
    total_pages: int = 0
    has_previous: bool = False
    has_next: bool = False
    state: ViewState = "idle"
    notice: str | None = None
    errors: list[PostsValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PostOutput:
    """Output containing a single post."""

    post: Post | None = None
    state: ViewState = "idle"
    errors: list[PostsValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class CreatePostOutput:
    """Output for create-and-publish."""

    published: PublishedPost | None = None
    errors: list[PostsValidationError] = field(default_factory=list)
    success: bool = True
