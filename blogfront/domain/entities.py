from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
Stage = Literal["DRAFT", "PUBLISHED"]

# --- Posts ---


class PostBody(BaseModel):
    """Rich text body in every format the content source exposes."""

    json_: dict[str, Any] | None = Field(default=None, alias="json")
    markdown: str | None = None
    text: str | None = None
    html: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class PostSummary(BaseModel):
    id: str
    slug: str
    title: str
    author: str = ""
    excerpt: str = ""
    published_at: datetime | None = Field(default=None, alias="publishedAt")

    model_config = ConfigDict(populate_by_name=True)


class Post(PostSummary):
    body: PostBody = Field(default_factory=PostBody)


class PostPage(BaseModel):
    """One page of summaries plus the total across all pages."""

    posts: list[PostSummary] = Field(default_factory=list)
    total: int = 0


class PostDraft(BaseModel):
    title: str
    slug: str
    author: str
    excerpt: str
    body: dict[str, Any]


class PublishedPost(BaseModel):
    slug: str
    stage: Stage = "PUBLISHED"
