from typing import Any

from pydantic import BaseModel, Field

from blogfront.domain.entities import Post, PostSummary


# --- Documents ---
class DocumentIssueModel(BaseModel):
    code: str
    message: str
    path: str | None = None


class HeadingModel(BaseModel):
    level: int
    text: str
    id: str


class RenderDocumentRequest(BaseModel):
    document: Any
    # Omitted options fall back to the render rules
    wrap_in_article: bool | None = None
    add_heading_ids: bool | None = None


class RenderDocumentResponse(BaseModel):
    html: str
    headings: list[HeadingModel] = []
    warnings: list[DocumentIssueModel] = []


# --- Posts ---
class PostFeedResponse(BaseModel):
    posts: list[PostSummary]
    total: int
    page: int
    per_page: int
    total_pages: int
    has_previous: bool
    has_next: bool
    notice: str | None = None


class PostDetailResponse(BaseModel):
    post: Post
    html: str
    headings: list[HeadingModel] = []
    warnings: list[DocumentIssueModel] = []


class CreatePostRequest(BaseModel):
    title: str = Field(default="", max_length=300)
    author: str = Field(default="", max_length=200)
    excerpt: str = Field(default="", max_length=1000)
    body: str = ""
