"""
JSON API - feed, posts, create-and-publish, and document rendering.

Error mapping:
- Content source failures -> 502
- Missing post -> 404
- Validation failures -> 400
- Malformed document JSON -> 422
"""

import logging
from collections.abc import Iterable, Sequence
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query, status

from blogfront.api.deps import get_content_source, get_rules
from blogfront.api.schemas import (
    CreatePostRequest,
    DocumentIssueModel,
    HeadingModel,
    PostDetailResponse,
    PostFeedResponse,
    RenderDocumentRequest,
    RenderDocumentResponse,
)
from blogfront.components.document import (
    DocumentValidationError,
    HeadingInfo,
    RenderDocumentInput,
    run_render,
)
from blogfront.components.posts import (
    CreatePostInput,
    GetPostInput,
    ListPostsInput,
    PostsValidationError,
    render_post_body,
    run_create,
    run_get,
    run_list,
)
from blogfront.domain.entities import PublishedPost
from blogfront.ports.content_source import ContentSourcePort
from blogfront.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_STATUS = {
    "source_error": status.HTTP_502_BAD_GATEWAY,
    "publish_failed": status.HTTP_502_BAD_GATEWAY,
    "not_found": status.HTTP_404_NOT_FOUND,
}


def _raise_for_errors(errors: Sequence[PostsValidationError]) -> NoReturn:
    first = errors[0]
    raise HTTPException(
        status_code=ERROR_STATUS.get(first.code, status.HTTP_400_BAD_REQUEST),
        detail=first.message,
    )


def _headings(headings: Iterable[HeadingInfo]) -> list[HeadingModel]:
    return [HeadingModel(level=h.level, text=h.text, id=h.id) for h in headings]


def _issues(issues: Iterable[DocumentValidationError]) -> list[DocumentIssueModel]:
    return [DocumentIssueModel(code=i.code, message=i.message, path=i.path) for i in issues]


@router.get("/posts", response_model=PostFeedResponse)
def list_posts(
    page: int = Query(1),
    per_page: int | None = Query(None),
    source: ContentSourcePort = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
) -> PostFeedResponse:
    """Get one page of the feed, newest published first."""
    result = run_list(ListPostsInput(page=page, per_page=per_page), source=source, rules=rules)
    if not result.success:
        _raise_for_errors(result.errors)

    return PostFeedResponse(
        posts=result.posts,
        total=result.total,
        page=result.page,
        per_page=result.per_page,
        total_pages=result.total_pages,
        has_previous=result.has_previous,
        has_next=result.has_next,
        notice=result.notice,
    )


@router.get("/posts/{slug}", response_model=PostDetailResponse)
def get_post(
    slug: str,
    source: ContentSourcePort = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
) -> PostDetailResponse:
    """Get a post with its body rendered to HTML."""
    result = run_get(GetPostInput(slug=slug), source=source)
    if not result.success or result.post is None:
        _raise_for_errors(result.errors)

    rendered = render_post_body(result.post, rules=rules)
    if not rendered.success:
        logger.warning("Post %s has a malformed body: %s", slug, rendered.errors[0].message)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Post body is not a valid document",
        )

    return PostDetailResponse(
        post=result.post,
        html=rendered.html,
        headings=_headings(rendered.headings),
        warnings=_issues(rendered.warnings),
    )


@router.post("/posts", response_model=PublishedPost, status_code=status.HTTP_201_CREATED)
def create_post(
    req: CreatePostRequest,
    source: ContentSourcePort = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
) -> PublishedPost:
    """Create a post from plain text and publish it."""
    inp = CreatePostInput(title=req.title, author=req.author, excerpt=req.excerpt, body=req.body)
    result = run_create(inp, source=source, rules=rules)
    if not result.success or result.published is None:
        _raise_for_errors(result.errors)

    return result.published


@router.post("/documents/render", response_model=RenderDocumentResponse)
def render_document(
    req: RenderDocumentRequest,
    rules: Rules = Depends(get_rules),
) -> RenderDocumentResponse:
    """Render arbitrary rich text JSON to HTML."""
    inp = RenderDocumentInput(
        document=req.document,
        wrap_in_article=req.wrap_in_article,
        add_heading_ids=req.add_heading_ids,
    )
    result = run_render(inp, rules=rules)
    if not result.success:
        raise HTTPException(
            status_code=422,
            detail=[issue.model_dump() for issue in _issues(result.errors)],
        )

    return RenderDocumentResponse(
        html=result.html,
        headings=_headings(result.headings),
        warnings=_issues(result.warnings),
    )
