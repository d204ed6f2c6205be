"""
Posts component - Feed, post lookup, and create-and-publish.

Wraps the content source with the page arithmetic, form validation and
view-state handling the pages need.

Feed pagination:
- skip = (page - 1) * per_page
- total_pages = ceil(total / per_page)
- has_previous = page > 1
- has_next = page * per_page < total

View state:
- idle -> loading -> loaded | errored, driven by the source's response

Create-and-publish:
- title, author, excerpt and body are all required
- slug = lowercase title with non-alphanumerics collapsed to hyphens
- body text becomes one paragraph per blank-line-separated block
"""

from __future__ import annotations

import math
import re
import unicodedata
from typing import Any

from blogfront.components.document import (
    RenderDocumentInput,
    RenderDocumentOutput,
    run_render,
    slugify,
)
from blogfront.components.document import RulesPort as RenderRulesPort
from blogfront.domain.entities import Post, PostDraft
from blogfront.domain.state import ViewState, transition
from blogfront.ports.content_source import ContentSourceError

from .models import (
    CreatePostInput,
    CreatePostOutput,
    GetPostInput,
    ListPostsInput,
    PostFeedOutput,
    PostOutput,
    PostsValidationError,
)
from .ports import ContentSourcePort, RulesPort

# --- Default Configuration ---

DEFAULT_POSTS_PER_PAGE = 5
DEFAULT_MAX_PER_PAGE = 50
DEFAULT_PUBLISH_STAGES = ["PUBLISHED"]

REQUIRED_FIELDS_MESSAGE = "Title, author, body, and excerpt are required."
CREATE_FAILED_MESSAGE = "Failed to create and publish the post."
NO_POSTS_MESSAGE = "No posts found."
POST_NOT_FOUND_MESSAGE = "Post not found."


# --- Helpers ---


def slugify_title(title: str) -> str:
    """Slug for a new post: ASCII-folded, lowercase, alphanumerics and hyphens."""
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    # Punctuation separates words rather than gluing them together
    return slugify(re.sub(r"[^A-Za-z0-9\s-]+", " ", folded))


def build_body_document(body: str) -> dict[str, Any]:
    """Turn plain form text into a rich text document of paragraphs."""
    blocks = [block.strip() for block in re.split(r"\n\s*\n", body.strip())]
    return {
        "children": [
            {"type": "paragraph", "children": [{"text": block}]} for block in blocks if block
        ]
    }


def count_pages(total: int, per_page: int) -> int:
    return math.ceil(total / per_page) if total > 0 else 0


def render_post_body(post: Post, *, rules: RenderRulesPort | None = None) -> RenderDocumentOutput:
    """Render a post's rich text body; a post without one renders as empty."""
    document = post.body.json_ if post.body.json_ is not None else {"children": []}
    return run_render(RenderDocumentInput(document=document), rules=rules)


# --- Component Entry Points ---


def run_list(
    inp: ListPostsInput,
    *,
    source: ContentSourcePort,
    rules: RulesPort | None = None,
) -> PostFeedOutput:
    """
    Fetch one page of the feed.

    Args:
        inp: Page number (1-based) and optional page size.
        source: Content source to read from.
        rules: Optional rules port for page size limits.

    Returns:
        PostFeedOutput with posts and pagination flags.
    """
    default_per_page = rules.get_posts_per_page() if rules else DEFAULT_POSTS_PER_PAGE
    max_per_page = rules.get_max_per_page() if rules else DEFAULT_MAX_PER_PAGE
    per_page = inp.per_page if inp.per_page is not None else default_per_page

    errors: list[PostsValidationError] = []
    if inp.page < 1:
        errors.append(
            PostsValidationError(
                code="page_invalid",
                message="Page must be 1 or greater",
                field="page",
            )
        )
    if not 1 <= per_page <= max_per_page:
        errors.append(
            PostsValidationError(
                code="per_page_invalid",
                message=f"Page size must be between 1 and {max_per_page}",
                field="per_page",
            )
        )
    if errors:
        return PostFeedOutput(page=inp.page, per_page=per_page, errors=errors, success=False)

    state: ViewState = transition("idle", "loading")
    try:
        result = source.list_posts(first=per_page, skip=(inp.page - 1) * per_page)
    except ContentSourceError as e:
        state = transition(state, "errored")
        return PostFeedOutput(
            page=inp.page,
            per_page=per_page,
            state=state,
            errors=[
                PostsValidationError(
                    code="source_error",
                    message=f"Error fetching posts: {e}",
                )
            ],
            success=False,
        )
    state = transition(state, "loaded")

    return PostFeedOutput(
        posts=result.posts,
        total=result.total,
        page=inp.page,
        per_page=per_page,
        total_pages=count_pages(result.total, per_page),
        has_previous=inp.page > 1,
        has_next=inp.page * per_page < result.total,
        state=state,
        notice=None if result.posts else NO_POSTS_MESSAGE,
    )


def run_get(
    inp: GetPostInput,
    *,
    source: ContentSourcePort,
) -> PostOutput:
    """
    Fetch a single post by slug.

    Returns:
        PostOutput; code "not_found" when the slug does not exist.
    """
    if not inp.slug.strip():
        return PostOutput(
            errors=[
                PostsValidationError(
                    code="slug_required",
                    message="Slug is required",
                    field="slug",
                )
            ],
            success=False,
        )

    state: ViewState = transition("idle", "loading")
    try:
        post = source.get_post(inp.slug)
    except ContentSourceError as e:
        return PostOutput(
            state=transition(state, "errored"),
            errors=[PostsValidationError(code="source_error", message=str(e))],
            success=False,
        )
    state = transition(state, "loaded")

    if post is None:
        return PostOutput(
            state=state,
            errors=[PostsValidationError(code="not_found", message=POST_NOT_FOUND_MESSAGE)],
            success=False,
        )

    return PostOutput(post=post, state=state)


def run_create(
    inp: CreatePostInput,
    *,
    source: ContentSourcePort,
    rules: RulesPort | None = None,
) -> CreatePostOutput:
    """
    Validate the authoring form, then create and publish the post.

    Returns:
        CreatePostOutput with the published slug and stage.
    """
    title = inp.title.strip()
    author = inp.author.strip()
    excerpt = inp.excerpt.strip()
    body = inp.body.strip()

    if not (title and author and body and excerpt):
        return CreatePostOutput(
            errors=[PostsValidationError(code="fields_required", message=REQUIRED_FIELDS_MESSAGE)],
            success=False,
        )

    slug = slugify_title(title)
    if not slug:
        return CreatePostOutput(
            errors=[
                PostsValidationError(
                    code="slug_invalid",
                    message="Title must contain at least one letter or number",
                    field="title",
                )
            ],
            success=False,
        )

    draft = PostDraft(
        title=title,
        slug=slug,
        author=author,
        excerpt=excerpt,
        body=build_body_document(body),
    )
    stages = rules.get_publish_stages() if rules else DEFAULT_PUBLISH_STAGES

    try:
        published = source.create_post(draft, list(stages))
    except ContentSourceError as e:
        return CreatePostOutput(
            errors=[
                PostsValidationError(
                    code="publish_failed",
                    message=str(e) or CREATE_FAILED_MESSAGE,
                )
            ],
            success=False,
        )

    return CreatePostOutput(published=published)


def run(
    inp: ListPostsInput | GetPostInput | CreatePostInput,
    *,
    source: ContentSourcePort,
    rules: RulesPort | None = None,
) -> PostFeedOutput | PostOutput | CreatePostOutput:
    """
    Main entry point for the posts component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ListPostsInput):
        return run_list(inp, source=source, rules=rules)
    elif isinstance(inp, GetPostInput):
        return run_get(inp, source=source)
    elif isinstance(inp, CreatePostInput):
        return run_create(inp, source=source, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
