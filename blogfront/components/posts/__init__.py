"""
Posts component - Feed, post lookup, and create-and-publish.
"""

from .component import (
    CREATE_FAILED_MESSAGE,
    NO_POSTS_MESSAGE,
    POST_NOT_FOUND_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    build_body_document,
    count_pages,
    render_post_body,
    run,
    run_create,
    run_get,
    run_list,
    slugify_title,
)
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

__all__ = [
    # Entry points
    "run",
    "run_create",
    "run_get",
    "run_list",
    # Input models
    "CreatePostInput",
    "GetPostInput",
    "ListPostsInput",
    # Output models
    "CreatePostOutput",
    "PostFeedOutput",
    "PostOutput",
    "PostsValidationError",
    # Ports
    "ContentSourcePort",
    "RulesPort",
    # Helpers
    "CREATE_FAILED_MESSAGE",
    "NO_POSTS_MESSAGE",
    "POST_NOT_FOUND_MESSAGE",
    "REQUIRED_FIELDS_MESSAGE",
    "build_body_document",
    "count_pages",
    "render_post_body",
    "slugify_title",
]
