"""
Page metadata component - SSR <head> metadata builder.
"""

from ._impl import (
    CREATE_POST_PATH,
    POSTS_PREFIX,
    MetaTag,
    PageMetadata,
    PageMetaService,
    build_canonical_url,
    create_page_meta_service,
    format_published_date,
    post_path,
    truncate_description,
)

__all__ = [
    "CREATE_POST_PATH",
    "POSTS_PREFIX",
    "MetaTag",
    "PageMetadata",
    "PageMetaService",
    "build_canonical_url",
    "create_page_meta_service",
    "format_published_date",
    "post_path",
    "truncate_description",
]
