"""
Page metadata builder for the server-rendered pages.

Builds deterministic <head> metadata from site rules and post content.

Key behaviors:
- Builds <title>, meta description, canonical URL
- Generates OG and Twitter Card meta tags
- Pure functions: same inputs always produce same outputs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from blogfront.domain.entities import PostSummary
from blogfront.rules.models import SiteRules

POSTS_PREFIX = "/posts"
CREATE_POST_PATH = "/create-post"


# --- Metadata Models ---


@dataclass
class MetaTag:
    """HTML meta tag representation."""

    name: str | None = None
    property: str | None = None  # For OG tags
    content: str = ""


@dataclass
class PageMetadata:
    """
    Complete page metadata for SSR rendering.

    Contains all data needed to render <head> content.
    """

    title: str
    description: str
    canonical_url: str
    robots: str = "index, follow"

    og_title: str = ""
    og_type: str = "website"
    og_site_name: str = ""
    twitter_card: str = "summary"

    extra_meta: list[MetaTag] = field(default_factory=list)

    def to_meta_tags(self) -> list[MetaTag]:
        """Convert to list of MetaTag objects for rendering."""
        tags = [
            MetaTag(name="description", content=self.description),
            MetaTag(name="robots", content=self.robots),
            MetaTag(property="og:title", content=self.og_title or self.title),
            MetaTag(property="og:description", content=self.description),
            MetaTag(property="og:type", content=self.og_type),
            MetaTag(property="og:url", content=self.canonical_url),
        ]

        if self.og_site_name:
            tags.append(MetaTag(property="og:site_name", content=self.og_site_name))

        tags.extend(
            [
                MetaTag(name="twitter:card", content=self.twitter_card),
                MetaTag(name="twitter:title", content=self.og_title or self.title),
                MetaTag(name="twitter:description", content=self.description),
            ]
        )

        tags.extend(self.extra_meta)
        return tags


# --- URL and Text Helpers ---


def build_canonical_url(base_url: str, path: str) -> str:
    """
    Build canonical URL from base URL and path.

    Ensures proper URL formatting.
    """
    base = base_url.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path

    return f"{base}{path}"


def post_path(slug: str) -> str:
    return f"{POSTS_PREFIX}/{slug}"


def format_published_date(published_at: datetime | None) -> str:
    """Human-readable publish date, or "Not published" for drafts."""
    if published_at is None:
        return "Not published"
    return f"{published_at:%B} {published_at.day}, {published_at.year}"


def truncate_description(text: str, max_length: int = 160) -> str:
    """
    Truncate description to fit meta description limits.

    Breaks at word boundary if possible.
    """
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")

    if last_space > max_length * 0.6:  # At least 60% of the text
        truncated = truncated[:last_space]

    return truncated.rstrip() + "..."


# --- Service ---


class PageMetaService:
    """
    Metadata for the feed, post, and authoring pages.

    Pure functions: same inputs always produce same outputs.
    """

    def __init__(self, site: SiteRules) -> None:
        self._site = site
        self._base_url = site.base_url.rstrip("/")

    def build_page_metadata(
        self,
        path: str,
        title: str | None = None,
        description: str | None = None,
        og_type: str = "website",
        robots: str = "index, follow",
    ) -> PageMetadata:
        """Build metadata for an arbitrary page, defaulting to the site title and tagline."""
        full_title = f"{title} | {self._site.title}" if title else self._site.title
        return PageMetadata(
            title=full_title,
            description=truncate_description(description or self._site.tagline),
            canonical_url=build_canonical_url(self._base_url, path),
            robots=robots,
            og_title=title or self._site.title,
            og_type=og_type,
            og_site_name=self._site.title,
        )

    def build_home_metadata(self, page: int = 1) -> PageMetadata:
        path = "/" if page <= 1 else f"/?page={page}"
        return self.build_page_metadata(path=path)

    def build_post_metadata(self, post: PostSummary) -> PageMetadata:
        return self.build_page_metadata(
            path=post_path(post.slug),
            title=post.title,
            description=post.excerpt or None,
            og_type="article",
        )

    def build_create_post_metadata(self) -> PageMetadata:
        return self.build_page_metadata(
            path=CREATE_POST_PATH,
            title="Create Post",
            description="Write and publish a new post.",
            robots="noindex, nofollow",
        )

    def build_not_found_metadata(self, path: str) -> PageMetadata:
        return self.build_page_metadata(
            path=path,
            title="Not Found",
            robots="noindex, nofollow",
        )


# --- Factory ---


def create_page_meta_service(site: SiteRules) -> PageMetaService:
    """Create a page metadata service for the given site rules."""
    return PageMetaService(site)
