from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient

from blogfront.adapters.memory_source import InMemoryContentSource
from blogfront.api.deps import get_content_source, get_rules
from blogfront.api.main import app
from blogfront.domain.entities import Post, PostBody
from blogfront.rules.models import ContentSourceRules, ProjectRules, Rules, SiteRules

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def rules() -> Rules:
    """Rules for an in-memory site."""
    return Rules(
        project=ProjectRules(name="blogfront", rules_version="1"),
        site=SiteRules(
            title="Test Blog",
            tagline="Notes on testing.",
            base_url="https://blog.example.com",
        ),
        content_source=ContentSourceRules(kind="memory"),
    )


@pytest.fixture
def make_post() -> Callable[..., Post]:
    """Factory for posts published on a given day of January 2024."""

    def _make(
        slug: str,
        day: int | None = 1,
        title: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> Post:
        return Post(
            id=f"id-{slug}",
            slug=slug,
            title=title or slug.replace("-", " ").title(),
            author="Ada",
            excerpt=f"About {slug}.",
            published_at=datetime(2024, 1, day, tzinfo=UTC) if day else None,
            body=PostBody(json=body or {"children": []}),
        )

    return _make


@pytest.fixture
def hello_document() -> dict[str, Any]:
    """A paragraph with bold text followed by a link."""
    return {
        "children": [
            {
                "type": "paragraph",
                "children": [
                    {"text": "Hello ", "bold": True},
                    {
                        "type": "link",
                        "href": "https://x.io",
                        "children": [{"text": "world"}],
                    },
                ],
            }
        ]
    }


@pytest.fixture
def memory_source(make_post: Callable[..., Post], hello_document: dict[str, Any]) -> InMemoryContentSource:
    """Seven posts published Jan 1..7; the newest has a rendered body."""
    posts = [make_post(f"post-{day}", day=day) for day in range(1, 7)]
    posts.append(make_post("post-7", day=7, title="Hello World", body=hello_document))
    return InMemoryContentSource(posts, clock=lambda: FIXED_NOW)


@pytest.fixture
def client(rules: Rules, memory_source: InMemoryContentSource) -> Iterator[TestClient]:
    """Test client wired to the in-memory source."""
    app.dependency_overrides[get_rules] = lambda: rules
    app.dependency_overrides[get_content_source] = lambda: memory_source
    yield TestClient(app)
    app.dependency_overrides.clear()
