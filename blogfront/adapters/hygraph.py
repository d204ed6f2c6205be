"""
Hygraph content source - GraphQL over HTTP.

Implementation of ContentSourcePort against a Hygraph (GraphCMS) content API.
Uses a bearer token and a synchronous httpx client with a fixed timeout.

Key behaviors:
- Posts are listed newest published first with the aggregate total count
- Create-and-publish runs createPost and publishPost in one mutation
- Transport failures, HTTP errors and GraphQL errors raise ContentSourceError
  carrying the first GraphQL error message when the API sent one
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from blogfront.domain.entities import Post, PostDraft, PostPage, PostSummary, PublishedPost
from blogfront.ports.content_source import ContentSourceError

logger = logging.getLogger(__name__)

# --- Queries ---

GET_POST = """
query GetPostBySlug($slug: String!) {
  post(where: {slug: $slug}) {
    author
    body {
      json
      markdown
      text
      html
    }
    excerpt
    id
    publishedAt
    slug
    title
  }
}
"""

GET_POSTS = """
query GetPostsList($first: Int, $skip: Int) {
  posts(first: $first, skip: $skip, orderBy: publishedAt_DESC) {
    excerpt
    id
    publishedAt
    slug
    title
    author
  }
  postsConnection {
    aggregate {
      count
    }
  }
}
"""

CREATE_POST = """
mutation CreatePostMutation($data: PostCreateInput!, $where: PostWhereUniqueInput!, $to: [Stage!]!) {
  createPost(data: $data) {
    title
    slug
    excerpt
    author
    body {
      json
    }
  }
  publishPost(where: $where, to: $to) {
    slug
    stage
  }
}
"""


def _drop_nulls(item: dict[str, Any]) -> dict[str, Any]:
    # Hygraph sends null for unset optional fields; the models use defaults
    return {key: value for key, value in item.items() if value is not None}


class HygraphContentSource:
    """
    Hygraph GraphQL content source.

    This adapter satisfies the ContentSourcePort protocol.
    """

    def __init__(
        self,
        endpoint: str,
        token: str | None = None,
        *,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not endpoint:
            raise ValueError("Hygraph endpoint is required")

        self._endpoint = endpoint
        self._headers = {"Content-Type": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    def __enter__(self) -> HygraphContentSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    # --- GraphQL transport ---

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Run a GraphQL operation and return its `data` object.

        Raises:
            ContentSourceError: On transport, HTTP, or GraphQL errors.
        """
        try:
            response = self._client.post(
                self._endpoint,
                json={"query": query, "variables": variables or {}},
                headers=self._headers,
            )
        except httpx.RequestError as exc:
            logger.warning("Content source request failed: %s", exc)
            raise ContentSourceError(f"Request to content source failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        message = self._first_error_message(payload)
        if message is not None:
            logger.warning("Content source GraphQL error: %s", message)
            raise ContentSourceError(message)

        if response.is_error:
            logger.warning("Content source returned HTTP %s", response.status_code)
            raise ContentSourceError(f"Content source returned HTTP {response.status_code}")

        if not isinstance(payload, dict):
            raise ContentSourceError("Content source returned a non-JSON response")

        data = payload.get("data")
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _first_error_message(payload: Any) -> str | None:
        if not isinstance(payload, dict):
            return None
        errors = payload.get("errors")
        if not errors:
            return None
        first = errors[0] if isinstance(errors, list) else errors
        if isinstance(first, dict) and first.get("message"):
            return str(first["message"])
        return "Content source returned an error"

    # --- ContentSourcePort ---

    def get_post(self, slug: str) -> Post | None:
        data = self.execute(GET_POST, {"slug": slug})
        item = data.get("post")
        if not item:
            return None

        item = _drop_nulls(item)
        if "body" in item:
            item["body"] = _drop_nulls(item["body"])
        return Post.model_validate(item)

    def list_posts(self, first: int, skip: int) -> PostPage:
        data = self.execute(GET_POSTS, {"first": first, "skip": skip})
        items = data.get("posts") or []
        aggregate = (data.get("postsConnection") or {}).get("aggregate") or {}

        return PostPage(
            posts=[PostSummary.model_validate(_drop_nulls(item)) for item in items],
            total=int(aggregate.get("count", len(items))),
        )

    def create_post(self, draft: PostDraft, stages: list[str]) -> PublishedPost:
        data = self.execute(
            CREATE_POST,
            {
                "data": {
                    "title": draft.title,
                    "slug": draft.slug,
                    "author": draft.author,
                    "excerpt": draft.excerpt,
                    "body": draft.body,
                },
                "where": {"slug": draft.slug},
                "to": stages,
            },
        )

        published = data.get("publishPost")
        if not published:
            raise ContentSourceError(f"Post '{draft.slug}' was created but not published")

        logger.info("Published post %s to %s", published.get("slug"), published.get("stage"))
        return PublishedPost.model_validate(published)
