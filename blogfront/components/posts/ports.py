"""
Posts component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from blogfront.ports.content_source import ContentSourcePort


class RulesPort(Protocol):
    """Port for accessing feed and publishing rules."""

    def get_posts_per_page(self) -> int:
        """Get the default feed page size."""
        ...

    def get_max_per_page(self) -> int:
        """Get the largest page size a caller may request."""
        ...

    def get_publish_stages(self) -> list[str]:
        """Get the stages a new post is published to."""
        ...


__all__ = ["ContentSourcePort", "RulesPort"]
