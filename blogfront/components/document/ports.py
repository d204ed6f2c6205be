"""
Document component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from ._impl import RenderConfig


class RulesPort(Protocol):
    """Port for accessing render rules configuration."""

    def get_render_config(self) -> RenderConfig:
        """Get the base render configuration."""
        ...
