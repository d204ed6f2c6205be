"""
Document component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ._impl import HeadingInfo
from .presentation import PresentationNode
from .schema import DocumentValidationError

# --- Input Models ---


@dataclass(frozen=True)
class RenderDocumentInput:
    """Input for rendering rich text JSON."""

    document: Any
    # None defers to the render rules
    wrap_in_article: bool | None = None
    add_heading_ids: bool | None = None


@dataclass(frozen=True)
class ValidateDocumentInput:
    """Input for validating rich text JSON."""

    document: Any


@dataclass(frozen=True)
class ExtractTextInput:
    """Input for extracting plain text."""

    document: Any


@dataclass(frozen=True)
class ExtractHeadingsInput:
    """Input for extracting headings for a table of contents."""

    document: Any


# --- Output Models ---


@dataclass(frozen=True)
class RenderDocumentOutput:
    """Output containing the presentation tree and its HTML."""

    html: str
    tree: PresentationNode | None = None
    headings: tuple[HeadingInfo, ...] = ()
    warnings: list[DocumentValidationError] = field(default_factory=list)
    errors: list[DocumentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ValidateDocumentOutput:
    """Output for validation result."""

    is_valid: bool
    errors: list[DocumentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class TextOutput:
    """Output containing extracted plain text."""

    text: str
    errors: list[DocumentValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class HeadingsOutput:
    """Output containing extracted headings."""

    headings: tuple[HeadingInfo, ...]
    errors: list[DocumentValidationError] = field(default_factory=list)
    success: bool = True
