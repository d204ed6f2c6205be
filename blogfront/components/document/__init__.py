"""
Document component - Render rich text document trees.
"""

from ._impl import (
    DEFAULT_RENDER_CONFIG,
    NODE_RENDERERS,
    DocumentRenderer,
    HeadingInfo,
    RenderConfig,
    build_link_rel,
    create_document_renderer,
    extract_headings,
    extract_text,
    is_safe_url,
    outline_document,
    render_html,
    render_node,
    serialize_html,
    slugify,
)
from .component import (
    run,
    run_extract_headings,
    run_extract_text,
    run_render,
    run_validate,
)
from .models import (
    ExtractHeadingsInput,
    ExtractTextInput,
    HeadingsOutput,
    RenderDocumentInput,
    RenderDocumentOutput,
    TextOutput,
    ValidateDocumentInput,
    ValidateDocumentOutput,
)
from .nodes import KNOWN_KINDS, MARKS, DocumentNode, InvalidDocumentError
from .ports import RulesPort
from .presentation import (
    Element,
    Fragment,
    Outline,
    PresentationNode,
    Text,
    outline_presentation,
    to_html,
)
from .schema import DocumentValidationError, find_unsupported_kinds, validate_document


__all__ = [
    # Entry points
    "run",
    "run_extract_headings",
    "run_extract_text",
    "run_render",
    "run_validate",
    # Input models
    "ExtractHeadingsInput",
    "ExtractTextInput",
    "RenderDocumentInput",
    "ValidateDocumentInput",
    # Output models
    "HeadingsOutput",
    "RenderDocumentOutput",
    "TextOutput",
    "ValidateDocumentOutput",
    "DocumentValidationError",
    # Ports
    "RulesPort",
    # Document tree
    "DocumentNode",
    "InvalidDocumentError",
    "KNOWN_KINDS",
    "MARKS",
    # Presentation tree
    "Element",
    "Fragment",
    "Outline",
    "PresentationNode",
    "Text",
    "outline_document",
    "outline_presentation",
    "to_html",
    # Renderer
    "DEFAULT_RENDER_CONFIG",
    "NODE_RENDERERS",
    "DocumentRenderer",
    "HeadingInfo",
    "RenderConfig",
    "build_link_rel",
    "create_document_renderer",
    "extract_headings",
    "extract_text",
    "find_unsupported_kinds",
    "is_safe_url",
    "render_html",
    "render_node",
    "serialize_html",
    "slugify",
    "validate_document",
]
