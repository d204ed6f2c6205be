"""
Document component - Render rich text documents.

Converts rich text JSON from the content source into a presentation tree
and HTML for server-side rendered pages.

Invariants:
- Unsupported kinds never fail a render (passthrough, reported as warnings)
- Malformed input never renders partially (success=False, invalid_input)
- Output shape mirrors input shape
"""

from __future__ import annotations

from dataclasses import replace

from ._impl import (
    DEFAULT_RENDER_CONFIG,
    DocumentRenderer,
    RenderConfig,
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
from .nodes import DocumentNode, InvalidDocumentError
from .ports import RulesPort
from .schema import DocumentValidationError, find_unsupported_kinds, validate_document


def _build_config(
    rules: RulesPort | None,
    wrap_in_article: bool | None = None,
    add_heading_ids: bool | None = None,
) -> RenderConfig:
    """Build render config from rules port and per-call options."""
    config = rules.get_render_config() if rules is not None else DEFAULT_RENDER_CONFIG

    overrides: dict[str, bool] = {}
    if wrap_in_article is not None:
        overrides["wrap_in_article"] = wrap_in_article
    if add_heading_ids is not None:
        overrides["add_heading_ids"] = add_heading_ids
    return replace(config, **overrides) if overrides else config


def _invalid(e: InvalidDocumentError) -> DocumentValidationError:
    return DocumentValidationError(code="invalid_input", message=str(e), path=e.path)


# --- Component Entry Points ---


def run_render(
    inp: RenderDocumentInput,
    *,
    rules: RulesPort | None = None,
) -> RenderDocumentOutput:
    """
    Render a document to a presentation tree and HTML.

    Args:
        inp: Input containing rich text JSON and render options.
        rules: Optional rules port for configuration.

    Returns:
        RenderDocumentOutput; success=False when the JSON is malformed.
    """
    try:
        root = DocumentNode.from_dict(inp.document)
    except InvalidDocumentError as e:
        return RenderDocumentOutput(html="", errors=[_invalid(e)], success=False)

    config = _build_config(
        rules,
        wrap_in_article=inp.wrap_in_article,
        add_heading_ids=inp.add_heading_ids,
    )
    renderer = DocumentRenderer(config=config)

    tree = renderer.render(root)
    html = renderer.serialize(tree)

    return RenderDocumentOutput(
        html=html,
        tree=tree,
        headings=tuple(renderer.extract_headings(root)),
        warnings=find_unsupported_kinds(root),
        success=True,
    )


def run_validate(
    inp: ValidateDocumentInput,
    *,
    rules: RulesPort | None = None,
) -> ValidateDocumentOutput:
    """
    Validate a document.

    Unsupported kinds make a document invalid for authoring purposes even
    though it still renders.
    """
    errors = validate_document(inp.document)
    return ValidateDocumentOutput(
        is_valid=len(errors) == 0,
        errors=errors,
        success=True,
    )


def run_extract_text(
    inp: ExtractTextInput,
    *,
    rules: RulesPort | None = None,
) -> TextOutput:
    """Extract plain text from a document."""
    try:
        root = DocumentNode.from_dict(inp.document)
    except InvalidDocumentError as e:
        return TextOutput(text="", errors=[_invalid(e)], success=False)

    renderer = DocumentRenderer(config=_build_config(rules))
    return TextOutput(text=renderer.extract_text(root))


def run_extract_headings(
    inp: ExtractHeadingsInput,
    *,
    rules: RulesPort | None = None,
) -> HeadingsOutput:
    """Extract headings for a table of contents."""
    try:
        root = DocumentNode.from_dict(inp.document)
    except InvalidDocumentError as e:
        return HeadingsOutput(headings=(), errors=[_invalid(e)], success=False)

    renderer = DocumentRenderer(config=_build_config(rules))
    return HeadingsOutput(headings=tuple(renderer.extract_headings(root)))


def run(
    inp: RenderDocumentInput | ValidateDocumentInput | ExtractTextInput | ExtractHeadingsInput,
    *,
    rules: RulesPort | None = None,
) -> RenderDocumentOutput | ValidateDocumentOutput | TextOutput | HeadingsOutput:
    """
    Main entry point for the document component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RenderDocumentInput):
        return run_render(inp, rules=rules)
    elif isinstance(inp, ValidateDocumentInput):
        return run_validate(inp, rules=rules)
    elif isinstance(inp, ExtractTextInput):
        return run_extract_text(inp, rules=rules)
    elif isinstance(inp, ExtractHeadingsInput):
        return run_extract_headings(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
