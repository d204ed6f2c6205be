"""
Document validation - report problems without failing.

Rendering never fails on an unsupported kind, so this pass exists to tell
editors and API callers which parts of a document fell back to passthrough
rendering, and whether the document could be parsed at all.

Error codes:
- invalid_input: the JSON is not a well-formed tree (rendering impossible)
- unsupported_kind: a node kind with no rendering rule (rendered as passthrough)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .nodes import DOCUMENT, DocumentNode, InvalidDocumentError


@dataclass(frozen=True)
class DocumentValidationError:
    """Document validation error."""

    code: str
    message: str
    path: str | None = None


def find_unsupported_kinds(root: DocumentNode) -> list[DocumentValidationError]:
    """List every node whose kind has no rendering rule."""
    errors: list[DocumentValidationError] = []

    def visit(node: DocumentNode, path: str) -> None:
        if not node.is_known:
            errors.append(
                DocumentValidationError(
                    code="unsupported_kind",
                    message=f"Node kind '{node.kind}' has no rendering rule; children kept",
                    path=path,
                )
            )
        for i, child in enumerate(node.children):
            visit(child, f"{path}.children[{i}]")

    visit(root, DOCUMENT)
    return errors


def validate_document(data: Any) -> list[DocumentValidationError]:
    """
    Validate rich text JSON.

    Returns an empty list for a fully supported, well-formed document.
    """
    try:
        root = DocumentNode.from_dict(data)
    except InvalidDocumentError as e:
        return [DocumentValidationError(code="invalid_input", message=str(e), path=e.path)]

    return find_unsupported_kinds(root)
