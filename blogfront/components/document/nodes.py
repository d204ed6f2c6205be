"""
Document tree model - typed nodes parsed from rich text JSON.

The content source delivers post bodies as Hygraph rich text JSON:

    {"children": [
        {"type": "paragraph", "children": [
            {"text": "Hello ", "bold": true},
            {"type": "link", "href": "https://x.io", "children": [{"text": "world"}]}
        ]}
    ]}

Key behaviors:
- The untyped root object parses to kind "document"
- Leaves carrying "text", untyped or typed "text", parse to kind "text" with
  mark flags
- Hygraph aliases (heading-one, block-quote, table_row, ...) normalise to
  canonical kinds
- Unrecognised kinds are kept as-is; rendering decides what to do with them

Invariants:
- Parsing never mutates its input
- Nodes are immutable once built
- Malformed input raises InvalidDocumentError naming the offending path
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# --- Kinds ---

DOCUMENT = "document"
TEXT = "text"
HEADING = "heading"
LINK = "link"
IMAGE = "image"
VIDEO = "video"

KNOWN_KINDS: frozenset[str] = frozenset(
    [
        DOCUMENT,
        TEXT,
        "paragraph",
        HEADING,
        "bulleted-list",
        "numbered-list",
        "list-item",
        "list-item-child",
        LINK,
        IMAGE,
        VIDEO,
        "blockquote",
        "table",
        "table-head",
        "table-body",
        "table-row",
        "table-header-cell",
        "table-cell",
        "bold",
        "italic",
        "underline",
        "code",
        "code-block",
    ]
)

# Inline mark flags on text leaves, innermost first when nested
MARKS: tuple[str, ...] = ("bold", "italic", "underline", "code")

KIND_ALIASES: dict[str, str] = {
    "block-quote": "blockquote",
    "table_head": "table-head",
    "table_body": "table-body",
    "table_row": "table-row",
    "table_header_cell": "table-header-cell",
    "table_cell": "table-cell",
    "code_block": "code-block",
}

HEADING_ALIASES: dict[str, int] = {
    "heading-one": 1,
    "heading-two": 2,
    "heading-three": 3,
    "heading-four": 4,
    "heading-five": 5,
    "heading-six": 6,
}

# Attributes that must be present (non-empty string) per kind
REQUIRED_URL_ATTR: dict[str, str] = {
    LINK: "href",
    IMAGE: "src",
    VIDEO: "src",
}


class InvalidDocumentError(ValueError):
    """Raised when rich text JSON is not a well-formed document tree."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(f"{message} (at {path})")
        self.path = path


# --- Node ---


@dataclass(frozen=True)
class DocumentNode:
    """
    A node in the document tree.

    Container kinds carry children; text leaves carry text and marks;
    everything else the wire format sent lives in attrs.
    """

    kind: str
    children: tuple[DocumentNode, ...] = ()
    attrs: dict[str, Any] = field(default_factory=dict)
    text: str | None = None
    marks: frozenset[str] = frozenset()

    @property
    def is_known(self) -> bool:
        return self.kind in KNOWN_KINDS

    @property
    def level(self) -> int:
        """Heading level (1 for non-heading kinds)."""
        level: int = self.attrs.get("level", 1)
        return level

    def attr(self, name: str, default: Any = None) -> Any:
        return self.attrs.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Convert back to rich text JSON using canonical kind names."""
        if self.kind == TEXT:
            leaf: dict[str, Any] = {"text": self.text or ""}
            for mark in MARKS:
                if mark in self.marks:
                    leaf[mark] = True
            return leaf

        result: dict[str, Any] = {}
        if self.kind != DOCUMENT:
            result["type"] = self.kind
        result.update(self.attrs)
        result["children"] = [child.to_dict() for child in self.children]
        return result

    @classmethod
    def from_dict(cls, data: Any) -> DocumentNode:
        """
        Parse rich text JSON into a document tree.

        Accepts the untyped root object, a bare list of top-level nodes, or
        any single typed node.

        Raises:
            InvalidDocumentError: If the input is not a well-formed tree.
        """
        if isinstance(data, list):
            data = {"children": data}
        return _parse_node(data, DOCUMENT, is_root=True)


# --- Parsing ---


def normalize_kind(raw_type: str) -> tuple[str, int | None]:
    """Map a wire type name to (canonical kind, heading level or None)."""
    if raw_type in HEADING_ALIASES:
        return HEADING, HEADING_ALIASES[raw_type]
    return KIND_ALIASES.get(raw_type, raw_type), None


def _parse_node(data: Any, path: str, *, is_root: bool = False) -> DocumentNode:
    if not isinstance(data, Mapping):
        raise InvalidDocumentError(
            f"Node must be an object, got {type(data).__name__}",
            path,
        )

    if "type" in data:
        if data["type"] == TEXT:
            return _parse_text(data, path)
        return _parse_element(data, path)

    if "text" in data:
        return _parse_text(data, path)

    if is_root:
        return DocumentNode(
            kind=DOCUMENT,
            children=_parse_children(data, path),
            attrs={k: v for k, v in data.items() if k != "children"},
        )

    raise InvalidDocumentError("Node has neither 'type' nor 'text'", path)


def _parse_text(data: Mapping[str, Any], path: str) -> DocumentNode:
    if "text" not in data:
        raise InvalidDocumentError("Text node requires 'text'", path)
    text = data["text"]
    if not isinstance(text, str):
        raise InvalidDocumentError(
            f"Text must be a string, got {type(text).__name__}",
            path,
        )
    marks = frozenset(mark for mark in MARKS if data.get(mark) is True)
    return DocumentNode(kind=TEXT, text=text, marks=marks)


def _parse_element(data: Mapping[str, Any], path: str) -> DocumentNode:
    raw_type = data["type"]
    if not isinstance(raw_type, str) or not raw_type:
        raise InvalidDocumentError("Node 'type' must be a non-empty string", path)

    kind, alias_level = normalize_kind(raw_type)
    attrs = {k: v for k, v in data.items() if k not in ("type", "children")}

    if kind == HEADING:
        level = alias_level if alias_level is not None else attrs.get("level")
        # bool is an int subclass; reject it explicitly
        if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 6:
            raise InvalidDocumentError(
                f"Heading level must be an integer from 1 to 6, got {level!r}",
                path,
            )
        attrs["level"] = level

    url_attr = REQUIRED_URL_ATTR.get(kind)
    if url_attr is not None:
        url = attrs.get(url_attr)
        if not isinstance(url, str) or not url.strip():
            raise InvalidDocumentError(
                f"'{kind}' node requires a non-empty '{url_attr}'",
                path,
            )

    return DocumentNode(
        kind=kind,
        children=_parse_children(data, path),
        attrs=attrs,
    )


def _parse_children(data: Mapping[str, Any], path: str) -> tuple[DocumentNode, ...]:
    children = data.get("children", [])
    if not isinstance(children, list):
        raise InvalidDocumentError(
            f"'children' must be a list, got {type(children).__name__}",
            path,
        )
    return tuple(
        _parse_node(child, f"{path}.children[{i}]") for i, child in enumerate(children)
    )
