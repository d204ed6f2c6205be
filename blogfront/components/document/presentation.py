"""
Presentation tree - the renderer's output.

Three node types:
- Element: an HTML element with ordered attributes and children
- Text: literal text
- Fragment: a neutral container that emits only its children

Every node the renderer produces for a document node carries that node's
kind in `source_kind`. Helper nodes a rule adds around or beside the content
(the <img> inside a <figure>, nested mark wrappers) leave it unset, which is
what `outline_presentation` relies on to project the output back onto the
input's shape.
"""

from __future__ import annotations

import html
from dataclasses import dataclass

AttrValue = str | bool

VOID_TAGS: frozenset[str] = frozenset(["img", "source", "track", "br", "hr"])


@dataclass(frozen=True, slots=True)
class Text:
    value: str
    source_kind: str | None = None

    @property
    def children(self) -> tuple[PresentationNode, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class Element:
    tag: str
    attrs: tuple[tuple[str, AttrValue], ...] = ()
    children: tuple[PresentationNode, ...] = ()
    source_kind: str | None = None

    def get(self, name: str, default: AttrValue | None = None) -> AttrValue | None:
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    @property
    def attributes(self) -> dict[str, AttrValue]:
        return dict(self.attrs)


@dataclass(frozen=True, slots=True)
class Fragment:
    children: tuple[PresentationNode, ...] = ()
    source_kind: str | None = None


PresentationNode = Element | Text | Fragment


@dataclass(frozen=True, slots=True)
class Outline:
    """Kind-only shape of a tree, comparable across input and output."""

    kind: str
    children: tuple[Outline, ...] = ()


def element(
    tag: str,
    children: tuple[PresentationNode, ...] = (),
    source_kind: str | None = None,
    **attrs: AttrValue | None,
) -> Element:
    """Build an Element, dropping attributes whose value is None or False."""
    pairs = tuple(
        (name.rstrip("_").replace("_", "-"), value)
        for name, value in attrs.items()
        if value is not None and value is not False
    )
    return Element(tag=tag, attrs=pairs, children=children, source_kind=source_kind)


# --- HTML Serialization ---


def to_html(node: PresentationNode) -> str:
    """Serialize a presentation tree to an HTML string."""
    parts: list[str] = []
    _write(node, parts)
    return "".join(parts)


def _write(node: PresentationNode, parts: list[str]) -> None:
    if isinstance(node, Text):
        parts.append(html.escape(node.value))
        return

    if isinstance(node, Fragment):
        for child in node.children:
            _write(child, parts)
        return

    attrs = "".join(_format_attr(name, value) for name, value in node.attrs)
    if node.tag in VOID_TAGS:
        parts.append(f"<{node.tag}{attrs} />")
        return

    parts.append(f"<{node.tag}{attrs}>")
    for child in node.children:
        _write(child, parts)
    parts.append(f"</{node.tag}>")


def _format_attr(name: str, value: AttrValue) -> str:
    if value is True:
        return f" {name}"
    return f' {name}="{html.escape(str(value))}"'


# --- Outline Projection ---


def outline_presentation(node: PresentationNode) -> Outline:
    """
    Project a rendered tree onto document kinds.

    Raises:
        ValueError: If the root was not produced for a document node.
    """
    if node.source_kind is None:
        raise ValueError("Root node was not produced from a document node")
    return Outline(node.source_kind, _outline_children(node))


def _outline_children(node: PresentationNode) -> tuple[Outline, ...]:
    result: list[Outline] = []
    for child in node.children:
        if child.source_kind is not None:
            result.append(Outline(child.source_kind, _outline_children(child)))
        else:
            result.extend(_outline_children(child))
    return tuple(result)
