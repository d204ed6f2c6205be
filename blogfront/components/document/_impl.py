"""
Document renderer - rich text tree to presentation tree.

Walks a DocumentNode tree post-order and maps every node through the rule
registered for its kind in NODE_RENDERERS. Composite rules receive their
children already rendered and only wrap or lay them out.

Key behaviors:
- Links open in a new browsing context with noopener/noreferrer
- Images render as a figure, alt text falls back to "Image", title becomes
  a figcaption
- Videos render with controls, one source, and a captions track labelled
  with the title
- Text marks compose (bold + italic nest, neither overrides the other)
- Unknown kinds render their children in order inside a Fragment
- URLs with forbidden protocols degrade to a Fragment

Invariants:
- One output node per input node, carrying the input kind as source_kind
- Children keep their count and order
- No I/O, no logging, no mutation; only NODE_RENDERERS and the config are read
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from .nodes import (
    DOCUMENT,
    HEADING,
    IMAGE,
    LINK,
    MARKS,
    TEXT,
    VIDEO,
    DocumentNode,
)
from .presentation import (
    Element,
    Fragment,
    Outline,
    PresentationNode,
    Text,
    element,
    to_html,
)

# --- Configuration ---


@dataclass(frozen=True)
class RenderConfig:
    """Rendering configuration."""

    # Links
    link_target: str = "_blank"
    add_noopener: bool = True
    add_noreferrer: bool = True

    # Media
    image_width: int = 700
    image_height: int = 475
    image_loading: str = "lazy"  # lazy, eager
    image_alt_fallback: str = "Image"
    video_mime_type: str = "video/mp4"
    video_fallback_text: str = "Your browser does not support the video tag."

    # URL safety
    forbid_protocols: frozenset[str] = field(
        default_factory=lambda: frozenset(["javascript:", "data:", "vbscript:"])
    )

    # HTML output
    add_heading_ids: bool = True
    wrap_in_article: bool = False


DEFAULT_RENDER_CONFIG = RenderConfig()

Children = tuple[PresentationNode, ...]
Rule = Callable[[DocumentNode, Children, RenderConfig], PresentationNode]


# --- Helpers ---


def is_safe_url(url: str, config: RenderConfig = DEFAULT_RENDER_CONFIG) -> bool:
    """Check that a URL does not use a forbidden protocol."""
    # Browsers ignore embedded whitespace/control chars in the scheme
    compact = re.sub(r"[\x00-\x20]+", "", url).lower()
    return not any(compact.startswith(protocol) for protocol in config.forbid_protocols)


def build_link_rel(config: RenderConfig = DEFAULT_RENDER_CONFIG) -> str:
    """Build rel attribute value for links."""
    parts = []
    if config.add_noopener:
        parts.append("noopener")
    if config.add_noreferrer:
        parts.append("noreferrer")
    return " ".join(parts)


def slugify(text: str) -> str:
    """Create URL-safe slug from text."""
    slug = text.lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def extract_text(node: DocumentNode) -> str:
    """Extract plain text from a node tree."""
    if node.kind == TEXT:
        return node.text or ""
    return "".join(extract_text(child) for child in node.children)


def outline_document(node: DocumentNode) -> Outline:
    """Kind-only shape of a document tree."""
    return Outline(node.kind, tuple(outline_document(child) for child in node.children))


def _wrap(tag: str) -> Rule:
    """Rule that wraps rendered children in a single element."""

    def rule(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
        return Element(tag=tag, children=children, source_kind=node.kind)

    rule.__name__ = f"render_{tag}"
    return rule


# --- Node Renderers ---


def render_document(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render the root (or a transparent grouping node)."""
    return Fragment(children=children, source_kind=node.kind)


def render_text(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render a text leaf, nesting one wrapper per mark."""
    result: PresentationNode = Text(node.text or "")
    for mark in MARKS:
        if mark in node.marks:
            result = Element(tag=MARK_TAGS[mark], children=(result,))
    return replace(result, source_kind=TEXT)


def render_heading(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render a heading at its level."""
    heading_id = slugify(extract_text(node)) if config.add_heading_ids else ""
    return element(
        f"h{node.level}",
        children,
        source_kind=HEADING,
        id=heading_id or None,
    )


def render_link(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render an external link opening in a new browsing context."""
    href = node.attr("href", "")
    if not is_safe_url(href, config):
        # Keep the link text, drop the link
        return Fragment(children=children, source_kind=LINK)

    return element(
        "a",
        children,
        source_kind=LINK,
        href=href,
        target=config.link_target,
        rel=build_link_rel(config) or None,
        title=node.attr("title") or None,
    )


def render_image(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render an image as a figure with an optional caption."""
    src = node.attr("src", "")
    if not is_safe_url(src, config):
        return Fragment(source_kind=IMAGE)

    title = node.attr("title") or None
    img = element(
        "img",
        src=src,
        alt=node.attr("altText") or config.image_alt_fallback,
        title=title,
        width=str(config.image_width),
        height=str(config.image_height),
        loading=config.image_loading,
    )
    parts: Children = (img,)
    if title:
        parts += (Element(tag="figcaption", children=(Text(title),)),)
    return Element(tag="figure", children=parts, source_kind=IMAGE)


def render_video(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render a video player with controls and an optional captions track."""
    src = node.attr("src", "")
    if not is_safe_url(src, config):
        return Fragment(source_kind=VIDEO)

    title = node.attr("title") or None
    parts: Children = (element("source", src=src, type=config.video_mime_type),)
    if title:
        parts += (element("track", kind="captions", label=title),)
    parts += (Text(config.video_fallback_text),)

    video = element("video", parts, controls=True, aria_label=title)
    return Element(tag="div", children=(video,), source_kind=VIDEO)


def render_code_block(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render a preformatted code block."""
    code = Element(tag="code", children=children)
    return Element(tag="pre", children=(code,), source_kind=node.kind)


def render_fallback(node: DocumentNode, children: Children, config: RenderConfig) -> PresentationNode:
    """Render an unrecognised kind: keep children, add no markup."""
    return Fragment(children=children, source_kind=node.kind)


# --- Node Kind Dispatch ---

MARK_TAGS: dict[str, str] = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
    "code": "code",
}

NODE_RENDERERS: dict[str, Rule] = {
    DOCUMENT: render_document,
    "list-item-child": render_document,
    TEXT: render_text,
    "paragraph": _wrap("p"),
    HEADING: render_heading,
    "blockquote": _wrap("blockquote"),
    "bulleted-list": _wrap("ul"),
    "numbered-list": _wrap("ol"),
    "list-item": _wrap("li"),
    LINK: render_link,
    IMAGE: render_image,
    VIDEO: render_video,
    "table": _wrap("table"),
    "table-head": _wrap("thead"),
    "table-body": _wrap("tbody"),
    "table-row": _wrap("tr"),
    "table-header-cell": _wrap("th"),
    "table-cell": _wrap("td"),
    "bold": _wrap("strong"),
    "italic": _wrap("em"),
    "underline": _wrap("u"),
    "code": _wrap("code"),
    "code-block": render_code_block,
}


def render_node(
    node: DocumentNode,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> PresentationNode:
    """Render a node and its subtree (children first)."""
    children = tuple(render_node(child, config) for child in node.children)
    rule = NODE_RENDERERS.get(node.kind, render_fallback)
    return rule(node, children, config)


def serialize_html(tree: PresentationNode, config: RenderConfig = DEFAULT_RENDER_CONFIG) -> str:
    """Serialise a presentation tree, inside <article> when configured."""
    content = to_html(tree)
    if config.wrap_in_article:
        return f"<article>{content}</article>"
    return content


def render_html(
    node: DocumentNode,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
) -> str:
    """Render a node tree straight to an HTML string."""
    return serialize_html(render_node(node, config), config)


# --- Headings ---


@dataclass(frozen=True)
class HeadingInfo:
    """Heading metadata for a table of contents."""

    level: int
    text: str
    id: str


def extract_headings(node: DocumentNode) -> list[HeadingInfo]:
    """Collect headings in document order."""
    headings: list[HeadingInfo] = []
    _collect_headings(node, headings)
    return headings


def _collect_headings(node: DocumentNode, headings: list[HeadingInfo]) -> None:
    if node.kind == HEADING:
        text = extract_text(node)
        headings.append(HeadingInfo(level=node.level, text=text, id=slugify(text)))

    for child in node.children:
        _collect_headings(child, headings)


# --- Renderer Service ---


class DocumentRenderer:
    """
    Document renderer bound to one configuration.

    Stateless between calls; a single instance can be shared across threads.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or DEFAULT_RENDER_CONFIG

    @property
    def config(self) -> RenderConfig:
        return self._config

    def render(self, root: DocumentNode) -> PresentationNode:
        """Render a document tree to a presentation tree."""
        return render_node(root, self._config)

    def render_html(self, root: DocumentNode) -> str:
        """Render a document tree to HTML."""
        return render_html(root, self._config)

    def serialize(self, tree: PresentationNode) -> str:
        """Serialise an already rendered tree with this configuration."""
        return serialize_html(tree, self._config)

    def extract_text(self, root: DocumentNode) -> str:
        return extract_text(root)

    def extract_headings(self, root: DocumentNode) -> list[HeadingInfo]:
        return extract_headings(root)


def create_document_renderer(config: RenderConfig | None = None) -> DocumentRenderer:
    """Create a DocumentRenderer."""
    return DocumentRenderer(config=config)
