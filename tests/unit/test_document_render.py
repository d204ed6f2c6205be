"""
Tests for the document renderer.

Covers:
- Output shape mirrors input shape (outline projection)
- Deterministic output
- Image alt fallback and figcaption
- Video captions track
- Mark composition
- Passthrough for unsupported kinds
- Forbidden URL protocols
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from blogfront.components.document import (
    DEFAULT_RENDER_CONFIG,
    NODE_RENDERERS,
    DocumentNode,
    DocumentRenderer,
    Element,
    Fragment,
    InvalidDocumentError,
    RenderConfig,
    Text,
    build_link_rel,
    extract_headings,
    extract_text,
    is_safe_url,
    outline_document,
    outline_presentation,
    render_html,
    render_node,
    slugify,
    to_html,
)

# --- Helpers ---


def render(data: Any, config: RenderConfig = DEFAULT_RENDER_CONFIG) -> str:
    return render_html(DocumentNode.from_dict(data), config)


def doc(*children: dict[str, Any]) -> dict[str, Any]:
    return {"children": list(children)}


def para(*children: dict[str, Any]) -> dict[str, Any]:
    return {"type": "paragraph", "children": list(children)}


@pytest.fixture
def rich_document() -> dict[str, Any]:
    """Document touching most node kinds."""
    return doc(
        {"type": "heading-one", "children": [{"text": "Getting Started"}]},
        para(
            {"text": "Plain "},
            {"text": "both", "bold": True, "italic": True},
            {"type": "link", "href": "https://x.io", "children": [{"text": "a link"}]},
        ),
        {
            "type": "bulleted-list",
            "children": [
                {
                    "type": "list-item",
                    "children": [
                        {"type": "list-item-child", "children": [{"text": "one"}]},
                    ],
                },
                {
                    "type": "list-item",
                    "children": [
                        {"type": "list-item-child", "children": [{"text": "two"}]},
                    ],
                },
            ],
        },
        {"type": "image", "src": "https://img.example/cat.png", "title": "cat", "children": []},
        {"type": "video", "src": "https://vid.example/v.mp4", "title": "Demo", "children": []},
        {"type": "footnote", "children": [{"text": "note"}]},
        {
            "type": "table",
            "children": [
                {
                    "type": "table_head",
                    "children": [
                        {
                            "type": "table_row",
                            "children": [
                                {"type": "table_header_cell", "children": [para({"text": "H"})]}
                            ],
                        }
                    ],
                },
                {
                    "type": "table_body",
                    "children": [
                        {
                            "type": "table_row",
                            "children": [{"type": "table_cell", "children": [para({"text": "C"})]}],
                        }
                    ],
                },
            ],
        },
        {"type": "code-block", "children": [{"text": "x = 1"}]},
    )


# --- End-to-end ---


class TestRenderHtml:
    """Tests for complete document rendering."""

    def test_bold_text_then_link(self, hello_document: dict[str, Any]) -> None:
        """Paragraph with bold text followed by an external link."""
        assert render(hello_document) == (
            "<p><strong>Hello </strong>"
            '<a href="https://x.io" target="_blank" rel="noopener noreferrer">world</a></p>'
        )

    def test_plain_text_then_link(self) -> None:
        """Paragraph with plain text followed by a link around plain text."""
        data = para({"text": "Hello "}, {"type": "link", "href": "https://x.io", "children": [{"text": "world"}]})
        assert render(data) == (
            '<p>Hello <a href="https://x.io" target="_blank" rel="noopener noreferrer">world</a></p>'
        )

    def test_typed_text_leaves(self) -> None:
        """Leaves written with an explicit "text" type keep their text and marks."""
        data = para(
            {"type": "text", "text": "Hello "},
            {
                "type": "link",
                "href": "https://x.io",
                "children": [{"type": "text", "text": "world", "bold": True}],
            },
        )
        assert render(doc(data)) == (
            "<p>Hello "
            '<a href="https://x.io" target="_blank" rel="noopener noreferrer">'
            "<strong>world</strong></a></p>"
        )

    def test_typed_text_requires_text(self) -> None:
        """A typed text leaf without text is malformed, never silently empty."""
        with pytest.raises(InvalidDocumentError) as exc_info:
            DocumentNode.from_dict(doc(para({"type": "text", "bold": True})))
        assert exc_info.value.path == "document.children[0].children[0]"

    def test_empty_document(self) -> None:
        """Empty document renders to empty string."""
        assert render(doc()) == ""

    def test_text_is_escaped(self) -> None:
        """Text content never becomes markup."""
        assert render(doc(para({"text": "<script>&"}))) == "<p>&lt;script&gt;&amp;</p>"

    def test_wrap_in_article(self) -> None:
        """Config can wrap output in an article element."""
        config = RenderConfig(wrap_in_article=True)
        assert render(doc(para({"text": "x"})), config) == "<article><p>x</p></article>"

    def test_lists(self) -> None:
        """List items keep their order; list-item-child adds no markup."""
        data = doc(
            {
                "type": "numbered-list",
                "children": [
                    {"type": "list-item", "children": [{"text": "first"}]},
                    {
                        "type": "list-item",
                        "children": [{"type": "list-item-child", "children": [{"text": "second"}]}],
                    },
                ],
            }
        )
        assert render(data) == "<ol><li>first</li><li>second</li></ol>"

    def test_blockquote_alias(self) -> None:
        """block-quote renders as blockquote."""
        data = doc({"type": "block-quote", "children": [{"text": "quoted"}]})
        assert render(data) == "<blockquote>quoted</blockquote>"

    def test_table(self) -> None:
        """Tables render with head and body sections."""
        data = doc(
            {
                "type": "table",
                "children": [
                    {
                        "type": "table_head",
                        "children": [
                            {
                                "type": "table_row",
                                "children": [
                                    {"type": "table_header_cell", "children": [{"text": "H"}]}
                                ],
                            }
                        ],
                    },
                    {
                        "type": "table_body",
                        "children": [
                            {
                                "type": "table_row",
                                "children": [{"type": "table_cell", "children": [{"text": "C"}]}],
                            }
                        ],
                    },
                ],
            }
        )
        assert render(data) == (
            "<table><thead><tr><th>H</th></tr></thead><tbody><tr><td>C</td></tr></tbody></table>"
        )

    def test_code_block(self) -> None:
        """Code blocks render as pre > code."""
        data = doc({"type": "code-block", "children": [{"text": "a < b"}]})
        assert render(data) == "<pre><code>a &lt; b</code></pre>"


# --- Shape ---


class TestShapePreservation:
    """Output shape mirrors input shape."""

    def test_outline_matches_input(self, rich_document: dict[str, Any]) -> None:
        """Every input node maps to exactly one output node, in order."""
        root = DocumentNode.from_dict(rich_document)
        tree = render_node(root)
        assert outline_presentation(tree) == outline_document(root)

    def test_outline_matches_for_marked_text(self) -> None:
        """Mark wrappers do not add nodes to the outline."""
        root = DocumentNode.from_dict(
            doc(para({"text": "all", "bold": True, "italic": True, "underline": True, "code": True}))
        )
        assert outline_presentation(render_node(root)) == outline_document(root)

    def test_every_output_root_carries_source_kind(self, rich_document: dict[str, Any]) -> None:
        """Top-level output nodes are tagged with the input kind."""
        root = DocumentNode.from_dict(rich_document)
        tree = render_node(root)
        assert [child.source_kind for child in tree.children] == [
            child.kind for child in root.children
        ]

    def test_outline_rejects_untagged_root(self) -> None:
        """An arbitrary presentation node cannot be projected."""
        with pytest.raises(ValueError):
            outline_presentation(Element(tag="div"))


class TestDeterminism:
    """Same input, same output."""

    def test_render_twice_is_identical(self, rich_document: dict[str, Any]) -> None:
        """Two renders produce equal trees and equal HTML."""
        root = DocumentNode.from_dict(rich_document)
        assert render_node(root) == render_node(root)
        assert render_html(root) == render_html(root)

    def test_render_does_not_mutate_input(self, rich_document: dict[str, Any]) -> None:
        """Parsing and rendering leave the input JSON untouched."""
        before = copy.deepcopy(rich_document)
        render(rich_document)
        assert rich_document == before


# --- Media ---


class TestImage:
    """Tests for image rendering."""

    def test_alt_defaults_to_image(self) -> None:
        """Missing altText falls back to "Image"; no caption without a title."""
        data = doc({"type": "image", "src": "https://img.example/a.png", "children": []})
        assert render(data) == (
            '<figure><img src="https://img.example/a.png" alt="Image" '
            'width="700" height="475" loading="lazy" /></figure>'
        )

    def test_alt_and_caption_from_node(self) -> None:
        """altText becomes alt and title becomes a figcaption."""
        data = doc(
            {
                "type": "image",
                "src": "https://img.example/cat.png",
                "altText": "cat",
                "title": "cat",
                "children": [],
            }
        )
        html = render(data)
        assert 'alt="cat"' in html
        assert "<figcaption>cat</figcaption>" in html

    def test_configured_dimensions(self) -> None:
        """Width and height come from config."""
        config = RenderConfig(image_width=320, image_height=200, image_loading="eager")
        data = doc({"type": "image", "src": "https://img.example/a.png", "children": []})
        html = render(data, config)
        assert 'width="320"' in html
        assert 'height="200"' in html
        assert 'loading="eager"' in html

    def test_unsafe_src_renders_nothing(self) -> None:
        """An image with a forbidden protocol is dropped."""
        data = doc({"type": "image", "src": "javascript:alert(1)", "children": []})
        assert render(data) == ""


class TestVideo:
    """Tests for video rendering."""

    def test_video_with_title(self) -> None:
        """Titled video gets a captions track labelled with the title."""
        data = doc({"type": "video", "src": "https://vid.example/v.mp4", "title": "Demo", "children": []})
        assert render(data) == (
            '<div><video controls aria-label="Demo">'
            '<source src="https://vid.example/v.mp4" type="video/mp4" />'
            '<track kind="captions" label="Demo" />'
            "Your browser does not support the video tag.</video></div>"
        )

    def test_video_without_title_has_no_track(self) -> None:
        """No title, no captions track."""
        data = doc({"type": "video", "src": "https://vid.example/v.mp4", "children": []})
        html = render(data)
        assert "<track" not in html
        assert "aria-label" not in html
        assert "<video controls>" in html

    def test_video_mime_type_from_config(self) -> None:
        """Source type comes from config."""
        config = RenderConfig(video_mime_type="video/webm")
        data = doc({"type": "video", "src": "https://vid.example/v.webm", "children": []})
        assert 'type="video/webm"' in render(data, config)


# --- Text and marks ---


class TestMarks:
    """Tests for inline marks on text leaves."""

    def test_bold_and_italic_compose(self) -> None:
        """Both marks apply; neither overrides the other."""
        html = render(doc(para({"text": "hi", "bold": True, "italic": True})))
        assert html == "<p><em><strong>hi</strong></em></p>"

    @pytest.mark.parametrize(
        "mark,tag",
        [("bold", "strong"), ("italic", "em"), ("underline", "u"), ("code", "code")],
    )
    def test_single_mark(self, mark: str, tag: str) -> None:
        """Each mark maps to its tag."""
        assert render(doc(para({"text": "x", mark: True}))) == f"<p><{tag}>x</{tag}></p>"

    def test_false_flags_ignored(self) -> None:
        """Only true flags count as marks."""
        assert render(doc(para({"text": "x", "bold": False}))) == "<p>x</p>"

    def test_mark_element_kinds(self) -> None:
        """bold/italic as element kinds wrap their children."""
        data = doc(para({"type": "bold", "children": [{"type": "italic", "children": [{"text": "x"}]}]}))
        assert render(data) == "<p><strong><em>x</em></strong></p>"


# --- Links ---


class TestLinks:
    """Tests for link rendering and URL safety."""

    def test_link_title(self) -> None:
        """Optional title attribute is kept."""
        data = doc(para({"type": "link", "href": "https://x.io", "title": "X", "children": [{"text": "x"}]}))
        assert 'title="X"' in render(data)

    def test_unsafe_href_keeps_text(self) -> None:
        """A javascript: link loses its anchor but keeps its text."""
        data = doc(para({"type": "link", "href": "javascript:alert(1)", "children": [{"text": "click"}]}))
        assert render(data) == "<p>click</p>"

    def test_rel_follows_config(self) -> None:
        """rel is built from config flags and dropped when empty."""
        config = RenderConfig(add_noopener=False, add_noreferrer=False, link_target="_self")
        data = doc(para({"type": "link", "href": "https://x.io", "children": [{"text": "x"}]}))
        assert render(data, config) == '<p><a href="https://x.io" target="_self">x</a></p>'

    def test_href_is_escaped(self) -> None:
        """Quotes in URLs cannot break out of the attribute."""
        data = doc(para({"type": "link", "href": 'https://x.io/"a', "children": [{"text": "x"}]}))
        assert 'href="https://x.io/&quot;a"' in render(data)

    @pytest.mark.parametrize(
        "url,safe",
        [
            ("https://example.com", True),
            ("/relative/path", True),
            ("mailto:a@example.com", True),
            ("javascript:alert(1)", False),
            ("JavaScript:alert(1)", False),
            (" java\tscript:alert(1)", False),
            ("data:text/html,x", False),
            ("vbscript:msgbox", False),
        ],
    )
    def test_is_safe_url(self, url: str, safe: bool) -> None:
        """Forbidden protocols are detected regardless of case and whitespace."""
        assert is_safe_url(url) is safe

    def test_build_link_rel(self) -> None:
        """Default rel is noopener noreferrer."""
        assert build_link_rel() == "noopener noreferrer"
        assert build_link_rel(RenderConfig(add_noreferrer=False)) == "noopener"


# --- Headings ---


class TestHeadings:
    """Tests for heading rendering and extraction."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level: int) -> None:
        """Heading level selects the tag."""
        data = doc({"type": "heading", "level": level, "children": [{"text": "Title"}]})
        assert render(data) == f'<h{level} id="title">Title</h{level}>'

    def test_heading_alias(self) -> None:
        """heading-two aliases to level 2 with a slug id."""
        data = doc({"type": "heading-two", "children": [{"text": "Getting Started"}]})
        assert render(data) == '<h2 id="getting-started">Getting Started</h2>'

    def test_heading_ids_disabled(self) -> None:
        """No id attribute when disabled."""
        data = doc({"type": "heading-two", "children": [{"text": "Getting Started"}]})
        assert render(data, RenderConfig(add_heading_ids=False)) == "<h2>Getting Started</h2>"

    def test_extract_headings(self, rich_document: dict[str, Any]) -> None:
        """Headings are collected in document order."""
        headings = extract_headings(DocumentNode.from_dict(rich_document))
        assert [(h.level, h.text, h.id) for h in headings] == [
            (1, "Getting Started", "getting-started")
        ]

    def test_slugify(self) -> None:
        """Slugs are lowercase with hyphens."""
        assert slugify("  Hello   World! ") == "hello-world"
        assert slugify("a -- b") == "a-b"


# --- Fallback ---


class TestFallback:
    """Unsupported kinds render their children without markup."""

    def test_unknown_kind_passthrough(self) -> None:
        """A footnote keeps its text, adds no element."""
        data = doc(para({"text": "a"}, {"type": "footnote", "children": [{"text": "b"}]}))
        assert render(data) == "<p>ab</p>"

    def test_unknown_kind_output_node(self) -> None:
        """The passthrough node is a Fragment tagged with the unknown kind."""
        root = DocumentNode.from_dict(doc({"type": "footnote", "children": [{"text": "b"}]}))
        tree = render_node(root)
        assert tree.children == (Fragment(children=(Text("b", source_kind="text"),), source_kind="footnote"),)

    def test_unknown_kind_keeps_children_in_order(self) -> None:
        """Both children of a footnote survive, in order, inside one Fragment."""
        root = DocumentNode.from_dict(doc({"type": "footnote", "children": [{"text": "a"}, {"text": "b"}]}))
        tree = render_node(root)
        assert to_html(tree) == "ab"
        (fragment,) = tree.children
        assert isinstance(fragment, Fragment)
        assert fragment.source_kind == "footnote"
        assert fragment.children == (Text("a", source_kind="text"), Text("b", source_kind="text"))

    def test_registry_covers_known_kinds(self) -> None:
        """Every registered kind renders something for an empty node."""
        for kind in NODE_RENDERERS:
            if kind in ("link", "image", "video", "heading", "text"):
                continue
            node = DocumentNode(kind=kind)
            assert render_node(node).source_kind == kind


# --- Renderer service ---


class TestDocumentRenderer:
    """Tests for the configured renderer object."""

    def test_renderer_uses_its_config(self, hello_document: dict[str, Any]) -> None:
        """render_html honours the bound config."""
        renderer = DocumentRenderer(RenderConfig(wrap_in_article=True))
        root = DocumentNode.from_dict(hello_document)
        assert renderer.render_html(root).startswith("<article><p>")
        assert to_html(renderer.render(root)).startswith("<p>")

    def test_extract_text(self, hello_document: dict[str, Any]) -> None:
        """Plain text joins leaves in order."""
        assert extract_text(DocumentNode.from_dict(hello_document)) == "Hello world"
