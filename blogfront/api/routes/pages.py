"""
Server-rendered pages - feed, post, and authoring form.

Serves complete HTML pages with head metadata for crawlers and social
previews. Post bodies go through the document renderer.

Pages:
- GET /              feed with hero and "Page N of M" pagination
- GET /posts/{slug}  title, author, date, rendered body, back link
- GET /create-post   authoring form
- POST /create-post  validate, create and publish, re-render with a notice
"""

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import HTMLResponse

from blogfront.api.deps import get_content_source, get_page_meta_service, get_rules
from blogfront.components.page_meta import (
    CREATE_POST_PATH,
    PageMetadata,
    PageMetaService,
    format_published_date,
    post_path,
)
from blogfront.components.posts import (
    CreatePostInput,
    GetPostInput,
    ListPostsInput,
    PostFeedOutput,
    render_post_body,
    run_create,
    run_get,
    run_list,
)
from blogfront.domain.entities import PostSummary
from blogfront.ports.content_source import ContentSourcePort
from blogfront.rules.models import Rules, SiteRules

router = APIRouter()

CREATE_SUCCESS_MESSAGE = "Post created and published successfully!"

ERROR_STATUS = {
    "source_error": 502,
    "publish_failed": 502,
    "not_found": 404,
}


# --- HTML Rendering ---


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def render_meta_tags_html(metadata: PageMetadata) -> str:
    """Render PageMetadata to HTML meta tag string."""
    html_parts: list[str] = []

    html_parts.append(f"<title>{_escape_html(metadata.title)}</title>")

    for tag in metadata.to_meta_tags():
        if tag.property:
            html_parts.append(
                f'<meta property="{_escape_html(tag.property)}" '
                f'content="{_escape_html(tag.content)}" />'
            )
        elif tag.name:
            html_parts.append(
                f'<meta name="{_escape_html(tag.name)}" content="{_escape_html(tag.content)}" />'
            )

    html_parts.append(f'<link rel="canonical" href="{_escape_html(metadata.canonical_url)}" />')

    return "\n    ".join(html_parts)


def render_header(site: SiteRules) -> str:
    return f"""<header>
        <nav>
            <a href="/" class="brand">{_escape_html(site.title)}</a>
            <a href="/">Home</a>
            <a href="{CREATE_POST_PATH}">Create Post</a>
        </nav>
    </header>"""


def render_footer(site: SiteRules) -> str:
    return f"""<footer>
        <p>{_escape_html(site.title)}. All rights reserved.</p>
    </footer>"""


def render_ssr_page(metadata: PageMetadata, site: SiteRules, body_content: str = "") -> str:
    """
    Render complete SSR HTML page with metadata.

    Wraps the body in the shared header and footer.
    """
    meta_html = render_meta_tags_html(metadata)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    {meta_html}
</head>
<body>
    {render_header(site)}
    <main>
    {body_content}
    </main>
    {render_footer(site)}
</body>
</html>"""


def _render_message(message: str, kind: str = "error") -> str:
    role = "alert" if kind == "error" else "status"
    return f'<p class="{kind}" role="{role}">{_escape_html(message)}</p>'


def _render_post_card(post: PostSummary) -> str:
    href = _escape_html(post_path(post.slug))
    return f"""<article class="post-card">
            <h3><a href="{href}">{_escape_html(post.title)}</a></h3>
            <p>{_escape_html(post.excerpt)}</p>
            <a href="{href}">Read more &rarr;</a>
            <p class="date">{format_published_date(post.published_at)}</p>
        </article>"""


def render_pagination(feed: PostFeedOutput) -> str:
    """Previous/next controls, only when the feed spans more than one page."""
    if feed.total_pages <= 1:
        return ""

    previous = (
        f'<a href="/?page={feed.page - 1}" rel="prev">Previous</a>'
        if feed.has_previous
        else '<span class="disabled">Previous</span>'
    )
    following = (
        f'<a href="/?page={feed.page + 1}" rel="next">Next</a>'
        if feed.has_next
        else '<span class="disabled">Next</span>'
    )
    return f"""<nav class="pagination">
        {previous}
        <span>Page {feed.page} of {feed.total_pages}</span>
        {following}
    </nav>"""


def render_feed(feed: PostFeedOutput, site: SiteRules) -> str:
    hero = f"""<section class="hero">
        <h1>Welcome to the {_escape_html(site.title)}</h1>
        <p>{_escape_html(site.tagline)}</p>
        <a href="{CREATE_POST_PATH}">Start Writing</a>
    </section>"""

    if feed.notice:
        listing = _render_message(feed.notice, kind="notice")
    else:
        listing = "\n        ".join(_render_post_card(post) for post in feed.posts)

    return f"""{hero}
    <section class="feed">
        <h2>Latest Posts</h2>
        {listing}
    </section>
    {render_pagination(feed)}"""


def render_create_form(
    title: str = "",
    author: str = "",
    excerpt: str = "",
    body: str = "",
    error: str | None = None,
    notice: str | None = None,
) -> str:
    message = ""
    if error:
        message = _render_message(error)
    elif notice:
        message = _render_message(notice, kind="notice")

    return f"""<h1>Create and Publish a New Post</h1>
    <p>Fill out the form below to create a post. All fields are required.</p>
    {message}
    <form method="post" action="{CREATE_POST_PATH}">
        <label for="title">Title</label>
        <input id="title" name="title" type="text" placeholder="Enter your post title" value="{_escape_html(title)}" />
        <label for="author">Author</label>
        <input id="author" name="author" type="text" placeholder="Enter the author's name" value="{_escape_html(author)}" />
        <label for="excerpt">Excerpt</label>
        <textarea id="excerpt" name="excerpt" placeholder="Provide a short excerpt for the post">{_escape_html(excerpt)}</textarea>
        <label for="body">Body</label>
        <textarea id="body" name="body" placeholder="Write the full content of your post">{_escape_html(body)}</textarea>
        <button type="submit">Create Post</button>
    </form>"""


# --- Pages ---


@router.get("/", response_class=HTMLResponse, summary="Feed")
def feed_page(
    page: int = Query(1),
    source: ContentSourcePort = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
    meta: PageMetaService = Depends(get_page_meta_service),
) -> HTMLResponse:
    """Serve one page of the feed."""
    result = run_list(ListPostsInput(page=page), source=source, rules=rules)
    metadata = meta.build_home_metadata(page)

    if not result.success:
        error = result.errors[0]
        html = render_ssr_page(metadata, rules.site, _render_message(error.message))
        return HTMLResponse(content=html, status_code=ERROR_STATUS.get(error.code, 400))

    html = render_ssr_page(metadata, rules.site, render_feed(result, rules.site))
    return HTMLResponse(content=html, status_code=200)


@router.get("/posts/{slug}", response_class=HTMLResponse, summary="Post")
def post_page(
    slug: str,
    source: ContentSourcePort = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
    meta: PageMetaService = Depends(get_page_meta_service),
) -> HTMLResponse:
    """Serve a single post with its rendered body."""
    back_link = '<a href="/" class="back">Back to Posts</a>'
    result = run_get(GetPostInput(slug=slug), source=source)

    if not result.success or result.post is None:
        error = result.errors[0]
        metadata = meta.build_not_found_metadata(post_path(slug))
        body = f"{_render_message(error.message)}\n    {back_link}"
        html = render_ssr_page(metadata, rules.site, body)
        return HTMLResponse(content=html, status_code=ERROR_STATUS.get(error.code, 400))

    post = result.post
    metadata = meta.build_post_metadata(post)
    rendered = render_post_body(post, rules=rules)
    if not rendered.success:
        body = f"{_render_message('This post could not be displayed.')}\n    {back_link}"
        return HTMLResponse(content=render_ssr_page(metadata, rules.site, body), status_code=502)

    body = f"""<article class="post">
        <h1>{_escape_html(post.title)}</h1>
        <p class="byline">By {_escape_html(post.author)} &middot; {format_published_date(post.published_at)}</p>
        <div class="post-body">{rendered.html}</div>
    </article>
    {back_link}"""

    return HTMLResponse(content=render_ssr_page(metadata, rules.site, body), status_code=200)


@router.get(CREATE_POST_PATH, response_class=HTMLResponse, summary="Create post form")
def create_post_page(
    rules: Rules = Depends(get_rules),
    meta: PageMetaService = Depends(get_page_meta_service),
) -> HTMLResponse:
    """Serve the authoring form."""
    html = render_ssr_page(meta.build_create_post_metadata(), rules.site, render_create_form())
    return HTMLResponse(content=html, status_code=200)


@router.post(CREATE_POST_PATH, response_class=HTMLResponse, summary="Create and publish post")
def submit_post(
    title: str = Form(""),
    author: str = Form(""),
    excerpt: str = Form(""),
    body: str = Form(""),
    source: ContentSourcePort = Depends(get_content_source),
    rules: Rules = Depends(get_rules),
    meta: PageMetaService = Depends(get_page_meta_service),
) -> HTMLResponse:
    """
    Handle the authoring form.

    Errors re-render the form with the submitted values; success clears it.
    """
    metadata = meta.build_create_post_metadata()
    inp = CreatePostInput(title=title, author=author, excerpt=excerpt, body=body)
    result = run_create(inp, source=source, rules=rules)

    if not result.success or result.published is None:
        error = result.errors[0]
        form = render_create_form(title, author, excerpt, body, error=error.message)
        return HTMLResponse(
            content=render_ssr_page(metadata, rules.site, form),
            status_code=ERROR_STATUS.get(error.code, 400),
        )

    form = render_create_form(notice=CREATE_SUCCESS_MESSAGE)
    link = f'<a href="{_escape_html(post_path(result.published.slug))}">View your post</a>'
    return HTMLResponse(
        content=render_ssr_page(metadata, rules.site, f"{form}\n    {link}"),
        status_code=200,
    )
