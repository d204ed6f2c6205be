import argparse
import json
import logging
import os
import sys
from pathlib import Path

from blogfront.app_shell.config import StartupConfigError, create_content_source, validate_startup
from blogfront.components.document import RenderDocumentInput, run_render
from blogfront.components.page_meta import format_published_date
from blogfront.components.posts import ListPostsInput, run_list
from blogfront.rules.loader import load_rules
from blogfront.rules.models import Rules

logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_rules_path(args: argparse.Namespace) -> Path:
    return Path(args.rules or os.environ.get("BLOGFRONT_RULES_PATH", RULES_PATH))


def get_rules(args: argparse.Namespace, required: bool = True) -> Rules | None:
    path = get_rules_path(args)
    if not path.exists():
        if required:
            logger.error("Rules file %s not found.", path)
        return None
    return load_rules(path)


def read_document(source: str) -> object:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def handle_render(args: argparse.Namespace) -> int:
    try:
        document = read_document(args.file)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Could not read document %s: %s", args.file, e)
        return 1

    try:
        rules = get_rules(args, required=False)
    except ValueError as e:
        logger.error(str(e))
        return 1

    inp = RenderDocumentInput(
        document=document,
        wrap_in_article=True if args.wrap else None,
        add_heading_ids=False if args.no_heading_ids else None,
    )
    result = run_render(inp, rules=rules)
    if not result.success:
        for error in result.errors:
            logger.error("Invalid document: %s", error.message)
        return 1

    for warning in result.warnings:
        logger.warning(warning.message)
    print(result.html)
    return 0


def handle_posts(args: argparse.Namespace) -> int:
    try:
        rules = get_rules(args)
    except ValueError as e:
        logger.error(str(e))
        return 1
    if rules is None:
        return 1

    try:
        validate_startup(rules)
    except StartupConfigError as e:
        logger.error(str(e))
        return 1

    source = create_content_source(rules)
    try:
        result = run_list(ListPostsInput(page=args.page), source=source, rules=rules)
    finally:
        close = getattr(source, "close", None)
        if close is not None:
            close()

    if not result.success:
        for error in result.errors:
            logger.error(error.message)
        return 1

    if result.notice:
        print(result.notice)
    for post in result.posts:
        print(f"{post.slug}\t{post.title}\t{format_published_date(post.published_at)}")
    if result.total_pages > 1:
        print(f"Page {result.page} of {result.total_pages}")
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Blogfront CLI")
    parser.add_argument("--rules", help=f"Path to rules file (default: {RULES_PATH})")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # render
    render_parser = subparsers.add_parser("render", help="Render a rich text JSON document")
    render_parser.add_argument("file", help="Path to document JSON, or - for stdin")
    render_parser.add_argument("--wrap", action="store_true", help="Wrap output in <article>")
    render_parser.add_argument(
        "--no-heading-ids", action="store_true", help="Do not add id attributes to headings"
    )

    # posts
    posts_parser = subparsers.add_parser("posts", help="List a page of posts")
    posts_parser.add_argument("--page", type=int, default=1, help="Page number (1-based)")

    args = parser.parse_args(argv)

    if args.command == "render":
        return handle_render(args)
    elif args.command == "posts":
        return handle_posts(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())
