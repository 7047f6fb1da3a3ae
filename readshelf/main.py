"""Command-line entrypoint for readshelf.

Each invocation runs one library operation for the signed-in user (given by
``--user`` or ``READSHELF_USER_ID``) and prints the result to stdout.
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Optional

from dotenv import load_dotenv

from .fetchers import fetch_page
from .library import AccessDeniedError, Library, LibraryError, NotFoundError
from .output.reader_formatter import (
    EXTRACTION_NOTE,
    format_article_card,
    format_feeds,
    format_library,
    format_reader_view,
)
from .processors import RelevanceError, title_indicates_failure
from .processors.ai import create_ai_client
from .storage import StoreError, create_store
from .utils.config_loader import ConfigError
from .utils.logging import configure_logging, get_logger
from .utils.settings import AppSettings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="readshelf",
        description="readshelf - a personal read-it-later archive with AI extraction",
    )
    parser.add_argument("--user", default=None, help="User id to act as (default: READSHELF_USER_ID)")
    parser.add_argument("--store", default=None, help="Path to the JSON store file (default: READSHELF_STORE_PATH)")
    parser.add_argument(
        "--backend",
        default=None,
        choices=["gemini", "ollama"],
        help="AI backend (default: PROCESSING_BACKEND or gemini)",
    )
    parser.add_argument(
        "--no-fetch",
        action="store_true",
        help="Do not download the page before extraction; the model only sees the URL",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL or WARNING)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p_add = sub.add_parser("add", help="Extract an article URL and save it")
    p_add.add_argument("url")
    p_add.add_argument("--tag", action="append", default=[], help="Tag to attach (repeatable)")

    sub.add_parser("list", help="List saved articles, newest first")

    p_read = sub.add_parser("read", help="Show the reader view of an article")
    p_read.add_argument("article_id")
    p_read.add_argument("--keep-unread", action="store_true", help="Do not mark the article as read")

    p_mark = sub.add_parser("mark-read", help="Mark an article as read")
    p_mark.add_argument("article_id")
    p_mark.add_argument("--unread", action="store_true", help="Mark as unread instead")

    p_tag = sub.add_parser("tag", help="Edit the tags of an article")
    p_tag.add_argument("article_id")
    p_tag.add_argument("--add", action="append", default=[], metavar="NAME")
    p_tag.add_argument("--remove", action="append", default=[], metavar="ID_OR_NAME")

    p_pred = sub.add_parser("predict", help="Predict article relevance from the reading profile")
    p_pred.add_argument("article_id")

    p_del = sub.add_parser("delete", help="Permanently delete an article")
    p_del.add_argument("article_id")
    p_del.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    p_feed = sub.add_parser("feed", help="Manage RSS feed subscriptions")
    feed_sub = p_feed.add_subparsers(dest="feed_command", required=True)
    p_feed_add = feed_sub.add_parser("add", help="Subscribe to a feed")
    p_feed_add.add_argument("name")
    p_feed_add.add_argument("url")
    feed_sub.add_parser("list", help="List feed subscriptions")
    p_feed_rm = feed_sub.add_parser("remove", help="Remove a feed subscription")
    p_feed_rm.add_argument("feed_id")
    p_feed_imp = feed_sub.add_parser("import", help="Import feeds from a YAML file")
    p_feed_imp.add_argument("path")

    p_prof = sub.add_parser("profile", help="Show or edit the reading profile")
    prof_sub = p_prof.add_subparsers(dest="profile_command", required=True)
    prof_sub.add_parser("show", help="Show the reading profile")
    p_prof_set = prof_sub.add_parser("set", help="Update the reading profile")
    p_prof_set.add_argument("--history", default=None, help="Reading interests / history summary")
    p_prof_set.add_argument("--name", default=None)
    p_prof_set.add_argument("--email", default=None)

    return parser.parse_args(argv)


def build_library(args: argparse.Namespace, settings: AppSettings) -> Library:
    store = create_store(backend=settings.store_backend, path=args.store or settings.store_path)
    fetch = settings.fetch_pages and not args.no_fetch
    return Library(
        store=store,
        user_id=args.user or settings.user_id,
        ai_factory=lambda: create_ai_client(backend=args.backend),
        page_fetcher=fetch_page if fetch else None,
        default_reading_history=settings.default_reading_history,
    )


def _cmd_add(lib: Library, args: argparse.Namespace) -> int:
    article = lib.add_article(args.url, tags=args.tag)
    print(format_article_card(article))
    if title_indicates_failure(article.title):
        print(f"\nNote: {EXTRACTION_NOTE}")
    return 0


def _cmd_list(lib: Library, args: argparse.Namespace) -> int:
    print(format_library(lib.list_articles()))
    return 0


def _cmd_read(lib: Library, args: argparse.Namespace) -> int:
    article = lib.get_article(args.article_id)
    print(format_reader_view(article))
    if not args.keep_unread and not article.is_read:
        lib.set_read(article.id, True)
    return 0


def _cmd_mark_read(lib: Library, args: argparse.Namespace) -> int:
    article = lib.set_read(args.article_id, not args.unread)
    print(f"{'Read' if article.is_read else 'Unread'}: {article.title}")
    return 0


def _cmd_tag(lib: Library, args: argparse.Namespace) -> int:
    article = lib.get_article(args.article_id)
    for name in args.add:
        article = lib.add_tag(article.id, name)
    for key in args.remove:
        article = lib.remove_tag(article.id, key)
    print(format_article_card(article))
    return 0


def _cmd_predict(lib: Library, args: argparse.Namespace) -> int:
    article = lib.predict_relevance(args.article_id)
    rel = article.ai_relevance
    print(f"Score: {rel.score:.2f} for \"{article.title}\"")
    if rel.reasoning:
        print(rel.reasoning)
    return 0


def _cmd_delete(lib: Library, args: argparse.Namespace) -> int:
    article = lib.get_article(args.article_id)
    if not args.yes:
        answer = input(f'Permanently delete "{article.title}"? This cannot be undone. [y/N] ')
        if answer.strip().lower() not in {"y", "yes"}:
            print("Cancelled.")
            return 0
    lib.delete_article(article.id)
    print(f'"{article.title}" has been removed from your library.')
    return 0


def _cmd_feed(lib: Library, args: argparse.Namespace) -> int:
    if args.feed_command == "add":
        feed = lib.add_feed(args.name, args.url)
        print(f'"{feed.name}" has been added.')
    elif args.feed_command == "list":
        print(format_feeds(lib.list_feeds()))
    elif args.feed_command == "remove":
        feed = lib.remove_feed(args.feed_id)
        print(f'"{feed.name}" has been removed.')
    elif args.feed_command == "import":
        added = lib.import_feeds(args.path)
        print(f"Imported {len(added)} feed(s).")
    return 0


def _cmd_profile(lib: Library, args: argparse.Namespace) -> int:
    if args.profile_command == "set":
        profile = lib.save_profile(reading_history=args.history, display_name=args.name, email=args.email)
    else:
        profile = lib.get_profile()
    print(f"Name: {profile.display_name or '-'}")
    print(f"Email: {profile.email or '-'}")
    print(f"Reading interests: {profile.reading_history}")
    return 0


COMMANDS: Dict[str, Callable[[Library, argparse.Namespace], int]] = {
    "add": _cmd_add,
    "list": _cmd_list,
    "read": _cmd_read,
    "mark-read": _cmd_mark_read,
    "tag": _cmd_tag,
    "predict": _cmd_predict,
    "delete": _cmd_delete,
    "feed": _cmd_feed,
    "profile": _cmd_profile,
}


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("rs.cli")

    settings = AppSettings()
    try:
        lib = build_library(args, settings)
        return COMMANDS[args.command](lib, args)
    except (NotFoundError, AccessDeniedError) as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except RelevanceError as exc:
        logger.error("Relevance prediction failed: %s", exc)
        print("Could not predict relevance for this article.", file=sys.stderr)
        return 1
    except (ValueError, ConfigError, StoreError, LibraryError) as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # noqa: BLE001
        logger.exception("Command '%s' failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
