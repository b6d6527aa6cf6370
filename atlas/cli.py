"""Command line entry points: run the server or inspect a dataset."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

import config
from atlas.configuration import DEFAULT_CONFIG
from atlas.errors import UnknownCategoryError, UnknownFamilyError
from atlas.session import ExplorerSession, LoadStatus
from types_models import ExplorerConfig

MAX_LISTED_TITLES = 20


def _config_from_args(args: argparse.Namespace) -> ExplorerConfig:
    cfg = DEFAULT_CONFIG.model_copy()
    if args.data_dir:
        cfg.data_dir = Path(args.data_dir)
    if args.base_url:
        cfg.data_base_url = args.base_url
    return cfg


def inspect_family(
    session: ExplorerSession,
    family: str,
    search_text: str = "",
    categories: Sequence[str] | None = None,
) -> int:
    """Load ``family``, apply the filters and print a summary.

    Returns a process exit code.
    """
    status = asyncio.run(session.load_family(family))
    if status is not LoadStatus.COMMITTED:
        print(f"❌ Could not load {family}: {session.last_error}")
        return 1

    if categories:
        session.select_no_categories()
        for token in categories:
            try:
                session.toggle_category(token, True)
            except UnknownCategoryError:
                print(f"⚠️ Unknown category ignored: {token}")
    session.set_search_text(search_text)

    print(f"📂 {family}: {len(session.points)} papers, {len(session.categories)} categories")
    print(f"   Categories: {', '.join(session.categories)}")
    print(f"🔍 Relevant: {session.relevant_count}")

    relevant = [p for p in session.points if p.relevant]
    for point in relevant[:MAX_LISTED_TITLES]:
        link = point.external_link or "-"
        print(f"• {point.title} [{link}]")
    if len(relevant) > MAX_LISTED_TITLES:
        print(f"• (+ {len(relevant) - MAX_LISTED_TITLES} more...)")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for the atlas explorer."""
    parser = argparse.ArgumentParser(
        description="Interactive UMAP bubble chart of paper embeddings"
    )
    _ = parser.add_argument("--data-dir", help="Directory holding the dataset JSON files")
    _ = parser.add_argument("--base-url", help="Fetch dataset files from this URL instead")
    _ = parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the web server")
    _ = serve.add_argument("--host", default=config.SERVER_HOST)
    _ = serve.add_argument("--port", type=int, default=config.SERVER_PORT)

    _ = subparsers.add_parser("families", help="List selectable category families")

    inspect_parser = subparsers.add_parser("inspect", help="Summarise one category family")
    _ = inspect_parser.add_argument("family", help="Category family token, e.g. Computer_Science")
    _ = inspect_parser.add_argument("--search", default="", help="Title search text")
    _ = inspect_parser.add_argument(
        "--category",
        action="append",
        dest="categories",
        help="Only keep this category (repeatable)",
    )

    args = parser.parse_args(list(argv) if argv is not None else None)

    cfg = _config_from_args(args)

    if args.command == "serve":
        import web_server

        web_server.main(host=args.host, port=args.port, config_obj=cfg)
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.command == "families":
        for family in cfg.families:
            marker = " (default)" if family == cfg.default_family else ""
            print(f"{family}{marker}")
        return

    session = ExplorerSession(cfg, navigate=None)
    try:
        code = inspect_family(session, args.family, args.search, args.categories)
    except UnknownFamilyError as exc:
        print(f"❌ Error: {exc}")
        code = 2
    sys.exit(code)


__all__ = ["inspect_family", "main"]
