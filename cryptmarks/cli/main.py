"""
CLI entry point for cryptmarks.

Usage
─────
  # Create an empty encrypted store (no-op if it already exists)
  python -m cryptmarks init --recipient me@example.com

  # Add, annotate and remove bookmarks
  python -m cryptmarks add https://example.com -d "reading list"
  python -m cryptmarks edit https://example.com -d ""
  python -m cryptmarks delete https://example.com

  # Show the collection
  python -m cryptmarks list
  python -m cryptmarks urls          # one url per line, for fzf / dmenu

  # Desktop window
  python -m cryptmarks gui

Subcommands are implemented as standalone functions (cmd_init, cmd_list, …)
that take a BookmarkService, so they can be unit-tested without argparse.
"""

import argparse
import dataclasses
import getpass
import logging
import sys
from typing import Optional

from cryptmarks.config import PROVIDERS, StoreConfig
from cryptmarks.exceptions import ConfigError, DecryptionFailedError
from cryptmarks.service import BookmarkService, Outcome, open_service

__all__ = [
    "build_parser",
    "cmd_init",
    "cmd_list",
    "cmd_add",
    "cmd_delete",
    "cmd_edit",
    "cmd_urls",
    "main",
]

logger = logging.getLogger(__name__)

EXIT_OK     = 0
EXIT_FAILED = 1
EXIT_FATAL  = 2


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: init | list | add | delete | edit | urls | gui
    """
    parser = argparse.ArgumentParser(
        prog="cryptmarks",
        description="Encrypted bookmark store, safe to commit to a public repository",
    )
    parser.add_argument(
        "--file",
        default=None,
        metavar="PATH",
        help="Encrypted store path (default: $CRYPTMARKS_FILE or ~/.bookmarks.json.gpg)",
    )
    parser.add_argument(
        "--provider",
        choices=list(PROVIDERS),
        default=None,
        help="Encryption provider (default: $CRYPTMARKS_PROVIDER or gpg)",
    )
    parser.add_argument(
        "--recipient",
        action="append",
        default=None,
        metavar="KEYID",
        help="GPG recipient; repeatable (default: symmetric gpg)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    sub.add_parser("init", help="Create an empty encrypted store if none exists")
    sub.add_parser("list", help="List bookmarks with descriptions")
    sub.add_parser("urls", help="Print bookmarked urls, one per line")
    sub.add_parser("gui", help="Open the bookmark window")

    # ── add ───────────────────────────────────────────────────────────────
    add = sub.add_parser("add", help="Add a bookmark")
    add.add_argument("url", metavar="URL")
    add.add_argument(
        "-d", "--description",
        default=None,
        metavar="TEXT",
        help="Optional description",
    )

    # ── delete ────────────────────────────────────────────────────────────
    rm = sub.add_parser("delete", help="Delete a bookmark")
    rm.add_argument("url", metavar="URL")

    # ── edit ──────────────────────────────────────────────────────────────
    edit = sub.add_parser("edit", help="Replace a bookmark's description")
    edit.add_argument("url", metavar="URL")
    edit.add_argument(
        "-d", "--description",
        default=None,
        metavar="TEXT",
        help="New description; omit or pass \"\" to clear it",
    )

    return parser


# ── Helpers ───────────────────────────────────────────────────────────────────


def _config_from_args(ns: argparse.Namespace) -> StoreConfig:
    """Environment config with CLI flags layered on top."""
    config = StoreConfig.from_env()
    overrides = {}
    if ns.file:
        overrides["path"] = ns.file
    if ns.provider:
        overrides["provider"] = ns.provider
    if ns.recipient:
        overrides["recipients"] = tuple(ns.recipient)
    return dataclasses.replace(config, **overrides)


def _prompt_passphrase() -> str:
    return getpass.getpass("Bookmark passphrase: ")


def _report(outcome: Outcome) -> int:
    stream = sys.stdout if outcome.ok else sys.stderr
    print(outcome.message, file=stream)
    return EXIT_OK if outcome.ok else EXIT_FAILED


# ── Command implementations ───────────────────────────────────────────────────


def cmd_init(service: BookmarkService) -> int:
    """Create the store if absent."""
    return _report(service.initialize_if_absent())


def cmd_list(service: BookmarkService) -> int:
    """Print bookmarks in stored order, then the summary line."""
    outcome = service.list_bookmarks()
    for bm in outcome.bookmarks:
        if bm.description:
            print(f"{bm.url:<50} {bm.description}")
        else:
            print(bm.url)
    return _report(outcome)


def cmd_urls(service: BookmarkService) -> int:
    """Print only the urls, for piping into a selector."""
    outcome = service.list_bookmarks()
    if not outcome.ok:
        return _report(outcome)
    for url in service.find_for_selection():
        print(url)
    return EXIT_OK


def cmd_add(service: BookmarkService, url: str, description: Optional[str]) -> int:
    return _report(service.add_bookmark(url, description))


def cmd_delete(service: BookmarkService, url: str) -> int:
    return _report(service.delete_bookmark(url))


def cmd_edit(service: BookmarkService, url: str, description: Optional[str]) -> int:
    return _report(service.edit_description(url, description))


def cmd_gui(service: BookmarkService) -> int:
    """Run the PyQt6 window until it is closed."""
    from PyQt6.QtWidgets import QApplication
    from cryptmarks.gui.main_window import MainWindow

    app = QApplication.instance() or QApplication(sys.argv)
    win = MainWindow(service)
    win.show()
    return app.exec()


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return EXIT_OK

    try:
        service = open_service(_config_from_args(ns), passphrase_prompt=_prompt_passphrase)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FATAL

    commands = {
        "init":   lambda: cmd_init(service),
        "list":   lambda: cmd_list(service),
        "urls":   lambda: cmd_urls(service),
        "gui":    lambda: cmd_gui(service),
        "add":    lambda: cmd_add(service, ns.url, ns.description),
        "delete": lambda: cmd_delete(service, ns.url),
        "edit":   lambda: cmd_edit(service, ns.url, ns.description),
    }
    try:
        return commands[ns.subcommand]()
    except DecryptionFailedError as exc:
        logger.debug("decryption failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FATAL


if __name__ == "__main__":
    raise SystemExit(main())
