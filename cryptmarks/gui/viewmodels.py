"""
GUI ViewModels — pure-Python state containers.

No Qt imports here; every class is testable without a display.
Qt widgets read these objects and redraw themselves after each change.

Public API
──────────
BookmarkListViewModel — bookmark list + filter + selection + status line
"""

import logging
from typing import Optional

from cryptmarks.service import Outcome
from cryptmarks.store.models import Bookmark

__all__ = ["BookmarkListViewModel"]

logger = logging.getLogger(__name__)


class BookmarkListViewModel:
    """
    Manages the bookmark table shown in the main window.

    Attributes
    ──────────
    bookmarks         — full collection, in stored order
    filter_text       — substring matched against url and description (case-insensitive)
    selected          — the highlighted Bookmark, or None
    status            — message of the most recent service Outcome
    visible_bookmarks — derived: bookmarks matching filter_text
    """

    def __init__(self) -> None:
        self.bookmarks:   list[Bookmark]     = []
        self.filter_text: str                = ""
        self.selected:    Optional[Bookmark] = None
        self.status:      str                = ""

    def load(self, bookmarks: list[Bookmark]) -> None:
        """Replace the list; keep the selection only if its url survived."""
        self.bookmarks = list(bookmarks)
        if self.selected is not None:
            self.selected = next(
                (b for b in self.bookmarks if b.url == self.selected.url), None
            )

    @property
    def visible_bookmarks(self) -> list[Bookmark]:
        if not self.filter_text:
            return list(self.bookmarks)
        q = self.filter_text.lower()
        return [
            b for b in self.bookmarks
            if q in b.url.lower() or q in (b.description or "").lower()
        ]

    def select(self, bookmark: Optional[Bookmark]) -> None:
        self.selected = bookmark

    def apply(self, outcome: Outcome) -> None:
        """Record the outcome message for the status line."""
        self.status = outcome.message
        if not outcome.ok:
            logger.debug("Outcome not ok: %s", outcome.message)
