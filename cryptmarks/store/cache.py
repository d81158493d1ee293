"""
BookmarkCache — the single in-process working copy of the collection.

Usage::

    cache = BookmarkCache(store)

    cache.add("https://example.com", "notes")   # loads lazily, then saves
    rec = cache.find("https://example.com")
    cache.edit(rec.url, "")                     # description becomes None
    cache.delete(rec.url)

    cache.reload()      # drop the working copy; next read decrypts again
    cache.shutdown()

Only get_all() on an unloaded cache touches the store for reading; every
other read is served from memory.  Each mutation is followed by flush(),
which rewrites the whole collection.  A failed flush keeps the mutation in
memory and the dirty flag set.
"""

import logging
from dataclasses import replace
from typing import Optional

from cryptmarks.exceptions import AlreadyExistsError, RecordNotFoundError
from cryptmarks.store.encrypted import EncryptedStore, LoadStatus
from cryptmarks.store.models import Bookmark, normalize_description

__all__ = ["BookmarkCache"]

logger = logging.getLogger(__name__)


class BookmarkCache:
    """
    Lazily-populated bookmark collection over an EncryptedStore.

    Attributes
    ──────────
    is_loaded    — True once get_all() has populated the working copy
    dirty        — True while mutations are not yet durably saved
    last_warning — warning from the last CORRUPT load, or None
    """

    def __init__(self, store: EncryptedStore) -> None:
        self._store = store
        self._bookmarks: Optional[list[Bookmark]] = None
        self._dirty = False
        self.last_warning: Optional[str] = None

    @property
    def store(self) -> EncryptedStore:
        return self._store

    @property
    def is_loaded(self) -> bool:
        return self._bookmarks is not None

    @property
    def dirty(self) -> bool:
        return self._dirty

    # ── Reads ─────────────────────────────────────────────────────────────

    def _working_copy(self) -> list[Bookmark]:
        if self._bookmarks is None:
            result = self._store.load()
            if result.status is LoadStatus.CORRUPT:
                self.last_warning = result.warning
            elif result.status is LoadStatus.NOT_FOUND:
                logger.info("No store at %s; starting empty", self._store.path)
            self._bookmarks = list(result.bookmarks)
        return self._bookmarks

    def get_all(self) -> list[Bookmark]:
        """Return the collection, decrypting the store on first use."""
        return list(self._working_copy())

    def find(self, url: str) -> Optional[Bookmark]:
        """Return the first bookmark whose url equals *url*, or None."""
        for bookmark in self._working_copy():
            if bookmark.url == url:
                return bookmark
        return None

    # ── Mutations ─────────────────────────────────────────────────────────

    def add(self, url: str, description: Optional[str] = None) -> Bookmark:
        """
        Append a new bookmark and save.

        Raises:
            AlreadyExistsError: *url* is already present (nothing changes).
            ValueError: *url* is empty.
        """
        if self.find(url) is not None:
            raise AlreadyExistsError(f"Bookmark already exists: {url}")
        bookmark = Bookmark(url=url, description=normalize_description(description))
        self._working_copy().append(bookmark)
        self._dirty = True
        self.flush()
        return bookmark

    def delete(self, url: str) -> None:
        """
        Remove every bookmark with *url* and save.

        Raises:
            RecordNotFoundError: no bookmark has *url*.
        """
        bookmarks = self._working_copy()
        if self.find(url) is None:
            raise RecordNotFoundError(f"No bookmark for {url}")
        bookmarks[:] = [b for b in bookmarks if b.url != url]
        self._dirty = True
        self.flush()

    def edit(self, url: str, description: Optional[str] = None) -> Bookmark:
        """
        Replace the description of the bookmark for *url* in place and save.

        Raises:
            RecordNotFoundError: no bookmark has *url*.
        """
        bookmarks = self._working_copy()
        for index, bookmark in enumerate(bookmarks):
            if bookmark.url == url:
                updated = replace(bookmark, description=normalize_description(description))
                bookmarks[index] = updated
                self._dirty = True
                self.flush()
                return updated
        raise RecordNotFoundError(f"No bookmark for {url}")

    # ── Persistence / lifecycle ───────────────────────────────────────────

    def flush(self) -> None:
        """Save the full working copy if dirty; store errors propagate."""
        if not self._dirty or self._bookmarks is None:
            return
        self._store.save(self._bookmarks)
        self._dirty = False
        # the file on disk is valid again
        self.last_warning = None

    def reload(self) -> None:
        """Discard the working copy without saving; the next read re-decrypts."""
        if self._dirty:
            logger.warning("Discarding unsaved bookmark changes")
        self._bookmarks = None
        self._dirty = False
        self.last_warning = None

    def shutdown(self) -> None:
        """Flush pending changes, then release the working copy."""
        self.flush()
        self._bookmarks = None
        self.last_warning = None
