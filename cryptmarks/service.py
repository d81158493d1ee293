"""
BookmarkService — the CRUD surface the CLI and GUI call into.

Every method maps its result to one short, human-readable Outcome.
Record-level errors and save failures become ok=False outcomes;
DecryptionFailedError is deliberately not caught and reaches the
front-end as a hard stop.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from cryptmarks.config import StoreConfig
from cryptmarks.exceptions import (
    AlreadyExistsError,
    EncryptionFailedError,
    RecordNotFoundError,
    StoreError,
)
from cryptmarks.store.cache import BookmarkCache
from cryptmarks.store.encrypted import EncryptedStore
from cryptmarks.store.models import Bookmark

__all__ = ["Outcome", "BookmarkService", "open_service"]

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """
    Result of one service call.

    ok        — False for user-facing no-ops and failed saves
    message   — one line suitable for a status bar or stdout
    bookmarks — collection snapshot (list_bookmarks only)
    """
    ok:        bool
    message:   str
    bookmarks: list[Bookmark] = field(default_factory=list)

    def __str__(self) -> str:
        return self.message


class BookmarkService:
    """Owns a BookmarkCache and exposes bookmark CRUD as Outcomes."""

    def __init__(self, cache: BookmarkCache) -> None:
        self._cache = cache

    @property
    def cache(self) -> BookmarkCache:
        return self._cache

    def _save_failed(self, exc: Exception) -> Outcome:
        logger.error("Save failed: %s", exc)
        return Outcome(ok=False, message=f"Could not save bookmarks: {exc}")

    def _read_failed(self, exc: Exception) -> Outcome:
        logger.error("Read failed: %s", exc)
        return Outcome(ok=False, message=f"Could not read bookmarks: {exc}")

    def _ensure_loaded(self) -> Optional[Outcome]:
        """Populate the cache; returns a failed Outcome if the store is unreadable."""
        try:
            self._cache.get_all()
        except StoreError as exc:
            return self._read_failed(exc)
        return None

    # ── CRUD ──────────────────────────────────────────────────────────────

    def add_bookmark(self, url: str, description: Optional[str] = None) -> Outcome:
        url = (url or "").strip()
        if not url:
            return Outcome(ok=False, message="URL must not be empty")
        failed = self._ensure_loaded()
        if failed is not None:
            return failed
        try:
            self._cache.add(url, description)
        except AlreadyExistsError:
            return Outcome(ok=False, message=f"Bookmark already exists: {url}")
        except (EncryptionFailedError, StoreError) as exc:
            return self._save_failed(exc)
        return Outcome(ok=True, message=f"Added {url}")

    def delete_bookmark(self, url: str) -> Outcome:
        failed = self._ensure_loaded()
        if failed is not None:
            return failed
        try:
            self._cache.delete(url)
        except RecordNotFoundError:
            return Outcome(ok=False, message=f"No bookmark for {url}")
        except (EncryptionFailedError, StoreError) as exc:
            return self._save_failed(exc)
        return Outcome(ok=True, message=f"Deleted {url}")

    def edit_description(self, url: str, description: Optional[str] = None) -> Outcome:
        failed = self._ensure_loaded()
        if failed is not None:
            return failed
        try:
            self._cache.edit(url, description)
        except RecordNotFoundError:
            return Outcome(ok=False, message=f"No bookmark for {url}")
        except (EncryptionFailedError, StoreError) as exc:
            return self._save_failed(exc)
        return Outcome(ok=True, message=f"Updated {url}")

    def list_bookmarks(self) -> Outcome:
        try:
            bookmarks = self._cache.get_all()
        except StoreError as exc:
            return self._read_failed(exc)
        noun = "bookmark" if len(bookmarks) == 1 else "bookmarks"
        message = f"{len(bookmarks)} {noun}"
        if self._cache.last_warning:
            message = f"{message} ({self._cache.last_warning})"
        return Outcome(ok=True, message=message, bookmarks=bookmarks)

    def find_for_selection(self) -> list[str]:
        """Urls in collection order, for completion / pick lists."""
        try:
            bookmarks = self._cache.get_all()
        except StoreError as exc:
            logger.error("Read failed: %s", exc)
            return []
        return [b.url for b in bookmarks]

    def reload(self) -> Outcome:
        self._cache.reload()
        return Outcome(ok=True, message="Reloaded bookmarks")

    def initialize_if_absent(self) -> Outcome:
        store = self._cache.store
        if store.exists():
            return Outcome(ok=True, message=f"{store.path} already exists")
        try:
            if self._cache.dirty:
                # pending in-memory changes become the initial file
                self._cache.flush()
            else:
                store.save([])
                self._cache.reload()
        except (EncryptionFailedError, StoreError) as exc:
            return self._save_failed(exc)
        return Outcome(ok=True, message=f"Created {store.path}")

    def shutdown(self) -> Outcome:
        """Flush pending changes and release the working copy."""
        try:
            self._cache.shutdown()
        except (EncryptionFailedError, StoreError) as exc:
            return self._save_failed(exc)
        return Outcome(ok=True, message="Closed bookmarks")


def open_service(
    config: StoreConfig,
    passphrase_prompt: Optional[Callable[[], str]] = None,
) -> BookmarkService:
    """
    Composition root: provider → EncryptedStore → BookmarkCache → service.

    Raises:
        ConfigError: the configured provider cannot be built.
    """
    from cryptmarks.crypto.base import get_provider

    provider = get_provider(config, passphrase_prompt=passphrase_prompt)
    store = EncryptedStore(config.store_path, provider)
    logger.debug("Opened %s with %s", store.path, type(provider).__name__)
    return BookmarkService(BookmarkCache(store))
