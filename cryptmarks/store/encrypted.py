"""
EncryptedStore — durable, encrypted-at-rest bookmark collection.

Usage::

    store = EncryptedStore("~/.bookmarks.json.gpg", GpgProvider())

    result = store.load()
    if result.status is LoadStatus.CORRUPT:
        print(result.warning)
    bookmarks = result.bookmarks

    store.save(bookmarks + [Bookmark("https://example.com")])

The whole collection is rewritten on every save.  The ciphertext is first
written to a temporary sibling file and then moved over the target with
os.replace(), so a reader never sees a half-written store.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from cryptmarks.crypto.base import EncryptionProvider
from cryptmarks.exceptions import CorruptDataError, StoreError
from cryptmarks.store.models import Bookmark, bookmarks_from_json, bookmarks_to_json

__all__ = ["EncryptedStore", "LoadResult", "LoadStatus"]

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    OK        = "ok"
    NOT_FOUND = "not_found"
    CORRUPT   = "corrupt"


@dataclass
class LoadResult:
    """
    Outcome of EncryptedStore.load().

    status    — LoadStatus
    bookmarks — decoded collection (empty unless status is OK)
    warning   — human-readable reason when status is CORRUPT
    """
    status:    LoadStatus
    bookmarks: list[Bookmark] = field(default_factory=list)
    warning:   Optional[str]  = None


class EncryptedStore:
    """Reads and writes the single encrypted bookmark file at *path*."""

    def __init__(self, path: Union[str, Path], provider: EncryptionProvider) -> None:
        self._path = Path(path).expanduser()
        self._provider = provider

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    # ── Public API ────────────────────────────────────────────────────────

    def load(self) -> LoadResult:
        """
        Decrypt and decode the store file.

        Returns:
            LoadResult with status NOT_FOUND when the file is absent, CORRUPT
            (plus a warning and an empty collection) when the plaintext is not
            a bookmark document, OK otherwise.

        Raises:
            DecryptionFailedError: the provider could not decrypt the file.
            StoreError: the file exists but could not be read.
        """
        if not self._path.exists():
            logger.debug("Store %s not found", self._path)
            return LoadResult(status=LoadStatus.NOT_FOUND)

        try:
            plaintext = self._provider.decrypt(self._path)
        except OSError as exc:
            raise StoreError(f"Cannot read {self._path}: {exc}") from exc

        try:
            bookmarks = bookmarks_from_json(plaintext)
        except CorruptDataError as exc:
            warning = f"Ignoring unreadable bookmark file {self._path}: {exc}"
            logger.warning(warning)
            return LoadResult(status=LoadStatus.CORRUPT, warning=warning)

        logger.info("Loaded %d bookmarks from %s", len(bookmarks), self._path)
        return LoadResult(status=LoadStatus.OK, bookmarks=bookmarks)

    def save(self, bookmarks: list[Bookmark]) -> None:
        """
        Encrypt *bookmarks* and atomically replace the store file.

        On failure the previous file is left untouched.

        Raises:
            EncryptionFailedError: the provider could not encrypt.
            StoreError: the temporary file could not be created or moved.
        """
        data = bookmarks_to_json(bookmarks)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            os.close(fd)
        except OSError as exc:
            raise StoreError(f"Cannot prepare {self._path} for writing: {exc}") from exc

        tmp_path = Path(tmp_name)
        try:
            self._provider.encrypt_and_write(tmp_path, data)
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StoreError(f"Cannot write {self._path}: {exc}") from exc
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

        logger.info("Saved %d bookmarks to %s", len(bookmarks), self._path)
