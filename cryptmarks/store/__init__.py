"""
store — encrypted persistence and in-process cache for bookmarks.

Public API
──────────
Bookmark        — one url + optional description
EncryptedStore  — load()/save() of the encrypted file
LoadResult      — tagged result of EncryptedStore.load()
LoadStatus      — OK | NOT_FOUND | CORRUPT
BookmarkCache   — lazily-loaded working copy with CRUD + flush/reload
"""

from cryptmarks.store.models import Bookmark
from cryptmarks.store.encrypted import EncryptedStore, LoadResult, LoadStatus
from cryptmarks.store.cache import BookmarkCache

__all__ = ["Bookmark", "EncryptedStore", "LoadResult", "LoadStatus", "BookmarkCache"]
