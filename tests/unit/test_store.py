"""
Unit tests for cryptmarks/store/models.py and cryptmarks/store/encrypted.py

Coverage plan
─────────────
models.py     → Bookmark fields, normalization, JSON document format,
                corrupt-document detection
encrypted.py  → load (missing / ok / corrupt / decrypt failure / read error),
                save (round-trip, atomic replace, failure leaves old file)
"""

import json
from pathlib import Path

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# 1. Bookmark model
# ─────────────────────────────────────────────────────────────────────────────

class TestBookmark:
    """Bookmark dataclass — url key plus optional description."""

    def test_creates_with_url_only(self):
        from cryptmarks.store.models import Bookmark
        bm = Bookmark(url="https://a.com")
        assert bm.url == "https://a.com"
        assert bm.description is None

    def test_empty_description_normalized_to_none(self):
        from cryptmarks.store.models import Bookmark
        assert Bookmark(url="https://a.com", description="").description is None

    def test_empty_url_rejected(self):
        from cryptmarks.store.models import Bookmark
        with pytest.raises(ValueError):
            Bookmark(url="")

    def test_to_dict_omits_absent_description(self):
        from cryptmarks.store.models import Bookmark
        assert Bookmark(url="https://a.com").to_dict() == {"url": "https://a.com"}

    def test_to_dict_keeps_description(self):
        from cryptmarks.store.models import Bookmark
        d = Bookmark(url="https://b.com", description="notes").to_dict()
        assert d == {"url": "https://b.com", "description": "notes"}

    def test_bookmark_is_immutable(self):
        from dataclasses import FrozenInstanceError
        from cryptmarks.store.models import Bookmark
        bm = Bookmark(url="https://a.com")
        with pytest.raises(FrozenInstanceError):
            bm.description = "x"


# ─────────────────────────────────────────────────────────────────────────────
# 2. JSON document
# ─────────────────────────────────────────────────────────────────────────────

class TestDocumentFormat:
    """bookmarks_to_json / bookmarks_from_json."""

    def test_empty_collection_is_empty_array(self):
        from cryptmarks.store.models import bookmarks_to_json
        assert json.loads(bookmarks_to_json([])) == []

    def test_document_preserves_order(self):
        from cryptmarks.store.models import Bookmark, bookmarks_from_json, bookmarks_to_json
        bms = [Bookmark("https://z.com"), Bookmark("https://a.com", "first"), Bookmark("https://m.com")]
        assert bookmarks_from_json(bookmarks_to_json(bms)) == bms

    def test_non_ascii_description_survives(self):
        from cryptmarks.store.models import Bookmark, bookmarks_from_json, bookmarks_to_json
        bms = [Bookmark("https://ja.wikipedia.org", "日本語")]
        raw = bookmarks_to_json(bms)
        assert "日本語".encode("utf-8") in raw
        assert bookmarks_from_json(raw) == bms

    def test_empty_string_description_on_disk_read_as_absent(self):
        from cryptmarks.store.models import bookmarks_from_json
        bms = bookmarks_from_json(b'[{"url": "https://a.com", "description": ""}]')
        assert bms[0].description is None

    def test_null_description_accepted(self):
        from cryptmarks.store.models import bookmarks_from_json
        bms = bookmarks_from_json(b'[{"url": "https://a.com", "description": null}]')
        assert bms[0].description is None

    def test_unknown_keys_ignored(self):
        from cryptmarks.store.models import bookmarks_from_json
        bms = bookmarks_from_json(b'[{"url": "https://a.com", "tags": ["x"]}]')
        assert bms[0].url == "https://a.com"

    @pytest.mark.parametrize("raw", [
        b"not json at all",
        b'{"url": "https://a.com"}',
        b'["https://a.com"]',
        b'[{"description": "no url"}]',
        b'[{"url": ""}]',
        b'[{"url": 42}]',
        b'[{"url": "https://a.com", "description": 7}]',
        b"\xff\xfe",
    ])
    def test_malformed_documents_raise_corrupt_data(self, raw):
        from cryptmarks.exceptions import CorruptDataError
        from cryptmarks.store.models import bookmarks_from_json
        with pytest.raises(CorruptDataError):
            bookmarks_from_json(raw)


# ─────────────────────────────────────────────────────────────────────────────
# 3. EncryptedStore.load
# ─────────────────────────────────────────────────────────────────────────────

class TestEncryptedStoreLoad:
    """load() — tagged LoadResult, errors converted at the boundary."""

    def test_missing_file_is_not_found(self, store, provider):
        from cryptmarks.store.encrypted import LoadStatus
        result = store.load()
        assert result.status is LoadStatus.NOT_FOUND
        assert result.bookmarks == []
        assert provider.decrypt_calls == 0

    def test_load_after_save_round_trips(self, store):
        from cryptmarks.store.encrypted import LoadStatus
        from cryptmarks.store.models import Bookmark
        bms = [Bookmark("https://a.com"), Bookmark("https://b.com", "notes")]
        store.save(bms)
        result = store.load()
        assert result.status is LoadStatus.OK
        assert result.bookmarks == bms

    def test_empty_collection_round_trips(self, store):
        store.save([])
        assert store.load().bookmarks == []

    def test_corrupt_plaintext_returns_warning_not_exception(self, store, store_path, provider):
        from cryptmarks.store.encrypted import LoadStatus
        provider.write_plaintext(store_path, b"{{{ definitely not json")
        result = store.load()
        assert result.status is LoadStatus.CORRUPT
        assert result.bookmarks == []
        assert result.warning and str(store_path) in result.warning

    def test_corrupt_plaintext_logs_warning(self, store, store_path, provider, caplog):
        provider.write_plaintext(store_path, b'{"not": "an array"}')
        with caplog.at_level("WARNING", logger="cryptmarks.store.encrypted"):
            store.load()
        assert any("unreadable" in r.message for r in caplog.records)

    def test_decryption_failure_propagates(self, store, provider):
        from cryptmarks.exceptions import DecryptionFailedError
        store.save([])
        provider.fail_decrypt = True
        with pytest.raises(DecryptionFailedError):
            store.load()

    def test_os_error_from_provider_becomes_store_error(self, store, store_path):
        from unittest.mock import patch
        from cryptmarks.exceptions import StoreError
        store_path.write_bytes(b"x")
        with patch.object(store._provider, "decrypt", side_effect=PermissionError("denied")):
            with pytest.raises(StoreError):
                store.load()


# ─────────────────────────────────────────────────────────────────────────────
# 4. EncryptedStore.save
# ─────────────────────────────────────────────────────────────────────────────

class TestEncryptedStoreSave:
    """save() — full rewrite, atomic replace, old content kept on failure."""

    def test_file_on_disk_is_not_plaintext(self, store, store_path):
        from cryptmarks.store.models import Bookmark
        store.save([Bookmark("https://secret.example")])
        assert b"secret.example" not in store_path.read_bytes()

    def test_creates_parent_directory(self, tmp_path, provider):
        from cryptmarks.store.encrypted import EncryptedStore
        path = tmp_path / "nested" / "dir" / "marks.gpg"
        EncryptedStore(path, provider).save([])
        assert path.exists()

    def test_failed_encryption_keeps_previous_file(self, store, store_path, provider):
        from cryptmarks.exceptions import EncryptionFailedError
        from cryptmarks.store.models import Bookmark
        store.save([Bookmark("https://old.com")])
        before = store_path.read_bytes()

        provider.fail_encrypt = True
        with pytest.raises(EncryptionFailedError):
            store.save([Bookmark("https://new.com")])

        assert store_path.read_bytes() == before

    def test_no_temporary_files_left_behind(self, store, store_path, provider):
        from cryptmarks.exceptions import EncryptionFailedError
        store.save([])
        provider.fail_encrypt = True
        with pytest.raises(EncryptionFailedError):
            store.save([])
        assert sorted(p.name for p in store_path.parent.iterdir()) == [store_path.name]

    def test_failed_replace_becomes_store_error(self, store, store_path):
        from unittest.mock import patch
        from cryptmarks.exceptions import StoreError
        with patch("cryptmarks.store.encrypted.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StoreError):
                store.save([])
        assert not store_path.exists()

    def test_exists_reflects_file(self, store):
        assert store.exists() is False
        store.save([])
        assert store.exists() is True
