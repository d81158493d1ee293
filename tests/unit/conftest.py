"""Shared fixtures: an in-process stand-in for the encryption provider."""

import base64
from pathlib import Path

import pytest

from cryptmarks.crypto.base import EncryptionProvider
from cryptmarks.exceptions import DecryptionFailedError, EncryptionFailedError

_MAGIC = b"FAKE:"


class FakeProvider(EncryptionProvider):
    """
    Base64 "encryption" with switchable failures and call counters.

    fail_decrypt / fail_encrypt — raise the provider error on the next calls
    decrypt_calls / encrypt_calls — number of invocations so far
    """

    def __init__(self) -> None:
        self.fail_decrypt = False
        self.fail_encrypt = False
        self.decrypt_calls = 0
        self.encrypt_calls = 0

    def decrypt(self, path: Path) -> bytes:
        self.decrypt_calls += 1
        if self.fail_decrypt:
            raise DecryptionFailedError("no secret key")
        blob = Path(path).read_bytes()
        if not blob.startswith(_MAGIC):
            raise DecryptionFailedError("not encrypted")
        return base64.b64decode(blob[len(_MAGIC):])

    def encrypt_and_write(self, path: Path, data: bytes) -> None:
        self.encrypt_calls += 1
        if self.fail_encrypt:
            raise EncryptionFailedError("encryption refused")
        Path(path).write_bytes(_MAGIC + base64.b64encode(data))

    def write_plaintext(self, path: Path, data: bytes) -> None:
        """Write *data* as if encrypted, bypassing counters (test setup)."""
        Path(path).write_bytes(_MAGIC + base64.b64encode(data))


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "bookmarks.json.gpg"


@pytest.fixture
def store(store_path, provider):
    from cryptmarks.store.encrypted import EncryptedStore
    return EncryptedStore(store_path, provider)


@pytest.fixture
def cache(store):
    from cryptmarks.store.cache import BookmarkCache
    return BookmarkCache(store)


@pytest.fixture
def service(cache):
    from cryptmarks.service import BookmarkService
    return BookmarkService(cache)
