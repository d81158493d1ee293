"""
crypto — pluggable encryption providers for the bookmark store.

Public API
──────────
EncryptionProvider — interface: decrypt(path), encrypt_and_write(path, data)
GpgProvider        — shells out to GnuPG (agent / pinentry resolve the key)
get_provider       — factory driven by StoreConfig.provider

PassphraseProvider lives in crypto.passphrase and is imported lazily.
"""

from cryptmarks.crypto.base import EncryptionProvider, get_provider
from cryptmarks.crypto.gpg import GpgProvider

__all__ = ["EncryptionProvider", "GpgProvider", "get_provider"]
