"""
Project-wide custom exception hierarchy.
All modules raise subclasses of CryptmarksError — never bare Exception.
"""

__all__ = [
    "CryptmarksError",
    "ConfigError",
    "StoreError",
    "CorruptDataError",
    "ProviderError",
    "DecryptionFailedError",
    "EncryptionFailedError",
    "RecordError",
    "RecordNotFoundError",
    "AlreadyExistsError",
]


class CryptmarksError(Exception):
    """Root exception for all cryptmarks errors."""


# ── Config ────────────────────────────────────────────────────────────────────

class ConfigError(CryptmarksError):
    """Raised when the store configuration cannot be used (e.g. unknown provider)."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(CryptmarksError):
    """Raised on filesystem errors at the encrypted store boundary."""


class CorruptDataError(StoreError):
    """Raised when decrypted plaintext is not a valid bookmark document."""


# ── Encryption provider ───────────────────────────────────────────────────────

class ProviderError(CryptmarksError):
    """Base class for encryption provider failures."""


class DecryptionFailedError(ProviderError):
    """Raised when the provider cannot decrypt the store (bad key, cancelled prompt)."""


class EncryptionFailedError(ProviderError):
    """Raised when the provider cannot encrypt and write the store."""


# ── Records ───────────────────────────────────────────────────────────────────

class RecordError(CryptmarksError):
    """Base class for record-level errors raised by the cache."""


class RecordNotFoundError(RecordError):
    """Raised when no bookmark matches the requested url."""


class AlreadyExistsError(RecordError):
    """Raised when adding a url that is already bookmarked."""
