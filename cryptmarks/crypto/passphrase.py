"""
PassphraseProvider — passphrase-based encryption with the cryptography package.

File layout (binary):
    magic : 4 bytes  -> b"CMK1"
    salt  : 16 bytes -> PBKDF2 salt, fresh per write
    token : rest     -> Fernet token (AES-128-CBC + HMAC-SHA256) over the plaintext
"""

import base64
import logging
import os
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from cryptmarks.exceptions import DecryptionFailedError, EncryptionFailedError
from .base import EncryptionProvider

__all__ = ["PassphraseProvider"]

logger = logging.getLogger(__name__)

_MAGIC = b"CMK1"
_SALT_LEN = 16
_KDF_ITERATIONS = 390_000


def _derive_key(passphrase: str, salt: bytes) -> bytes:
    """Derive a urlsafe-base64 Fernet key from *passphrase* via PBKDF2-HMAC-SHA256."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=_KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(passphrase.encode("utf-8")))


class PassphraseProvider(EncryptionProvider):
    """Encrypts the whole store under a key derived from a passphrase."""

    def __init__(self, passphrase: str) -> None:
        if not passphrase:
            raise ValueError("passphrase must not be empty")
        self._passphrase = passphrase

    def decrypt(self, path: Path) -> bytes:
        try:
            blob = Path(path).read_bytes()
        except OSError as exc:
            raise DecryptionFailedError(f"Cannot read {path}: {exc}") from exc

        header = len(_MAGIC) + _SALT_LEN
        if len(blob) <= header or not blob.startswith(_MAGIC):
            raise DecryptionFailedError(f"{path} is not a cryptmarks passphrase file")

        salt = blob[len(_MAGIC):header]
        try:
            return Fernet(_derive_key(self._passphrase, salt)).decrypt(blob[header:])
        except InvalidToken as exc:
            raise DecryptionFailedError(
                f"Cannot decrypt {path}: wrong passphrase or damaged file"
            ) from exc

    def encrypt_and_write(self, path: Path, data: bytes) -> None:
        salt = os.urandom(_SALT_LEN)
        token = Fernet(_derive_key(self._passphrase, salt)).encrypt(data)
        try:
            Path(path).write_bytes(_MAGIC + salt + token)
        except OSError as exc:
            raise EncryptionFailedError(f"Cannot write {path}: {exc}") from exc
        logger.debug("Wrote %d encrypted bytes to %s", len(token), path)
