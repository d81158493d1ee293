"""Abstract base class for encryption providers and the provider factory."""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from cryptmarks.config import StoreConfig
from cryptmarks.exceptions import ConfigError

__all__ = ["EncryptionProvider", "get_provider"]


class EncryptionProvider(ABC):
    """
    Transparent encrypt-on-write / decrypt-on-read for a single file.

    Implementations may block (e.g. on a pinentry prompt); callers wait.
    """

    @abstractmethod
    def decrypt(self, path: Path) -> bytes:
        """
        Read *path* and return its decrypted contents.

        Raises:
            DecryptionFailedError: bad key, cancelled prompt, unreadable ciphertext.
        """
        ...

    @abstractmethod
    def encrypt_and_write(self, path: Path, data: bytes) -> None:
        """
        Encrypt *data* and write the ciphertext to *path*, replacing it.

        Raises:
            EncryptionFailedError: the provider could not produce or write ciphertext.
        """
        ...


def get_provider(
    config: StoreConfig,
    passphrase_prompt: Optional[Callable[[], str]] = None,
) -> EncryptionProvider:
    """
    Factory: return the EncryptionProvider named by *config.provider*.

    Import is deferred so the cryptography package is only needed for
    the passphrase provider.

    Args:
        config:            Store configuration.
        passphrase_prompt: Called to obtain the passphrase when the env var
                           named by config.passphrase_env is unset.

    Raises:
        ConfigError: Unknown provider, or no passphrase source available.
    """
    if config.provider == "gpg":
        from .gpg import GpgProvider
        return GpgProvider(recipients=config.recipients)

    if config.provider == "passphrase":
        from .passphrase import PassphraseProvider
        passphrase = os.environ.get(config.passphrase_env, "")
        if not passphrase and passphrase_prompt is not None:
            passphrase = passphrase_prompt()
        if not passphrase:
            raise ConfigError(
                f"No passphrase: set {config.passphrase_env} or run interactively"
            )
        return PassphraseProvider(passphrase)

    raise ConfigError(f"Unknown encryption provider: {config.provider!r}")
