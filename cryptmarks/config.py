"""
Store configuration.

Values come from, in increasing priority:
  1. dataclass defaults
  2. environment (CRYPTMARKS_FILE, CRYPTMARKS_PROVIDER, CRYPTMARKS_RECIPIENTS)
  3. CLI flags (applied by cli.main via dataclasses.replace)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

__all__ = ["StoreConfig", "DEFAULT_STORE_PATH", "PROVIDERS"]

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = "~/.bookmarks.json.gpg"

# Names accepted by crypto.get_provider()
PROVIDERS = ("gpg", "passphrase")


@dataclass(frozen=True)
class StoreConfig:
    """
    Where the encrypted bookmark file lives and how it is encrypted.

    Fields
    ──────
    path            — location of the encrypted store file
    provider        — "gpg" (GnuPG via agent/pinentry) or "passphrase"
    recipients      — GPG key ids to encrypt to; empty = symmetric gpg
    passphrase_env  — env var consulted by the passphrase provider
    """
    path:           str             = DEFAULT_STORE_PATH
    provider:       str             = "gpg"
    recipients:     tuple[str, ...] = ()
    passphrase_env: str             = "CRYPTMARKS_PASSPHRASE"

    @property
    def store_path(self) -> Path:
        """Expanded absolute path of the store file."""
        return Path(self.path).expanduser()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StoreConfig":
        """Build a config from CRYPTMARKS_* environment variables."""
        env = os.environ if environ is None else environ
        recipients = tuple(
            r.strip() for r in env.get("CRYPTMARKS_RECIPIENTS", "").split(",") if r.strip()
        )
        config = cls(
            path=env.get("CRYPTMARKS_FILE") or DEFAULT_STORE_PATH,
            provider=(env.get("CRYPTMARKS_PROVIDER") or "gpg").lower(),
            recipients=recipients,
        )
        logger.debug("Config from env: path=%s provider=%s", config.path, config.provider)
        return config
