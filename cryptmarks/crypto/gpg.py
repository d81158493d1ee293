"""
GpgProvider — delegates encryption to the GnuPG command-line tool.

The key is resolved entirely by gpg itself (gpg-agent, pinentry, or the
default key), so this module never sees a secret.
"""

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from cryptmarks.exceptions import DecryptionFailedError, EncryptionFailedError
from .base import EncryptionProvider

__all__ = ["GpgProvider"]

logger = logging.getLogger(__name__)

# Keep error messages short; gpg can be chatty on stderr
_STDERR_TAIL = 2000


class GpgProvider(EncryptionProvider):
    """
    Encrypt/decrypt the store with ``gpg``.

    With recipients configured the file is public-key encrypted to them;
    otherwise gpg's symmetric mode is used and the agent prompts for a
    passphrase.
    """

    def __init__(
        self,
        recipients: Sequence[str] = (),
        gpg_binary: str = "gpg",
        symmetric: bool = False,
    ) -> None:
        self._recipients = list(recipients)
        self._gpg = gpg_binary
        self._symmetric = symmetric or not self._recipients

    def decrypt(self, path: Path) -> bytes:
        cmd = [self._gpg, "--quiet", "--batch", "--yes", "--decrypt", str(path)]
        result = self._run(cmd, DecryptionFailedError)
        return result.stdout

    def encrypt_and_write(self, path: Path, data: bytes) -> None:
        cmd = [self._gpg, "--quiet", "--batch", "--yes", "--output", str(path)]
        if self._symmetric:
            cmd.append("--symmetric")
        else:
            cmd.append("--encrypt")
            for recipient in self._recipients:
                cmd.extend(["--recipient", recipient])
        self._run(cmd, EncryptionFailedError, stdin=data)

    # ── subprocess ────────────────────────────────────────────────────────────

    def _run(self, cmd: list[str], error_cls: type, stdin: bytes = b"") -> subprocess.CompletedProcess:
        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, input=stdin, capture_output=True)
        except FileNotFoundError as exc:
            raise error_cls(f"Cannot execute {self._gpg}: {exc}") from exc
        except OSError as exc:
            raise error_cls(f"gpg invocation failed: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise error_cls(
                f"gpg exited with code {result.returncode}.\n"
                f"stderr: {stderr[-_STDERR_TAIL:]}"
            )
        return result
