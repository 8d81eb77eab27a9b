"""Secure on-disk persistence of credentials embedded in a kubeconfig.

Client certificates, keys and CA bundles that arrive base64-encoded
(``*-data`` fields) have to exist as files before the TLS layer can use them.
They are written into a single per-process directory created with mode 0700;
every file is created exclusively with mode 0600 under a unique name. The
directory is removed when the interpreter exits.
"""

from __future__ import annotations

import atexit
import base64
import binascii
import os
import shutil
import tempfile
import threading
from collections.abc import Iterable

from kubecore.errors import ParseError
from kubecore.observability.logging import get_logger
from kubecore.observability.metrics import credential_files_written_total

_log = get_logger("kubeconfig.credentials")

_DIR_PREFIX = "kubecore-"


def decode_b64(data: str, field_name: str) -> bytes:
    """Decode base64 credential material, raising ParseError when malformed."""
    try:
        return base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as err:
        raise ParseError(f"{field_name} is not valid base64") from err


class CredentialStore:
    """Writes decoded credential material to owner-only files.

    Args:
        base_dir: Parent directory for the store's private directory. ``None``
                  or empty uses the system temporary directory.
    """

    def __init__(self, base_dir: str | None = None) -> None:
        self._base_dir = base_dir or None
        self._dir: str | None = None
        self._lock = threading.Lock()

    @property
    def directory(self) -> str | None:
        """The private directory, or ``None`` if nothing has been written yet."""
        return self._dir

    def _ensure_dir(self) -> str:
        with self._lock:
            if self._dir is None:
                self._dir = tempfile.mkdtemp(prefix=_DIR_PREFIX, dir=self._base_dir)
                atexit.register(self.cleanup)
            return self._dir

    def write(self, material: bytes, *, label: str, suffix: str = ".pem") -> str:
        """Persist *material* to a fresh 0600 file and return its path.

        Args:
            material: Decoded bytes to write.
            label:    Short tag used in the file name and metrics
                      (``"client-cert"``, ``"client-key"``, ``"ca"``).
            suffix:   File name suffix.
        """
        directory = self._ensure_dir()
        fd, path = tempfile.mkstemp(prefix=f"{label}-", suffix=suffix, dir=directory)
        try:
            os.fchmod(fd, 0o600)
            with os.fdopen(fd, "wb") as fh:
                fh.write(material)
        except OSError:
            os.unlink(path)
            raise
        credential_files_written_total.labels(material=label).inc()
        _log.debug("credential_persisted", material=label, path=path)
        return path

    def write_b64(self, data: str, *, label: str, field_name: str) -> str:
        """Decode base64 *data* and persist it; see :meth:`write`."""
        return self.write(decode_b64(data, field_name), label=label)

    def discard(self, paths: Iterable[str]) -> None:
        """Remove individual files previously returned by :meth:`write`."""
        for path in paths:
            try:
                os.unlink(path)
            except FileNotFoundError:
                continue
            _log.debug("credential_discarded", path=path)

    def cleanup(self) -> None:
        """Remove the private directory and everything in it."""
        with self._lock:
            directory, self._dir = self._dir, None
        if directory is not None:
            shutil.rmtree(directory, ignore_errors=True)
            _log.debug("credential_dir_removed", path=directory)


_default_store: CredentialStore | None = None
_default_lock = threading.Lock()


def default_store() -> CredentialStore:
    """Return the process-wide store, honouring ``KUBECORE_CREDENTIALS_DIR``."""
    global _default_store
    with _default_lock:
        if _default_store is None:
            from kubecore.config import load_config

            _default_store = CredentialStore(load_config().credentials.base_dir)
        return _default_store
