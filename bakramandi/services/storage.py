from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

log = logging.getLogger(__name__)


class LocalObjectStore:
    """
    Flat directory of uploaded listing images, served statically under url_prefix.

    put_bytes returns the public URL ("/uploads/<key>"), which is what listings store.
    """

    def __init__(self, base_dir: str, url_prefix: str = "/uploads"):
        self.base = Path(base_dir).resolve()
        self.base.mkdir(parents=True, exist_ok=True)
        self.url_prefix = "/" + url_prefix.strip("/")

    def _key_path(self, key: str) -> Path:
        path = (self.base / key).resolve()
        if path.parent != self.base:
            raise ValueError(f"Invalid storage key: {key!r}")
        return path

    def exists(self, key: str) -> bool:
        return self._key_path(key).exists()

    def put_bytes(self, *, key: str, data: bytes) -> str:
        self._key_path(key).write_bytes(data)
        return f"{self.url_prefix}/{key}"

    def resolve_path(self, url: str) -> Path:
        """
        Map a stored image reference back to its file.

        Accepts the public path returned by put_bytes, a bare key, or a file:// URL.
        """
        parsed = urlparse(url)
        if parsed.scheme == "file":
            return Path(parsed.path)
        if parsed.scheme:
            raise ValueError(f"Unsupported storage scheme: {parsed.scheme}")

        prefix = self.url_prefix + "/"
        key = parsed.path[len(prefix):] if parsed.path.startswith(prefix) else parsed.path
        return self._key_path(key)

    def delete(self, url: str) -> None:
        path = self.resolve_path(url)
        try:
            path.unlink()
        except FileNotFoundError:
            log.warning("stored image already gone: %s", url)
