"""
Read-only access to the pre-built frontend bundle.
"""

import logging
import posixpath
from pathlib import Path
from typing import Optional, Union

from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


ENTRY_DOCUMENT = "index.html"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

MIME_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".mjs": "application/javascript; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".map": "application/json; charset=utf-8",
    ".webmanifest": "application/manifest+json; charset=utf-8",
    ".txt": "text/plain; charset=utf-8",
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".glb": "model/gltf-binary",
    ".gltf": "model/gltf+json",
    ".wasm": "application/wasm",
}


def content_type_for(path: Union[str, Path]) -> str:
    """Content type by file extension, case-insensitive."""
    suffix = Path(path).suffix.lower()
    return MIME_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)


class AssetStore:
    """
    Files under a fixed asset root.

    Lookups never escape the root: ".." segments are clamped at the root the
    way an absolute path normalises, and symlinks pointing outside are
    refused. Missing files are an expected outcome and come back as None.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    @property
    def entry_path(self) -> Path:
        return self.root / ENTRY_DOCUMENT

    def resolve(self, request_path: str) -> Optional[Path]:
        """Map a decoded request path to a file path inside the root."""
        if "\x00" in request_path:
            return None

        normalized = posixpath.normpath("/" + request_path.replace("\\", "/"))
        relative = normalized.lstrip("/")
        if not relative or relative == ".":
            return None

        candidate = (self.root / relative).resolve()
        try:
            candidate.relative_to(self.root)
        except ValueError:
            logger.warning(f"Refusing path outside asset root: {request_path!r}")
            return None
        return candidate

    def is_entry(self, request_path: str) -> bool:
        """True if request_path names the entry document in any spelling."""
        path = self.resolve(request_path)
        return path is not None and path == self.entry_path.resolve()

    def _read_bytes(self, path: Path) -> Optional[bytes]:
        try:
            return path.read_bytes()
        except OSError:
            return None

    async def read(self, request_path: str) -> Optional[bytes]:
        """Raw bytes of the asset at request_path, or None if there is none."""
        path = self.resolve(request_path)
        if path is None:
            return None
        return await run_in_threadpool(self._read_bytes, path)

    async def read_entry(self) -> str:
        """
        Text of the entry document.
        Unlike read(), failures propagate: a missing entry document means
        the bundle was never built or was deployed incompletely.
        """
        return await run_in_threadpool(self.entry_path.read_text, encoding="utf-8")
