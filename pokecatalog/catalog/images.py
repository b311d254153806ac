"""
Local storage for uploaded record images.

Uploaded files are written below a root directory and referenced from records
by their public path (``{url_prefix}/{filename}``). Paths outside the prefix
(e.g. absolute PokeAPI artwork URLs on seeded records) are never touched.
"""

from __future__ import annotations

import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pokecatalog.core.logging_config import get_logger

from .errors import CatalogValidationError

logger = get_logger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image file read into memory."""

    filename: str
    content: bytes

    @property
    def is_empty(self) -> bool:
        return len(self.content) == 0


def sanitize_filename(filename: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("", Path(filename or "").name)


class ImageStorage:
    """Writes and removes uploaded images on the local filesystem."""

    def __init__(self, root_dir: str | Path, url_prefix: str = "/uploads/pokemon") -> None:
        self.root_dir = Path(root_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, upload: ImageUpload) -> str:
        """Persist an upload under a unique name.

        Args:
            upload: File name and content of the uploaded image

        Returns:
            Public path of the stored file, e.g. ``/uploads/pokemon/1700000000000-42-pika.png``

        Raises:
            CatalogValidationError: the upload has no content
        """
        if upload.is_empty:
            raise CatalogValidationError("Uploaded image is empty", field="image")

        self.root_dir.mkdir(parents=True, exist_ok=True)
        unique_prefix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        filename = f"{unique_prefix}-{sanitize_filename(upload.filename)}"
        (self.root_dir / filename).write_bytes(upload.content)
        logger.debug(f"Stored uploaded image {filename} ({len(upload.content)} bytes)")
        return f"{self.url_prefix}/{filename}"

    def owns(self, path: Optional[str]) -> bool:
        """Whether ``path`` refers to a file managed by this storage."""
        return bool(path) and path.startswith(f"{self.url_prefix}/")

    def delete_if_exists(self, path: Optional[str]) -> None:
        """Remove a stored image; foreign paths and missing files are ignored."""
        if not self.owns(path):
            return
        target = self.root_dir / Path(path[len(self.url_prefix) + 1 :]).name
        try:
            target.unlink()
            logger.info(f"Deleted image: {target}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not delete image {target}: {e}")
