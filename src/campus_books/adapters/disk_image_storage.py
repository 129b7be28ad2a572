"""Disk-backed ImageStorage.

Files land in ``root`` under random names and are served by the static
file mount at ``/<url_prefix>/<name>``.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from campus_books.domain.listing import ImageUpload
from campus_books.domain.listing_validation import media_type
from campus_books.infra.config import UPLOADS_URL_PREFIX
from campus_books.ports.image_storage import ImageStorage

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
}


class DiskImageStorage(ImageStorage):
    def __init__(self, root: Path, url_prefix: str = UPLOADS_URL_PREFIX) -> None:
        self._root = Path(root)
        self._url_prefix = url_prefix.strip("/")

    def save(self, image: ImageUpload) -> str:
        self._root.mkdir(parents=True, exist_ok=True)

        # Never trust the client filename; the extension follows the media type
        extension = _EXTENSIONS.get(media_type(image.content_type), "")
        name = f"{uuid.uuid4().hex}{extension}"
        target = self._root / name

        with open(target, "wb") as handle:
            handle.write(image.content)
            handle.flush()
            os.fsync(handle.fileno())

        logger.info("Stored image", extra={"image": name, "size": len(image.content)})
        return f"{self._url_prefix}/{name}"

    def delete(self, path: str) -> None:
        name = Path(path).name
        try:
            (self._root / name).unlink()
        except FileNotFoundError:
            logger.info("Image already removed", extra={"image": name})
