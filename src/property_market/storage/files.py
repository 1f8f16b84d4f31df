"""Local image store for profile and portfolio uploads."""

import hashlib
import logging
import shutil
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)


class InvalidUpload(ValueError):
    """Raised for uploads that are not images."""


class FileStore:
    """Saves images under ``upload_dir`` and names them by filename hash."""

    def __init__(self, upload_dir: str | Path):
        self.upload_dir = Path(upload_dir)

    @staticmethod
    def stored_name(filename: str) -> str:
        """SHA-256 of the original filename, keeping its extension."""
        digest = hashlib.sha256(filename.encode("utf-8")).hexdigest()
        return f"{digest}{Path(filename).suffix}"

    def save(self, filename: str, content_type: str | None, fileobj: BinaryIO) -> str:
        """Store an image and return its stored name."""
        if not content_type or not content_type.startswith("image/"):
            raise InvalidUpload("Hanya diperbolehkan mengunggah file gambar")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        name = self.stored_name(filename)
        with open(self.upload_dir / name, "wb") as buf:
            shutil.copyfileobj(fileobj, buf)

        logger.debug(f"Stored upload {filename} as {name}")
        return name

    def path(self, name: str) -> Path:
        return self.upload_dir / name
