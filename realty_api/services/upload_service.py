"""Stores uploaded files under the public uploads directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional
import logging
import os
import random
import time

from realty_api.core.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
_CHUNK = 1024 * 1024


@dataclass
class StoredUpload:
    url: str
    filename: str
    path: str


def generate_filename(original_name: Optional[str], *, now_ms: Optional[int] = None) -> str:
    """``{epoch millis}-{random int}{extension}`` with the client's directory parts ignored."""
    base = os.path.basename((original_name or "").replace("\\", "/"))
    ext = os.path.splitext(base)[1].lower()
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{millis}-{random.randint(0, 10**9)}{ext}"


class UploadService:
    def __init__(self, uploads_dir: str | os.PathLike, *, max_bytes: int) -> None:
        self.uploads_dir = Path(uploads_dir)
        self.max_bytes = max_bytes

    def save(self, stream: BinaryIO, original_name: Optional[str]) -> StoredUpload:
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        filename = generate_filename(original_name)
        target = self.uploads_dir / filename
        written = 0
        with target.open("wb") as out:
            while True:
                chunk = stream.read(_CHUNK)
                if not chunk:
                    break
                written += len(chunk)
                if self.max_bytes and written > self.max_bytes:
                    break
                out.write(chunk)
        if self.max_bytes and written > self.max_bytes:
            target.unlink()
            raise ValidationError("file too large")
        logger.info("Stored upload %s (%d bytes)", filename, written)
        return StoredUpload(url=f"{UPLOADS_URL_PREFIX}/{filename}", filename=filename, path=str(target))
