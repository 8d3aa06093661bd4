import asyncio
import base64
import binascii
from abc import ABC, abstractmethod
from pathlib import Path
from uuid import uuid4

from dosomething.config.settings import settings
from dosomething.exceptions import ValidationError


def decode_image(image_b64: str) -> bytes:
    """Accepts raw base64 or a ``data:image/...;base64,`` URL."""
    if not image_b64:
        raise ValidationError({"image": "Must not be empty!"})
    if image_b64.startswith("data:"):
        image_b64 = image_b64.split(",", 1)[-1]
    try:
        return base64.b64decode(image_b64, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError({"image": "Invalid image data!"})


class BlobStore(ABC):
    @abstractmethod
    async def upload(self, data: bytes, suffix: str = ".jpg") -> str:
        """Store ``data`` and return its public URL."""
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Writes uploads to a directory served under ``/uploads``."""

    def __init__(self, directory: str | None = None, base_url: str | None = None) -> None:
        self.directory = Path(directory or settings.upload_dir)
        self.base_url = (base_url or settings.public_base_url).rstrip("/")

    def _write(self, name: str, data: bytes) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / name).write_bytes(data)

    async def upload(self, data: bytes, suffix: str = ".jpg") -> str:
        name = f"{uuid4().hex}{suffix}"
        await asyncio.to_thread(self._write, name, data)
        return f"{self.base_url}/uploads/{name}"


def get_blob_store() -> BlobStore:
    return LocalBlobStore()
