# storefront/storage/images.py
"""
Stocare pe disc pentru imaginile de produs.

Fișierele sunt imuabile după scriere și nu se șterg niciodată (nici la
ștergerea produsului, nici la înlocuirea imaginii).
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import List, Tuple, Union

from storefront.core.errors import NotFoundError, ValidationError
from storefront.core.settings import settings

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"
URL_PREFIX = "/uploads"
MAX_NAME_ATTEMPTS = 5


@dataclass(frozen=True)
class UploadedImage:
    """Un fișier primit în request (câmpul multipart + conținut)."""
    filename: str
    content: bytes
    field_name: str = "image"


@dataclass(frozen=True)
class ImageDetails:
    filename: str
    size: int
    created: datetime
    modified: datetime


def image_url(filename: str) -> str:
    return f"{URL_PREFIX}/{filename}"


class ImageStore:
    def __init__(self, root: Union[str, Path], *, max_bytes: int = 5 * 1024 * 1024):
        self.root = Path(root)
        self.max_bytes = max_bytes
        self.root.mkdir(parents=True, exist_ok=True)

    # -------------------------- Writes --------------------------

    def validate(self, upload: UploadedImage) -> str:
        """Verifică extensia și mărimea; întoarce extensia originală (cu punct)."""
        ext = Path(upload.filename or "").suffix
        if ext.lower() not in ALLOWED_EXTENSIONS:
            raise ValidationError("Only image files are allowed!")
        if len(upload.content) > self.max_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_bytes // (1024 * 1024)}MB",
                details={"max_bytes": self.max_bytes, "size": len(upload.content)},
            )
        return ext

    def _generate_name(self, field_name: str, ext: str) -> str:
        return f"{field_name}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"

    def store(self, upload: UploadedImage) -> str:
        """Scrie fișierul sub un nume nou și întoarce calea relativă `/uploads/<nume>`."""
        ext = self.validate(upload)
        for _ in range(MAX_NAME_ATTEMPTS):
            name = self._generate_name(upload.field_name, ext)
            try:
                # 'x' → nu suprascrie niciodată un fișier existent
                with open(self.root / name, "xb") as fh:
                    fh.write(upload.content)
            except FileExistsError:
                continue
            logger.info("Stored image %s (%d bytes)", name, len(upload.content))
            return image_url(name)
        raise RuntimeError("Could not allocate a unique image filename")

    # -------------------------- Reads --------------------------

    def list_images(self) -> List[str]:
        return sorted(
            p.name
            for p in self.root.iterdir()
            if p.is_file() and p.suffix.lower() in ALLOWED_EXTENSIONS
        )

    def resolve(self, filename: str) -> Path:
        # doar nume simple, fără componente de cale
        if not filename or Path(filename).name != filename or filename in {".", ".."}:
            raise NotFoundError("Image not found")
        path = self.root / filename
        if not path.is_file():
            raise NotFoundError("Image not found")
        return path

    def details(self, filename: str) -> ImageDetails:
        st = self.resolve(filename).stat()
        created = getattr(st, "st_birthtime", st.st_ctime)
        return ImageDetails(
            filename=filename,
            size=st.st_size,
            created=datetime.fromtimestamp(created, tz=timezone.utc),
            modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    def open(self, filename: str) -> Tuple[Path, str]:
        """Calea fișierului + content type după extensie (octet-stream pentru rest)."""
        path = self.resolve(filename)
        return path, CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


@lru_cache(maxsize=1)
def get_image_store() -> ImageStore:
    """FastAPI dependency; în teste se suprascrie prin app.dependency_overrides."""
    return ImageStore(settings.UPLOAD_DIR, max_bytes=settings.MAX_UPLOAD_BYTES)
