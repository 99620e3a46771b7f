from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional, Protocol

from PIL import Image, UnidentifiedImageError
from werkzeug.datastructures import FileStorage

from ..core.constants import ALLOWED_PHOTO_EXTENSIONS
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class PhotoStorage(Protocol):
    def validate(self, file: FileStorage) -> str:
        """Check an upload is an accepted image; returns its extension."""

        raise NotImplementedError

    def upload(self, student_id: int, file: FileStorage) -> str:
        """Store a student's photo and return its public URL."""

        raise NotImplementedError


def photo_extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        raise ValidationError("Photo must have a file extension")

    ext = filename.rsplit(".", 1)[1].lower()
    if ext not in ALLOWED_PHOTO_EXTENSIONS:
        allowed = ", ".join(sorted(ALLOWED_PHOTO_EXTENSIONS))
        raise ValidationError(f"Photo must be one of: {allowed}")
    return ext


def ensure_image(stream: BinaryIO) -> None:
    """Reject payloads Pillow cannot identify as an image; rewinds the stream."""

    try:
        with Image.open(stream) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Photo is not a valid image")
    finally:
        stream.seek(0)


class LocalPhotoStorage(PhotoStorage):
    """Photo bucket on local disk, served under ``base_url``.

    Objects are keyed ``<student_id>.<ext>``; uploading again overwrites.
    """

    def __init__(self, root_dir: str, base_url: str):
        self._root_dir = root_dir
        self._base_url = base_url.rstrip("/")

    @property
    def root_dir(self) -> str:
        return self._root_dir

    def public_url(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    def validate(self, file: FileStorage) -> str:
        ext = photo_extension(file.filename)
        ensure_image(file.stream)
        return ext

    def upload(self, student_id: int, file: FileStorage) -> str:
        ext = self.validate(file)

        key = f"{int(student_id)}.{ext}"
        os.makedirs(self._root_dir, exist_ok=True)
        file.save(os.path.join(self._root_dir, key))

        logger.info("Stored photo %s for student_id=%s", key, student_id)
        return self.public_url(key)
