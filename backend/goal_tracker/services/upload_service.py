import logging
import random
import re
import time
from pathlib import Path

import aiofiles
from fastapi import UploadFile

from goal_tracker.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

UPLOAD_URL_PREFIX = "/uploads/"

_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,10}$")
_FILENAME_RE = re.compile(r"^[\w\-\.]+$")


class UploadError(ValueError):
    """Base class for rejected uploads."""


class EmptyUpload(UploadError):
    pass


class UnsupportedUploadType(UploadError):
    pass


class UploadTooLarge(UploadError):
    pass


class UploadService:
    """Service for storing completion photos on disk."""

    def __init__(self):
        self.base_dir = Path(settings.upload_dir)
        self.max_file_size = settings.max_upload_size_mb * 1024 * 1024
        self.allowed_types = {t.lower() for t in settings.allowed_upload_types}

    def ensure_upload_dir(self) -> Path:
        """Create the upload directory if needed."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        return self.base_dir

    def _generate_filename(self, original_name: str | None) -> str:
        """Timestamp plus random suffix, keeping the original extension."""
        extension = Path(original_name or "").suffix.lower()
        if not _EXTENSION_RE.match(extension):
            extension = ""
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        return unique_suffix + extension

    def _validate_filename(self, filename: str) -> bool:
        """Validate filename to prevent path traversal attacks."""
        return bool(_FILENAME_RE.match(filename)) and filename not in (".", "..")

    def validate_upload(self, content_type: str | None, size: int) -> None:
        """Reject uploads of the wrong type or size before anything is written."""
        media_type = (content_type or "").split(";")[0].strip().lower()
        if media_type not in self.allowed_types:
            raise UnsupportedUploadType(f"Unsupported image type: {media_type or 'unknown'}")
        if size == 0:
            raise EmptyUpload("Uploaded file is empty")
        if size > self.max_file_size:
            raise UploadTooLarge(
                f"File size exceeds limit of {settings.max_upload_size_mb}MB"
            )

    async def save(self, upload: UploadFile) -> str:
        """Store an uploaded photo and return its public URL."""
        # Read one byte past the limit so oversized files are detected
        content = await upload.read(self.max_file_size + 1)
        self.validate_upload(upload.content_type, len(content))

        filename = self._generate_filename(upload.filename)
        file_path = self.ensure_upload_dir() / filename
        async with aiofiles.open(file_path, mode="wb") as f:
            await f.write(content)

        logger.info(f"Stored upload {filename} ({len(content)} bytes)")
        return UPLOAD_URL_PREFIX + filename

    def path_for_url(self, url: str) -> Path | None:
        """Map a stored photo URL back to its file, or None if it is not ours."""
        if not url or not url.startswith(UPLOAD_URL_PREFIX):
            return None
        filename = url[len(UPLOAD_URL_PREFIX):]
        if not self._validate_filename(filename):
            return None
        return self.base_dir / filename

    async def delete(self, url: str) -> None:
        """Delete the file behind a photo URL if it still exists."""
        file_path = self.path_for_url(url)
        if file_path is None:
            return
        if file_path.exists():
            file_path.unlink()
            logger.info(f"Removed upload {file_path.name}")


def get_upload_service() -> UploadService:
    """Get the upload service instance."""
    return UploadService()
