"""Local-disk storage for images attached to reviews."""

import random
import time
from pathlib import Path

import structlog
from protean.exceptions import ValidationError
from starlette.datastructures import UploadFile

logger = structlog.get_logger(__name__)

DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024

URL_PREFIX = "/uploads"

# Stored files are served by extension, so it comes from the accepted type only
IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class ImageStore:
    """Saves uploaded images under a directory served at ``/uploads``."""

    def __init__(self, directory: Path, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES):
        self.directory = Path(directory)
        self.max_bytes = max_bytes

    def ensure_directory(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    @staticmethod
    def generate_filename(content_type: str) -> str:
        """`<epoch millis>-<random><ext>` for an accepted image type."""
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{IMAGE_EXTENSIONS[content_type]}"

    async def save(self, upload: UploadFile) -> str:
        """Validate and persist an upload, returning the stored filename."""
        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        if content_type not in IMAGE_EXTENSIONS:
            raise ValidationError({"image": ["Only image uploads are accepted"]})

        content = await upload.read(self.max_bytes + 1)
        if len(content) > self.max_bytes:
            raise ValidationError({"image": [f"Image must not exceed {self.max_bytes} bytes"]})
        if not content:
            raise ValidationError({"image": ["Image file is empty"]})

        filename = self.generate_filename(content_type)
        (self.ensure_directory() / filename).write_bytes(content)

        logger.info("Image stored", filename=filename, size=len(content), content_type=content_type)
        return filename

    def discard(self, filename: str) -> None:
        """Remove a stored image, ignoring files that are already gone."""
        (self.directory / filename).unlink(missing_ok=True)
        logger.info("Image discarded", filename=filename)

    @staticmethod
    def public_url(scheme: str, host: str, filename: str) -> str:
        return f"{scheme}://{host}{URL_PREFIX}/{filename}"
