"""Image storage for review attachments.

Provides get_image_store() / set_image_store() so tests can point uploads
at a temporary directory.
"""

import os
from pathlib import Path

from shopform.media.store import DEFAULT_MAX_IMAGE_BYTES, ImageStore

_current_store: ImageStore | None = None


def get_image_store() -> ImageStore:
    """Return the configured image store (singleton).

    Configured via UPLOADS_DIR and MAX_IMAGE_BYTES environment variables.
    """
    global _current_store
    if _current_store is None:
        _current_store = ImageStore(
            directory=Path(os.environ.get("UPLOADS_DIR", "uploads")),
            max_bytes=int(os.environ.get("MAX_IMAGE_BYTES", DEFAULT_MAX_IMAGE_BYTES)),
        )
    return _current_store


def set_image_store(store: ImageStore) -> None:
    """Override the active image store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_image_store() -> None:
    """Reset to the environment-configured store."""
    global _current_store
    _current_store = None
