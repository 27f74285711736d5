"""
Object Storage - uploaded document bytes.

Files live under storage_dir with per-user-prefixed keys
("<user_id>/<epoch_ms>-<random>.<ext>") and are served read-only from /files,
so storage_url is publicly fetchable.
"""

import logging
import os
import time
import uuid

from skillsync.core.config import get_settings
from skillsync.utils.file_upload import get_file_extension

logger = logging.getLogger(__name__)


class ObjectStore:

    def __init__(self, root: str, public_base_url: str):
        self.root = os.path.abspath(root)
        self.public_base_url = public_base_url.rstrip("/")

    def build_key(self, owner_id: int, filename: str) -> str:
        ext = get_file_extension(filename)
        return f"{owner_id}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.root, key))
        if not path.startswith(self.root + os.sep):
            raise ValueError(f"Storage key escapes storage root: {key}")
        return path

    def put(self, key: str, content: bytes) -> str:
        """Write bytes under key and return their public URL."""
        path = self._path(key)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)
        logger.info("Stored %d bytes at %s", len(content), key)
        return self.public_url(key)

    def read(self, key: str) -> bytes:
        with open(self._path(key), "rb") as f:
            return f.read()

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/files/{key}"


def get_object_store() -> ObjectStore:
    settings = get_settings()
    return ObjectStore(settings.storage_dir, settings.public_base_url)
