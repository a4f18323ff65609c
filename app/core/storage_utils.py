# app/core/storage_utils.py
import secrets
import string
import time
import uuid
from functools import lru_cache
from typing import Callable

from app.core.config import get_settings
from app.core.supabase_client import supabase_admin

settings = get_settings()

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class StorageObjectNotFound(Exception):
    """Raised when a delete targets an object that is not in the bucket."""


class PhotoStorage:
    """
    Thin wrapper over a public Supabase Storage bucket.

    Objects are addressed by their path inside the bucket; the same path is
    stored on the photo row so the blob can be removed later.
    """

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    def upload(self, path: str, file_bytes: bytes, content_type: str) -> str:
        """
        Upload raw bytes and return the public URL.

        Raises:
            Any exception raised by the Supabase client if upload fails.
        """
        self.client.storage.from_(self.bucket).upload(
            path,
            file_bytes,
            {"content-type": content_type, "upsert": "false"},
        )
        return self.client.storage.from_(self.bucket).get_public_url(path)

    def delete(self, path: str) -> None:
        """
        Delete an object by its bucket path.

        Raises:
            StorageObjectNotFound: if nothing was removed.
        """
        # Supabase Python client expects a list of paths and returns the
        # objects it actually removed.
        removed = self.client.storage.from_(self.bucket).remove([path])
        if not removed:
            raise StorageObjectNotFound(path)


@lru_cache
def get_storage() -> PhotoStorage:
    """FastAPI dependency returning the configured photo bucket."""
    return PhotoStorage(supabase_admin(), settings.STORAGE_BUCKET)


def get_storage_provider() -> Callable[[], PhotoStorage]:
    """
    FastAPI dependency for routes that only sometimes touch Storage.

    Returns the factory instead of the bucket, so the Supabase client is
    only built (and its key only required) when it is actually used.
    """
    return get_storage


def build_photo_path(business_id: uuid.UUID, ext: str) -> str:
    """
    Storage key for a new business photo.

    Pattern:
        business-<business_id>/<epoch_ms>-<random>.<ext>
    """
    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(6))
    return f"business-{business_id}/{timestamp}-{suffix}.{ext}"
