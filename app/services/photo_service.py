# app/services/photo_service.py
import logging
import re
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.storage_utils import PhotoStorage, StorageObjectNotFound, build_photo_path
from app.models.business import BusinessPhoto
from app.repositories.business_repo import BusinessRepository
from app.repositories.photo_repo import PhotoRepository

logger = logging.getLogger(__name__)
settings = get_settings()

# Canonical textual UUID (versions 1-5, RFC 4122 variant)
UUID_REGEX = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

_EXT_REGEX = re.compile(r"^[a-z0-9]{1,10}$")


def parse_uuid(value: str | None, field: str) -> uuid.UUID:
    """
    Raises:
        HTTPException(400): missing or not a canonical UUID.
    """
    if not value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field} is required",
        )
    if not UUID_REGEX.match(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {field} (must be UUID)",
        )
    return uuid.UUID(value)


def format_size(num_bytes: int) -> str:
    """Human-readable size: "10MB", "512KB", "900 bytes"."""
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes / (1024 * 1024):g}MB"
    if num_bytes >= 1024:
        return f"{num_bytes / 1024:g}KB"
    return f"{num_bytes} bytes"


def file_extension(filename: str | None, content_type: str) -> str:
    """
    Extension of the uploaded file, lowercased.

    Falls back to the content subtype ("image/png" -> "png") when the
    original name has no usable extension.
    """
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].lower()
        if _EXT_REGEX.match(ext):
            return ext
    subtype = content_type.split("/", 1)[-1].split("+", 1)[0].lower()
    return subtype if _EXT_REGEX.match(subtype) else "bin"


class PhotoService:
    """
    Business logic for business photos.

    Responsibilities:
      - upload validation (business id, file presence, type, size)
      - Storage upload/delete orchestration
      - keeping a single primary (cover) photo per business
    """

    def __init__(self, repo: PhotoRepository, business_repo: BusinessRepository):
        self.repo = repo
        self.business_repo = business_repo

    def _require_business(self, session: Session, business_id: uuid.UUID) -> None:
        if self.business_repo.get_by_id(session, business_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Business not found",
            )

    def list_photos(self, session: Session, business_id: uuid.UUID) -> list[BusinessPhoto]:
        """Primary photo first, then oldest first."""
        return self.repo.list_for_business(session, business_id)

    def upload_photo(
        self,
        session: Session,
        storage: PhotoStorage,
        business_id_raw: str | None,
        is_primary: bool,
        filename: str | None,
        content_type: str | None,
        file_bytes: bytes,
    ) -> BusinessPhoto:
        """
        Store the blob, then insert the row.

        If the insert fails after the upload, the blob is left behind;
        there is no compensating delete.
        """
        business_id = parse_uuid(business_id_raw, "business_id")

        if not content_type or not content_type.startswith("image/"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported file type. Only images are allowed.",
            )
        if len(file_bytes) > settings.MAX_UPLOAD_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large (max {format_size(settings.MAX_UPLOAD_BYTES)}).",
            )

        self._require_business(session, business_id)

        path = build_photo_path(business_id, file_extension(filename, content_type))
        try:
            public_url = storage.upload(path, file_bytes, content_type)
        except Exception as e:
            logger.error("Photo upload to storage failed for %s: %s", path, e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to upload photo: {e}",
            )

        photo = self.repo.create(
            session,
            BusinessPhoto(
                business_id=business_id,
                photo_url=public_url,
                storage_path=path,
                is_primary=is_primary,
            ),
        )
        logger.info("Stored photo %s for business %s (primary=%s)", photo.id, business_id, is_primary)
        return photo

    def delete_photo(
        self,
        session: Session,
        storage: PhotoStorage,
        photo_id_raw: str | None,
    ) -> None:
        """
        Remove the blob, then the row. A missing row or a missing blob is
        reported to the caller.
        """
        photo_id = parse_uuid(photo_id_raw, "photo_id")

        photo = self.repo.get_by_id(session, photo_id)
        if not photo:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Photo not found",
            )

        try:
            storage.delete(photo.storage_path)
        except StorageObjectNotFound:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Photo file not found in storage",
            )
        except Exception as e:
            logger.error("Photo delete from storage failed for %s: %s", photo.storage_path, e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to delete photo: {e}",
            )

        self.repo.delete(session, photo)
