# app/services/business_service.py
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core import map_links
from app.core.storage_utils import PhotoStorage, StorageObjectNotFound
from app.models.business import Business, BusinessPhoto
from app.repositories.business_repo import BusinessRepository
from app.repositories.photo_repo import PhotoRepository
from app.repositories.user_repo import UserRepository
from app.schemas.business import (
    OVERWRITE_FIELDS,
    BusinessCreate,
    BusinessUpdate,
    MapLinks,
)

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^a-zA-Z0-9_\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(raw: str) -> str:
    """
    URL-safe slug from a business name:
      - lowercase, trim
      - drop everything but ASCII letters/digits, '_', whitespace and '-'
        (any Unicode space counts as whitespace, e.g. NBSP)
      - collapse whitespace/underscore/hyphen runs to one '-'
      - strip leading/trailing '-'

    Not guaranteed unique; an all-symbol name yields "".
    """
    value = raw.lower().strip()
    value = _NON_WORD.sub("", value)
    value = _SEPARATORS.sub("-", value)
    return value.strip("-")


class BusinessService:
    """
    Business logic for listings.

    Responsibilities:
      - slug generation
      - create / edit / delete orchestration (photos, favorites, Storage)
      - moderation (verification status, active flag)
    """

    def __init__(
        self,
        repo: BusinessRepository,
        user_repo: UserRepository,
        photo_repo: PhotoRepository,
    ):
        self.repo = repo
        self.user_repo = user_repo
        self.photo_repo = photo_repo

    def get_business(self, session: Session, business_id: uuid.UUID) -> Business:
        business = self.repo.get_by_id(session, business_id)
        if not business:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Business not found",
            )
        return business

    def list_for_owner(self, session: Session, user_id: uuid.UUID) -> list[Business]:
        return self.repo.list_for_owner(session, user_id)

    def create_business(self, session: Session, payload: BusinessCreate) -> Business:
        """
        Register a listing. Starts as pending + active.
        """
        if self.user_repo.get_by_id(session, payload.user_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        business = Business(
            **payload.model_dump(),
            slug=slugify(payload.business_name),
        )
        business = self.repo.create(session, business)
        logger.info("Registered business %s (%s)", business.id, business.slug)
        return business

    def update_business(
        self,
        session: Session,
        business_id: uuid.UUID,
        payload: BusinessUpdate,
    ) -> Business:
        """
        Edit a listing.

        - business_name / category: keep the prior value when absent.
        - every other editable field: overwritten, absent => null.

        The slug is not regenerated on rename.
        """
        business = self.get_business(session, business_id)

        if payload.business_name is not None:
            business.business_name = payload.business_name
        if payload.category is not None:
            business.category = payload.category

        for field in OVERWRITE_FIELDS:
            setattr(business, field, getattr(payload, field))

        business.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, business)

    def delete_business(
        self,
        session: Session,
        business_id: uuid.UUID,
        storage_provider: Callable[[], PhotoStorage],
    ) -> None:
        """
        Delete a listing with its photos and favorites, and clean up Storage.

        Storage is only resolved when the listing has photos.
        """
        business = self.get_business(session, business_id)
        photos = self.photo_repo.list_for_business(session, business_id)

        # Best-effort Storage cleanup; the rows go regardless
        if photos:
            self._delete_photo_objects(storage_provider, photos)

        self.repo.delete_with_dependents(session, business)
        logger.info("Deleted business %s with %d photos", business_id, len(photos))

    @staticmethod
    def _delete_photo_objects(
        storage_provider: Callable[[], PhotoStorage],
        photos: list[BusinessPhoto],
    ) -> None:
        try:
            storage = storage_provider()
        except RuntimeError as e:
            logger.warning("Storage unavailable, leaving %d photo objects: %s", len(photos), e)
            return

        for photo in photos:
            try:
                storage.delete(photo.storage_path)
            except StorageObjectNotFound:
                logger.warning("Photo object already gone: %s", photo.storage_path)
            except Exception as e:
                logger.warning("Could not delete photo object %s: %s", photo.storage_path, e)

    def map_links(self, session: Session, business_id: uuid.UUID) -> MapLinks:
        business = self.get_business(session, business_id)
        if business.latitude is None or business.longitude is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Business has no location",
            )

        lat, lng = business.latitude, business.longitude
        return MapLinks(
            google_maps_url=map_links.google_maps_search_url(lat, lng),
            google_directions_url=map_links.google_maps_directions_url(lat, lng),
            apple_maps_url=map_links.apple_maps_url(lat, lng, business.business_name),
            share_text=map_links.share_text(
                business.business_name, business.address_formatted, business.city
            ),
        )

    # ----- Moderation -----

    def set_verification_status(
        self,
        session: Session,
        business_id: uuid.UUID,
        verification_status: str,
    ) -> Business:
        business = self.get_business(session, business_id)
        business.verification_status = verification_status
        business.updated_at = datetime.now(timezone.utc)
        logger.info("Business %s marked %s", business_id, verification_status)
        return self.repo.update(session, business)

    def set_active(
        self,
        session: Session,
        business_id: uuid.UUID,
        is_active: bool,
    ) -> Business:
        business = self.get_business(session, business_id)
        business.is_active = is_active
        business.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, business)
