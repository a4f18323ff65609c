# app/routers/businesses.py
import uuid
from typing import Callable

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.storage_utils import PhotoStorage, get_storage_provider
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.photo_repo import PhotoRepository
from app.repositories.user_repo import UserRepository
from app.schemas.business import (
    BusinessCreate,
    BusinessListResponse,
    BusinessRead,
    BusinessResponse,
    BusinessUpdate,
    MapLinksResponse,
    MessageResponse,
)
from app.schemas.photo import PhotoListResponse, PhotoRead
from app.services.business_service import BusinessService
from app.services.photo_service import PhotoService

router = APIRouter(prefix="/businesses", tags=["Businesses"])

repo = BusinessRepository()
photo_repo = PhotoRepository()
service = BusinessService(repo, UserRepository(), photo_repo)
photo_service = PhotoService(photo_repo, repo)


@router.post(
    "",
    response_model=BusinessResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_business(
    payload: BusinessCreate,
    session: Session = Depends(get_session),
):
    """
    Register a new listing for `user_id`.

    - Requires business_name and category.
    - Slug is derived from the name (not unique).
    - Starts with verification_status="pending".
    """
    business = service.create_business(session, payload)
    return BusinessResponse(business=BusinessRead.model_validate(business))


@router.get("", response_model=BusinessListResponse)
def list_businesses(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    All listings owned by `user_id`, newest first.
    """
    businesses = service.list_for_owner(session, user_id)
    return BusinessListResponse(
        businesses=[BusinessRead.model_validate(b) for b in businesses],
        count=len(businesses),
    )


@router.get("/{business_id}", response_model=BusinessResponse)
def get_business(
    business_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    business = service.get_business(session, business_id)
    return BusinessResponse(business=BusinessRead.model_validate(business))


@router.put("/{business_id}", response_model=BusinessResponse)
def update_business(
    business_id: uuid.UUID,
    payload: BusinessUpdate,
    session: Session = Depends(get_session),
):
    """
    Edit a listing.

    business_name and category keep their value when omitted; every other
    field is replaced, so omitted fields are cleared.
    """
    business = service.update_business(session, business_id, payload)
    return BusinessResponse(
        message="Business updated successfully",
        business=BusinessRead.model_validate(business),
    )


@router.delete("/{business_id}", response_model=MessageResponse)
def delete_business(
    business_id: uuid.UUID,
    session: Session = Depends(get_session),
    storage_provider: Callable[[], PhotoStorage] = Depends(get_storage_provider),
):
    """
    Delete a listing, its photos (rows and files) and favorites.
    """
    service.delete_business(session, business_id, storage_provider)
    return MessageResponse(message="Business deleted successfully")


@router.get("/{business_id}/photos", response_model=PhotoListResponse)
def list_business_photos(
    business_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Photos of a business, cover photo first.
    """
    photos = photo_service.list_photos(session, business_id)
    return PhotoListResponse(photos=[PhotoRead.model_validate(p) for p in photos])


@router.get("/{business_id}/map-links", response_model=MapLinksResponse)
def get_map_links(
    business_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Google Maps / Apple Maps links and share text for a listing.
    """
    return MapLinksResponse(links=service.map_links(session, business_id))
