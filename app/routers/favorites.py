# app/routers/favorites.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.favorite_repo import FavoriteRepository
from app.repositories.user_repo import UserRepository
from app.schemas.favorite import (
    FavoriteCreate,
    FavoriteDeleteResponse,
    FavoriteListResponse,
    FavoriteRead,
    FavoriteResponse,
)
from app.services.favorite_service import FavoriteService

# Included twice in main: at "/favorites" and at "/consumer/favorites".
router = APIRouter(prefix="/favorites", tags=["Favorites"])

repo = FavoriteRepository()
service = FavoriteService(repo, UserRepository(), BusinessRepository())


@router.get("", response_model=FavoriteListResponse)
def list_favorites(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Saved businesses for a user, newest saved first.

    Inactive listings are left out. Each item carries the business
    fields plus `favorite_id`, `favorited_at` and `cover_photo`.
    """
    favorites = service.list_favorites(session, user_id)
    return FavoriteListResponse(favorites=favorites, count=len(favorites))


@router.post("", response_model=FavoriteResponse)
def add_favorite(
    payload: FavoriteCreate,
    session: Session = Depends(get_session),
):
    """
    Save a business. Saving the same business twice is rejected (400).
    """
    favorite = service.add_favorite(session, payload)
    return FavoriteResponse(
        message="Added to favorites",
        favorite=FavoriteRead.model_validate(favorite),
    )


@router.delete("", response_model=FavoriteDeleteResponse)
def remove_favorite(
    user_id: uuid.UUID,
    business_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Unsave a business. `deleted` is false when it was not saved.
    """
    deleted = service.remove_favorite(session, user_id, business_id)
    return FavoriteDeleteResponse(deleted=deleted)
