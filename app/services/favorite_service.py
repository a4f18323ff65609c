# app/services/favorite_service.py
import uuid

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.models.favorite import Favorite
from app.repositories.business_repo import BusinessRepository
from app.repositories.favorite_repo import FavoriteRepository
from app.repositories.user_repo import UserRepository
from app.schemas.business import BusinessRead
from app.schemas.favorite import FavoriteBusinessRead, FavoriteCreate


class FavoriteService:
    """
    Business logic for saved businesses.

    Rules:
      - (user, business) is unique; the DB constraint decides, no pre-check
      - removing a missing favorite is not an error
      - listings of inactive businesses are hidden from the favorites list
    """

    def __init__(
        self,
        repo: FavoriteRepository,
        user_repo: UserRepository,
        business_repo: BusinessRepository,
    ):
        self.repo = repo
        self.user_repo = user_repo
        self.business_repo = business_repo

    def add_favorite(self, session: Session, payload: FavoriteCreate) -> Favorite:
        if self.user_repo.get_by_id(session, payload.user_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        if self.business_repo.get_by_id(session, payload.business_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Business not found",
            )

        try:
            return self.repo.create(
                session,
                Favorite(user_id=payload.user_id, business_id=payload.business_id),
            )
        except IntegrityError:
            session.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Business already in favorites",
            )

    def remove_favorite(
        self,
        session: Session,
        user_id: uuid.UUID,
        business_id: uuid.UUID,
    ) -> bool:
        """Returns True if a row was deleted."""
        return self.repo.delete_pair(session, user_id, business_id) > 0

    def list_favorites(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> list[FavoriteBusinessRead]:
        favorites: list[FavoriteBusinessRead] = []
        for favorite, business, cover_photo in self.repo.list_for_user(session, user_id):
            business_data = BusinessRead.model_validate(business).model_dump()
            favorites.append(
                FavoriteBusinessRead(
                    **business_data,
                    favorite_id=favorite.id,
                    favorited_at=favorite.created_at,
                    cover_photo=cover_photo,
                )
            )
        return favorites
