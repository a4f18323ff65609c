# app/repositories/favorite_repo.py
import uuid

from sqlalchemy import delete
from sqlmodel import Session, select

from app.models.business import Business, BusinessPhoto
from app.models.favorite import Favorite


class FavoriteRepository:
    """
    Data access layer for favorites.

    Uniqueness of (user_id, business_id) is a DB constraint, so `create`
    raises sqlalchemy.exc.IntegrityError on duplicates; the service maps it.
    """

    def create(self, session: Session, favorite: Favorite) -> Favorite:
        session.add(favorite)
        session.commit()
        session.refresh(favorite)
        return favorite

    def delete_pair(
        self,
        session: Session,
        user_id: uuid.UUID,
        business_id: uuid.UUID,
    ) -> int:
        """Delete the (user, business) row if present; returns rows affected."""
        result = session.execute(
            delete(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.business_id == business_id,
            )
        )
        session.commit()
        return result.rowcount or 0

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> list[tuple[Favorite, Business, str | None]]:
        """
        Favorites joined with their (active) business and cover photo URL,
        newest favorited first.
        """
        cover_photo = (
            select(BusinessPhoto.photo_url)
            .where(
                BusinessPhoto.business_id == Business.id,
                BusinessPhoto.is_primary == True,  # noqa: E712
            )
            .limit(1)
            .correlate(Business)
            .scalar_subquery()
        )

        stmt = (
            select(Favorite, Business, cover_photo.label("cover_photo"))
            .join(Business, Business.id == Favorite.business_id)
            .where(
                Favorite.user_id == user_id,
                Business.is_active == True,  # noqa: E712
            )
            .order_by(Favorite.created_at.desc())
        )
        return [tuple(row) for row in session.exec(stmt).all()]
