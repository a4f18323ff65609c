# app/repositories/business_repo.py
import uuid

from sqlalchemy import delete, or_
from sqlmodel import Session, select

from app.core.geo import BoundingBox
from app.models.business import Business, BusinessPhoto
from app.models.favorite import Favorite


def _text_filter(term: str):
    """Case-insensitive substring match on name, description, category, city."""
    return or_(
        Business.business_name.icontains(term, autoescape=True),
        Business.description.icontains(term, autoescape=True),
        Business.category.icontains(term, autoescape=True),
        Business.city.icontains(term, autoescape=True),
    )


class BusinessRepository:
    """
    Data access layer for Business.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, business_id: uuid.UUID) -> Business | None:
        return session.get(Business, business_id)

    def list_for_owner(self, session: Session, user_id: uuid.UUID) -> list[Business]:
        stmt = (
            select(Business)
            .where(Business.user_id == user_id)
            .order_by(
                Business.created_at.desc().nulls_last(),
                Business.business_name.asc(),
            )
        )
        return list(session.exec(stmt).all())

    def create(self, session: Session, business: Business) -> Business:
        session.add(business)
        session.commit()
        session.refresh(business)
        return business

    def update(self, session: Session, business: Business) -> Business:
        session.add(business)
        session.commit()
        session.refresh(business)
        return business

    def delete_with_dependents(self, session: Session, business: Business) -> None:
        """
        Delete photo rows, favorites and finally the business row,
        in a single commit.
        """
        session.execute(delete(BusinessPhoto).where(BusinessPhoto.business_id == business.id))
        session.execute(delete(Favorite).where(Favorite.business_id == business.id))
        session.delete(business)
        session.commit()

    # ----- Search -----

    def search_candidates(
        self,
        session: Session,
        box: BoundingBox,
        category: str | None = None,
        text: str | None = None,
    ) -> list[Business]:
        """
        Visible businesses inside the bounding box.

        The exact great-circle radius check happens in the service.
        """
        stmt = select(Business).where(
            Business.is_active == True,  # noqa: E712
            Business.verification_status == "verified",
            Business.latitude.is_not(None),
            Business.longitude.is_not(None),
            Business.latitude >= box.min_lat,
            Business.latitude <= box.max_lat,
        )
        if box.min_lng is not None and box.max_lng is not None:
            stmt = stmt.where(
                Business.longitude >= box.min_lng,
                Business.longitude <= box.max_lng,
            )
        if category:
            stmt = stmt.where(Business.category == category)
        if text:
            stmt = stmt.where(_text_filter(text))
        return list(session.exec(stmt).all())

    def list_visible(
        self,
        session: Session,
        limit: int,
        category: str | None = None,
        text: str | None = None,
    ) -> list[Business]:
        """Verified, active businesses newest first (map browse without a point)."""
        stmt = select(Business).where(
            Business.is_active == True,  # noqa: E712
            Business.verification_status == "verified",
        )
        if category:
            stmt = stmt.where(Business.category == category)
        if text:
            stmt = stmt.where(_text_filter(text))
        stmt = stmt.order_by(Business.created_at.desc().nulls_last()).limit(limit)
        return list(session.exec(stmt).all())
