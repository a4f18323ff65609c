# app/repositories/stats_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.business import Business
from app.models.favorite import Favorite


class StatsRepository:
    """
    Read-only aggregated queries for the supplier dashboard.

    All counts only consider the owner's active businesses.
    """

    def count_businesses(
        self,
        session: Session,
        user_id: uuid.UUID,
        verification_status: str | None = None,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(Business)
            .where(Business.user_id == user_id, Business.is_active == True)  # noqa: E712
        )
        if verification_status is not None:
            stmt = stmt.where(Business.verification_status == verification_status)
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_favorites_for_owner(self, session: Session, user_id: uuid.UUID) -> int:
        """
        Total favorites across every active business the user owns.
        """
        stmt = (
            select(func.count(Favorite.id))
            .join(Business, Business.id == Favorite.business_id)
            .where(Business.user_id == user_id, Business.is_active == True)  # noqa: E712
        )
        value = session.exec(stmt).one()
        return int(value or 0)
