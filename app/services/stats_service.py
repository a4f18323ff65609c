# app/services/stats_service.py
import uuid

from sqlmodel import Session

from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import SupplierDashboardStats


class StatsService:
    """
    Orchestrates the supplier dashboard counters.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_supplier_dashboard(
        self,
        session: Session,
        user_id: uuid.UUID,
    ) -> SupplierDashboardStats:
        return SupplierDashboardStats(
            total_businesses=self.repo.count_businesses(session, user_id),
            verified_businesses=self.repo.count_businesses(session, user_id, "verified"),
            pending_businesses=self.repo.count_businesses(session, user_id, "pending"),
            total_favorites=self.repo.count_favorites_for_owner(session, user_id),
        )
