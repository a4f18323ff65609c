# app/routers/supplier_dashboard.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import SupplierDashboardStats
from app.services.stats_service import StatsService

router = APIRouter(prefix="/supplier/dashboard", tags=["Supplier Dashboard"])

repo = StatsRepository()
service = StatsService(repo)


@router.get("", response_model=SupplierDashboardStats)
def get_supplier_dashboard(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Counters for the supplier's active listings:
      - total / verified / pending businesses
      - favorites received across all of them
    """
    return service.get_supplier_dashboard(session, user_id)
