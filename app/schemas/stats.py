# app/schemas/stats.py
from pydantic import ConfigDict
from sqlmodel import SQLModel


class SupplierDashboardStats(SQLModel):
    """
    Counters for a supplier's dashboard, over active businesses only.
    """
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    total_businesses: int
    verified_businesses: int
    pending_businesses: int
    total_favorites: int
