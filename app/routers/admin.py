# app/routers/admin.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.repositories.photo_repo import PhotoRepository
from app.repositories.user_repo import UserRepository
from app.schemas.business import (
    ActiveUpdate,
    BusinessRead,
    BusinessResponse,
    VerificationUpdate,
)
from app.services.business_service import BusinessService

router = APIRouter(
    prefix="/admin/businesses",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)

service = BusinessService(BusinessRepository(), UserRepository(), PhotoRepository())


@router.patch("/{business_id}/verification", response_model=BusinessResponse)
def set_verification_status(
    business_id: uuid.UUID,
    payload: VerificationUpdate,
    session: Session = Depends(get_session),
):
    """
    Moderate a listing (admin only). Only "verified" listings appear in search.
    """
    business = service.set_verification_status(session, business_id, payload.verification_status)
    return BusinessResponse(
        message=f"Business marked {payload.verification_status}",
        business=BusinessRead.model_validate(business),
    )


@router.patch("/{business_id}/active", response_model=BusinessResponse)
def set_active(
    business_id: uuid.UUID,
    payload: ActiveUpdate,
    session: Session = Depends(get_session),
):
    """
    Activate or deactivate a listing (admin only).
    """
    business = service.set_active(session, business_id, payload.is_active)
    return BusinessResponse(
        message="Business activated" if payload.is_active else "Business deactivated",
        business=BusinessRead.model_validate(business),
    )
