# app/routers/users.py
from typing import Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import enforce_identity, get_token_claims
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserRead, UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo)


@router.get("/{external_id}", response_model=UserResponse)
def get_user(
    external_id: str,
    session: Session = Depends(get_session),
    claims: dict[str, Any] | None = Depends(get_token_claims),
):
    """
    Profile of the user linked to an identity provider id.
    """
    enforce_identity(external_id, claims)
    user = service.get_by_external_id(session, external_id)
    return UserResponse(user=UserRead.model_validate(user))


@router.put("/{external_id}", response_model=UserResponse)
def update_user(
    external_id: str,
    payload: UserUpdate,
    session: Session = Depends(get_session),
    claims: dict[str, Any] | None = Depends(get_token_claims),
):
    """
    Update the display name.
    """
    enforce_identity(external_id, claims)
    user = service.update_profile(session, external_id, payload)
    return UserResponse(
        message="Profile updated successfully",
        user=UserRead.model_validate(user),
    )
