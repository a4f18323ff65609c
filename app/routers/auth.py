# app/routers/auth.py
from typing import Any

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import enforce_identity, get_token_claims
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.user import SyncUserRequest, SyncUserResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = UserService(repo)


@router.post("/sync-user", response_model=SyncUserResponse)
def sync_user(
    payload: SyncUserRequest,
    session: Session = Depends(get_session),
    claims: dict[str, Any] | None = Depends(get_token_claims),
):
    """
    Map the signed-in identity provider account to a user row.

    Safe to call on every login: an existing row is returned unchanged.
    If the database is unreachable the response still succeeds with
    `sync_pending=true` (see USER_SYNC_FALLBACK_ENABLED).
    """
    enforce_identity(payload.external_id, claims)
    user, message = service.sync_user(session, payload)
    return SyncUserResponse(message=message, user=user)
