# app/services/user_service.py
import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from app.core.config import get_settings
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import SyncedUser, SyncUserRequest, UserUpdate

logger = logging.getLogger(__name__)
settings = get_settings()


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - map identity provider accounts to user rows (sync)
      - profile read / name update by external id
      - map domain errors to HTTP errors
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    # ----- Sync -----

    def sync_user(
        self,
        session: Session,
        payload: SyncUserRequest,
    ) -> tuple[SyncedUser, str]:
        """
        Idempotently map an external identity to a user row.

        Rules:
          - existing row => returned unchanged (name/role are NOT updated)
          - new row => role defaults to "consumer", name defaults to email
          - store failure => synthesized user with sync_pending=True
            (only when USER_SYNC_FALLBACK_ENABLED; otherwise re-raised)

        Returns:
            (user, message)
        """
        try:
            user = self.repo.get_by_external_id(session, payload.external_id)
            if user is None:
                user = self.repo.create(
                    session,
                    User(
                        external_id=payload.external_id,
                        email=payload.email,
                        full_name=payload.full_name or payload.email,
                        role=payload.role or "consumer",
                    ),
                )
                logger.info("Created user %s for external id %s", user.id, user.external_id)
        except IntegrityError:
            session.rollback()
            # A concurrent first sync for the same identity won the insert
            user = self.repo.get_by_external_id(session, payload.external_id)
            if user is None:
                # email already linked to another identity
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Email is already registered to another account",
                )
        except SQLAlchemyError as e:
            session.rollback()
            if not settings.USER_SYNC_FALLBACK_ENABLED:
                raise
            logger.warning("User sync failed, returning pending user: %s", e)
            return self._pending_user(payload), "User authenticated (database sync pending)"

        return (
            SyncedUser(
                id=str(user.id),
                external_id=user.external_id,
                email=user.email,
                full_name=user.full_name,
                role=user.role,
                created_at=user.created_at,
                updated_at=user.updated_at,
            ),
            "User synced successfully",
        )

    @staticmethod
    def _pending_user(payload: SyncUserRequest) -> SyncedUser:
        return SyncedUser(
            id=payload.external_id,
            external_id=payload.external_id,
            email=payload.email,
            full_name=payload.full_name or payload.email,
            role=payload.role or "consumer",
            sync_pending=True,
        )

    # ----- Profile -----

    def get_by_external_id(self, session: Session, external_id: str) -> User:
        """
        Raises:
            HTTPException(404): if not found.
        """
        user = self.repo.get_by_external_id(session, external_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_profile(
        self,
        session: Session,
        external_id: str,
        payload: UserUpdate,
    ) -> User:
        """
        Change the display name. This is the only path that edits a
        user after the first sync.
        """
        user = self.get_by_external_id(session, external_id)
        user.full_name = payload.full_name
        user.updated_at = datetime.now(timezone.utc)
        return self.repo.update(session, user)
