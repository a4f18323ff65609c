# app/models/favorite.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Favorite(SQLModel, table=True):
    """
    A consumer's saved business.
    One user cannot have 2 rows for the same business (enforced by the DB).
    """

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "business_id", name="uq_favorites_user_business"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    business_id: uuid.UUID = Field(
        foreign_key="businesses.id",
        index=True,
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
