# app/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent user profile for the directory.

    Identity:
      - id: internal primary key, referenced by businesses and favorites
      - external_id: stable id issued by the identity provider (Supabase
        auth user id). Unique; every login-time lookup goes through it.

    Role:
      - "consumer" | "supplier" | "admin"
      - fixed at first sync; admins are promoted directly in the database.

    This table is *not* responsible for credentials. The identity provider
    owns passwords and sessions; we only mirror identity, name and role.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    external_id: str = Field(
        unique=True,
        index=True,
        max_length=128,
        description="Identity provider user id",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Email from the identity provider",
    )

    full_name: str = Field(
        max_length=200,
        description="Display name; defaults to the email on first sync",
    )

    role: str = Field(
        default="consumer",
        index=True,
        description="Application role: consumer | supplier | admin",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last profile change (UTC)",
    )
