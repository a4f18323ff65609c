# app/models/business.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Business(SQLModel, table=True):
    """
    Business listing owned by a supplier.

    Visibility in search requires:
      - is_active = true
      - verification_status = "verified"
      - latitude and longitude both set
    """

    __tablename__ = "businesses"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
        description="Owning user (users.id)",
    )

    business_name: str = Field(max_length=255, index=True)

    # Derived from business_name at creation; NOT unique
    slug: str = Field(max_length=255, index=True)

    category: str = Field(max_length=100, index=True)
    description: str | None = None

    # Location
    latitude: float | None = Field(default=None, index=True)
    longitude: float | None = Field(default=None, index=True)
    address_formatted: str | None = None
    street_address: str | None = None
    city: str | None = Field(default=None, index=True)
    postal_code: str | None = None
    country: str | None = None
    google_place_id: str | None = None

    # Contact
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    whatsapp_number: str | None = None

    # Social links
    facebook_url: str | None = None
    instagram_url: str | None = None
    twitter_url: str | None = None
    linkedin_url: str | None = None
    tiktok_url: str | None = None

    # Free text, e.g. "Mon-Fri 08:00-17:00"
    operating_hours: str | None = None

    # pending | verified | rejected
    verification_status: str = Field(
        default="pending",
        index=True,
        description="Moderation state; only verified listings are searchable",
    )

    is_active: bool = Field(default=True, index=True)

    created_at: datetime | None = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime | None = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last edit timestamp (UTC)",
    )


class BusinessPhoto(SQLModel, table=True):
    """
    Photo attached to a business.

    At most one photo per business has is_primary = true (the cover photo).
    """

    __tablename__ = "business_photos"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    business_id: uuid.UUID = Field(
        foreign_key="businesses.id",
        index=True,
        description="FK to businesses.id",
    )

    photo_url: str = Field(description="Public URL in Supabase Storage")

    storage_path: str = Field(description="Object path inside the bucket")

    is_primary: bool = Field(default=False, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Upload timestamp (UTC)",
    )
