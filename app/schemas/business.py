# app/schemas/business.py
import math
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

VerificationStatus = Literal["pending", "verified", "rejected"]

# Fields an owner may change through PUT /businesses/{id}.
# business_name and category keep their prior value when omitted; every
# other field in this tuple is overwritten, so omitting it clears it.
OVERWRITE_FIELDS: tuple[str, ...] = (
    "description",
    "latitude",
    "longitude",
    "address_formatted",
    "street_address",
    "city",
    "postal_code",
    "country",
    "google_place_id",
    "phone",
    "email",
    "website",
    "whatsapp_number",
    "facebook_url",
    "instagram_url",
    "twitter_url",
    "linkedin_url",
    "tiktok_url",
    "operating_hours",
)


class BusinessDetails(SQLModel):
    """
    Optional descriptive fields shared by create and update payloads.
    """

    model_config = ConfigDict(extra="ignore")

    description: str | None = None

    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    address_formatted: str | None = None
    street_address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    google_place_id: str | None = None

    phone: str | None = None
    email: str | None = None
    website: str | None = None
    whatsapp_number: str | None = None

    facebook_url: str | None = None
    instagram_url: str | None = None
    twitter_url: str | None = None
    linkedin_url: str | None = None
    tiktok_url: str | None = None

    operating_hours: str | None = None

    @field_validator("latitude", "longitude")
    @classmethod
    def finite(cls, v: float | None) -> float | None:
        if v is not None and not math.isfinite(v):
            raise ValueError("coordinate must be a finite number")
        return v


class BusinessCreate(BusinessDetails):
    """
    Registration payload. Requires the owner, a name and a category.
    """

    user_id: uuid.UUID
    business_name: str = Field(max_length=255)
    category: str = Field(max_length=100)

    @field_validator("business_name", "category")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class BusinessUpdate(BusinessDetails):
    """
    Edit payload.

    business_name / category: omitted or null keeps the current value.
    Everything else: written as given, omitted means null.
    """

    business_name: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, max_length=100)

    @field_validator("business_name", "category")
    @classmethod
    def blank_is_absent(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class BusinessRead(BusinessDetails):
    """
    Business representation for clients.
    """

    model_config = ConfigDict(extra="ignore")

    id: uuid.UUID
    user_id: uuid.UUID
    business_name: str
    slug: str
    category: str
    verification_status: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VerificationUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")
    verification_status: VerificationStatus


class ActiveUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")
    is_active: bool


class MapLinks(SQLModel):
    google_maps_url: str
    google_directions_url: str
    apple_maps_url: str
    share_text: str


# ----- Response envelopes -----


class BusinessResponse(SQLModel):
    success: bool = True
    message: str | None = None
    business: BusinessRead


class BusinessListResponse(SQLModel):
    success: bool = True
    businesses: list[BusinessRead]
    count: int


class MapLinksResponse(SQLModel):
    success: bool = True
    links: MapLinks


class MessageResponse(SQLModel):
    success: bool = True
    message: str
