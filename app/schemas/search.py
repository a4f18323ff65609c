# app/schemas/search.py
import math
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# Category value the client sends when no category filter is selected
ALL_CATEGORIES = "All Categories"

SearchSource = Literal["database", "fallback"]


class SearchRequest(SQLModel):
    """
    Geo search body. `radius` is in kilometres.
    """

    model_config = ConfigDict(extra="ignore")

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius: float | None = Field(default=None, gt=0)
    category: str | None = None
    search: str | None = None

    @field_validator("latitude", "longitude", "radius")
    @classmethod
    def finite(cls, v: float | None) -> float | None:
        if v is not None and not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v


class SearchResult(SQLModel):
    """
    Map card for a business. `id` is a string because fallback rows carry
    placeholder ids.
    """

    id: str
    business_name: str
    category: str
    description: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    address_formatted: str | None = None
    city: str | None = None
    phone: str | None = None
    email: str | None = None
    whatsapp_number: str | None = None
    verification_status: str
    is_active: bool
    created_at: datetime | None = None
    distance_km: float | None = None


class SearchResponse(SQLModel):
    success: bool = True
    businesses: list[SearchResult]
    count: int
    source: SearchSource
    note: str | None = None


class SearchFilters(SQLModel):
    """Normalized filters handed from router to service."""

    latitude: float | None = None
    longitude: float | None = None
    radius_km: float
    category: str | None = None
    search: str | None = None

    @classmethod
    def build(
        cls,
        latitude: float | None,
        longitude: float | None,
        radius_km: float,
        category: str | None,
        search: str | None,
    ) -> "SearchFilters":
        category = (category or "").strip()
        if category == ALL_CATEGORIES:
            category = ""
        search = (search or "").strip()
        return cls(
            latitude=latitude,
            longitude=longitude,
            radius_km=radius_km,
            category=category or None,
            search=search or None,
        )


def result_from_business(business, distance_km: float | None) -> SearchResult:
    return SearchResult(
        id=str(business.id) if isinstance(business.id, uuid.UUID) else business.id,
        business_name=business.business_name,
        category=business.category,
        description=business.description,
        latitude=business.latitude,
        longitude=business.longitude,
        address_formatted=business.address_formatted,
        city=business.city,
        phone=business.phone,
        email=business.email,
        whatsapp_number=business.whatsapp_number,
        verification_status=business.verification_status,
        is_active=business.is_active,
        created_at=business.created_at,
        distance_km=distance_km,
    )
