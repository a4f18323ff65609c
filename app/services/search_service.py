# app/services/search_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.geo import bounding_box, haversine_km
from app.repositories.business_repo import BusinessRepository
from app.schemas.search import (
    SearchFilters,
    SearchResponse,
    SearchResult,
    result_from_business,
)

logger = logging.getLogger(__name__)
settings = get_settings()

FALLBACK_NOTE = "Using placeholder data - database not available."

# Served when the store is unreachable so the map still renders something.
FALLBACK_BUSINESSES: tuple[dict, ...] = (
    {
        "id": "fallback-1",
        "business_name": "Ubuntu Coffee Shop",
        "category": "Coffee Shop",
        "description": "Authentic African coffee experience",
        "latitude": -26.2041,
        "longitude": 28.0473,
        "address_formatted": "123 Nelson Mandela Square, Sandton",
        "city": "Johannesburg",
        "phone": "+27 11 123 4567",
        "email": "info@ubuntucoffee.co.za",
        "whatsapp_number": "+27711234567",
    },
    {
        "id": "fallback-2",
        "business_name": "Kasi Kitchen",
        "category": "Restaurant",
        "description": "Traditional South African cuisine",
        "latitude": -26.1950,
        "longitude": 28.0550,
        "address_formatted": "45 Vilakazi Street, Soweto",
        "city": "Johannesburg",
        "phone": "+27 11 234 5678",
        "email": "hello@kasikitchen.co.za",
        "whatsapp_number": "+27712345678",
    },
    {
        "id": "fallback-3",
        "business_name": "Afro Hair Salon",
        "category": "Beauty Salon",
        "description": "Specializing in natural hair care",
        "latitude": -26.2100,
        "longitude": 28.0400,
        "address_formatted": "78 Rosebank Mall, Rosebank",
        "city": "Johannesburg",
        "phone": "+27 11 345 6789",
        "email": "bookings@afrohair.co.za",
        "whatsapp_number": "+27713456789",
    },
)


class SearchService:
    """
    Geo search over verified, active businesses.

    Distances are great-circle kilometres. The repository narrows
    candidates with a bounding box; this service applies the exact radius,
    orders by distance and caps the result.
    """

    def __init__(self, repo: BusinessRepository):
        self.repo = repo

    def search(self, session: Session, filters: SearchFilters) -> SearchResponse:
        try:
            if filters.latitude is None or filters.longitude is None:
                results = self._browse(session, filters)
            else:
                results = self._nearby(session, filters)
        except SQLAlchemyError as e:
            session.rollback()
            if not settings.SEARCH_FALLBACK_ENABLED:
                raise
            logger.warning("Search store unavailable, serving fallback data: %s", e)
            results = self._fallback(filters)
            return SearchResponse(
                businesses=results,
                count=len(results),
                source="fallback",
                note=FALLBACK_NOTE,
            )

        return SearchResponse(businesses=results, count=len(results), source="database")

    def _nearby(self, session: Session, filters: SearchFilters) -> list[SearchResult]:
        box = bounding_box(filters.latitude, filters.longitude, filters.radius_km)
        candidates = self.repo.search_candidates(
            session,
            box,
            category=filters.category,
            text=filters.search,
        )

        scored = []
        for business in candidates:
            distance = haversine_km(
                filters.latitude, filters.longitude, business.latitude, business.longitude
            )
            if distance <= filters.radius_km:
                scored.append((distance, business))

        scored.sort(key=lambda pair: pair[0])
        return [
            result_from_business(business, distance)
            for distance, business in scored[: settings.SEARCH_RESULT_LIMIT]
        ]

    def _browse(self, session: Session, filters: SearchFilters) -> list[SearchResult]:
        rows = self.repo.list_visible(
            session,
            limit=settings.SEARCH_RESULT_LIMIT,
            category=filters.category,
            text=filters.search,
        )
        return [result_from_business(b, None) for b in rows]

    @staticmethod
    def _fallback(filters: SearchFilters) -> list[SearchResult]:
        results = []
        for row in FALLBACK_BUSINESSES:
            distance = None
            if filters.latitude is not None and filters.longitude is not None:
                distance = round(
                    haversine_km(filters.latitude, filters.longitude, row["latitude"], row["longitude"]),
                    3,
                )
            results.append(
                SearchResult(
                    **row,
                    verification_status="verified",
                    is_active=True,
                    distance_km=distance,
                )
            )

        if filters.latitude is not None:
            results.sort(key=lambda r: r.distance_km)
        return results
