# app/routers/search.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.geo import is_valid_coordinate
from app.database import get_session
from app.repositories.business_repo import BusinessRepository
from app.schemas.search import SearchFilters, SearchRequest, SearchResponse
from app.services.search_service import SearchService

# Mounted before the businesses router so "/businesses/search" is not
# captured by "/businesses/{business_id}".
router = APIRouter(prefix="/businesses/search", tags=["Search"])

settings = get_settings()

repo = BusinessRepository()
service = SearchService(repo)


@router.post("", response_model=SearchResponse)
def search_businesses(
    payload: SearchRequest,
    session: Session = Depends(get_session),
):
    """
    Verified, active businesses within `radius` km of a point,
    nearest first.

    Body:
      - latitude, longitude (required)
      - radius: km, defaults to SEARCH_DEFAULT_RADIUS_KM
      - category: exact match; "All Categories" disables the filter
      - search: substring match on name, description, category, city
    """
    filters = SearchFilters.build(
        latitude=payload.latitude,
        longitude=payload.longitude,
        radius_km=payload.radius or settings.SEARCH_DEFAULT_RADIUS_KM,
        category=payload.category,
        search=payload.search,
    )
    return service.search(session, filters)


@router.get("", response_model=SearchResponse)
def search_businesses_get(
    lat: float | None = None,
    lng: float | None = None,
    radius: float | None = None,
    category: str | None = None,
    search: str | None = None,
    session: Session = Depends(get_session),
):
    """
    Query-string variant of the search.

    Without `lat` and `lng` it lists verified, active businesses newest
    first (no distance).
    """
    if (lat is None) != (lng is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="lat and lng must be provided together",
        )
    if lat is not None and not is_valid_coordinate(lat, lng):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="lat/lng must be finite numbers within range",
        )
    if radius is not None and not (0 < radius < float("inf")):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="radius must be a positive number of kilometres",
        )

    filters = SearchFilters.build(
        latitude=lat,
        longitude=lng,
        radius_km=radius or settings.SEARCH_DEFAULT_RADIUS_KM,
        category=category,
        search=search,
    )
    return service.search(session, filters)
