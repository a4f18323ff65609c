# app/core/geo.py
"""
Great-circle helpers for the business search.

Distances use the haversine formula on a spherical earth with the IUGG mean
radius, which is what PostGIS returns for geography distances computed with
use_spheroid=false.
"""
import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0088


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    # None when the box crosses the antimeridian or reaches a pole;
    # callers then skip the longitude filter.
    min_lng: float | None
    max_lng: float | None


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points, in kilometres."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    # Clamp for floating point drift on antipodal points
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def bounding_box(lat: float, lng: float, radius_km: float) -> BoundingBox:
    """
    Smallest lat/lng rectangle containing every point within `radius_km`.

    Used as a cheap index-friendly prefilter before the exact distance check.
    """
    d_lat = math.degrees(radius_km / EARTH_RADIUS_KM)
    min_lat = lat - d_lat
    max_lat = lat + d_lat

    if min_lat <= -90 or max_lat >= 90:
        return BoundingBox(max(min_lat, -90.0), min(max_lat, 90.0), None, None)

    d_lng = math.degrees(
        math.asin(min(1.0, math.sin(radius_km / EARTH_RADIUS_KM) / math.cos(math.radians(lat))))
    )
    min_lng = lng - d_lng
    max_lng = lng + d_lng

    if min_lng < -180 or max_lng > 180:
        return BoundingBox(min_lat, max_lat, None, None)

    return BoundingBox(min_lat, max_lat, min_lng, max_lng)


def is_valid_coordinate(lat: float, lng: float) -> bool:
    return (
        math.isfinite(lat)
        and math.isfinite(lng)
        and -90 <= lat <= 90
        and -180 <= lng <= 180
    )
