# app/core/map_links.py
from urllib.parse import urlencode


def google_maps_search_url(latitude: float, longitude: float) -> str:
    return "https://www.google.com/maps/search/?" + urlencode(
        {"api": 1, "query": f"{latitude},{longitude}"}
    )


def google_maps_directions_url(latitude: float, longitude: float) -> str:
    return "https://www.google.com/maps/dir/?" + urlencode(
        {"api": 1, "destination": f"{latitude},{longitude}"}
    )


def apple_maps_url(latitude: float, longitude: float, label: str) -> str:
    return "https://maps.apple.com/?" + urlencode(
        {"q": label, "ll": f"{latitude},{longitude}"}
    )


def share_text(business_name: str, address: str | None, city: str | None) -> str:
    """
    Human-readable text that accompanies a shared location link.

    Example:
        "Kasi Kitchen - 45 Vilakazi Street, Soweto"
    """
    where = address or city
    return f"{business_name} - {where}" if where else business_name
