from typing import Iterable, List, Optional
from urllib.parse import quote

from chat_server.schemas.chat_schema import MapLink, PlaceCandidate
from chat_server.utils.config import COUNTRY_QUALIFIER, MAPS_SEARCH_URL


def map_query(place: PlaceCandidate, country: Optional[str] = COUNTRY_QUALIFIER) -> str:
    """Join the non-empty place fields and the country qualifier with commas."""
    parts = [place.name, place.city, place.department, country]
    return ", ".join(p.strip() for p in parts if p and p.strip())


def build_map_link(
    place: PlaceCandidate,
    base_url: str = MAPS_SEARCH_URL,
    country: Optional[str] = COUNTRY_QUALIFIER,
) -> MapLink:
    # encodeURIComponent semantics: nothing but unreserved characters left raw
    encoded = quote(map_query(place, country), safe="-_.!~*'()")
    return MapLink(name=place.name, url=f"{base_url}?api=1&query={encoded}")


def build_map_links(
    places: Iterable[PlaceCandidate],
    base_url: str = MAPS_SEARCH_URL,
    country: Optional[str] = COUNTRY_QUALIFIER,
) -> List[MapLink]:
    return [build_map_link(p, base_url, country) for p in places]
