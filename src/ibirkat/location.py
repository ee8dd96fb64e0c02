"""Location layer — free-text address to a GeoContext.

Geocoding uses Nominatim (OpenStreetMap) over httpx and the IANA zone comes
from timezonefinder. The zmanim core never calls this module; it only takes
the resolved GeoContext.
"""

import logging

import httpx
from timezonefinder import TimezoneFinder

from ibirkat.models import GeoContext

_LOGGER = logging.getLogger(__name__)

_tf = TimezoneFinder()

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
USER_AGENT = "iBirkat/1.0 (zmanim command-line client)"

FALLBACK_LOCATION = GeoContext(
    latitude=31.778,
    longitude=35.235,
    time_zone="Asia/Jerusalem",
    elevation_m=0.0,
    display_name="ירושלים",
)


class GeocodingError(Exception):
    """Geocoder call failure."""


def fallback_location(elevation_m: float = 0.0) -> GeoContext:
    """Jerusalem, used whenever no location can be resolved."""
    return GeoContext(
        latitude=FALLBACK_LOCATION.latitude,
        longitude=FALLBACK_LOCATION.longitude,
        time_zone=FALLBACK_LOCATION.time_zone,
        elevation_m=elevation_m,
        display_name=FALLBACK_LOCATION.display_name,
    )


def _geocode_nominatim(address: str) -> tuple[float, float, str] | None:
    """Nominatim geocoder. Returns (lat, lng, display_name) or None."""
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": USER_AGENT}
    try:
        resp = httpx.get(NOMINATIM_URL, params=params, headers=headers, timeout=10)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        raise GeocodingError(f"Nominatim request failed: {e}") from e
    results = resp.json()
    if not results:
        return None
    r = results[0]
    return float(r["lat"]), float(r["lon"]), r["display_name"]


def timezone_for(latitude: float, longitude: float) -> str:
    """IANA zone id for a coordinate.

    Raises:
        GeocodingError: When the coordinate has no zone (open ocean).
    """
    tz_str = _tf.timezone_at(lat=latitude, lng=longitude)
    if tz_str is None:
        raise GeocodingError(f"Timezone not found: lat={latitude}, lng={longitude}")
    return tz_str


def resolve_location(address: str, elevation_m: float = 0.0) -> GeoContext:
    """Resolve an address string to a GeoContext.

    Args:
        address: Address or place name in any language.
        elevation_m: Observer elevation in metres; Nominatim does not report one.

    Returns:
        GeoContext with lat/lng, IANA zone and the geocoder's display name.

    Raises:
        GeocodingError: On API error or when the address cannot be found.
    """
    result = _geocode_nominatim(address)
    if result is None:
        raise GeocodingError(f"Address not found: {address}")
    lat, lng, display_name = result
    _LOGGER.debug("Resolved %r to %.4f,%.4f", address, lat, lng)
    return GeoContext(
        latitude=lat,
        longitude=lng,
        time_zone=timezone_for(lat, lng),
        elevation_m=elevation_m,
        display_name=display_name,
    )
