"""
Address geocoding for the Walking Route Planner.

Resolves free-text addresses to map annotations using OSMnx, which
queries the Nominatim service and caches responses on disk.
"""

import logging
from dataclasses import dataclass

import osmnx as ox

from config import CACHE_DIR, GEOCODER_USER_AGENT, REQUEST_TIMEOUT
from utils import validate_coordinates

logger = logging.getLogger(__name__)

# Configure OSMnx
ox.settings.log_console = False
ox.settings.use_cache = True
ox.settings.cache_folder = CACHE_DIR
ox.settings.http_user_agent = GEOCODER_USER_AGENT
ox.settings.requests_timeout = REQUEST_TIMEOUT


class GeocodingError(Exception):
    """Raised when an address cannot be resolved to a location."""


@dataclass(frozen=True)
class Annotation:
    """A labeled point shown as a pin on the map."""
    title: str
    lat: float
    lon: float

    @property
    def coordinate(self):
        return (self.lat, self.lon)


def geocode_address(address: str) -> Annotation:
    """
    Geocode an address string into an annotation.

    The annotation title is the address exactly as entered, not the
    geocoder's canonical name.

    Args:
        address: Free-text address

    Returns:
        Annotation placed at the first geocoder match

    Raises:
        GeocodingError: If the address is blank or cannot be resolved
    """
    if not address or not address.strip():
        raise GeocodingError("Address is empty")

    logger.info(f"Geocoding address: {address!r}")

    try:
        lat, lon = ox.geocode(address.strip())
    except Exception as e:
        logger.error(f"Error geocoding {address!r}: {e}")
        raise GeocodingError(f"Could not geocode {address!r}") from e

    if not validate_coordinates(lat, lon):
        logger.error(f"Geocoder returned invalid coordinates for {address!r}: {lat}, {lon}")
        raise GeocodingError(f"Invalid coordinates for {address!r}")

    logger.info(f"Geocoded {address!r} -> ({lat:.6f}, {lon:.6f})")
    return Annotation(title=address, lat=float(lat), lon=float(lon))
