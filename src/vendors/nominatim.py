"""Client utilities for the OpenStreetMap Nominatim geocoder."""

import logging
from typing import Optional, Tuple

import requests

from src.core.config import Settings, get_settings
from src.core.errors import BAD_RESPONSE, GeocodeNotFound, UpstreamUnavailable, classify_failure
from src.core.models import Coordinate

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


def geocode(address: str, settings: Optional[Settings] = None) -> Tuple[Coordinate, str]:
    """Resolve ``address`` to its best-matching coordinate and display label."""
    settings = settings or get_settings()
    params = {"q": address, "format": "json", "addressdetails": 1, "limit": 1}
    headers = {"User-Agent": settings.user_agent}

    try:
        response = _SESSION.get(
            settings.nominatim_url,
            params=params,
            headers=headers,
            timeout=settings.geocode_timeout,
        )
        response.raise_for_status()
        matches = response.json()
    except (requests.RequestException, ValueError) as exc:
        reason = classify_failure(exc)
        logger.error("geocode failed: address=%s reason=%s error=%s", address, reason, exc)
        raise UpstreamUnavailable(f"Nominatim request failed: {exc}", reason=reason) from exc

    if not isinstance(matches, list):
        logger.error("geocode returned an unexpected payload for %s: %s", address, str(matches)[:200])
        raise UpstreamUnavailable("Nominatim returned an unexpected payload", reason=BAD_RESPONSE)
    if not matches:
        raise GeocodeNotFound(address)

    best = matches[0]
    try:
        coordinate = Coordinate(latitude=float(best["lat"]), longitude=float(best["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("geocode returned an unusable match for %s: %s", address, best)
        raise UpstreamUnavailable("Nominatim returned a match without coordinates", reason=BAD_RESPONSE) from exc

    label = best.get("display_name") or address
    logger.info("Geocoded %s to (%s, %s)", address, coordinate.latitude, coordinate.longitude)
    return coordinate, label
