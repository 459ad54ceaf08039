"""Client utilities for the OpenStreetMap Overpass API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from src.core.config import Settings, get_settings
from src.core.models import Coordinate

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

HEALTHCARE_AMENITIES = ("hospital", "clinic", "doctors", "health_centre")


class OverpassError(RuntimeError):
    """Raised when a single Overpass query fails or returns an unusable payload."""


def build_query(center: Coordinate, radius_m: int) -> str:
    amenity_filter = "|".join(HEALTHCARE_AMENITIES)
    around = f"(around:{radius_m},{center.latitude},{center.longitude})"
    selectors = "\n".join(
        f'  {kind}["amenity"~"{amenity_filter}"]{around};' for kind in ("node", "way", "relation")
    )
    return f"[out:json][timeout:25];\n(\n{selectors}\n);\nout center tags;"


def query_facilities(
    center: Coordinate,
    radius_m: int,
    settings: Optional[Settings] = None,
    timeout: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """Run one healthcare amenity query around ``center`` and return raw elements."""
    settings = settings or get_settings()
    headers = {"Content-Type": "text/plain", "User-Agent": settings.user_agent}
    response = _SESSION.post(
        settings.overpass_url,
        data=build_query(center, radius_m),
        headers=headers,
        timeout=timeout if timeout is not None else settings.overpass_timeout,
    )
    response.raise_for_status()
    try:
        payload = response.json()
    except ValueError as exc:
        raise OverpassError("Overpass returned a non-JSON body") from exc

    if not isinstance(payload, dict):
        raise OverpassError("Overpass returned an unexpected payload")
    elements = payload.get("elements") or []
    # Overpass reports server-side query errors in "remark" with a 200 status.
    remark = payload.get("remark")
    if remark and not elements:
        raise OverpassError(remark)
    return [element for element in elements if isinstance(element, dict)]
