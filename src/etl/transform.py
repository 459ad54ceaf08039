"""Utilities for transforming Overpass elements into facility candidates."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from src.core.models import Coordinate, FacilityCandidate

logger = logging.getLogger(__name__)

_ADDRESS_TAGS = ("addr:full", "addr:street", "addr:city", "addr:state", "addr:postcode", "addr:country")


def join_address(tags: Dict[str, Any], fallback: str) -> str:
    parts = [str(tags[key]).strip() for key in _ADDRESS_TAGS if tags.get(key)]
    return ", ".join(part for part in parts if part) or fallback


def element_coordinate(element: Dict[str, Any]) -> Optional[Coordinate]:
    """Nodes carry their own point; ways and relations carry a computed centre."""
    lat = element.get("lat")
    lon = element.get("lon")
    if lat is None or lon is None:
        center = element.get("center")
        if not isinstance(center, dict):
            return None
        lat = center.get("lat")
        lon = center.get("lon")
    if lat is None or lon is None:
        return None
    try:
        return Coordinate(latitude=float(lat), longitude=float(lon))
    except (TypeError, ValueError):
        logger.debug("Discarding unparseable coordinate on element %s", element.get("id"))
        return None


def to_candidate(element: Dict[str, Any], fallback_address: str) -> FacilityCandidate:
    tags = element.get("tags")
    if not isinstance(tags, dict):
        tags = {}
    healthcare = tags.get("healthcare")
    return FacilityCandidate(
        name=tags.get("name") or "Unknown Facility",
        address=join_address(tags, fallback_address),
        type=tags.get("amenity") or "Unknown",
        specialties=[healthcare] if healthcare else [],
        coordinate=element_coordinate(element),
    )


def to_candidates(elements: Iterable[Dict[str, Any]], fallback_address: str) -> List[FacilityCandidate]:
    return [to_candidate(element, fallback_address) for element in elements]
