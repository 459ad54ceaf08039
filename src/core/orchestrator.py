"""Entry point tying geocoding, facility search and ranking together."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Iterable, List, Optional, Tuple

from src.core.config import Settings, get_settings
from src.core.errors import (
    CONNECTION,
    RATE_LIMITED,
    TIMEOUT,
    ClientError,
    GeocodeNotFound,
    NotFoundError,
    ServerError,
    UpstreamUnavailable,
)
from src.core.models import Coordinate, FacilityCandidate, LocationQuery, RankedFacility, SearchResult
from src.core.ranking import rank
from src.core.search import MAX_RADIUS_KM, FacilitySearchEngine
from src.vendors import nominatim, overpass

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Either address or coordinates required."
INVALID_COORDINATES_MESSAGE = (
    "Invalid coordinates provided. Latitude must be between -90 and 90, longitude between -180 and 180."
)
EMPTY_RESULT_MESSAGE = (
    f"No healthcare facilities found within {MAX_RADIUS_KM}km of your location. "
    "Try searching in a different area."
)
SEARCH_FAILURE_MESSAGES = {
    TIMEOUT: "Request timeout - external services are slow. Please try again.",
    RATE_LIMITED: "Rate limit exceeded - too many requests. Please wait a moment and try again.",
    CONNECTION: "Unable to connect to external services. Please check your internet connection.",
}
DEFAULT_SEARCH_FAILURE_MESSAGE = "Failed to find facilities"

Geocoder = Callable[[str], Tuple[Coordinate, str]]
Ranker = Callable[[Coordinate, Iterable[FacilityCandidate]], List[RankedFacility]]


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def build_query(
    address: Optional[str] = None,
    latitude: Any = None,
    longitude: Any = None,
) -> LocationQuery:
    """Turn raw request fields into a ``LocationQuery``.

    Coordinates win when both forms are supplied. Raises ``ClientError`` when
    neither is usable.
    """
    if _present(latitude) and _present(longitude):
        try:
            coordinate = Coordinate(latitude=float(latitude), longitude=float(longitude))
        except (TypeError, ValueError) as exc:
            raise ClientError(INVALID_COORDINATES_MESSAGE) from exc
        return LocationQuery(coordinate=coordinate)
    if _present(address):
        return LocationQuery(address=str(address).strip())
    raise ClientError(MISSING_INPUT_MESSAGE)


class RequestOrchestrator:
    def __init__(
        self,
        geocoder: Optional[Geocoder] = None,
        engine: Optional[FacilitySearchEngine] = None,
        ranker: Ranker = rank,
    ) -> None:
        self._geocoder = geocoder or nominatim.geocode
        self._engine = engine or FacilitySearchEngine()
        self._ranker = ranker

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RequestOrchestrator":
        settings = settings or get_settings()
        engine = FacilitySearchEngine(
            fetch=functools.partial(overpass.query_facilities, settings=settings),
            request_timeout=settings.overpass_timeout,
            deadline_seconds=settings.search_deadline_seconds,
        )
        return cls(geocoder=functools.partial(nominatim.geocode, settings=settings), engine=engine)

    def _resolve(self, query: LocationQuery) -> Tuple[Coordinate, str]:
        if query.coordinate is not None:
            coordinate = query.coordinate
            return coordinate, f"Lat: {coordinate.latitude}, Lon: {coordinate.longitude}"

        try:
            return self._geocoder(query.address)
        except GeocodeNotFound as exc:
            logger.info("No geocoding match for %s", query.address)
            raise NotFoundError("Could not geocode address.") from exc
        except UpstreamUnavailable as exc:
            raise ServerError("Geocoding failed", error=str(exc)) from exc

    def handle(self, query: LocationQuery) -> SearchResult:
        center, label = self._resolve(query)

        if not center.is_valid():
            logger.info("Rejecting out-of-range coordinate (%s, %s)", center.latitude, center.longitude)
            raise ClientError(INVALID_COORDINATES_MESSAGE)

        try:
            candidates, radius_km = self._engine.search_with_radius(center, label)
        except UpstreamUnavailable as exc:
            logger.error("Facility search failed for %s: reason=%s error=%s", label, exc.reason, exc)
            message = SEARCH_FAILURE_MESSAGES.get(exc.reason, DEFAULT_SEARCH_FAILURE_MESSAGE)
            raise ServerError(message, error=str(exc)) from exc

        facilities = self._ranker(center, candidates)
        if not facilities:
            logger.warning("No facilities found within %dkm of %s", MAX_RADIUS_KM, label)
            return SearchResult(facilities=[], location_label=label, message=EMPTY_RESULT_MESSAGE)

        return SearchResult(facilities=facilities, location_label=label, radius_km=radius_km)
