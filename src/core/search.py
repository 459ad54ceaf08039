"""Radius-expanding search over the spatial facility data source."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from src.core.errors import TIMEOUT, UpstreamUnavailable, classify_failure
from src.core.models import Coordinate, FacilityCandidate
from src.etl.transform import to_candidates
from src.vendors import overpass

logger = logging.getLogger(__name__)

INITIAL_RADIUS_KM = 50
MAX_RADIUS_KM = 300
RADIUS_STEP_KM = 50

Fetcher = Callable[..., List[Dict[str, Any]]]

_DEADLINE_PASSED = object()


class FacilitySearchEngine:
    """Widens the search radius until facilities turn up or the cap is reached.

    Iterations run strictly one after another: each only happens when every
    smaller radius came back empty or failed. A failed iteration is logged and
    skipped. ``UpstreamUnavailable`` is raised only when no iteration produced
    a successful response, so callers can tell an unreachable data source from
    an area with no facilities.
    """

    def __init__(
        self,
        fetch: Optional[Fetcher] = None,
        request_timeout: Optional[float] = None,
        deadline_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch or overpass.query_facilities
        self._request_timeout = request_timeout
        self._deadline_seconds = deadline_seconds
        self._clock = clock

    def _call_timeout(self, deadline: Optional[float]) -> Any:
        if deadline is None:
            return self._request_timeout
        remaining = deadline - self._clock()
        if remaining <= 0:
            return _DEADLINE_PASSED
        if self._request_timeout is None:
            return remaining
        return min(self._request_timeout, remaining)

    def search(self, center: Coordinate, location_label: str = "") -> List[FacilityCandidate]:
        candidates, _ = self.search_with_radius(center, location_label)
        return candidates

    def search_with_radius(
        self, center: Coordinate, location_label: str = ""
    ) -> Tuple[List[FacilityCandidate], Optional[int]]:
        """Like ``search``, also returning the radius in km that produced results."""
        deadline = None
        if self._deadline_seconds is not None:
            deadline = self._clock() + self._deadline_seconds

        candidates: List[FacilityCandidate] = []
        radius_km = INITIAL_RADIUS_KM
        responded = False
        found_radius_km: Optional[int] = None
        last_error: Optional[BaseException] = None

        while not candidates and radius_km <= MAX_RADIUS_KM:
            timeout = self._call_timeout(deadline)
            if timeout is _DEADLINE_PASSED:
                logger.warning("Search deadline reached before radius %dkm; stopping", radius_km)
                break

            logger.info("Querying facilities within %dkm of (%s, %s)", radius_km, center.latitude, center.longitude)
            try:
                elements = self._fetch(center, radius_km * 1000, timeout=timeout)
            except (requests.RequestException, overpass.OverpassError, ValueError) as exc:
                last_error = exc
                logger.warning("Facility query failed at radius %dkm: %s", radius_km, exc)
            else:
                responded = True
                candidates = to_candidates(elements, location_label)
                logger.info("Found %d facilities within %dkm", len(candidates), radius_km)
                if candidates:
                    found_radius_km = radius_km
            radius_km += RADIUS_STEP_KM

        if not responded:
            if last_error is None:
                raise UpstreamUnavailable("Search deadline expired before any query was made", reason=TIMEOUT)
            raise UpstreamUnavailable(
                f"Facility data source did not respond: {last_error}",
                reason=classify_failure(last_error),
            ) from last_error
        return candidates, found_radius_km
