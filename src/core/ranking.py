"""Distance ranking for facility candidates."""

from typing import Iterable, List

from src.core.distance import haversine
from src.core.models import Coordinate, FacilityCandidate, RankedFacility

MAX_RESULTS = 20


def rank(center: Coordinate, candidates: Iterable[FacilityCandidate]) -> List[RankedFacility]:
    """Sort candidates nearest first, unknown distances last, capped at ``MAX_RESULTS``."""
    ranked = []
    for candidate in candidates:
        distance_km = None
        if candidate.coordinate is not None:
            distance_km = round(haversine(center, candidate.coordinate), 1)
        ranked.append(RankedFacility(candidate=candidate, distance_km=distance_km))

    # sorted() is stable, so unknowns keep their insertion order.
    ranked = sorted(ranked, key=lambda item: (item.distance_km is None, item.distance_km or 0.0))
    return ranked[:MAX_RESULTS]
