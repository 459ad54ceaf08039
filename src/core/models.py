"""Request-scoped data models for the nearby facility search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

UNKNOWN_DISTANCE = "Unknown"


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        # NaN fails both comparisons.
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0


@dataclass(frozen=True, slots=True)
class LocationQuery:
    """Either a free-text address or an explicit coordinate, never both."""

    address: Optional[str] = None
    coordinate: Optional[Coordinate] = None

    def __post_init__(self) -> None:
        if (self.address is None) == (self.coordinate is None):
            raise ValueError("LocationQuery needs exactly one of address or coordinate")


@dataclass(slots=True)
class FacilityCandidate:
    """Normalized healthcare facility returned by the spatial data source."""

    name: str = "Unknown Facility"
    address: str = ""
    type: str = "Unknown"
    specialties: List[str] = field(default_factory=list)
    coordinate: Optional[Coordinate] = None


@dataclass(slots=True)
class RankedFacility:
    candidate: FacilityCandidate
    distance_km: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        coordinate = self.candidate.coordinate
        if self.distance_km is None:
            distance = UNKNOWN_DISTANCE
        else:
            distance = f"{self.distance_km:.1f} km"
        return {
            "name": self.candidate.name,
            "address": self.candidate.address,
            "type": self.candidate.type,
            "specialties": list(self.candidate.specialties),
            "distance": distance,
            "distance_km": self.distance_km,
            "lat": coordinate.latitude if coordinate else None,
            "lon": coordinate.longitude if coordinate else None,
        }


@dataclass(slots=True)
class SearchResult:
    facilities: List[RankedFacility]
    location_label: str
    message: Optional[str] = None
    radius_km: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": True,
            "facilities": [facility.to_dict() for facility in self.facilities],
            "location_searched": self.location_label,
            "radius_km": self.radius_km,
        }
        if self.message:
            payload["message"] = self.message
        return payload
