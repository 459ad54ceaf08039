import math

from src.core.models import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine(start: Coordinate, end: Coordinate) -> float:
    """Great-circle distance between two coordinates, in kilometers."""
    start_lat = math.radians(start.latitude)
    end_lat = math.radians(end.latitude)
    delta_lat = math.radians(end.latitude - start.latitude)
    delta_lng = math.radians(end.longitude - start.longitude)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(start_lat) * math.cos(end_lat) * math.sin(delta_lng / 2) ** 2
    )
    # Rounding can push antipodal points just past 1.
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
