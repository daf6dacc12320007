"""
Great-circle distance between airports.

Inputs are WGS84 decimal degrees. Invalid numbers fail fast with
InvalidCoordinate instead of leaking NaN into distance totals.
"""

import math
from numbers import Real

EARTH_RADIUS_KM = 6371.0

# Half the Earth's circumference: the longest possible great-circle distance
MAX_DISTANCE_KM = math.pi * EARTH_RADIUS_KM


class InvalidCoordinate(ValueError):
    """Latitude/longitude that is not a finite number within range."""


def validate_coordinate(lat, lon) -> None:
    """Raise InvalidCoordinate unless lat in [-90, 90] and lon in [-180, 180]."""
    for label, value, limit in (('latitude', lat, 90), ('longitude', lon, 180)):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidCoordinate(f'{label} must be a number, got {value!r}')
        if not math.isfinite(value):
            raise InvalidCoordinate(f'{label} must be finite, got {value!r}')
        if not -limit <= value <= limit:
            raise InvalidCoordinate(f'{label} {value} outside [-{limit}, {limit}]')


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points in kilometers.

    Uses the Haversine formula with a mean Earth radius of 6371 km.
    Identical points give 0; antipodal points give ~20015 km.
    """
    validate_coordinate(lat1, lon1)
    validate_coordinate(lat2, lon2)

    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push `a` a hair past 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c
