"""
Trip aggregation engine.

Folds a user's flight list into travel statistics:

1. Unique airlines, airports and countries (set cardinalities)
2. Total great-circle distance over resolvable legs
3. Directional route frequencies for the globe view

Key design principles:
- Pure function of (flights, airport directory); every call builds fresh
  accumulators, so it is re-entrant and idempotent
- Best-effort over dirty data: unknown airports and incomplete records
  are counted where possible and skipped where not, never raised
- Only invalid numeric coordinates raise (InvalidCoordinate)
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from sinceonearth.reference.airports import (
    AirportDirectory,
    get_airport_directory,
    normalize_code,
)
from sinceonearth.stats.geo import haversine_distance

logger = logging.getLogger(__name__)

RouteKey = Tuple[str, str]


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    """First non-None value among `keys`."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_coordinate(value: Any) -> Optional[float]:
    """
    Coerce a cached coordinate to float.

    Numbers pass through untouched (NaN included, so the distance
    calculator can reject it). Numeric strings are parsed; anything
    else counts as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class FlightRecord:
    """
    Read-only flight input to the aggregator.

    Every field is optional: records arrive from manual entry, CSV
    imports and older API clients with varying completeness.
    """
    departure_code: Optional[str] = None
    arrival_code: Optional[str] = None
    airline_code: Optional[str] = None
    airline_name: Optional[str] = None
    date: Optional[str] = None
    status: Optional[str] = None

    # Cached coordinates, used in place of the directory's for known airports
    departure_lat: Optional[float] = None
    departure_lon: Optional[float] = None
    arrival_lat: Optional[float] = None
    arrival_lon: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'FlightRecord':
        """
        Build from a loosely-typed dict.

        Accepts the API's camelCase keys ('from', 'to', 'airline',
        'airlineName', 'departureLat', ...) as well as snake_case.
        Never raises for missing or oddly-typed fields.
        """
        return cls(
            departure_code=normalize_code(_first(
                data, 'departure_code', 'departureCode', 'from', 'from_code', 'departure')),
            arrival_code=normalize_code(_first(
                data, 'arrival_code', 'arrivalCode', 'to', 'to_code', 'arrival')),
            airline_code=_as_text(_first(data, 'airline_code', 'airlineCode', 'airline')),
            airline_name=_as_text(_first(data, 'airline_name', 'airlineName')),
            date=_as_text(data.get('date')),
            status=_as_text(data.get('status')),
            departure_lat=_as_coordinate(_first(
                data, 'departure_lat', 'departureLat', 'departure_latitude')),
            departure_lon=_as_coordinate(_first(
                data, 'departure_lon', 'departureLon', 'departure_longitude')),
            arrival_lat=_as_coordinate(_first(
                data, 'arrival_lat', 'arrivalLat', 'arrival_latitude')),
            arrival_lon=_as_coordinate(_first(
                data, 'arrival_lon', 'arrivalLon', 'arrival_longitude')),
        )

    @property
    def departure(self) -> Optional[str]:
        return normalize_code(self.departure_code)

    @property
    def arrival(self) -> Optional[str]:
        return normalize_code(self.arrival_code)

    @property
    def airline_key(self) -> Optional[str]:
        """
        Dedup key for airline counting.

        Normalized code when available, otherwise the case-folded name.
        Prefixes keep a code and a name with the same text apart.
        """
        code = _as_text(self.airline_code)
        if code:
            return f'code:{code.upper()}'
        name = _as_text(self.airline_name)
        if name:
            return f'name:{" ".join(name.split()).casefold()}'
        return None


def as_record(flight: Any) -> FlightRecord:
    """Normalize a FlightRecord, ORM Flight or dict into a FlightRecord."""
    if isinstance(flight, FlightRecord):
        return flight
    to_record = getattr(flight, 'to_record', None)
    if callable(to_record):
        return to_record()
    if isinstance(flight, Mapping):
        return FlightRecord.from_mapping(flight)
    logger.debug(f'Unrecognised flight record {type(flight).__name__}, counting as empty')
    return FlightRecord()


@dataclass(frozen=True)
class TripStats:
    """
    Derived travel statistics for a flight list.

    Recomputed on every request; never persisted.
    """
    total_flights: int = 0
    unique_airlines: int = 0
    unique_airports: int = 0
    unique_countries: int = 0
    total_distance_km: float = 0.0

    # Directional (departure, arrival) -> number of flights
    routes: Dict[RouteKey, int] = field(default_factory=dict)

    countries: List[str] = field(default_factory=list)
    leg_distances_km: List[float] = field(default_factory=list)
    unresolved_airports: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'totalFlights': self.total_flights,
            'uniqueAirlines': self.unique_airlines,
            'uniqueAirports': self.unique_airports,
            'uniqueCountries': self.unique_countries,
            'totalDistanceKm': round(self.total_distance_km, 1),
            'countries': list(self.countries),
            'routes': [
                {'from': dep, 'to': arr, 'count': count}
                for (dep, arr), count in sorted(self.routes.items())
            ],
            'unresolvedAirports': list(self.unresolved_airports),
        }


def _endpoint_coordinates(
    code: Optional[str],
    lat: Optional[float],
    lon: Optional[float],
    directory: AirportDirectory,
) -> Optional[Tuple[float, float]]:
    """
    Coordinates for one endpoint, or None when the code is not in the directory.

    Cached coordinates on the record replace the directory's, but only for
    airports the directory knows.
    """
    known = directory.resolve_coordinates(code)
    if known is None:
        return None
    if lat is not None and lon is not None:
        return (lat, lon)
    return known


def flight_distance(
    flight: Any,
    directory: Optional[AirportDirectory] = None,
) -> Optional[float]:
    """
    Great-circle distance of a single flight in km.

    Returns None when either endpoint is missing from the directory.
    """
    record = as_record(flight)
    if directory is None:
        directory = get_airport_directory()

    dep = _endpoint_coordinates(
        record.departure, record.departure_lat, record.departure_lon, directory)
    arr = _endpoint_coordinates(
        record.arrival, record.arrival_lat, record.arrival_lon, directory)
    if dep is None or arr is None:
        return None
    return haversine_distance(dep[0], dep[1], arr[0], arr[1])


def aggregate_trips(
    flights: Iterable[Any],
    directory: Optional[AirportDirectory] = None,
) -> TripStats:
    """
    Fold a flight list into TripStats.

    For each record:
    - airline key added to the airline set
    - both airport codes added to the airport set (resolved or not)
    - each endpoint that resolves adds its country
    - distance added only when both endpoints resolve
    - route counter bumped for (departure, arrival)

    Records missing an airport code still count toward total_flights
    but contribute nothing spatial.
    """
    if directory is None:
        directory = get_airport_directory()

    airlines = set()
    airports = set()
    countries = set()
    unresolved = set()
    routes: Counter = Counter()
    legs: List[float] = []
    total_flights = 0

    for flight in flights:
        record = as_record(flight)
        total_flights += 1

        airline_key = record.airline_key
        if airline_key:
            airlines.add(airline_key)

        dep_code = record.departure
        arr_code = record.arrival
        if not dep_code or not arr_code:
            logger.debug(f'Skipping spatial stats for incomplete record {record}')
            continue

        airports.update((dep_code, arr_code))

        dep_airport = directory.resolve(dep_code)
        arr_airport = directory.resolve(arr_code)
        for code, airport in ((dep_code, dep_airport), (arr_code, arr_airport)):
            if airport is not None:
                countries.add(airport.country)
            else:
                unresolved.add(code)

        dep = _endpoint_coordinates(dep_code, record.departure_lat, record.departure_lon, directory)
        arr = _endpoint_coordinates(arr_code, record.arrival_lat, record.arrival_lon, directory)
        if dep is not None and arr is not None:
            legs.append(haversine_distance(dep[0], dep[1], arr[0], arr[1]))

        routes[(dep_code, arr_code)] += 1

    if unresolved:
        logger.debug(f'Unresolved airports: {sorted(unresolved)}')

    return TripStats(
        total_flights=total_flights,
        unique_airlines=len(airlines),
        unique_airports=len(airports),
        unique_countries=len(countries),
        total_distance_km=float(sum(legs)),
        routes=dict(routes),
        countries=sorted(countries),
        leg_distances_km=legs,
        unresolved_airports=sorted(unresolved),
    )


def distance_summary(stats: TripStats) -> dict:
    """
    Summary statistics over per-flight distances.

    Returns longest/shortest/average/std in km, or all None when no
    flight had resolvable endpoints.
    """
    legs = np.asarray(stats.leg_distances_km, dtype=np.float64)
    if legs.size == 0:
        return {
            'longest_km': None,
            'shortest_km': None,
            'average_km': None,
            'std_km': None,
        }

    return {
        'longest_km': round(float(np.max(legs)), 1),
        'shortest_km': round(float(np.min(legs)), 1),
        'average_km': round(float(np.mean(legs)), 1),
        'std_km': round(float(np.std(legs)), 1),
    }
