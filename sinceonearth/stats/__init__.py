"""
Trip statistics module for SinceOnEarth.

Pure, stateless computations over a flight list:
- Great-circle distances (Haversine)
- Airline/airport/country deduplication
- Route frequencies and map nodes
- Country stamp achievements
- Upcoming/past and per-year timelines
"""

from sinceonearth.stats.geo import (
    InvalidCoordinate,
    haversine_distance,
)
from sinceonearth.stats.aggregator import (
    FlightRecord,
    TripStats,
    aggregate_trips,
    as_record,
    distance_summary,
    flight_distance,
)
from sinceonearth.stats.routes import RouteMap, RouteSegment, AirportNode, summarize_routes
from sinceonearth.stats.stamps import Stamp, earned_stamps
from sinceonearth.stats.timeline import group_by_year, is_upcoming, split_trips

__all__ = [
    'InvalidCoordinate',
    'haversine_distance',
    'FlightRecord',
    'TripStats',
    'aggregate_trips',
    'as_record',
    'distance_summary',
    'flight_distance',
    'RouteMap',
    'RouteSegment',
    'AirportNode',
    'summarize_routes',
    'Stamp',
    'earned_stamps',
    'group_by_year',
    'is_upcoming',
    'split_trips',
]
