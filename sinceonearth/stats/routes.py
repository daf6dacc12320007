"""
Route summaries for the globe view.

Turns the aggregator's route counter into the shape a map renderer
consumes: {from, to, count} segments plus the airport nodes they touch.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from sinceonearth.reference.airports import AirportDirectory, get_airport_directory
from sinceonearth.stats.aggregator import RouteKey


@dataclass(frozen=True)
class RouteSegment:
    """One directional route and how many times it was flown."""
    from_code: str
    to_code: str
    count: int

    def to_dict(self) -> dict:
        return {'from': self.from_code, 'to': self.to_code, 'count': self.count}


@dataclass(frozen=True)
class AirportNode:
    """Map node for an airport that appears in at least one route."""
    code: str
    latitude: float
    longitude: float
    city: str
    country: str

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'lat': self.latitude,
            'lng': self.longitude,
            'city': self.city,
            'country': self.country,
        }


@dataclass(frozen=True)
class RouteMap:
    routes: List[RouteSegment] = field(default_factory=list)
    airports: List[AirportNode] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'routes': [r.to_dict() for r in self.routes],
            'airports': [a.to_dict() for a in self.airports],
        }


def summarize_routes(
    routes: Mapping[RouteKey, int],
    directory: Optional[AirportDirectory] = None,
) -> RouteMap:
    """
    Build map data from directional route counts.

    Segments are ordered by count (most flown first), then by codes.
    Airport nodes cover every resolvable code in any segment; codes
    missing from the directory stay in the segments but get no node.
    """
    if directory is None:
        directory = get_airport_directory()

    segments = [
        RouteSegment(from_code=dep, to_code=arr, count=count)
        for (dep, arr), count in routes.items()
        if count > 0
    ]
    segments.sort(key=lambda s: (-s.count, s.from_code, s.to_code))

    nodes = {}
    for segment in segments:
        for code in (segment.from_code, segment.to_code):
            if code in nodes:
                continue
            airport = directory.resolve(code)
            if airport is None:
                continue
            nodes[code] = AirportNode(
                code=code,
                latitude=airport.latitude,
                longitude=airport.longitude,
                city=airport.city,
                country=airport.country,
            )

    return RouteMap(
        routes=segments,
        airports=sorted(nodes.values(), key=lambda n: n.code),
    )
