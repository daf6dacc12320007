"""
Trip timeline helpers: upcoming vs. past, and grouping by year.

Dates are only compared, never used for arithmetic. A flight dated
today counts as upcoming.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from sinceonearth.stats.aggregator import as_record


def parse_flight_date(value: Optional[str]) -> Optional[date]:
    """Parse 'YYYY-MM-DD' (a time suffix is tolerated); None if unparseable."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        return None


def is_upcoming(flight: Any, today: date) -> bool:
    """True when the flight's date is today or later. Undated flights are past."""
    flight_date = parse_flight_date(as_record(flight).date)
    return flight_date is not None and flight_date >= today


def split_trips(flights: List[Any], today: date) -> Tuple[List[Any], List[Any]]:
    """
    Split flights into (upcoming, past).

    Upcoming is ordered soonest first, past most recent first; undated
    flights sit at the end of past.
    """
    upcoming = []
    past = []
    for flight in flights:
        if is_upcoming(flight, today):
            upcoming.append(flight)
        else:
            past.append(flight)

    upcoming.sort(key=lambda f: parse_flight_date(as_record(f).date))
    past.sort(
        key=lambda f: parse_flight_date(as_record(f).date) or date.min,
        reverse=True,
    )
    return upcoming, past


def group_by_year(flights: List[Any]) -> Dict[Optional[int], List[Any]]:
    """Group flights by year, newest year first; undated flights under None, last."""
    groups: Dict[Optional[int], List[Any]] = {}
    for flight in flights:
        flight_date = parse_flight_date(as_record(flight).date)
        year = flight_date.year if flight_date else None
        groups.setdefault(year, []).append(flight)

    ordered_years = sorted((y for y in groups if y is not None), reverse=True)
    if None in groups:
        ordered_years.append(None)
    return {year: groups[year] for year in ordered_years}
