"""
Static reference data.

Airport and airline tables are immutable, process-wide lookups loaded
once at startup.
"""

from sinceonearth.reference.airports import (
    AirportDirectory,
    AirportInfo,
    get_airport_directory,
)
from sinceonearth.reference.airlines import (
    AirlineInfo,
    get_airline_by_code,
    get_all_airlines,
    normalize_airline_code,
)

__all__ = [
    'AirportDirectory',
    'AirportInfo',
    'get_airport_directory',
    'AirlineInfo',
    'get_airline_by_code',
    'get_all_airlines',
    'normalize_airline_code',
]
