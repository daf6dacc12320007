"""
Flight log CSV import.

Understands Flighty exports as well as simple hand-made sheets with
Date/Airline/Flight Number/From/To columns. Each valid row becomes a
dict of Flight column values ready for bulk insert.

Flighty specifics:
- Airline column holds ICAO codes (IGO, UAE); converted to IATA
- Times only exist as "Gate Departure (Scheduled)" timestamps
"""

import csv
import io
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sinceonearth.models.flight import FlightStatus
from sinceonearth.reference.airlines import normalize_airline_code
from sinceonearth.stats.timeline import parse_flight_date

logger = logging.getLogger(__name__)

UNKNOWN_AIRLINE = 'XX'

_AIRPORT_CODE = re.compile(r'^[A-Z0-9]{3,4}$')


class CsvImportError(ValueError):
    """CSV could not be turned into any flights."""
    pass


@dataclass
class CsvImportResult:
    """Parsed flights plus the number of rows that were skipped."""
    flights: List[Dict[str, Any]] = field(default_factory=list)
    skipped: int = 0


def _cell(row: Mapping[str, Optional[str]], *columns: str) -> Optional[str]:
    """First non-blank value among `columns`, stripped."""
    for column in columns:
        value = row.get(column)
        if value and value.strip():
            return value.strip()
    return None


def _clock_time(timestamp: Optional[str]) -> Optional[str]:
    """'2024-03-01T07:05:00+05:30' -> '07:05'. None if unparseable."""
    if not timestamp:
        return None
    try:
        parsed = datetime.fromisoformat(timestamp.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    return parsed.strftime('%H:%M')


def _airline_lookup(airlines: Optional[Iterable[Any]]):
    """
    Build a code -> (IATA, name) resolver.

    `airlines` may be any objects with code/icao/name attributes (ORM
    rows from the airlines table); without it the bundled directory is used,
    which also matches full airline names.
    """
    if airlines is None:
        return normalize_airline_code

    table: Dict[str, Tuple[str, str]] = {}
    for airline in airlines:
        entry = (airline.code, airline.name)
        if airline.code:
            table.setdefault(airline.code.upper(), entry)
        if getattr(airline, 'icao', None):
            table.setdefault(airline.icao.upper(), entry)

    def lookup(code: str) -> Optional[Tuple[str, str]]:
        return table.get(code.upper())
    return lookup


def _parse_row(row: Mapping[str, Optional[str]], today: date, lookup) -> Optional[Dict[str, Any]]:
    """One CSV row -> Flight column values, or None when the row is unusable."""
    raw_date = _cell(row, 'Date')
    dep_code = _cell(row, 'From')
    arr_code = _cell(row, 'To')
    if not raw_date or not dep_code or not arr_code:
        return None

    flight_date = parse_flight_date(raw_date)
    if flight_date is None:
        logger.debug(f'Unparseable date in CSV row: {raw_date!r}')
        return None

    dep_code = dep_code.upper()
    arr_code = arr_code.upper()
    if not _AIRPORT_CODE.match(dep_code) or not _AIRPORT_CODE.match(arr_code):
        logger.debug(f'Invalid airport code in CSV row: {dep_code}->{arr_code}')
        return None

    airline_code = _cell(row, 'Airline')
    airline_name = None
    if airline_code:
        resolved = lookup(airline_code)
        if resolved:
            airline_code, airline_name = resolved
    else:
        airline_code = UNKNOWN_AIRLINE

    status = FlightStatus.UPCOMING if flight_date >= today else FlightStatus.COMPLETED

    return {
        'date': flight_date.isoformat(),
        'airline': airline_code,
        'airline_name': airline_name,
        'flight_number': _cell(row, 'Flight Number', 'Flight') or '',
        'from_code': dep_code,
        'to_code': arr_code,
        'departure_time': (
            _cell(row, 'Departure Time')
            or _clock_time(_cell(row, 'Gate Departure (Scheduled)'))
        ),
        'arrival_time': (
            _cell(row, 'Arrival Time')
            or _clock_time(_cell(row, 'Gate Arrival (Scheduled)'))
        ),
        'departure_terminal': _cell(row, 'Dep Terminal', 'Departure Terminal'),
        'arrival_terminal': _cell(row, 'Arr Terminal', 'Arrival Terminal'),
        'aircraft_type': _cell(row, 'Aircraft', 'Aircraft Type Name'),
        'status': status.value,
    }


def parse_flight_csv(
    text: str,
    today: date,
    airlines: Optional[Iterable[Any]] = None,
) -> CsvImportResult:
    """
    Parse a flight log CSV.

    Args:
        text: Decoded CSV content with a header row
        today: Reference date; flights on or after it are 'upcoming'
        airlines: Optional airline rows used to map ICAO codes to IATA

    Raises:
        CsvImportError: No header, or no row produced a valid flight
    """
    text = (text or '').lstrip('\ufeff')
    reader = csv.DictReader(io.StringIO(text))
    if not reader.fieldnames:
        raise CsvImportError('The CSV file is empty')
    reader.fieldnames = [name.strip() for name in reader.fieldnames]

    lookup = _airline_lookup(airlines)
    result = CsvImportResult()

    for row in reader:
        flight = _parse_row(row, today, lookup)
        if flight is None:
            result.skipped += 1
        else:
            result.flights.append(flight)

    if not result.flights:
        raise CsvImportError('The CSV file contains no valid flight data')

    logger.info(f'Parsed {len(result.flights)} flights from CSV ({result.skipped} rows skipped)')
    return result
