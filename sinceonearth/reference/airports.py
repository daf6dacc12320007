"""
Airport reference table and resolver.

Maps airport codes to coordinates and country. Data can come from:
1. The bundled table below (airports seen in typical user logs)
2. An OpenFlights airports.dat file, merged on top when configured

Lookups never raise for an unknown code: absence is the common case for
regional airports, and callers treat it as a recorded omission.

Usage:
    from sinceonearth.reference.airports import get_airport_directory

    directory = get_airport_directory()
    info = directory.resolve('del')
    print(info.city)  # 'New Delhi'
"""

import csv
import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import requests

from sinceonearth.config import config
from sinceonearth.reference.countries import country_to_iso, normalize_country

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AirportInfo:
    """
    Airport reference entry.

    Coordinates are WGS84 decimal degrees; construction fails with
    ValueError when they are out of range or not finite.
    """
    code: str
    latitude: float
    longitude: float
    city: str
    country: str
    iso_country: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        lat, lon = self.latitude, self.longitude
        if not (isinstance(lat, (int, float)) and math.isfinite(lat) and -90 <= lat <= 90):
            raise ValueError(f'Invalid latitude for {self.code}: {lat!r}')
        if not (isinstance(lon, (int, float)) and math.isfinite(lon) and -180 <= lon <= 180):
            raise ValueError(f'Invalid longitude for {self.code}: {lon!r}')

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'name': self.name,
            'city': self.city,
            'country': self.country,
            'isoCountry': self.iso_country,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }


# (code, name, city, country, lat, lon)
_BUNDLED_AIRPORTS = [
    # India
    ('AMD', 'Sardar Vallabhbhai Patel Intl', 'Ahmedabad', 'India', 23.0772, 72.6347),
    ('BDQ', 'Vadodara Airport', 'Vadodara', 'India', 22.3364, 73.2263),
    ('DEL', 'Indira Gandhi Intl', 'New Delhi', 'India', 28.5562, 77.1000),
    ('BOM', 'Chhatrapati Shivaji Maharaj Intl', 'Mumbai', 'India', 19.0896, 72.8656),
    ('BLR', 'Kempegowda Intl', 'Bengaluru', 'India', 12.9499, 77.6680),
    ('MAA', 'Chennai Intl', 'Chennai', 'India', 12.9941, 80.1709),
    ('CCU', 'Netaji Subhas Chandra Bose Intl', 'Kolkata', 'India', 22.6547, 88.4467),
    ('HYD', 'Rajiv Gandhi Intl', 'Hyderabad', 'India', 17.2403, 78.4294),
    ('COK', 'Cochin Intl', 'Kochi', 'India', 10.1520, 76.4019),
    ('IXL', 'Kushok Bakula Rimpochee', 'Leh', 'India', 34.1359, 77.5465),
    ('IXB', 'Bagdogra Airport', 'Bagdogra', 'India', 26.6812, 88.3286),
    ('IXE', 'Mangalore Intl', 'Mangalore', 'India', 12.9611, 74.8904),
    ('IXZ', 'Veer Savarkar Intl', 'Port Blair', 'India', 11.6410, 92.7296),
    ('IXR', 'Birsa Munda Airport', 'Ranchi', 'India', 23.3144, 85.3218),
    ('LKO', 'Chaudhary Charan Singh Intl', 'Lucknow', 'India', 26.7606, 80.8893),
    ('IDR', 'Devi Ahilyabai Holkar Airport', 'Indore', 'India', 22.7216, 75.8011),
    ('JLR', 'Jabalpur Airport', 'Jabalpur', 'India', 23.1778, 80.0524),
    ('GOX', 'Manohar Intl', 'Goa', 'India', 15.3808, 73.8314),
    ('STV', 'Surat Airport', 'Surat', 'India', 21.1142, 72.7419),
    ('AYJ', 'Maharishi Valmiki Intl', 'Ayodhya', 'India', 26.7517, 82.1503),
    ('VNS', 'Lal Bahadur Shastri Intl', 'Varanasi', 'India', 25.4524, 82.8592),

    # UAE & Middle East
    ('SHJ', 'Sharjah Intl', 'Sharjah', 'UAE', 25.3286, 55.5172),
    ('DXB', 'Dubai Intl', 'Dubai', 'UAE', 25.2532, 55.3657),
    ('AUH', 'Zayed Intl', 'Abu Dhabi', 'UAE', 24.4330, 54.6511),
    ('DOH', 'Hamad Intl', 'Doha', 'Qatar', 25.2731, 51.6081),
    ('IST', 'Istanbul Airport', 'Istanbul', 'Turkey', 41.2753, 28.7519),

    # Asia
    ('BKK', 'Suvarnabhumi', 'Bangkok', 'Thailand', 13.6900, 100.7501),
    ('DMK', 'Don Mueang Intl', 'Bangkok DMK', 'Thailand', 13.9126, 100.6067),
    ('HKT', 'Phuket Intl', 'Phuket', 'Thailand', 8.1132, 98.3169),
    ('CMB', 'Bandaranaike Intl', 'Colombo', 'Sri Lanka', 7.1808, 79.8841),
    ('SIN', 'Changi', 'Singapore', 'Singapore', 1.3644, 103.9915),
    ('KUL', 'Kuala Lumpur Intl', 'Kuala Lumpur', 'Malaysia', 2.7456, 101.7099),
    ('HKG', 'Hong Kong Intl', 'Hong Kong', 'Hong Kong', 22.3080, 113.9185),
    ('NRT', 'Narita Intl', 'Tokyo', 'Japan', 35.7720, 140.3929),
    ('HND', 'Haneda', 'Tokyo', 'Japan', 35.5494, 139.7798),
    ('ICN', 'Incheon Intl', 'Seoul', 'South Korea', 37.4602, 126.4407),

    # Europe
    ('HEL', 'Helsinki-Vantaa', 'Helsinki', 'Finland', 60.3172, 24.9633),
    ('FCO', 'Leonardo da Vinci-Fiumicino', 'Rome', 'Italy', 41.8003, 12.2389),
    ('MXP', 'Malpensa', 'Milan', 'Italy', 45.6306, 8.7281),
    ('CDG', 'Charles de Gaulle', 'Paris', 'France', 49.0097, 2.5479),
    ('LUX', 'Luxembourg Findel', 'Luxembourg', 'Luxembourg', 49.6233, 6.2044),
    ('LIS', 'Humberto Delgado', 'Lisbon', 'Portugal', 38.7813, -9.1359),
    ('LHR', 'Heathrow', 'London', 'UK', 51.4700, -0.4543),
    ('DUB', 'Dublin Airport', 'Dublin', 'Ireland', 53.4213, -6.2701),
    ('ARN', 'Stockholm Arlanda', 'Stockholm', 'Sweden', 59.6519, 17.9186),
    ('CPH', 'Copenhagen Kastrup', 'Copenhagen', 'Denmark', 55.6181, 12.6561),
    ('FRA', 'Frankfurt am Main', 'Frankfurt', 'Germany', 50.0379, 8.5622),
    ('MUC', 'Munich Airport', 'Munich', 'Germany', 48.3538, 11.7861),
    ('AMS', 'Schiphol', 'Amsterdam', 'Netherlands', 52.3105, 4.7683),
    ('BRU', 'Brussels Airport', 'Brussels', 'Belgium', 50.9010, 4.4856),
    ('ZRH', 'Zurich Airport', 'Zurich', 'Switzerland', 47.4582, 8.5555),
    ('VIE', 'Vienna Intl', 'Vienna', 'Austria', 48.1103, 16.5697),
    ('MAD', 'Adolfo Suarez Madrid-Barajas', 'Madrid', 'Spain', 40.4983, -3.5676),

    # Americas
    ('IAH', 'George Bush Intercontinental', 'Houston', 'USA', 29.9902, -95.3368),
    ('ATL', 'Hartsfield-Jackson Atlanta Intl', 'Atlanta', 'USA', 33.6407, -84.4277),
    ('EWR', 'Newark Liberty Intl', 'Newark', 'USA', 40.6895, -74.1745),
    ('JFK', 'John F Kennedy Intl', 'New York', 'USA', 40.6413, -73.7781),
    ('LAX', 'Los Angeles Intl', 'Los Angeles', 'USA', 33.9416, -118.4085),
    ('SFO', 'San Francisco Intl', 'San Francisco', 'USA', 37.6213, -122.3790),
    ('ORD', "Chicago O'Hare Intl", 'Chicago', 'USA', 41.9742, -87.9073),
    ('YYZ', 'Toronto Pearson Intl', 'Toronto', 'Canada', 43.6777, -79.6248),
    ('GRU', 'Sao Paulo-Guarulhos Intl', 'Sao Paulo', 'Brazil', -23.4356, -46.4731),

    # Oceania
    ('SYD', 'Sydney Kingsford Smith', 'Sydney', 'Australia', -33.9399, 151.1753),
]


def _build_bundled() -> Dict[str, AirportInfo]:
    return {
        code: AirportInfo(
            code=code,
            latitude=lat,
            longitude=lon,
            city=city,
            country=country,
            iso_country=country_to_iso(country),
            name=name,
        )
        for code, name, city, country, lat, lon in _BUNDLED_AIRPORTS
    }


BUNDLED_AIRPORTS: Mapping[str, AirportInfo] = MappingProxyType(_build_bundled())


def normalize_code(code) -> Optional[str]:
    """Uppercase and strip an airport code; None for blank or non-string input."""
    if not isinstance(code, str):
        return None
    code = code.strip().upper()
    return code or None


class AirportDirectory:
    """
    Immutable code -> AirportInfo lookup.

    Pure in-memory table; safe to share across threads and requests.
    """

    def __init__(self, entries: Union[Mapping[str, AirportInfo], Iterable[AirportInfo]]):
        if isinstance(entries, Mapping):
            table = {normalize_code(k): v for k, v in entries.items()}
        else:
            table = {normalize_code(a.code): a for a in entries}
        table.pop(None, None)
        self._airports: Mapping[str, AirportInfo] = MappingProxyType(table)

    def __len__(self) -> int:
        return len(self._airports)

    def __contains__(self, code) -> bool:
        return self.resolve(code) is not None

    def resolve(self, code) -> Optional[AirportInfo]:
        """Return the airport for `code` (case-insensitive), or None."""
        key = normalize_code(code)
        if key is None:
            return None
        return self._airports.get(key)

    def resolve_coordinates(self, code) -> Optional[Tuple[float, float]]:
        """Return (lat, lon) for `code`, or None if unknown."""
        airport = self.resolve(code)
        return airport.coordinates if airport else None

    def search(self, query: Optional[str], limit: int = 20) -> List[AirportInfo]:
        """
        Case-insensitive search on code, city, country and name.

        Exact code matches sort first, then alphabetical by code.
        """
        if not query or not query.strip():
            return sorted(self._airports.values(), key=lambda a: a.code)[:limit]

        needle = query.strip().lower()
        matches = [
            a for a in self._airports.values()
            if needle in a.code.lower()
            or needle in a.city.lower()
            or needle in a.country.lower()
            or (a.name and needle in a.name.lower())
        ]
        matches.sort(key=lambda a: (a.code.lower() != needle, a.code))
        return matches[:limit]

    def merged_with(self, other: 'AirportDirectory') -> 'AirportDirectory':
        """New directory with `other`'s entries overriding ours."""
        combined = dict(self._airports)
        combined.update(other._airports)
        return AirportDirectory(combined)

    @classmethod
    def bundled(cls) -> 'AirportDirectory':
        return cls(BUNDLED_AIRPORTS)

    @classmethod
    def from_openflights(cls, path: Path) -> 'AirportDirectory':
        """
        Load an OpenFlights airports.dat file.

        Expected columns (no header):
        id,name,city,country,iata,icao,latitude,longitude,altitude,
        timezone,dst,tz_database,type,source

        Airports are keyed by IATA code and, when present, ICAO code.
        Rows without either code or with invalid coordinates are skipped.
        """
        path = Path(path)
        if not path.exists():
            logger.error(f'Airport data file not found: {path}')
            return cls({})

        logger.info(f'Loading airport data from {path}')
        table: Dict[str, AirportInfo] = {}
        skipped = 0

        with open(path, 'r', encoding='utf-8', errors='ignore', newline='') as f:
            for row in csv.reader(f):
                if len(row) < 8:
                    skipped += 1
                    continue

                iata = _clean_dat_field(row[4])
                icao = _clean_dat_field(row[5])
                if not iata and not icao:
                    skipped += 1
                    continue

                country = normalize_country(row[3]) or 'Unknown'
                try:
                    airport = AirportInfo(
                        code=iata or icao,
                        latitude=float(row[6]),
                        longitude=float(row[7]),
                        city=row[2].strip() or (iata or icao),
                        country=country,
                        iso_country=country_to_iso(country),
                        name=row[1].strip() or None,
                    )
                except ValueError:
                    skipped += 1
                    continue

                if iata:
                    table[iata.upper()] = airport
                if icao:
                    table[icao.upper()] = airport

        logger.info(f'Loaded {len(table)} airport codes ({skipped} rows skipped)')
        return cls(table)


def _clean_dat_field(value: str) -> Optional[str]:
    """OpenFlights marks missing values as \\N."""
    value = (value or '').strip()
    if not value or value == '\\N':
        return None
    return value


def fetch_openflights(dest: Path, url: Optional[str] = None, timeout: int = 30) -> Path:
    """
    Download an OpenFlights airports.dat file to `dest`.

    Raises requests.RequestException on network or HTTP errors.
    """
    url = url or config.reference.airports_url
    dest = Path(dest)
    dest.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f'Downloading airport data from {url}')
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    dest.write_bytes(response.content)

    logger.info(f'Saved {len(response.content)} bytes to {dest}')
    return dest


_directory: Optional[AirportDirectory] = None
_directory_lock = threading.Lock()


def get_airport_directory() -> AirportDirectory:
    """
    Process-wide airport directory.

    Bundled table, merged with the OpenFlights file at AIRPORTS_DATA_PATH
    when configured (bundled entries win on conflict). Loaded once.
    """
    global _directory
    if _directory is not None:
        return _directory

    with _directory_lock:
        if _directory is None:
            directory = AirportDirectory.bundled()
            if config.reference.airports_path:
                external = AirportDirectory.from_openflights(Path(config.reference.airports_path))
                directory = external.merged_with(directory)
            _directory = directory
            logger.info(f'Airport directory ready with {len(directory)} codes')
    return _directory
