"""
Airline reference table.

Maps IATA (2-char) and ICAO (3-char) designators to carrier metadata.
Flighty CSV exports carry ICAO codes while the flight log stores IATA,
so lookups accept either.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class AirlineInfo:
    """Airline information from lookup."""
    code: str
    icao: Optional[str]
    name: str
    country: str

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'icao': self.icao,
            'name': self.name,
            'country': self.country,
        }


# (IATA, ICAO, name, country)
_AIRLINES = [
    # Indian airlines
    ('6E', 'IGO', 'IndiGo', 'India'),
    ('AI', 'AIC', 'Air India', 'India'),
    ('UK', 'VTI', 'Vistara', 'India'),
    ('G8', 'GOW', 'Go First', 'India'),
    ('SG', 'SEJ', 'SpiceJet', 'India'),
    ('I5', 'IAD', 'AirAsia India', 'India'),

    # Middle East
    ('EK', 'UAE', 'Emirates', 'UAE'),
    ('EY', 'ETD', 'Etihad Airways', 'UAE'),
    ('QR', 'QTR', 'Qatar Airways', 'Qatar'),
    ('WY', 'OMA', 'Oman Air', 'Oman'),
    ('G9', 'ABY', 'Air Arabia', 'UAE'),
    ('FZ', 'FDB', 'flydubai', 'UAE'),
    ('XY', 'KNE', 'flynas', 'Saudi Arabia'),
    ('SV', 'SVA', 'Saudia', 'Saudi Arabia'),
    ('GF', 'GFA', 'Gulf Air', 'Bahrain'),
    ('KU', 'KAC', 'Kuwait Airways', 'Kuwait'),

    # Asia
    ('SQ', 'SIA', 'Singapore Airlines', 'Singapore'),
    ('TG', 'THA', 'Thai Airways', 'Thailand'),
    ('MH', 'MAS', 'Malaysia Airlines', 'Malaysia'),
    ('CX', 'CPA', 'Cathay Pacific', 'Hong Kong'),
    ('JL', 'JAL', 'Japan Airlines', 'Japan'),
    ('NH', 'ANA', 'All Nippon Airways', 'Japan'),
    ('KE', 'KAL', 'Korean Air', 'South Korea'),
    ('OZ', 'AAR', 'Asiana Airlines', 'South Korea'),
    ('BR', 'EVA', 'EVA Air', 'Taiwan'),
    ('CI', 'CAL', 'China Airlines', 'Taiwan'),
    ('CA', 'CCA', 'Air China', 'China'),
    ('CZ', 'CSN', 'China Southern Airlines', 'China'),
    ('MU', 'CES', 'China Eastern Airlines', 'China'),
    ('VN', 'HVN', 'Vietnam Airlines', 'Vietnam'),
    ('VJ', 'VJC', 'VietJet Air', 'Vietnam'),
    ('PG', 'BKP', 'Bangkok Airways', 'Thailand'),
    ('FD', 'AIQ', 'Thai AirAsia', 'Thailand'),
    ('SL', 'TLM', 'Thai Lion Air', 'Thailand'),
    ('VZ', 'TVJ', 'Thai Vietjet Air', 'Thailand'),
    ('UL', 'ALK', 'SriLankan Airlines', 'Sri Lanka'),
    ('AK', 'AXM', 'AirAsia', 'Malaysia'),
    ('D7', 'XAX', 'AirAsia X', 'Malaysia'),
    ('BI', 'RBA', 'Royal Brunei Airlines', 'Brunei'),
    ('PK', 'PIA', 'Pakistan International Airlines', 'Pakistan'),

    # United States
    ('AA', 'AAL', 'American Airlines', 'USA'),
    ('UA', 'UAL', 'United Airlines', 'USA'),
    ('DL', 'DAL', 'Delta Air Lines', 'USA'),
    ('WN', 'SWA', 'Southwest Airlines', 'USA'),
    ('B6', 'JBU', 'JetBlue Airways', 'USA'),
    ('AS', 'ASA', 'Alaska Airlines', 'USA'),
    ('NK', 'NKS', 'Spirit Airlines', 'USA'),
    ('F9', 'FFT', 'Frontier Airlines', 'USA'),
    ('G4', 'AAY', 'Allegiant Air', 'USA'),
    ('HA', 'HAL', 'Hawaiian Airlines', 'USA'),

    # Europe
    ('BA', 'BAW', 'British Airways', 'UK'),
    ('LH', 'DLH', 'Lufthansa', 'Germany'),
    ('AF', 'AFR', 'Air France', 'France'),
    ('KL', 'KLM', 'KLM Royal Dutch Airlines', 'Netherlands'),
    ('IB', 'IBE', 'Iberia', 'Spain'),
    ('AZ', 'AZA', 'Alitalia', 'Italy'),
    ('LX', 'SWR', 'Swiss International Air Lines', 'Switzerland'),
    ('OS', 'AUA', 'Austrian Airlines', 'Austria'),
    ('SN', 'BEL', 'Brussels Airlines', 'Belgium'),
    ('SK', 'SAS', 'Scandinavian Airlines', 'Sweden'),
    ('AY', 'FIN', 'Finnair', 'Finland'),
    ('TP', 'TAP', 'TAP Air Portugal', 'Portugal'),
    ('EI', 'EIN', 'Aer Lingus', 'Ireland'),
    ('FR', 'RYR', 'Ryanair', 'Ireland'),
    ('U2', 'EZY', 'easyJet', 'UK'),
    ('VY', 'VLG', 'Vueling', 'Spain'),
    ('W6', 'WZZ', 'Wizz Air', 'Hungary'),
    ('LG', 'LGL', 'Luxair', 'Luxembourg'),
    ('TK', 'THY', 'Turkish Airlines', 'Turkey'),
    ('SU', 'AFL', 'Aeroflot', 'Russia'),
    ('LO', 'LOT', 'LOT Polish Airlines', 'Poland'),
    ('OK', 'CSA', 'Czech Airlines', 'Czech Republic'),
    ('RO', 'ROT', 'Tarom', 'Romania'),

    # Canada
    ('AC', 'ACA', 'Air Canada', 'Canada'),
    ('WS', 'WJA', 'WestJet', 'Canada'),

    # Latin America
    ('AM', 'AMX', 'Aeromexico', 'Mexico'),
    ('AR', 'ARG', 'Aerolineas Argentinas', 'Argentina'),
    ('LA', 'LAN', 'LATAM Airlines', 'Chile'),
    ('CM', 'CMP', 'Copa Airlines', 'Panama'),
    ('AV', 'AVA', 'Avianca', 'Colombia'),
    ('G3', 'GLO', 'GOL Linhas Aereas', 'Brazil'),
    ('AD', 'AZU', 'Azul Brazilian Airlines', 'Brazil'),

    # Oceania
    ('QF', 'QFA', 'Qantas', 'Australia'),
    ('VA', 'VOZ', 'Virgin Australia', 'Australia'),
    ('JQ', 'JST', 'Jetstar Airways', 'Australia'),
    ('NZ', 'ANZ', 'Air New Zealand', 'New Zealand'),
    ('FJ', 'FJI', 'Fiji Airways', 'Fiji'),

    # Africa
    ('ET', 'ETH', 'Ethiopian Airlines', 'Ethiopia'),
    ('MS', 'MSR', 'EgyptAir', 'Egypt'),
    ('SA', 'SAA', 'South African Airways', 'South Africa'),
    ('KQ', 'KQA', 'Kenya Airways', 'Kenya'),
    ('AT', 'RAM', 'Royal Air Maroc', 'Morocco'),
    ('TU', 'TAR', 'Tunisair', 'Tunisia'),
]

AIRLINES: Mapping[str, AirlineInfo] = MappingProxyType({
    iata: AirlineInfo(code=iata, icao=icao, name=name, country=country)
    for iata, icao, name, country in _AIRLINES
})

_BY_ICAO: Mapping[str, AirlineInfo] = MappingProxyType({
    a.icao: a for a in AIRLINES.values() if a.icao
})


def get_airline_by_code(code: Optional[str]) -> Optional[AirlineInfo]:
    """Look up an airline by IATA or ICAO code (case-insensitive)."""
    if not code:
        return None
    code = code.strip().upper()
    return AIRLINES.get(code) or _BY_ICAO.get(code)


def get_all_airlines() -> List[AirlineInfo]:
    """All airlines, deduplicated by name and country, sorted by name."""
    seen = set()
    unique = []
    for airline in AIRLINES.values():
        key = (airline.name, airline.country)
        if key not in seen:
            seen.add(key)
            unique.append(airline)
    return sorted(unique, key=lambda a: a.name.lower())


def normalize_airline_code(value: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Resolve free-form airline input to (IATA code, name).

    Tries IATA code, then ICAO code, then exact (case-insensitive) name.
    Returns None when nothing matches.
    """
    if not value or not value.strip():
        return None

    airline = get_airline_by_code(value)
    if airline:
        return (airline.code, airline.name)

    wanted = value.strip().upper()
    for airline in AIRLINES.values():
        if airline.name.upper() == wanted:
            return (airline.code, airline.name)

    return None
