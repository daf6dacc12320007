"""
Request payload models.

Field names follow the Flight/User columns; aliases accept the
camelCase keys the web client sends ('from', 'flightNumber', ...).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from sinceonearth.models.flight import FlightStatus
from sinceonearth.stats.timeline import parse_flight_date


def validation_details(error: ValidationError) -> List[Dict[str, str]]:
    """Flatten a ValidationError into JSON-safe {field, message} pairs."""
    return [
        {
            'field': '.'.join(str(part) for part in err['loc']),
            'message': err['msg'],
        }
        for err in error.errors()
    ]


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)

    @field_validator('username', 'name', 'country')
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('must not be blank')
        return v


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username_or_email: str = Field(..., alias='usernameOrEmail', min_length=1)
    password: str = Field(..., min_length=1)


# Flight columns that cannot be cleared by an update
_REQUIRED_COLUMNS = ('date', 'airline', 'flight_number', 'from_code', 'to_code', 'status')


def _clean_date(v: Any) -> Any:
    if v is None:
        return v
    parsed = parse_flight_date(v) if isinstance(v, str) else None
    if parsed is None:
        raise ValueError('date must be YYYY-MM-DD')
    return parsed.isoformat()


def _clean_airport(v: Any) -> Any:
    if v is None:
        return v
    code = str(v).strip().upper()
    if not (3 <= len(code) <= 4 and code.isalnum()):
        raise ValueError('airport code must be 3-4 letters or digits')
    return code


class FlightPayload(BaseModel):
    """A new flight as submitted by the client."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    date: str
    airline: str = Field(..., min_length=1, max_length=8)
    airline_name: Optional[str] = Field(None, alias='airlineName', max_length=100)
    flight_number: str = Field(..., alias='flightNumber', max_length=10)
    from_code: str = Field(..., alias='from')
    to_code: str = Field(..., alias='to')
    departure_time: Optional[str] = Field(None, alias='departureTime', max_length=5)
    arrival_time: Optional[str] = Field(None, alias='arrivalTime', max_length=5)
    departure_terminal: Optional[str] = Field(None, alias='departureTerminal', max_length=10)
    arrival_terminal: Optional[str] = Field(None, alias='arrivalTerminal', max_length=10)
    aircraft_type: Optional[str] = Field(None, alias='aircraftType', max_length=100)
    status: FlightStatus = Field(FlightStatus.COMPLETED, validate_default=True)

    departure_lat: Optional[float] = Field(None, alias='departureLat', ge=-90, le=90)
    departure_lon: Optional[float] = Field(None, alias='departureLon', ge=-180, le=180)
    arrival_lat: Optional[float] = Field(None, alias='arrivalLat', ge=-90, le=90)
    arrival_lon: Optional[float] = Field(None, alias='arrivalLon', ge=-180, le=180)

    @field_validator('date')
    @classmethod
    def check_date(cls, v: str) -> str:
        return _clean_date(v)

    @field_validator('from_code', 'to_code')
    @classmethod
    def check_airport(cls, v: str) -> str:
        return _clean_airport(v)

    @field_validator('airline')
    @classmethod
    def uppercase_airline(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator('flight_number', mode='before')
    @classmethod
    def flight_number_as_text(cls, v: Any) -> Any:
        # Older clients send numeric flight numbers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def to_columns(self) -> Dict[str, Any]:
        return self.model_dump()


class FlightUpdate(FlightPayload):
    """Partial update; only fields present in the request are applied."""

    date: Optional[str] = None
    airline: Optional[str] = Field(None, min_length=1, max_length=8)
    flight_number: Optional[str] = Field(None, alias='flightNumber', max_length=10)
    from_code: Optional[str] = Field(None, alias='from')
    to_code: Optional[str] = Field(None, alias='to')
    status: Optional[FlightStatus] = None

    @field_validator('airline')
    @classmethod
    def uppercase_airline(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v is not None else v

    def to_columns(self) -> Dict[str, Any]:
        changes = self.model_dump(exclude_unset=True)
        return {
            key: value for key, value in changes.items()
            if value is not None or key not in _REQUIRED_COLUMNS
        }


class BulkFlightsRequest(BaseModel):
    flights: List[FlightPayload] = Field(..., min_length=1)
