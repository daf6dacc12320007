"""
Flight model - one logged flight leg belonging to a user.

Design notes:
- Airport columns keep the historical names `from` / `to`; they are
  exposed as `from_code` / `to_code` on the model to avoid clashing
  with Python keywords.
- Cached coordinates are optional. When present they let the trip
  aggregator skip the airport lookup for distance.
- Indexed by user and date for the "my flights, newest first" query.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Float, DateTime, Index, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sinceonearth.models.base import Base
from sinceonearth.stats.aggregator import FlightRecord

if TYPE_CHECKING:
    from sinceonearth.models.user import User


class FlightStatus(str, Enum):
    """
    Advisory flight status.

    - UPCOMING: scheduled for today or later
    - COMPLETED: flown
    - CANCELLED: kept in the log but never flown
    """
    UPCOMING = 'upcoming'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @classmethod
    def values(cls) -> tuple:
        return tuple(s.value for s in cls)


class Flight(Base):
    """A single flight leg in a user's log."""

    __tablename__ = 'flights'

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False,
    )

    date: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        comment='Flight date (YYYY-MM-DD)',
    )

    # Carrier
    airline: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        comment='Airline IATA code (or raw code when unknown)',
    )

    airline_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    flight_number: Mapped[str] = mapped_column(String(10), nullable=False)

    # Route
    from_code: Mapped[str] = mapped_column(
        'from',
        String(4),
        nullable=False,
        comment='Departure airport code',
    )

    to_code: Mapped[str] = mapped_column(
        'to',
        String(4),
        nullable=False,
        comment='Arrival airport code',
    )

    # Schedule details
    departure_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    arrival_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    departure_terminal: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    arrival_terminal: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    aircraft_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=FlightStatus.COMPLETED.value,
    )

    # Cached coordinates (WGS84, decimal degrees)
    departure_lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    departure_lon: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    arrival_lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    arrival_lon: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped['User'] = relationship(back_populates='flights')

    __table_args__ = (
        Index('idx_flights_user_id', 'user_id'),
        Index('idx_flights_date', 'date'),
    )

    def __repr__(self) -> str:
        return f'<Flight {self.airline}{self.flight_number} {self.from_code}->{self.to_code} {self.date}>'

    @property
    def display_flight_number(self) -> str:
        """Carrier code plus number, e.g. '6E488'."""
        return f'{self.airline}{self.flight_number}'

    def to_record(self) -> FlightRecord:
        """Convert to the aggregator's input type."""
        return FlightRecord(
            departure_code=self.from_code,
            arrival_code=self.to_code,
            airline_code=self.airline,
            airline_name=self.airline_name,
            date=self.date,
            status=self.status,
            departure_lat=self.departure_lat,
            departure_lon=self.departure_lon,
            arrival_lat=self.arrival_lat,
            arrival_lon=self.arrival_lon,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict for API responses."""
        return {
            'id': self.id,
            'userId': self.user_id,
            'date': self.date,
            'airline': self.airline,
            'airlineName': self.airline_name,
            'flightNumber': self.flight_number,
            'from': self.from_code,
            'to': self.to_code,
            'departureTime': self.departure_time,
            'arrivalTime': self.arrival_time,
            'departureTerminal': self.departure_terminal,
            'arrivalTerminal': self.arrival_terminal,
            'aircraftType': self.aircraft_type,
            'status': self.status,
            'departureLat': self.departure_lat,
            'departureLon': self.departure_lon,
            'arrivalLat': self.arrival_lat,
            'arrivalLon': self.arrival_lon,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
