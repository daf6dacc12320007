"""
Persistence operations for users, flights and airlines.

Every method opens its own session via get_session(), so objects
returned here are detached; all columns are loaded up front
(expire_on_commit=False) and safe to read after the session closes.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, or_, select

from sinceonearth.models import Airline, Flight, User, get_session
from sinceonearth.reference.airlines import get_all_airlines

logger = logging.getLogger(__name__)

# Columns a client may set on a flight
FLIGHT_FIELDS = (
    'date',
    'airline',
    'airline_name',
    'flight_number',
    'from_code',
    'to_code',
    'departure_time',
    'arrival_time',
    'departure_terminal',
    'arrival_terminal',
    'aircraft_type',
    'status',
    'departure_lat',
    'departure_lon',
    'arrival_lat',
    'arrival_lon',
)


def _flight_values(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key in FLIGHT_FIELDS}


class DatabaseStorage:
    """Thin repository over the ORM models."""

    # User operations

    def get_user(self, user_id: str) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_username_or_email(self, identifier: str) -> Optional[User]:
        with get_session() as session:
            return session.scalars(
                select(User).where(or_(User.username == identifier, User.email == identifier))
            ).first()

    def user_exists(self, username: str, email: str) -> bool:
        """True if the username or email is already registered."""
        with get_session() as session:
            count = session.scalar(
                select(func.count(User.id)).where(
                    or_(User.username == username, User.email == email)
                )
            )
            return bool(count)

    def create_user(self, **fields: Any) -> User:
        with get_session() as session:
            user = User(**fields)
            session.add(user)
            session.flush()
            session.refresh(user)
            logger.info(f'Created user {user.username}')
            return user

    def get_all_users(self) -> List[User]:
        with get_session() as session:
            return list(session.scalars(select(User).order_by(User.created_at)))

    # Flight operations

    def get_user_flights(self, user_id: str) -> List[Flight]:
        """A user's flights, newest date first."""
        with get_session() as session:
            return list(session.scalars(
                select(Flight)
                .where(Flight.user_id == user_id)
                .order_by(Flight.date.desc(), Flight.created_at.desc())
            ))

    def count_user_flights(self, user_id: str) -> int:
        with get_session() as session:
            return session.scalar(
                select(func.count(Flight.id)).where(Flight.user_id == user_id)
            ) or 0

    def get_flight(self, flight_id: str) -> Optional[Flight]:
        with get_session() as session:
            return session.get(Flight, flight_id)

    def create_flight(self, user_id: str, data: Dict[str, Any]) -> Flight:
        with get_session() as session:
            flight = Flight(user_id=user_id, **_flight_values(data))
            session.add(flight)
            session.flush()
            session.refresh(flight)
            return flight

    def create_flights_bulk(self, user_id: str, rows: Iterable[Dict[str, Any]]) -> List[Flight]:
        """Insert many flights in one transaction (all or nothing)."""
        with get_session() as session:
            flights = [Flight(user_id=user_id, **_flight_values(row)) for row in rows]
            session.add_all(flights)
            session.flush()
            for flight in flights:
                session.refresh(flight)
            logger.info(f'Bulk created {len(flights)} flights for user {user_id}')
            return flights

    def update_flight(self, flight_id: str, changes: Dict[str, Any]) -> Optional[Flight]:
        """Apply a partial update. None if the flight does not exist."""
        with get_session() as session:
            flight = session.get(Flight, flight_id)
            if flight is None:
                return None
            for key, value in _flight_values(changes).items():
                setattr(flight, key, value)
            session.flush()
            session.refresh(flight)
            return flight

    def delete_flight(self, flight_id: str) -> bool:
        with get_session() as session:
            flight = session.get(Flight, flight_id)
            if flight is None:
                return False
            session.delete(flight)
            return True

    # Airline operations

    def get_all_airlines(self) -> List[Airline]:
        with get_session() as session:
            return list(session.scalars(select(Airline).order_by(Airline.name)))

    def seed_airlines(self) -> int:
        """
        Fill the airlines table from the bundled directory.

        Only runs against an empty table. Returns rows inserted.
        """
        with get_session() as session:
            existing = session.scalar(select(func.count(Airline.code))) or 0
            if existing:
                return 0

            rows = [
                Airline(code=a.code, icao=a.icao, name=a.name, country=a.country)
                for a in get_all_airlines()
            ]
            session.add_all(rows)
            logger.info(f'Seeded {len(rows)} airlines')
            return len(rows)

    # Admin operations

    def get_admin_stats(self) -> Dict[str, int]:
        """Site-wide counts for the admin dashboard."""
        with get_session() as session:
            total_users = session.scalar(select(func.count(User.id))) or 0
            total_flights = session.scalar(select(func.count(Flight.id))) or 0
            total_airlines = session.scalar(
                select(func.count(func.distinct(Flight.airline)))
            ) or 0

            airports = set()
            for dep, arr in session.execute(select(Flight.from_code, Flight.to_code)):
                airports.update((dep, arr))

        return {
            'totalUsers': total_users,
            'totalFlights': total_flights,
            'totalAirlines': total_airlines,
            'totalAirports': len(airports),
        }


# Global storage instance
storage = DatabaseStorage()
