"""
Database models for SinceOnEarth.

Schema priorities:
1. Per-user flight lists ordered by date
2. Cascade cleanup when a user is deleted
3. Small static airline reference table
"""

from sinceonearth.models.base import Base, engine, SessionLocal, init_db, drop_db, get_session
from sinceonearth.models.user import User
from sinceonearth.models.flight import Flight, FlightStatus
from sinceonearth.models.airline import Airline

__all__ = [
    'Base',
    'engine',
    'SessionLocal',
    'init_db',
    'drop_db',
    'get_session',
    'User',
    'Flight',
    'FlightStatus',
    'Airline',
]
