"""
API module for SinceOnEarth.

Provides REST endpoints for:
- Authentication (register, login, current user)
- Flight log CRUD, bulk insert and CSV import
- Travel statistics, routes and stamps
- Airline/airport reference data
- Admin overview
"""

from sinceonearth.api.admin import admin_bp
from sinceonearth.api.auth import auth_bp
from sinceonearth.api.flights import flights_bp
from sinceonearth.api.reference import reference_bp
from sinceonearth.api.stats import stats_bp

__all__ = ['admin_bp', 'auth_bp', 'flights_bp', 'reference_bp', 'stats_bp']
