"""
SinceOnEarth Backend Package.

Personal flight log and travel statistics API built with Flask, SQLAlchemy, and NumPy.

Modules:
    api/         REST endpoints for auth, flights, statistics, reference data, admin
    models/      SQLAlchemy ORM models (User, Flight, Airline)
    reference/   Bundled airport and airline reference tables
    stats/       Trip aggregation engine (distances, countries, routes, stamps)
    services/    CSV import and password/token security helpers
    storage.py   Persistence operations over the ORM
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
