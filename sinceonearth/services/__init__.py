"""
Application services: authentication and flight log import.
"""

from sinceonearth.services.csv_import import CsvImportError, CsvImportResult, parse_flight_csv
from sinceonearth.services.security import (
    TokenPayload,
    hash_password,
    require_admin,
    require_auth,
    sign_token,
    verify_password,
    verify_token,
)

__all__ = [
    'CsvImportError',
    'CsvImportResult',
    'parse_flight_csv',
    'TokenPayload',
    'hash_password',
    'require_admin',
    'require_auth',
    'sign_token',
    'verify_password',
    'verify_token',
]
