"""
Environment-driven settings for the SinceOnEarth API.

Every value comes from the process environment (or a .env file) and is
frozen into the `config` singleton at import time.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _parse_origins(value: str) -> Tuple[str, ...]:
    """Parse comma-separated CORS origins, falling back to '*'."""
    origins = tuple(o.strip() for o in (value or '').split(',') if o.strip())
    return origins or ('*',)


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration."""
    url: str = os.getenv('DATABASE_URL', 'sqlite:///sinceonearth.db')

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def is_memory(self) -> bool:
        # 'sqlite://' and 'sqlite:///:memory:' both open a private in-memory db
        return self.url in ('sqlite://', 'sqlite:///:memory:')


@dataclass(frozen=True)
class AuthConfig:
    """Password hashing and token settings."""
    jwt_secret: str = os.getenv('SESSION_SECRET', 'dev-jwt-secret-change-in-prod')
    jwt_algorithm: str = 'HS256'
    token_ttl_days: int = int(os.getenv('JWT_EXPIRES_DAYS', '7'))
    bcrypt_rounds: int = int(os.getenv('BCRYPT_ROUNDS', '10'))


@dataclass(frozen=True)
class ReferenceDataConfig:
    """Airport reference table sources."""
    airports_path: Optional[str] = os.getenv('AIRPORTS_DATA_PATH') or None
    airports_url: str = os.getenv(
        'AIRPORTS_DATA_URL',
        'https://raw.githubusercontent.com/jpatokal/openflights/master/data/airports.dat',
    )


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    database: DatabaseConfig
    auth: AuthConfig
    reference: ReferenceDataConfig

    cors_origins: Tuple[str, ...]

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        database=DatabaseConfig(),
        auth=AuthConfig(),
        reference=ReferenceDataConfig(),
        cors_origins=_parse_origins(os.getenv('CORS_ORIGINS', '*')),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
