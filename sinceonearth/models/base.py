"""
Engine, declarative base and session handling for the flight log database.

SQLite is the default store (a file next to the app, or a private
in-memory database for tests); any SQLAlchemy URL such as PostgreSQL
works through DATABASE_URL.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sinceonearth.config import DatabaseConfig, config


class Base(DeclarativeBase):
    """Declarative base shared by users, flights and airlines."""


def _build_engine(database: DatabaseConfig, echo: bool = False) -> Engine:
    options = {'echo': echo}
    if database.is_sqlite:
        # Flask serves requests from worker threads
        options['connect_args'] = {'check_same_thread': False}
    if database.is_memory:
        # One shared connection, otherwise every checkout sees an empty database
        options['poolclass'] = StaticPool

    built = create_engine(database.url, **options)

    if database.is_sqlite:
        @event.listens_for(built, 'connect')
        def _sqlite_on_connect(dbapi_connection, connection_record):
            """Foreign keys are off per connection by default; the flights cascade needs them."""
            cursor = dbapi_connection.cursor()
            if not database.is_memory:
                cursor.execute('PRAGMA journal_mode=WAL')
                cursor.execute('PRAGMA synchronous=NORMAL')
            cursor.execute('PRAGMA foreign_keys=ON')
            cursor.close()

    return built


engine = _build_engine(config.database, echo=config.debug)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    # Rows are handed to the API layer after the session closes
    expire_on_commit=False,
)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Yield a session that commits on success and rolls back on any error.

        with get_session() as session:
            session.add(flight)
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create any missing tables."""
    from sinceonearth.models import airline, flight, user  # noqa: F401  (registers tables)

    Base.metadata.create_all(bind=engine)


def drop_db() -> None:
    """Drop every table. Used to give each test a clean database."""
    Base.metadata.drop_all(bind=engine)
