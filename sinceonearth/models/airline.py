"""
Airline model - static reference data for carrier codes.

Seeded from the bundled airline directory the first time the schema
is created; afterwards it can be edited in the database directly.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from sinceonearth.models.base import Base


class Airline(Base):
    """
    Airline keyed by its 2-character IATA designator.

    Fields:
        code: IATA code (e.g., '6E', 'EK')
        icao: 3-letter ICAO code (e.g., 'IGO', 'UAE'), used by Flighty exports
        name: Display name
        country: Country of the carrier
    """

    __tablename__ = 'airlines'

    code: Mapped[str] = mapped_column(String(2), primary_key=True)

    icao: Mapped[Optional[str]] = mapped_column(
        String(3),
        nullable=True,
        index=True,
        comment='ICAO airline code (e.g., IGO)',
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    country: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f'<Airline {self.code} {self.name}>'

    def to_dict(self) -> dict:
        return {
            'code': self.code,
            'icao': self.icao,
            'name': self.name,
            'country': self.country,
        }
