"""
Country stamps - passport-style achievements for visited countries.

A fixed catalogue of stamps, one per country, each unlocked once any
flight touches an airport in that country.
"""

from dataclasses import dataclass
from typing import Iterable, List

from sinceonearth.reference.countries import country_to_iso

# ISO alpha-2 codes with stamp artwork, in display order
STAMP_COUNTRIES = (
    ('in', 'India'),
    ('ae', 'United Arab Emirates'),
    ('us', 'United States'),
    ('gb', 'United Kingdom'),
    ('th', 'Thailand'),
    ('sg', 'Singapore'),
    ('de', 'Germany'),
    ('fr', 'France'),
    ('it', 'Italy'),
    ('ch', 'Switzerland'),
    ('br', 'Brazil'),
    ('jp', 'Japan'),
    ('pt', 'Portugal'),
    ('nl', 'Netherlands'),
    ('be', 'Belgium'),
    ('my', 'Malaysia'),
    ('va', 'Vatican City'),
)


@dataclass(frozen=True)
class Stamp:
    id: str
    name: str
    iso_code: str
    image_url: str
    achieved: bool = False

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'isoCode': self.iso_code,
            'imageUrl': self.image_url,
            'achieved': self.achieved,
        }


def visited_iso_codes(countries: Iterable[str]) -> set:
    """ISO codes for visited country names; unknown names are ignored."""
    codes = set()
    for country in countries:
        iso = country_to_iso(country)
        if iso:
            codes.add(iso)
    return codes


def earned_stamps(countries: Iterable[str]) -> List[Stamp]:
    """Full stamp catalogue with `achieved` set for visited countries."""
    earned = visited_iso_codes(countries)
    return [
        Stamp(
            id=str(i),
            name=name,
            iso_code=iso,
            image_url=f'/stamps/{iso}.png',
            achieved=iso in earned,
        )
        for i, (iso, name) in enumerate(STAMP_COUNTRIES, start=1)
    ]
