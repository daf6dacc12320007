"""
Country naming helpers.

The bundled airport table uses short display names ('UAE', 'UK', 'USA').
External datasets spell the same countries out in full, so names are
normalized on the way in to keep country sets from double counting.
"""

from types import MappingProxyType
from typing import Optional

# Long-form names seen in OpenFlights and similar datasets -> display name
COUNTRY_ALIASES = MappingProxyType({
    'united arab emirates': 'UAE',
    'united kingdom': 'UK',
    'great britain': 'UK',
    'united states': 'USA',
    'united states of america': 'USA',
    'us': 'USA',
    'holy see': 'Vatican City',
    'vatican': 'Vatican City',
})

# Display name -> ISO 3166-1 alpha-2 (lowercase)
COUNTRY_ISO = MappingProxyType({
    'Argentina': 'ar',
    'Australia': 'au',
    'Austria': 'at',
    'Bahrain': 'bh',
    'Belgium': 'be',
    'Brazil': 'br',
    'Brunei': 'bn',
    'Canada': 'ca',
    'Chile': 'cl',
    'China': 'cn',
    'Colombia': 'co',
    'Czech Republic': 'cz',
    'Denmark': 'dk',
    'Egypt': 'eg',
    'Ethiopia': 'et',
    'Fiji': 'fj',
    'Finland': 'fi',
    'France': 'fr',
    'Germany': 'de',
    'Hong Kong': 'hk',
    'Hungary': 'hu',
    'India': 'in',
    'Ireland': 'ie',
    'Italy': 'it',
    'Japan': 'jp',
    'Kenya': 'ke',
    'Kuwait': 'kw',
    'Luxembourg': 'lu',
    'Malaysia': 'my',
    'Mexico': 'mx',
    'Morocco': 'ma',
    'Netherlands': 'nl',
    'New Zealand': 'nz',
    'Oman': 'om',
    'Pakistan': 'pk',
    'Panama': 'pa',
    'Poland': 'pl',
    'Portugal': 'pt',
    'Qatar': 'qa',
    'Romania': 'ro',
    'Russia': 'ru',
    'Saudi Arabia': 'sa',
    'Singapore': 'sg',
    'South Africa': 'za',
    'South Korea': 'kr',
    'Spain': 'es',
    'Sri Lanka': 'lk',
    'Sweden': 'se',
    'Switzerland': 'ch',
    'Taiwan': 'tw',
    'Thailand': 'th',
    'Tunisia': 'tn',
    'Turkey': 'tr',
    'UAE': 'ae',
    'UK': 'gb',
    'USA': 'us',
    'Vatican City': 'va',
    'Vietnam': 'vn',
})


def normalize_country(name: Optional[str]) -> Optional[str]:
    """Collapse whitespace and map long-form aliases to display names."""
    if not name:
        return None
    cleaned = ' '.join(name.split())
    if not cleaned:
        return None
    return COUNTRY_ALIASES.get(cleaned.lower(), cleaned)


def country_to_iso(name: Optional[str]) -> Optional[str]:
    """
    Map a country name to its lowercase ISO alpha-2 code.

    Accepts display names, long-form aliases and (case-insensitively)
    names that only differ in capitalization. Returns None when unknown.
    """
    country = normalize_country(name)
    if country is None:
        return None
    if country in COUNTRY_ISO:
        return COUNTRY_ISO[country]
    lowered = country.lower()
    for display, iso in COUNTRY_ISO.items():
        if display.lower() == lowered:
            return iso
    return None
