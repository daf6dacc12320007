from sinceonearth.reference.countries import country_to_iso, normalize_country
from sinceonearth.stats.stamps import STAMP_COUNTRIES, earned_stamps, visited_iso_codes


def test_country_aliases_map_to_iso():
    assert country_to_iso('UAE') == 'ae'
    assert country_to_iso('United Arab Emirates') == 'ae'
    assert country_to_iso('UK') == 'gb'
    assert country_to_iso('USA') == 'us'
    assert country_to_iso('united states') == 'us'
    assert country_to_iso('india') == 'in'
    assert country_to_iso('Atlantis') is None
    assert country_to_iso(None) is None


def test_normalize_country_collapses_whitespace():
    assert normalize_country('  United   Kingdom ') == 'UK'
    assert normalize_country('France') == 'France'
    assert normalize_country('   ') is None


def test_all_stamps_listed_even_with_no_travel():
    stamps = earned_stamps([])

    assert len(stamps) == len(STAMP_COUNTRIES)
    assert not any(s.achieved for s in stamps)
    assert stamps[0].to_dict() == {
        'id': '1',
        'name': 'India',
        'isoCode': 'in',
        'imageUrl': '/stamps/in.png',
        'achieved': False,
    }


def test_visited_countries_unlock_stamps():
    stamps = earned_stamps(['India', 'UAE', 'Sri Lanka'])

    achieved = {s.iso_code for s in stamps if s.achieved}
    assert achieved == {'in', 'ae'}


def test_visited_iso_codes_ignores_unknown_names():
    assert visited_iso_codes(['Thailand', 'Narnia', 'USA']) == {'th', 'us'}
