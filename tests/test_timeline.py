from datetime import date

from sinceonearth.stats.aggregator import FlightRecord
from sinceonearth.stats.timeline import group_by_year, is_upcoming, parse_flight_date, split_trips

TODAY = date(2024, 6, 15)


def test_parse_flight_date():
    assert parse_flight_date('2024-06-15') == date(2024, 6, 15)
    assert parse_flight_date('2024-06-15T10:30:00Z') == date(2024, 6, 15)
    assert parse_flight_date('15/06/2024') is None
    assert parse_flight_date('') is None
    assert parse_flight_date(None) is None


def test_today_counts_as_upcoming():
    assert is_upcoming({'date': '2024-06-15'}, TODAY)
    assert is_upcoming({'date': '2025-01-01'}, TODAY)
    assert not is_upcoming({'date': '2024-06-14'}, TODAY)


def test_undated_flights_are_past():
    assert not is_upcoming({}, TODAY)
    assert not is_upcoming(FlightRecord(date='someday'), TODAY)


def test_split_trips_orders_each_side():
    flights = [
        {'date': '2023-01-01', 'from': 'DEL', 'to': 'BOM'},
        {'date': '2024-12-01', 'from': 'BOM', 'to': 'DEL'},
        {'from': 'AMD', 'to': 'DEL'},
        {'date': '2024-07-01', 'from': 'DEL', 'to': 'DXB'},
        {'date': '2024-05-01', 'from': 'DXB', 'to': 'DEL'},
    ]

    upcoming, past = split_trips(flights, TODAY)

    assert [f['date'] for f in upcoming] == ['2024-07-01', '2024-12-01']
    assert [f.get('date') for f in past] == ['2024-05-01', '2023-01-01', None]


def test_group_by_year_newest_first_undated_last():
    flights = [
        {'date': '2019-05-12'},
        {'date': '2023-01-01'},
        {'date': 'bad'},
        {'date': '2019-12-31'},
    ]

    groups = group_by_year(flights)

    assert list(groups) == [2023, 2019, None]
    assert len(groups[2019]) == 2
