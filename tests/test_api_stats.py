import pytest

from sinceonearth.models import Flight, get_session
from tests.helpers import auth_headers, flight_payload, register_user


def _log(client, headers, dep, arr, **overrides):
    response = client.post('/api/flights', json=flight_payload(**{'from': dep, 'to': arr}, **overrides),
                           headers=headers)
    assert response.status_code == 201


def test_stats_for_empty_log(client, headers):
    body = client.get('/api/stats', headers=headers).get_json()

    assert body['totalFlights'] == 0
    assert body['totalDistanceKm'] == 0
    assert body['routes'] == []
    assert body['distance']['longest_km'] is None


def test_stats_round_trip(client, headers):
    _log(client, headers, 'DEL', 'BOM')
    _log(client, headers, 'BOM', 'DEL')

    body = client.get('/api/stats', headers=headers).get_json()

    assert body['totalFlights'] == 2
    assert body['uniqueAirports'] == 2
    assert body['uniqueCountries'] == 1
    assert body['uniqueAirlines'] == 1
    assert body['totalDistanceKm'] == pytest.approx(2274, rel=0.01)
    assert body['routes'] == [
        {'from': 'BOM', 'to': 'DEL', 'count': 1},
        {'from': 'DEL', 'to': 'BOM', 'count': 1},
    ]
    assert body['distance']['shortest_km'] == body['distance']['longest_km']


def test_stats_with_unknown_airport(client, headers):
    _log(client, headers, 'ZZZ', 'DEL')

    body = client.get('/api/stats', headers=headers).get_json()

    assert body['totalFlights'] == 1
    assert body['uniqueAirports'] == 2
    assert body['totalDistanceKm'] == 0
    assert body['uniqueCountries'] == 1
    assert body['unresolvedAirports'] == ['ZZZ']


def test_stats_are_per_user(client, headers):
    _log(client, headers, 'DEL', 'BOM')
    other = auth_headers(register_user(client, username='zed')['token'])

    assert client.get('/api/stats', headers=other).get_json()['totalFlights'] == 0


def test_invalid_stored_coordinates_report_an_error(client, headers, user):
    _log(client, headers, 'DEL', 'BOM')
    with get_session() as session:
        flight = session.query(Flight).filter(Flight.user_id == user['id']).first()
        flight.departure_lat = 95.0
        flight.departure_lon = 10.0

    response = client.get('/api/stats', headers=headers)

    assert response.status_code == 422


def test_routes_endpoint(client, headers):
    _log(client, headers, 'DEL', 'BOM')
    _log(client, headers, 'DEL', 'BOM')
    _log(client, headers, 'DEL', 'ZZZ')

    body = client.get('/api/stats/routes', headers=headers).get_json()

    assert body['routes'][0] == {'from': 'DEL', 'to': 'BOM', 'count': 2}
    assert [a['code'] for a in body['airports']] == ['BOM', 'DEL']


def test_stamps_endpoint(client, headers):
    _log(client, headers, 'DEL', 'DXB')
    _log(client, headers, 'DXB', 'LHR')

    body = client.get('/api/stats/stamps', headers=headers).get_json()

    achieved = {s['isoCode'] for s in body['stamps'] if s['achieved']}
    assert achieved == {'in', 'ae', 'gb'}
    assert body['achieved'] == 3
    assert body['total'] == len(body['stamps'])


def test_stats_require_auth(client):
    assert client.get('/api/stats').status_code == 401
    assert client.get('/api/stats/routes').status_code == 401
    assert client.get('/api/stats/stamps').status_code == 401
