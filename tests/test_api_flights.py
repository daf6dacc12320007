import io
from datetime import date

from sinceonearth.api import flights as flights_api
from tests.helpers import auth_headers, flight_payload, register_user


def _create(client, headers, **overrides):
    response = client.post('/api/flights', json=flight_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def test_flights_require_auth(client):
    assert client.get('/api/flights').status_code == 401
    assert client.post('/api/flights', json=flight_payload()).status_code == 401


def test_create_and_list_newest_first(client, headers, user):
    _create(client, headers, date='2020-01-01')
    created = _create(client, headers, date='2023-03-04', **{'from': 'bom', 'to': 'del'})

    assert created['from'] == 'BOM'
    assert created['to'] == 'DEL'
    assert created['userId'] == user['id']
    assert created['status'] == 'completed'

    flights = client.get('/api/flights', headers=headers).get_json()
    assert [f['date'] for f in flights] == ['2023-03-04', '2020-01-01']


def test_create_accepts_numeric_flight_number(client, headers):
    created = _create(client, headers, flightNumber=488)

    assert created['flightNumber'] == '488'


def test_create_validates_payload(client, headers):
    response = client.post('/api/flights', json=flight_payload(
        date='yesterday', status='boarding', departureLat=123.0), headers=headers)

    assert response.status_code == 400
    fields = {d['field'] for d in response.get_json()['details']}
    assert fields == {'date', 'status', 'departureLat'}


def test_create_requires_route(client, headers):
    payload = flight_payload()
    del payload['to']

    response = client.post('/api/flights', json=payload, headers=headers)

    assert response.status_code == 400


def test_bulk_create_is_all_or_nothing(client, headers):
    bad = client.post('/api/flights/bulk', json={'flights': [
        flight_payload(),
        flight_payload(**{'from': 'X'}),
    ]}, headers=headers)
    assert bad.status_code == 400
    assert client.get('/api/flights', headers=headers).get_json() == []

    good = client.post('/api/flights/bulk', json={'flights': [
        flight_payload(),
        flight_payload(**{'from': 'BOM', 'to': 'DEL'}),
    ]}, headers=headers)
    assert good.status_code == 201
    assert len(good.get_json()) == 2


def test_get_flight_includes_distance_and_airports(client, headers):
    created = _create(client, headers)

    body = client.get(f"/api/flights/{created['id']}", headers=headers).get_json()

    assert 1120 < body['distanceKm'] < 1150
    assert body['departureAirport']['city'] == 'New Delhi'
    assert body['arrivalAirport']['city'] == 'Mumbai'


def test_get_flight_with_unknown_airport(client, headers):
    created = _create(client, headers, **{'to': 'ZZZ'})

    body = client.get(f"/api/flights/{created['id']}", headers=headers).get_json()

    assert body['distanceKm'] is None
    assert body['arrivalAirport'] is None


def test_update_flight(client, headers):
    created = _create(client, headers)

    response = client.put(f"/api/flights/{created['id']}", json={
        'status': 'cancelled',
        'aircraftType': 'Airbus A321neo',
        'date': None,
    }, headers=headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body['status'] == 'cancelled'
    assert body['aircraftType'] == 'Airbus A321neo'
    assert body['date'] == created['date']
    assert body['from'] == 'DEL'


def test_update_validates(client, headers):
    created = _create(client, headers)

    response = client.put(f"/api/flights/{created['id']}", json={'to': '!!'}, headers=headers)

    assert response.status_code == 400


def test_delete_flight(client, headers):
    created = _create(client, headers)

    response = client.delete(f"/api/flights/{created['id']}", headers=headers)

    assert response.get_json() == {'success': True}
    assert client.get(f"/api/flights/{created['id']}", headers=headers).status_code == 404


def test_other_users_flights_are_not_found(client, headers):
    created = _create(client, headers)
    other = auth_headers(register_user(client, username='mallory')['token'])
    url = f"/api/flights/{created['id']}"

    assert client.get(url, headers=other).status_code == 404
    assert client.put(url, json={'status': 'cancelled'}, headers=other).status_code == 404
    assert client.delete(url, headers=other).status_code == 404
    assert client.get(url, headers=headers).status_code == 200


def test_import_csv_upload(client, headers):
    csv_text = (
        'Date,Airline,Flight,From,To\n'
        '2019-05-12,IGO,2591,BDQ,DEL\n'
        '2019-05-12,,2263,DEL,\n'
    )

    response = client.post(
        '/api/flights/import',
        data={'file': (io.BytesIO(csv_text.encode('utf-8')), 'flighty.csv')},
        content_type='multipart/form-data',
        headers=headers,
    )

    assert response.status_code == 201
    assert response.get_json() == {'success': True, 'count': 1, 'skipped': 1}

    flights = client.get('/api/flights', headers=headers).get_json()
    assert flights[0]['airline'] == '6E'
    assert flights[0]['airlineName'] == 'IndiGo'


def test_import_csv_raw_body(client, headers):
    response = client.post(
        '/api/flights/import',
        data='Date,From,To\n2021-11-07,AMD,BLR\n',
        content_type='text/csv',
        headers=headers,
    )

    assert response.status_code == 201
    assert response.get_json()['count'] == 1


def test_import_csv_without_valid_rows(client, headers):
    response = client.post(
        '/api/flights/import',
        data='Date,From,To\n,,\n',
        content_type='text/csv',
        headers=headers,
    )

    assert response.status_code == 400
    assert 'no valid flight data' in response.get_json()['error']


def test_import_default_only_seeds_empty_logs(client, headers):
    seed = {'flights': [
        flight_payload(status='delayed'),
        flight_payload(**{'from': 'BOM', 'to': 'DEL'}),
    ]}

    first = client.post('/api/flights/import-default', json=seed, headers=headers)
    second = client.post('/api/flights/import-default', json=seed, headers=headers)

    assert first.get_json() == {'success': True, 'count': 2}
    assert second.get_json() == {'message': 'User already has flights', 'count': 2}

    statuses = {f['status'] for f in client.get('/api/flights', headers=headers).get_json()}
    assert statuses == {'completed'}


def test_import_default_requires_flight_list(client, headers):
    response = client.post('/api/flights/import-default', json={'flights': 'nope'}, headers=headers)

    assert response.status_code == 400


def test_history_splits_upcoming_and_past(client, headers, monkeypatch):
    monkeypatch.setattr(flights_api, '_today', lambda: date(2024, 6, 15))
    _create(client, headers, date='2023-01-10')
    _create(client, headers, date='2024-06-15', status='upcoming')
    _create(client, headers, date='2024-09-01', status='upcoming')

    body = client.get('/api/flights/history', headers=headers).get_json()

    assert [f['date'] for f in body['upcoming']] == ['2024-06-15', '2024-09-01']
    assert [f['date'] for f in body['past']] == ['2023-01-10']
    assert body['years'] == [{'year': 2024, 'count': 2}, {'year': 2023, 'count': 1}]
