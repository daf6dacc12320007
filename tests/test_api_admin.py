from tests.helpers import auth_headers, flight_payload, make_admin, register_user


def _admin_headers(client):
    admin = register_user(client, username='root')
    make_admin(admin['id'])
    return auth_headers(admin['token'])


def test_admin_routes_reject_regular_users(client, headers):
    assert client.get('/api/admin/users', headers=headers).status_code == 403
    assert client.get('/api/admin/stats', headers=headers).status_code == 403


def test_admin_routes_require_token(client):
    assert client.get('/api/admin/users').status_code == 401


def test_admin_lists_users_without_hashes(client, user):
    admin = _admin_headers(client)

    users = client.get('/api/admin/users', headers=admin).get_json()

    assert {u['username'] for u in users} == {'alice', 'root'}
    assert all('password_hash' not in u and 'passwordHash' not in u for u in users)


def test_admin_stats(client, headers):
    client.post('/api/flights', json=flight_payload(), headers=headers)
    client.post('/api/flights', json=flight_payload(**{'from': 'BOM', 'to': 'DXB', 'airline': 'EK'}),
                headers=headers)
    admin = _admin_headers(client)

    stats = client.get('/api/admin/stats', headers=admin).get_json()

    assert stats == {
        'totalUsers': 2,
        'totalFlights': 2,
        'totalAirlines': 2,
        'totalAirports': 3,
    }


def test_airlines_are_seeded_and_sorted(client):
    airlines = client.get('/api/airlines').get_json()
    names = [a['name'] for a in airlines]

    assert names == sorted(names)
    assert {'code': '6E', 'icao': 'IGO', 'name': 'IndiGo', 'country': 'India'} in airlines


def test_airport_search(client):
    body = client.get('/api/airports?q=mumbai').get_json()

    assert body['count'] == 1
    assert body['airports'][0]['code'] == 'BOM'


def test_airport_search_rejects_bad_limit(client):
    assert client.get('/api/airports?limit=lots').status_code == 400


def test_airport_lookup(client):
    assert client.get('/api/airports/del').get_json()['city'] == 'New Delhi'
    assert client.get('/api/airports/ZZZ').status_code == 404
