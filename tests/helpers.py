from sinceonearth.models import User, get_session


def register_user(client, username='alice', email=None, password='password123',
                  name='Alice', country='India'):
    """Register through the API and return the JSON body (user + token)."""
    response = client.post('/api/auth/register', json={
        'username': username,
        'email': email or f'{username}@example.com',
        'password': password,
        'name': name,
        'country': country,
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


def make_admin(user_id):
    with get_session() as session:
        session.get(User, user_id).is_admin = True


def flight_payload(**overrides):
    """A valid POST /api/flights body (DEL -> BOM on IndiGo)."""
    payload = {
        'date': '2023-05-12',
        'airline': '6E',
        'airlineName': 'IndiGo',
        'flightNumber': '2591',
        'from': 'DEL',
        'to': 'BOM',
        'departureTime': '07:00',
        'arrivalTime': '09:10',
        'status': 'completed',
    }
    payload.update(overrides)
    return payload
