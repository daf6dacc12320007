"""
Flight log API endpoints.

Provides endpoints for:
- GET /api/flights - The caller's flights, newest first
- POST /api/flights - Log one flight
- POST /api/flights/bulk - Log many flights in one transaction
- POST /api/flights/import - Import a Flighty/generic CSV export
- POST /api/flights/import-default - Seed flights for an empty log
- GET /api/flights/history - Upcoming/past split and per-year counts
- GET /api/flights/<id> - Single flight with distance and endpoints
- PUT /api/flights/<id> - Partial update
- DELETE /api/flights/<id> - Remove a flight

Flights belonging to someone else are reported as not found.
"""

import logging
from datetime import date

from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError

from sinceonearth.api.schemas import (
    BulkFlightsRequest,
    FlightPayload,
    FlightUpdate,
    validation_details,
)
from sinceonearth.models.flight import FlightStatus
from sinceonearth.reference.airports import get_airport_directory
from sinceonearth.services.csv_import import CsvImportError, parse_flight_csv
from sinceonearth.services.security import require_auth
from sinceonearth.stats import InvalidCoordinate, flight_distance, group_by_year, split_trips
from sinceonearth.storage import storage

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


def _today() -> date:
    return date.today()


def _not_found():
    return jsonify({'error': 'Flight not found'}), 404


def _owned_flight(flight_id: str):
    """The flight if it exists and belongs to the caller, else None."""
    flight = storage.get_flight(flight_id)
    if flight is None or flight.user_id != g.user_id:
        return None
    return flight


def _invalid(message: str, error: ValidationError):
    return jsonify({'error': message, 'details': validation_details(error)}), 400


@flights_bp.route('', methods=['GET'])
@require_auth
def list_flights():
    flights = storage.get_user_flights(g.user_id)
    return jsonify([f.to_dict() for f in flights])


@flights_bp.route('', methods=['POST'])
@require_auth
def create_flight():
    try:
        payload = FlightPayload.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _invalid('Invalid flight data', e)

    flight = storage.create_flight(g.user_id, payload.to_columns())
    logger.info(f'User {g.username} logged {flight.display_flight_number} {flight.from_code}->{flight.to_code}')
    return jsonify(flight.to_dict()), 201


@flights_bp.route('/bulk', methods=['POST'])
@require_auth
def create_flights_bulk():
    """Create many flights; nothing is stored if any entry is invalid."""
    try:
        payload = BulkFlightsRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _invalid('Invalid flights data', e)

    flights = storage.create_flights_bulk(
        g.user_id, [f.to_columns() for f in payload.flights])
    return jsonify([f.to_dict() for f in flights]), 201


def _uploaded_csv() -> str:
    """CSV text from a multipart 'file' field or the raw request body."""
    upload = request.files.get('file')
    raw = upload.read() if upload is not None else request.get_data()
    return raw.decode('utf-8-sig')


@flights_bp.route('/import', methods=['POST'])
@require_auth
def import_csv():
    """
    Import flights from a CSV export.

    Accepts multipart/form-data with a 'file' field, or the CSV as the
    request body. Rows without Date/From/To are skipped.
    """
    try:
        text = _uploaded_csv()
    except UnicodeDecodeError:
        return jsonify({'error': 'CSV must be UTF-8 encoded'}), 400

    try:
        result = parse_flight_csv(text, _today(), airlines=storage.get_all_airlines())
    except CsvImportError as e:
        return jsonify({'error': str(e)}), 400

    flights = storage.create_flights_bulk(g.user_id, result.flights)
    logger.info(f'User {g.username} imported {len(flights)} flights from CSV')
    return jsonify({
        'success': True,
        'count': len(flights),
        'skipped': result.skipped,
    }), 201


@flights_bp.route('/import-default', methods=['POST'])
@require_auth
def import_default():
    """
    Seed a new account with a starter flight list.

    Does nothing when the user already has flights. Unknown statuses
    fall back to 'completed'.
    """
    existing = storage.count_user_flights(g.user_id)
    if existing:
        return jsonify({'message': 'User already has flights', 'count': existing})

    data = request.get_json(silent=True) or {}
    entries = data.get('flights') if isinstance(data, dict) else None
    if not isinstance(entries, list):
        return jsonify({'error': 'Invalid flights data'}), 400

    cleaned = []
    for entry in entries:
        if isinstance(entry, dict) and entry.get('status') not in FlightStatus.values():
            entry = {**entry, 'status': FlightStatus.COMPLETED.value}
        cleaned.append(entry)

    try:
        payload = BulkFlightsRequest.model_validate({'flights': cleaned})
    except ValidationError as e:
        return _invalid('Invalid flights data', e)

    flights = storage.create_flights_bulk(
        g.user_id, [f.to_columns() for f in payload.flights])
    return jsonify({'success': True, 'count': len(flights)})


@flights_bp.route('/history', methods=['GET'])
@require_auth
def flight_history():
    """Upcoming and past trips plus flight counts per year."""
    flights = storage.get_user_flights(g.user_id)
    upcoming, past = split_trips(flights, _today())
    years = group_by_year(flights)

    return jsonify({
        'upcoming': [f.to_dict() for f in upcoming],
        'past': [f.to_dict() for f in past],
        'years': [
            {'year': year, 'count': len(year_flights)}
            for year, year_flights in years.items()
        ],
    })


@flights_bp.route('/<flight_id>', methods=['GET'])
@require_auth
def get_flight(flight_id: str):
    """Single flight with great-circle distance and endpoint details."""
    flight = _owned_flight(flight_id)
    if flight is None:
        return _not_found()

    directory = get_airport_directory()
    result = flight.to_dict()

    try:
        distance = flight_distance(flight, directory)
    except InvalidCoordinate as e:
        logger.warning(f'Flight {flight.id} has invalid cached coordinates: {e}')
        distance = None
    result['distanceKm'] = round(distance, 1) if distance is not None else None

    for key, code in (('departureAirport', flight.from_code), ('arrivalAirport', flight.to_code)):
        airport = directory.resolve(code)
        result[key] = airport.to_dict() if airport else None

    return jsonify(result)


@flights_bp.route('/<flight_id>', methods=['PUT'])
@require_auth
def update_flight(flight_id: str):
    if _owned_flight(flight_id) is None:
        return _not_found()

    try:
        payload = FlightUpdate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _invalid('Invalid flight data', e)

    flight = storage.update_flight(flight_id, payload.to_columns())
    if flight is None:
        return _not_found()
    return jsonify(flight.to_dict())


@flights_bp.route('/<flight_id>', methods=['DELETE'])
@require_auth
def delete_flight(flight_id: str):
    if _owned_flight(flight_id) is None:
        return _not_found()

    storage.delete_flight(flight_id)
    return jsonify({'success': True})
