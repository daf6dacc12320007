"""
Reference data API endpoints.

Provides endpoints for:
- GET /api/airlines - Airlines ordered by name
- GET /api/airports?q=&limit= - Airport search by code, city or country
- GET /api/airports/<code> - Single airport
"""

import logging

from flask import Blueprint, jsonify, request

from sinceonearth.reference.airports import get_airport_directory
from sinceonearth.storage import storage

logger = logging.getLogger(__name__)

reference_bp = Blueprint('reference', __name__, url_prefix='/api')


@reference_bp.route('/airlines', methods=['GET'])
def list_airlines():
    return jsonify([a.to_dict() for a in storage.get_all_airlines()])


@reference_bp.route('/airports', methods=['GET'])
def search_airports():
    """
    Search airports.

    Query parameters:
    - q: substring of code, city, country or name (optional)
    - limit: int, max results (default 20, max 100)
    """
    query = request.args.get('q', '')
    try:
        limit = min(max(int(request.args.get('limit', 20)), 1), 100)
    except ValueError:
        return jsonify({'error': 'limit must be an integer'}), 400

    airports = get_airport_directory().search(query, limit=limit)
    return jsonify({
        'airports': [a.to_dict() for a in airports],
        'count': len(airports),
    })


@reference_bp.route('/airports/<code>', methods=['GET'])
def get_airport(code: str):
    airport = get_airport_directory().resolve(code)
    if airport is None:
        return jsonify({'error': f'Unknown airport {code.upper()}'}), 404
    return jsonify(airport.to_dict())
