"""
Travel statistics API endpoints.

Provides endpoints for:
- GET /api/stats - Aggregate counts, total distance and distance summary
- GET /api/stats/routes - Route segments and airport nodes for the globe
- GET /api/stats/stamps - Country stamps with achieved flags

Everything is recomputed from the caller's flights on each request.
"""

import logging

from flask import Blueprint, g, jsonify

from sinceonearth.reference.airports import get_airport_directory
from sinceonearth.services.security import require_auth
from sinceonearth.stats import (
    InvalidCoordinate,
    aggregate_trips,
    distance_summary,
    earned_stamps,
    summarize_routes,
)
from sinceonearth.storage import storage

logger = logging.getLogger(__name__)

stats_bp = Blueprint('stats', __name__, url_prefix='/api/stats')


def _user_stats():
    flights = storage.get_user_flights(g.user_id)
    return aggregate_trips(flights, get_airport_directory())


@stats_bp.route('', methods=['GET'])
@require_auth
def get_stats():
    try:
        stats = _user_stats()
    except InvalidCoordinate as e:
        logger.error(f'Stats failed for user {g.user_id}: {e}')
        return jsonify({'error': 'Flight log contains invalid coordinates'}), 422

    result = stats.to_dict()
    result['distance'] = distance_summary(stats)
    return jsonify(result)


@stats_bp.route('/routes', methods=['GET'])
@require_auth
def get_routes():
    try:
        stats = _user_stats()
    except InvalidCoordinate as e:
        logger.error(f'Route summary failed for user {g.user_id}: {e}')
        return jsonify({'error': 'Flight log contains invalid coordinates'}), 422

    return jsonify(summarize_routes(stats.routes, get_airport_directory()).to_dict())


@stats_bp.route('/stamps', methods=['GET'])
@require_auth
def get_stamps():
    try:
        stats = _user_stats()
    except InvalidCoordinate as e:
        logger.error(f'Stamps failed for user {g.user_id}: {e}')
        return jsonify({'error': 'Flight log contains invalid coordinates'}), 422

    stamps = earned_stamps(stats.countries)
    return jsonify({
        'stamps': [s.to_dict() for s in stamps],
        'achieved': sum(1 for s in stamps if s.achieved),
        'total': len(stamps),
    })
