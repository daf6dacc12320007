"""
Admin API endpoints (admin accounts only).

Provides endpoints for:
- GET /api/admin/users - All registered users
- GET /api/admin/stats - Site-wide user/flight/airline/airport counts
"""

import logging

from flask import Blueprint, jsonify

from sinceonearth.services.security import require_admin
from sinceonearth.storage import storage

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


@admin_bp.route('/users', methods=['GET'])
@require_admin
def list_users():
    return jsonify([u.to_dict() for u in storage.get_all_users()])


@admin_bp.route('/stats', methods=['GET'])
@require_admin
def site_stats():
    return jsonify(storage.get_admin_stats())
