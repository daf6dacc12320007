"""
Authentication API endpoints.

Provides endpoints for:
- POST /api/auth/register - Create an account, returns user + token
- POST /api/auth/login - Exchange credentials for a token
- POST /api/auth/logout - Client-side logout acknowledgement
- GET /api/auth/user - Current user
"""

import logging

from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError

from sinceonearth.api.schemas import LoginRequest, RegisterRequest, validation_details
from sinceonearth.services.security import (
    TokenPayload,
    hash_password,
    require_auth,
    sign_token,
    verify_password,
)
from sinceonearth.storage import storage

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _with_token(user) -> dict:
    """User dict plus a freshly signed token."""
    token = sign_token(TokenPayload(
        user_id=user.id,
        email=user.email,
        username=user.username,
    ))
    return {**user.to_dict(), 'token': token}


@auth_bp.route('/register', methods=['POST'])
def register():
    """Register a new user."""
    try:
        payload = RegisterRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': 'Invalid registration data', 'details': validation_details(e)}), 400

    if storage.user_exists(payload.username, payload.email):
        return jsonify({'error': 'Username or email already exists'}), 400

    user = storage.create_user(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
        name=payload.name,
        country=payload.country,
    )
    logger.info(f'Registered user {user.username}')
    return jsonify(_with_token(user)), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Log in with username or email."""
    try:
        payload = LoginRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'error': 'Invalid login data', 'details': validation_details(e)}), 400

    user = storage.get_user_by_username_or_email(payload.username_or_email)
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info(f'Failed login for {payload.username_or_email}')
        return jsonify({'error': 'Invalid credentials'}), 401

    return jsonify(_with_token(user))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Tokens are stateless; the client just discards its copy."""
    return jsonify({'success': True})


@auth_bp.route('/user', methods=['GET'])
@require_auth
def current_user():
    user = storage.get_user(g.user_id)
    if user is None:
        return jsonify({'error': 'Unauthorized'}), 401
    return jsonify(user.to_dict())
