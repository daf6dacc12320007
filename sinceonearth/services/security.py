"""
Password hashing and bearer-token authentication.

- Passwords: bcrypt, cost from config
- Tokens: HS256 JWTs carrying userId/email/username, 7-day default expiry
- Flask decorators `require_auth` / `require_admin` guard API routes and
  expose the caller's id as `g.user_id`
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Optional

import bcrypt
import jwt
from flask import g, jsonify, request

from sinceonearth.config import config
from sinceonearth.storage import storage

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of input
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class TokenPayload:
    """Claims carried by an access token."""
    user_id: str
    email: str
    username: str


def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Return a bcrypt hash of `password`."""
    salt = bcrypt.gensalt(rounds=config.auth.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode('utf-8')


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check `password` against a stored hash. False for missing/corrupt hashes."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode('utf-8'))
    except ValueError:
        logger.warning('Stored password hash is not a valid bcrypt hash')
        return False


def sign_token(payload: TokenPayload, expires_in: Optional[timedelta] = None) -> str:
    """Issue a signed access token."""
    now = datetime.now(timezone.utc)
    expires_in = expires_in if expires_in is not None else timedelta(days=config.auth.token_ttl_days)
    claims = {
        'userId': payload.user_id,
        'email': payload.email,
        'username': payload.username,
        'iat': now,
        'exp': now + expires_in,
    }
    return jwt.encode(claims, config.auth.jwt_secret, algorithm=config.auth.jwt_algorithm)


def verify_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate a token. None if expired, tampered or malformed."""
    try:
        claims = jwt.decode(
            token,
            config.auth.jwt_secret,
            algorithms=[config.auth.jwt_algorithm],
        )
    except jwt.InvalidTokenError as e:
        logger.debug(f'Rejected token: {e}')
        return None

    user_id = claims.get('userId')
    if not user_id:
        return None
    return TokenPayload(
        user_id=user_id,
        email=claims.get('email', ''),
        username=claims.get('username', ''),
    )


def _bearer_payload() -> Optional[TokenPayload]:
    """Token payload from the Authorization header, if valid."""
    header = request.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None
    return verify_token(header[len('Bearer '):].strip())


def _unauthorized():
    return jsonify({'error': 'Unauthorized'}), 401


def require_auth(view):
    """Reject requests without a valid bearer token (401)."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        payload = _bearer_payload()
        if payload is None:
            return _unauthorized()

        g.user_id = payload.user_id
        g.user_email = payload.email
        g.username = payload.username
        return view(*args, **kwargs)

    return wrapper


def require_admin(view):
    """Like require_auth, plus the user must exist and be an admin (403)."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        payload = _bearer_payload()
        if payload is None:
            return _unauthorized()

        user = storage.get_user(payload.user_id)
        if user is None or not user.is_admin:
            logger.warning(f'Admin access denied for user {payload.username}')
            return jsonify({'error': 'Forbidden - Admin access required'}), 403

        g.user_id = payload.user_id
        g.user_email = payload.email
        g.username = payload.username
        return view(*args, **kwargs)

    return wrapper
