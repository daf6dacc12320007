from datetime import timedelta

import jwt

from sinceonearth.config import config
from sinceonearth.services.security import (
    TokenPayload,
    hash_password,
    sign_token,
    verify_password,
    verify_token,
)

PAYLOAD = TokenPayload(user_id='u-1', email='alice@example.com', username='alice')


def test_password_hash_round_trip():
    hashed = hash_password('correct horse')

    assert hashed != 'correct horse'
    assert verify_password('correct horse', hashed)
    assert not verify_password('wrong horse', hashed)


def test_verify_password_handles_missing_or_corrupt_hash():
    assert not verify_password('anything', None)
    assert not verify_password('anything', '')
    assert not verify_password('anything', 'not-a-bcrypt-hash')


def test_long_passwords_are_accepted():
    long_password = 'x' * 100

    assert verify_password(long_password, hash_password(long_password))


def test_token_carries_user_claims():
    token = sign_token(PAYLOAD)

    assert verify_token(token) == PAYLOAD

    claims = jwt.decode(token, config.auth.jwt_secret, algorithms=['HS256'])
    assert claims['userId'] == 'u-1'
    assert claims['exp'] - claims['iat'] == config.auth.token_ttl_days * 86400


def test_expired_token_is_rejected():
    token = sign_token(PAYLOAD, expires_in=timedelta(seconds=-1))

    assert verify_token(token) is None


def test_tampered_or_foreign_tokens_are_rejected():
    foreign = jwt.encode({'userId': 'u-1'}, 'another-secret-that-is-long-enough-to-sign', algorithm='HS256')

    assert verify_token(foreign) is None
    assert verify_token('garbage') is None
    assert verify_token(sign_token(PAYLOAD) + 'x') is None


def test_token_without_user_id_is_rejected():
    token = jwt.encode({'email': 'a@b.c'}, config.auth.jwt_secret, algorithm='HS256')

    assert verify_token(token) is None
