from datetime import datetime, timedelta, timezone

import jwt
import pytest

from student_auth.auth.jwt_handler import TokenClaims, create_access_token, decode_access_token
from student_auth.core import config
from student_auth.core.errors import TokenInvalid

CLAIMS = TokenClaims(id=7, email='student@iset.tn', role='student')


def test_decode_recovers_issued_claims() -> None:
    token = create_access_token(CLAIMS)

    assert decode_access_token(token) == CLAIMS


def test_token_expires_one_week_after_issue() -> None:
    issued_at = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)
    token = create_access_token(CLAIMS, issued_at=issued_at)

    payload = jwt.decode(
        token,
        config.JWT_SECRET_KEY,
        algorithms=[config.JWT_ALGORITHM],
        options={'verify_exp': False},
    )

    assert payload['exp'] - payload['iat'] == 168 * 3600
    assert payload['iat'] == int(issued_at.timestamp())


def test_decode_rejects_token_signed_with_other_secret() -> None:
    token = create_access_token(CLAIMS, secret='another-secret')

    with pytest.raises(TokenInvalid):
        decode_access_token(token)


def test_decode_rejects_expired_token() -> None:
    issued_at = datetime.now(timezone.utc) - timedelta(hours=169)
    token = create_access_token(CLAIMS, issued_at=issued_at)

    with pytest.raises(TokenInvalid):
        decode_access_token(token)


def test_decode_accepts_token_near_end_of_validity_window() -> None:
    issued_at = datetime.now(timezone.utc) - timedelta(hours=167)
    token = create_access_token(CLAIMS, issued_at=issued_at)

    assert decode_access_token(token) == CLAIMS


def test_decode_rejects_tampered_payload() -> None:
    token = create_access_token(CLAIMS)
    header, _payload, signature = token.split('.')
    forged = create_access_token(TokenClaims(id=1, email='admin@iset.tn', role='admin'), secret='forger')
    forged_payload = forged.split('.')[1]

    with pytest.raises(TokenInvalid):
        decode_access_token(f'{header}.{forged_payload}.{signature}')


@pytest.mark.parametrize('token', ['', 'garbage', 'a.b.c'])
def test_decode_rejects_malformed_token(token: str) -> None:
    with pytest.raises(TokenInvalid):
        decode_access_token(token)


@pytest.mark.parametrize(
    'payload',
    [
        {'email': 'student@iset.tn', 'role': 'student'},
        {'id': '7', 'email': 'student@iset.tn', 'role': 'student'},
        {'id': 7, 'role': 'student'},
        {'id': 7, 'email': 'student@iset.tn', 'role': 'superuser'},
    ],
)
def test_decode_rejects_incomplete_claims(payload: dict) -> None:
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {**payload, 'iat': now, 'exp': now + timedelta(hours=1)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(TokenInvalid):
        decode_access_token(token)


def test_decode_rejects_token_without_expiry() -> None:
    token = jwt.encode(
        {'id': 7, 'email': 'student@iset.tn', 'role': 'student', 'iat': datetime.now(timezone.utc)},
        config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
    )

    with pytest.raises(TokenInvalid):
        decode_access_token(token)
