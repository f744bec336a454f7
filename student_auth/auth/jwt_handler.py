from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from student_auth.core import config
from student_auth.core.errors import TokenInvalid
from student_auth.models.user import ROLE_VALUES


@dataclass(frozen=True)
class TokenClaims:
    id: int
    email: str
    role: str


def create_access_token(
    claims: TokenClaims,
    secret: str | None = None,
    issued_at: datetime | None = None,
) -> str:
    issued_at = issued_at or datetime.now(timezone.utc)
    expire = issued_at + timedelta(hours=config.JWT_EXPIRES_HOURS)
    payload = {
        "id": claims.id,
        "email": claims.email,
        "role": claims.role,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(payload, secret or config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str, secret: str | None = None) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            secret or config.JWT_SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise TokenInvalid() from exc

    user_id = payload.get("id")
    email = payload.get("email")
    role = payload.get("role")
    if (
        not isinstance(user_id, int)
        or isinstance(user_id, bool)
        or not isinstance(email, str)
        or role not in ROLE_VALUES
    ):
        raise TokenInvalid()
    return TokenClaims(id=user_id, email=email, role=role)
