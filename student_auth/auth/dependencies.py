from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from student_auth.auth import jwt_handler
from student_auth.core.errors import TokenInvalid

security = HTTPBearer(auto_error=False)


def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> jwt_handler.TokenClaims:
    if credentials is None or not credentials.credentials:
        raise TokenInvalid("Token manquant")
    return jwt_handler.decode_access_token(credentials.credentials)
