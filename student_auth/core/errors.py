import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from student_auth.core.middleware import SECURITY_HEADERS

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base of every failure the service reports to a client."""

    status_code = 500
    message = "Erreur serveur"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequest(ServiceError):
    status_code = 400
    message = "Requête invalide"


class InvalidCredentials(ServiceError):
    status_code = 401
    message = "Identifiants incorrects"


class RoleMismatch(ServiceError):
    status_code = 403
    message = "Accès refusé pour ce rôle"


class Forbidden(ServiceError):
    status_code = 403
    message = "Accès non autorisé"


class NotFound(ServiceError):
    status_code = 404
    message = "Ressource non trouvée"


class DuplicateEmail(ServiceError):
    status_code = 400
    message = "Cet email est déjà utilisé"


class TokenInvalid(ServiceError):
    status_code = 401
    message = "Token invalide ou expiré"
    headers = {"WWW-Authenticate": "Bearer"}


class StoreUnavailable(ServiceError):
    status_code = 500
    message = "Erreur serveur"


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def service_error_handler(request: Request, exc: ServiceError):
    return error_response(exc.status_code, exc.message, exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(400, InvalidRequest.message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception | request_id=%s",
        getattr(request.state, "request_id", "unknown"),
        exc_info=exc,
    )
    # Raised past the http middlewares, so their headers are added here.
    headers = dict(SECURITY_HEADERS)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers["x-request-id"] = request_id
    return error_response(500, ServiceError.message, headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
