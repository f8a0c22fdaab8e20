"""
Domain exceptions and their HTTP mapping.

Services raise these instead of HTTPException so they stay usable outside a
request. ``register_error_handlers`` maps them onto the API error envelope
``{"success": false, "error": ...}``:

    ValidationError        -> 400
    PermissionDeniedError  -> 403
    NotFoundError          -> 404
    SQLAlchemyError        -> 500
"""
import logging
import re

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class NotFoundError(Exception):
    """Requested resource does not exist.

    Args:
        resource: Human-readable entity name (e.g. "Project").
        resource_id: Key that was looked up. Logged, not returned to clients.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class ValidationError(Exception):
    """Input is malformed or breaks a business rule."""

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        self.message = message
        self.details = details or []
        super().__init__(message)


class PermissionDeniedError(Exception):
    """Caller is authenticated but may not act on this resource."""


def validate_object_id(value: str, resource: str) -> str:
    """Reject keys that could never identify a stored entity."""
    if not isinstance(value, str) or not OBJECT_ID_PATTERN.match(value):
        raise ValidationError(f"Invalid {resource} ID")
    return value


def _error_response(status_code: int, error) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


def _format_validation_error(err: dict) -> str:
    msg = err.get("msg", "Invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    field = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
    return f"{field}: {msg}" if field else msg


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        if exc.details:
            return _error_response(status.HTTP_400_BAD_REQUEST, exc.details)
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        messages = [_format_validation_error(e) for e in exc.errors()]
        return _error_response(status.HTTP_400_BAD_REQUEST, messages)

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        logger.info("%s id=%s not found", exc.resource, exc.resource_id)
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(PermissionDeniedError)
    async def _permission_denied(request: Request, exc: PermissionDeniedError):
        return _error_response(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        response = _error_response(exc.status_code, exc.detail)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(request: Request, exc: SQLAlchemyError):
        logger.exception("Store error on %s %s", request.method, request.url.path)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")
