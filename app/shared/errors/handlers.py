"""
Centralized error handling for FastAPI.

Every failure reaching a client goes through the ErrorNormalizer and
leaves with the same envelope: ``{success: false, message, stack?}``.

- Database errors become 400 with a generic message; the driver text
  never reaches the client.
- Validation errors become 400 with a generic message.
- Anything else keeps its own status (default 500) and message, except
  that a 500 in production always gets the generic internal message.
- Stack traces are only included in development.
"""

import logging
import traceback
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.workshop.errors import INTERNAL_ERROR_MESSAGE, WorkshopError
from app.shared.validation.result import FieldError

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_500 = 500

DATABASE_ERROR_MESSAGE = "Error en la base de datos"
INVALID_INPUT_MESSAGE = "Datos de entrada inválidos"
INVALID_QUERY_MESSAGE = "Parámetros de consulta inválidos"
INVALID_PATH_MESSAGE = "Parámetros de ruta inválidos"
ROUTE_NOT_FOUND_PREFIX = "Ruta no encontrada: "

DATABASE_KIND = "database"
VALIDATION_KIND = "validation"
GENERIC_KIND = "generic"


def classify(exc: BaseException) -> str:
    """Return the kind of failure: database, validation or generic."""
    kind = getattr(exc, "kind", None)
    if isinstance(exc, SQLAlchemyError) or kind == DATABASE_KIND:
        return DATABASE_KIND
    if isinstance(exc, (ValidationError, RequestValidationError)) or kind == VALIDATION_KIND:
        return VALIDATION_KIND
    return GENERIC_KIND


def _own_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if message is None and isinstance(exc, StarletteHTTPException):
        message = exc.detail
    if message is None:
        message = str(exc)
    return str(message) if message else INTERNAL_ERROR_MESSAGE


@dataclass(frozen=True)
class NormalizedError:
    """Status code and JSON body for one failure."""

    status_code: int
    body: dict[str, Any]

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.body)


class ErrorNormalizer:
    """Turns any exception into the uniform error envelope.

    The environment is fixed at construction so the normalizer can be
    tested without touching process-wide state.

    Args:
        environment: ``production``, ``development`` or ``test``.
    """

    def __init__(self, environment: str) -> None:
        self._environment = environment

    @property
    def is_production(self) -> bool:
        return self._environment == "production"

    @property
    def includes_stack(self) -> bool:
        return self._environment == "development"

    def normalize(self, exc: BaseException) -> NormalizedError:
        kind = classify(exc)
        if kind == DATABASE_KIND:
            status_code, message = HTTP_400, DATABASE_ERROR_MESSAGE
        elif kind == VALIDATION_KIND:
            status_code, message = HTTP_400, INVALID_INPUT_MESSAGE
        else:
            status_code = getattr(exc, "status_code", None) or HTTP_500
            message = _own_message(exc)

        if self.is_production and status_code == HTTP_500:
            message = INTERNAL_ERROR_MESSAGE

        self._log(exc, kind, status_code)

        body: dict[str, Any] = {"success": False, "message": message}
        if self.includes_stack:
            body["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        return NormalizedError(status_code=status_code, body=body)

    @staticmethod
    def _log(exc: BaseException, kind: str, status_code: int) -> None:
        if getattr(exc, "is_operational", False):
            logger.warning(
                "Operational error (%d): %s", status_code, _own_message(exc)
            )
        elif status_code >= HTTP_500:
            logger.error(
                "Unhandled %s error: %s",
                kind,
                type(exc).__name__,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
        elif kind == DATABASE_KIND:
            # Driver detail stays in the logs only
            logger.warning("Database error: %s", exc)
        else:
            logger.warning(
                "%s (%d): %s", type(exc).__name__, status_code, _own_message(exc)
            )


def route_not_found(request: Request) -> JSONResponse:
    """Build the 404 response for a path no route matches."""
    original_url = request.url.path
    if request.url.query:
        original_url = f"{original_url}?{request.url.query}"
    logger.warning("Route not found: %s %s", request.method, original_url)
    return JSONResponse(
        status_code=HTTP_404,
        content={"success": False, "message": f"{ROUTE_NOT_FOUND_PREFIX}{original_url}"},
    )


def validation_failure(
    errors: Iterable[FieldError], message: str = INVALID_INPUT_MESSAGE
) -> JSONResponse:
    """Build the 400 response listing every rejected field."""
    return JSONResponse(
        status_code=HTTP_400,
        content={
            "success": False,
            "message": message,
            "errors": [error.as_dict() for error in errors],
        },
    )


def register_error_handlers(app: FastAPI, normalizer: ErrorNormalizer) -> None:
    """Register the normalizer and the not-found responder on the app.

    Args:
        app: The FastAPI application instance.
        normalizer: The normalizer configured for the current environment.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unmatched routes get the not-found body; other HTTP errors are normalized."""
        if exc.status_code == HTTP_404:
            return route_not_found(request)
        return normalizer.normalize(exc).to_response()

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Bodies FastAPI cannot parse at all, e.g. malformed JSON."""
        return normalizer.normalize(exc).to_response()

    @app.exception_handler(ValidationError)
    async def handle_model_validation(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Pydantic errors raised outside the request validators."""
        return normalizer.normalize(exc).to_response()

    @app.exception_handler(SQLAlchemyError)
    async def handle_database(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Database driver and ORM errors. Never exposes driver text."""
        return normalizer.normalize(exc).to_response()

    @app.exception_handler(WorkshopError)
    async def handle_workshop(_request: Request, exc: WorkshopError) -> JSONResponse:
        """Operational errors raised by the use cases."""
        return normalizer.normalize(exc).to_response()

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors."""
        return normalizer.normalize(exc).to_response()
