"""Exception-to-HTTP mapping for the API boundary.

Every error response has the same body:

    {"status": 400, "error": "...", "message": "...", "path": "/reservations/7"}

Domain exceptions are looked up in ERROR_TABLE by class (walking the MRO, so
subclasses inherit their parent's mapping). Anything not in the table is a
500 with a fixed message; the exception text is only logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reservas.domain.reservations import ReservationNotFoundError
from reservas.domain.rules import ReservationValidationError
from reservas.observability.logging import get_logger, log_fields

logger = get_logger(__name__)

VALIDATION_ERROR = "Bad Request - Validation Error"
NOT_FOUND_ERROR = "Not Found - Resource Not Found"
INTERNAL_ERROR = "Internal Server Error"
INTERNAL_ERROR_MESSAGE = "An unexpected internal error occurred."


@dataclass(frozen=True)
class ErrorMapping:
    status_code: int
    error: str
    # None means "use the exception's own message".
    message: str | None = None


ERROR_TABLE: dict[type[Exception], ErrorMapping] = {
    ReservationValidationError: ErrorMapping(400, VALIDATION_ERROR),
    ReservationNotFoundError: ErrorMapping(404, NOT_FOUND_ERROR),
}

UNEXPECTED = ErrorMapping(500, INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)


def resolve_mapping(exc: Exception) -> ErrorMapping:
    """Find the mapping for an exception, falling back to UNEXPECTED."""
    for klass in type(exc).__mro__:
        mapping = ERROR_TABLE.get(klass)
        if mapping is not None:
            return mapping
    return UNEXPECTED


def error_body(status_code: int, error: str, message: str, path: str) -> dict:
    return {
        "status": status_code,
        "error": error,
        "message": message,
        "path": path,
    }


def _respond(request: Request, status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, error, message, request.url.path),
    )


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer a business or not-found error raised by the domain layer."""
    mapping = resolve_mapping(exc)
    message = mapping.message if mapping.message is not None else str(exc)

    logger.info(
        "request rejected",
        extra=log_fields(
            path=request.url.path,
            method=request.method,
            status=mapping.status_code,
            error_type=type(exc).__name__,
        ),
    )
    return _respond(request, mapping.status_code, mapping.error, message)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into "field: reason"."""
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    # loc is e.g. ("body", "startDate") or ("path", "reservation_id")
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    reason = first.get("msg", "invalid value")
    return f"{field}: {reason}" if field else reason


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed body or path parameter: 400 with the first field error."""
    return _respond(request, 400, VALIDATION_ERROR, _describe_validation_error(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework HTTP errors (unknown route, wrong method) in the common body."""
    try:
        phrase = HTTPStatus(exc.status_code).phrase
    except ValueError:
        phrase = "Error"
    response = _respond(request, exc.status_code, phrase, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def unexpected_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and build the fixed 500 response.

    Called from the correlation middleware, so the log line and the
    response both carry the request's correlation ID.
    """
    logger.error(
        "unexpected error",
        exc_info=exc,
        extra=log_fields(path=request.url.path, method=request.method),
    )
    return _respond(request, UNEXPECTED.status_code, UNEXPECTED.error, UNEXPECTED.message)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for errors raised outside the correlation middleware."""
    return unexpected_error_response(request, exc)


def install_error_handlers(app: FastAPI) -> None:
    """Register the handlers above on a FastAPI app."""
    for exc_type in ERROR_TABLE:
        app.add_exception_handler(exc_type, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
