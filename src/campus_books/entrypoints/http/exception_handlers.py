"""Translation of domain and request errors into JSON error bodies.

Every error response has the same shape, whatever raised it:

    {"error": "...", "detail": "...", "code": "...", "errors": [{field, message, code}, ...]}

``error`` and ``detail`` carry the same message; browser clients read
``error``. ``errors`` is only present when individual fields failed.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from campus_books.domain.errors import DomainError

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred"
INVALID_REQUEST = "Invalid request parameters"

# Keyed by DomainError.error_code; anything unlisted is a client error
STATUS_CODE_MAP: dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_body(
    detail: str, code: str, errors: list[dict[str, str]] | None = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"error": detail, "detail": detail, "code": code}
    if errors:
        body["errors"] = errors
    return body


def _request_context(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Respond to a DomainError with the status its error code maps to.

    4xx errors are logged at INFO. 5xx errors are logged at ERROR with the
    traceback, but only the error's own (safe) message reaches the caller.
    """
    status_code = STATUS_CODE_MAP.get(exc.error_code, status.HTTP_400_BAD_REQUEST)
    context = {
        "error_code": exc.error_code,
        "error_message": exc.message,
        **_request_context(request),
    }

    if status_code >= 500:
        logger.error("Server error while handling request", exc_info=exc, extra=context)
    else:
        logger.info("Request rejected", extra=context)

    error_dict = exc.to_dict()
    body = _error_body(
        error_dict.get("message", str(exc)),
        error_dict.get("code", exc.error_code),
        error_dict.get("errors"),
    )
    return JSONResponse(status_code=status_code, content=body)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report FastAPI/pydantic parsing failures as 400 field errors.

    Covers malformed query strings (``page=abc``, ``limit=500``) and bad
    JSON bodies such as a login without a password. The ``query``/``body``
    location prefix is dropped so the field name matches the parameter.
    """
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"] if loc not in ("body", "query")),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]

    logger.info(
        "Request parameters failed validation",
        extra={"errors": errors, **_request_context(request)},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(INVALID_REQUEST, "VALIDATION_ERROR", errors),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, answer with a generic 500."""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, **_request_context(request)},
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(GENERIC_SERVER_ERROR, "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``; called once from build_app()."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)
