"""Exception handlers producing the ``{ok: false, error, details?}`` envelope."""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.errors import ClientRegistryError
from src.core.logging import get_logger

logger = get_logger(__name__)


def error_response(
    status_code: int, message: str, details: Any | None = None
) -> JSONResponse:
    """Build an error envelope; ``details`` is omitted when empty."""
    content: dict[str, Any] = {"ok": False, "error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def client_registry_error_handler(
    request: Request, exc: ClientRegistryError
) -> JSONResponse:
    """Map service errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(
            "request_failed",
            path=request.url.path,
            method=request.method,
            error=exc.message,
        )
    else:
        logger.info(
            "request_rejected",
            path=request.url.path,
            method=request.method,
            status_code=exc.status_code,
            error=exc.message,
        )
    return error_response(exc.status_code, exc.message, exc.details)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report framework-level validation errors with the same envelope."""
    errors = [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", [])),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()[:5]
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation error", errors)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap routing errors (404 unknown path, 405 method) in the envelope."""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all envelope-producing handlers to the app."""
    app.add_exception_handler(ClientRegistryError, client_registry_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
