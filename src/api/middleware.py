"""Request context middleware for correlation ID tracking."""

import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.logging import client_id_ctx, request_id_ctx

RequestResponseEndpoint = Callable[[Request], Awaitable[Response]]


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Set per-request logging context.

    Reuses the caller's X-Request-ID header (or generates one), echoes it on
    the response, and resets the client id so it never leaks between
    requests.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_token = request_id_ctx.set(request_id)
        client_id_token = client_id_ctx.set(None)

        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(request_id_token)
            client_id_ctx.reset(client_id_token)

        response.headers["X-Request-ID"] = request_id
        return response
