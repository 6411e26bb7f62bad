"""
Request ID middleware for tracking requests across the application.

Every log line written while a request is served carries its id, so a
failed checkout can be traced from the router down to the payment record.
"""

import uuid
from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Read by core.logging_config.RequestIDFilter
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.

    How it works:
    1. Use the client-provided X-Request-ID header, or generate a UUID
    2. Store it in request.state and in the logging context variable
    3. Echo it back in the X-Request-ID response header
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)

        try:
            response: Response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response


def get_request_id(request: Request) -> str:
    """
    Return the request id stored by RequestIDMiddleware,
    or "no-request-id" if the middleware did not run.
    """
    return getattr(request.state, "request_id", "no-request-id")
