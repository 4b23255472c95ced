"""
ProjectHub Backend — Request ID Middleware
============================================

What:  Tags every request with a correlation id and echoes it back.
How:   Reuses a client-supplied X-Request-ID or mints a short UUID, stores
       it in a ContextVar (read by loggers and exception handlers) and on
       request.state, and sets the X-Request-ID response header.
When:  Outermost application middleware, so every later layer sees the id.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# coroutine-local: concurrent requests share the thread, not the value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
