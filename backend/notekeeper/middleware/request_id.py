"""
NoteKeeper Backend: Request ID Middleware
=========================================

What:  Tags every request with a correlation ID that appears in the access
       log, in error bodies ({"request_id": ...}) and in the X-Request-ID
       response header.

ID policy:
    - A client-supplied X-Request-ID is reused only when it is 1-64 chars of
      [A-Za-z0-9._-]; anything else would end up verbatim in log lines.
    - Otherwise a 12-char hex ID is generated.

The ID lives only in a ContextVar. Readers call `current_request_id()`;
the value is reset when the response leaves the middleware.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def current_request_id() -> str:
    """ID of the request being handled, or "" outside a request."""
    return request_id_var.get()


def choose_request_id(client_value: Optional[str]) -> str:
    """Reuse a well-formed client ID, else mint a new one."""
    if client_value and _CLIENT_ID_PATTERN.fullmatch(client_value):
        return client_value
    return uuid.uuid4().hex[:12]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds the request ID for the duration of one request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = choose_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
