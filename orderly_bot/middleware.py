"""
FastAPI middleware for Orderly Bot.
"""

import logging
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.

    The ID is taken from the incoming X-Request-ID header when present,
    otherwise generated. It is available in request.state.request_id and
    returned in the X-Request-ID response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        logger.debug("%s %s [%s]", request.method, request.url.path, request_id)
        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
