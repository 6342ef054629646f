"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency and a
short request ID, and injects the ID into request.state so handlers can
return it in ApiResponse. Server errors log at WARNING; static file hits
log at DEBUG to keep the access log about the API.

Log format:
    INFO [POST] /api/game/submit → 200 (4ms) req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("cr.request")

_API_PREFIXES = ("/api/", "/health")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        path = request.url.path
        if response.status_code >= 500:
            level = logging.WARNING
        elif path.startswith(_API_PREFIXES):
            level = logging.INFO
        else:
            level = logging.DEBUG

        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            request.state.request_id,
        )
        response.headers["X-Request-ID"] = request.state.request_id
        return response
