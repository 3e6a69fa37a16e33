"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency, a short
request ID for correlation and the authenticated caller. The request_id is
injected into request.state so router handlers can include it in
ApiResponse; get_caller_address fills request.state.caller once the bearer
token has been verified, so anonymous and rejected requests log "-".

Log format:
    INFO [POST] /api/v1/settlements/sales → 200 (23ms) req_a1b2c3d4e5f6 caller=0xAb8483F64d9C6d1EcF9b849Ae677dD3315835cb2
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("mx.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "[%s] %s → %d (%.0fms) %s caller=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.state.request_id,
            getattr(request.state, "caller", "-"),
        )
        return response
