import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from cinelog_api.core.context import set_caller_id, set_trace_id

REQUEST_ID_HEADER = "X-Request-Id"

alog = logging.getLogger("access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a trace id per request and write one access log line."""

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        set_trace_id(trace_id)
        set_caller_id(None)
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[REQUEST_ID_HEADER] = trace_id
            return response
        finally:
            alog.info(
                "access",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query": str(request.url.query),
                    "status": status,
                    "latency_ms": int((time.perf_counter() - start) * 1000),
                    "client_ip": request.client.host
                    if request.client else None,
                },
            )
