"""
Request tracking middleware: correlation id and timing for every request.
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestTrackingMiddleware(BaseHTTPMiddleware):
    """
    Adds a request id (reused from X-Request-ID when the client sends one)
    and logs method, path, status and duration.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Request failed: %s %s (%.2f ms): %s",
                request.method, request.url.path, process_time, e,
                extra={"request_id": request_id},
            )
            raise

        process_time = (time.perf_counter() - start_time) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.2f}"

        logger.info(
            "%s %s -> %d (%.2f ms)",
            request.method, request.url.path, response.status_code, process_time,
            extra={"request_id": request_id},
        )
        return response
