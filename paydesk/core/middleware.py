import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from paydesk.core.config import settings
from paydesk.core.logging import new_request_id, request_id_var

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds a request id to the logging context and echoes it back to the caller."""

    async def dispatch(self, request: Request, call_next):
        request_id = new_request_id(request.headers.get(settings.request_id_header))
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[settings.request_id_header] = request_id
        response.headers["X-Process-Time"] = f"{elapsed_ms:.1f}ms"
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={"request_id": request_id, "duration_ms": round(elapsed_ms, 1)}
        )
        return response
