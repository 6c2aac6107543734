import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from paperdesk.core.logging import LOGGER_NAME, request_id_ctx_var, latency_bucket_ms


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request_id for the duration of a request and log its outcome.

    The id is taken from the incoming header when the front-end supplies one,
    echoed back on the response, and visible to every log line emitted while
    the request is handled.
    """

    def __init__(self, app, header_name: str = "x-request-id"):
        super().__init__(app)
        self.header_name = header_name
        self.logger = logging.getLogger(LOGGER_NAME)

    async def dispatch(self, request, call_next):
        rid = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = rid
        token = request_id_ctx_var.set(rid)
        start = time.perf_counter()
        fields = {"request_id": rid, "path": request.url.path, "method": request.method}

        try:
            response = await call_next(request)
        except Exception:
            fields["latency_bucket"] = latency_bucket_ms((time.perf_counter() - start) * 1000)
            self.logger.error("request.failed", extra=fields)
            raise
        finally:
            request_id_ctx_var.reset(token)

        response.headers[self.header_name] = rid
        fields["status"] = response.status_code
        fields["latency_bucket"] = latency_bucket_ms((time.perf_counter() - start) * 1000)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(level, "request.complete", extra=fields)
        return response
