import uuid
import time
from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from core.logging.logger import _current_request

TRACE_HEADER = "X-Trace-ID"
MAX_TRACE_ID_LENGTH = 64


def resolve_trace_id(request: Request) -> str:
    """Trace id from the incoming header, or a new one when absent or unusable."""
    incoming = request.headers.get(TRACE_HEADER, "").strip()
    if incoming and len(incoming) <= MAX_TRACE_ID_LENGTH and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


def _level_for(status_code: int) -> str:
    if status_code >= 500:
        return "ERROR"
    if status_code >= 400:
        return "WARNING"
    return "INFO"


class LoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request start and end, all tagged with the request's trace id."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = resolve_trace_id(request)
        request.state.trace_id = trace_id
        token = _current_request.set(request)
        route = f"{request.method} {request.url.path}"
        client = request.client.host if request.client else "unknown"

        with logger.contextualize(trace_id=trace_id):
            logger.info(f"--> {route} | Client: {client}")
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = (time.perf_counter() - started) * 1000
                logger.error(f"<-- {route} | Failed: {e!r} | {elapsed:.2f}ms")
                raise
            finally:
                _current_request.reset(token)

            elapsed = (time.perf_counter() - started) * 1000
            logger.log(_level_for(response.status_code), f"<-- {route} | {response.status_code} | {elapsed:.2f}ms")
            response.headers[TRACE_HEADER] = trace_id
            return response
