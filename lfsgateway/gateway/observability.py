from __future__ import annotations
import contextvars
import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("lfsgateway.gateway")

REQUEST_ID_HEADER = "x-request-id"

_request_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("lfs_request_id", default=None)


def current_request_id() -> Optional[str]:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """Stamps ``record.request_id`` so service logs can be correlated with a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = current_request_id() or "-"
        return True


def endpoint_kind(path: str) -> str:
    if path.endswith("/objects/batch"):
        return "batch"
    if "/locks" in path:
        return "locks"
    return "other"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = _request_id.set(request_id)
        kind = endpoint_kind(request.url.path)

        logger.info(
            "request.start",
            extra={"request_id": request_id, "endpoint": kind, "path": request.url.path, "method": request.method},
        )
        try:
            response: Response = await call_next(request)
        except Exception:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.exception(
                "request.exception",
                extra={"request_id": request_id, "endpoint": kind, "duration_ms": duration_ms},
            )
            raise
        finally:
            _request_id.reset(token)

        duration_ms = int((time.perf_counter() - start) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request.end",
            extra={"request_id": request_id, "endpoint": kind, "status": response.status_code, "duration_ms": duration_ms},
        )
        return response


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one request-id aware stream handler to the ``lfsgateway`` logger tree."""
    root = logging.getLogger("lfsgateway")
    root.setLevel(level.upper())
    if not any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        handler = logging.StreamHandler()
        handler.addFilter(RequestIdFilter())
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root
