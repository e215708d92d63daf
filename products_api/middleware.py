"""
HTTP middleware: cross-origin guard and request logging
"""
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from products_api.exceptions import CorsOriginError
from products_api.utils.logger import get_logger

logger = get_logger(__name__)


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """
    Reject requests coming from any origin other than the allowed one.

    Requests without an Origin header, and same-origin requests such as the
    ones issued from the interactive docs, are let through.
    """

    def __init__(self, app, allowed_origin: str):
        super().__init__(app)
        self.allowed_origin = allowed_origin.rstrip("/")

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is None:
            return await call_next(request)

        origin = origin.rstrip("/")
        own_origin = f"{request.url.scheme}://{request.url.netloc}"
        if origin in (self.allowed_origin, own_origin):
            return await call_next(request)

        exc = CorsOriginError(origin)
        logger.warning(f"Rejected {request.method} {request.url.path} from origin {exc.origin}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request"""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {duration_ms:.3f} ms")
        return response
