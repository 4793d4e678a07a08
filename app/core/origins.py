"""
Origin allow-list enforcement.

Starlette's CORSMiddleware only decides which response headers to add; a
simple POST from a foreign origin would still reach the route. This
middleware sits in front of it and refuses such requests outright.
Requests without an Origin header (curl, server-to-server) pass through.
"""

import logging
from typing import Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

CORS_REJECTION_MESSAGE = (
    "The CORS policy for this site does not allow access from the specified Origin."
)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is not None and origin not in self.allowed_origins:
            logger.warning(f"Rejected {request.method} {request.url.path} from origin {origin}")
            return JSONResponse(status_code=403, content={"error": CORS_REJECTION_MESSAGE})
        return await call_next(request)
