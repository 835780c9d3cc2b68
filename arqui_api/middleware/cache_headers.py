"""
Cache-Control headers middleware.

Quote figures change on every mutation, so API responses must never be
served from a browser or proxy cache.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable, List, Tuple


class CacheHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds Cache-Control headers based on endpoint patterns.

    - ``/api/...``: never cached
    - Public info endpoints: short public caching
    """

    NO_STORE_PREFIXES: Tuple[str, ...] = ("/api/",)

    # Format: (exact path, max_age_seconds)
    PUBLIC_CACHEABLE: List[Tuple[str, int]] = [
        ("/health", 30),
        ("/", 300),
    ]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        path = request.url.path

        if path.startswith(self.NO_STORE_PREFIXES):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, proxy-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
            return response

        if response.status_code >= 400 or request.method not in ("GET", "HEAD"):
            return response

        for cacheable_path, max_age in self.PUBLIC_CACHEABLE:
            if path == cacheable_path:
                response.headers["Cache-Control"] = f"public, max-age={max_age}"
                break

        return response
