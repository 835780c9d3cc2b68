"""
Middleware modules for the quoting API.

Provides request processing middleware for:
- Correlation ID tracking for log tracing
- Cache-Control headers so quote figures are never served stale
"""

from .correlation import CorrelationIdMiddleware, CorrelationLogFilter, correlation_id_ctx, request_id_ctx
from .cache_headers import CacheHeadersMiddleware

__all__ = [
    "CorrelationIdMiddleware",
    "CorrelationLogFilter",
    "correlation_id_ctx",
    "request_id_ctx",
    "CacheHeadersMiddleware",
]
