"""
ASGI middleware for tracking HTTP request metrics.
Records request count, duration, and error responses.
"""
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from imghost.utils.metrics import errors_total, http_request_duration_seconds, http_requests_total

# Paths that never show up in request metrics
EXCLUDED_PATHS = ("/metrics",)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to track HTTP metrics for Prometheus."""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            errors_total.labels(error_type="exception").inc()
            raise

        path = self._route_path(request)
        http_requests_total.labels(
            method=request.method,
            path=path,
            status=response.status_code
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            path=path
        ).observe(time.time() - start_time)

        if response.status_code >= 400:
            errors_total.labels(error_type=f"{response.status_code // 100}xx").inc()

        return response

    @staticmethod
    def _route_path(request: Request) -> str:
        """
        Route template of the matched endpoint, so cardinality stays bounded.
        Unmatched requests are grouped under a single label.
        """
        route = request.scope.get("route")
        if route is not None and getattr(route, "path", None):
            return route.path
        return "unmatched"
