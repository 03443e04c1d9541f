"""HTTP gateway: one /api endpoint dispatching to lazily loaded handlers."""

from gateway.errors import ApiError
from gateway.paths import resolve_logical_path
from gateway.request import ExtractedRequest
from gateway.routes import ROUTES, NotFound, RouteMatch, RouteRule, RouteTable

__all__ = [
    "ApiError",
    "ExtractedRequest",
    "NotFound",
    "ROUTES",
    "RouteMatch",
    "RouteRule",
    "RouteTable",
    "resolve_logical_path",
]
