"""Single-endpoint ASGI dispatcher for /api.

Every request goes through the same steps:

1. CORS headers are attached to whatever response is eventually sent.
2. ``OPTIONS`` is answered with an empty 200 before any routing.
3. The logical path is resolved and matched against the route table.
4. The handler is loaded lazily and invoked with an :class:`ExtractedRequest`.

Handler failures become a 500 ``InternalError`` envelope unless the handler
already started its response, in which case the error is logged and dropped.
"""

from __future__ import annotations

import logging
from typing import Optional

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import Message, Receive, Scope, Send

from gateway.db import Database
from gateway.errors import internal_error_response, not_found_response
from gateway.paths import DEFAULT_MOUNT, ForwardedPath, resolve_logical_path
from gateway.registry import HandlerRegistry
from gateway.request import ExtractedRequest
from gateway.routes import ROUTES, NotFound, RouteTable

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

FORWARDED_PATH_PARAM = "path"


def forwarded_path(request: Request) -> ForwardedPath:
    values = request.query_params.getlist(FORWARDED_PATH_PARAM)
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


class Dispatcher:
    """ASGI application serving the whole route table behind one endpoint."""

    def __init__(
        self,
        routes: RouteTable = ROUTES,
        registry: Optional[HandlerRegistry] = None,
        db: Optional[Database] = None,
        mount: str = DEFAULT_MOUNT,
    ) -> None:
        self.routes = routes
        self.registry = registry or HandlerRegistry()
        self.db = db
        self.mount = mount

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        response_started = False

        async def send_with_cors(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
                headers = MutableHeaders(scope=message)
                headers.update(CORS_HEADERS)
            await send(message)

        request = Request(scope, receive)
        method = request.method.upper()

        if method == "OPTIONS":
            await Response(status_code=200)(scope, receive, send_with_cors)
            return

        # scope["path"] is already decoded and has no query string.
        logical_path = resolve_logical_path(
            forwarded_path(request), None, mount=self.mount, path=scope["path"]
        )
        match = self.routes.match(method, logical_path)

        if isinstance(match, NotFound):
            logger.info("No route for %s %s/%s", match.method, self.mount, match.path)
            response = not_found_response(match.method, match.path, self.mount)
            await response(scope, receive, send_with_cors)
            return

        extracted = ExtractedRequest(
            logical_path=logical_path,
            method=method,
            path_params=match.path_params,
            request=request,
        )
        try:
            handler = self.registry.get(match.handler_id)
            response = await handler(extracted, self.db)
            await response(scope, receive, send_with_cors)
        except Exception as exc:
            logger.exception("Handler %s failed for %s /%s", match.handler_id, method, logical_path)
            if response_started:
                return
            await internal_error_response(exc)(scope, receive, send_with_cors)
