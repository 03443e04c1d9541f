"""Error envelopes for the /api endpoint.

Every error body is JSON: ``{"error": <code>, "message": <text>}`` plus
``status`` for errors raised by handlers themselves.
"""

from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from typing import Awaitable, Callable, Iterator

import psycopg
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Expected failure raised by a handler, rendered with its own status."""

    def __init__(self, status: int, message: str, error: str = "ApiError") -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.error = error


def error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(
        {"error": exc.error, "message": exc.message, "status": exc.status},
        status_code=exc.status,
    )


def not_found_response(method: str, path: str, mount: str = "/api") -> JSONResponse:
    return JSONResponse(
        {"error": "NotFound", "message": f"No route for {method} {mount}/{path}"},
        status_code=404,
    )


def internal_error_response(exc: BaseException) -> JSONResponse:
    return JSONResponse(
        {"error": "InternalError", "message": str(exc) or "Unknown error"},
        status_code=500,
    )


def handles_api_errors(
    func: Callable[..., Awaitable[Response]],
) -> Callable[..., Awaitable[Response]]:
    """Turn :class:`ApiError` raised by a handler into its JSON envelope.

    Anything else propagates to the dispatcher.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Response:
        try:
            return await func(*args, **kwargs)
        except ApiError as exc:
            if exc.status >= 500:
                logger.error("API error %s: %s", exc.error, exc.message)
            return error_response(exc)

    return wrapper


@contextmanager
def database_errors(message: str) -> Iterator[None]:
    """Re-raise driver errors as a 500 ``DatabaseError`` carrying *message*."""
    try:
        yield
    except psycopg.Error as exc:
        logger.error("%s: %s", message, exc)
        raise ApiError(500, message, "DatabaseError") from exc


def bad_request(message: str) -> ApiError:
    return ApiError(400, message, "BadRequest")


def not_found(message: str) -> ApiError:
    return ApiError(404, message, "NotFound")
