"""Shared fixtures for gateway tests: request factory and a stubbed Database."""

from __future__ import annotations

import json
from types import MappingProxyType
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from gateway.db import Database
from gateway.request import ExtractedRequest


def _build_request(method="GET", query="", path_params=None, body=None, logical_path="x"):
    raw = b"" if body is None else json.dumps(body).encode()

    async def receive():
        return {"type": "http.request", "body": raw, "more_body": False}

    scope = {
        "type": "http",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "root_path": "",
        "path": f"/api/{logical_path}",
        "raw_path": f"/api/{logical_path}".encode(),
        "query_string": query.encode(),
        "headers": [(b"content-type", b"application/json")],
    }
    return ExtractedRequest(
        logical_path=logical_path,
        method=method,
        path_params=MappingProxyType(dict(path_params or {})),
        request=Request(scope, receive),
    )


@pytest.fixture
def make_request():
    """Factory for ExtractedRequest values without going through the dispatcher."""
    return _build_request


@pytest.fixture
def db():
    """Database double; tests set ``fetch_all`` / ``fetch_one`` return values."""
    db = MagicMock(spec=Database)
    db.fetch_all = AsyncMock(return_value=[])
    db.fetch_one = AsyncMock(return_value=None)
    db.execute = AsyncMock(return_value=1)
    return db
