"""Immutable per-request value handed to route handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from starlette.datastructures import Headers, QueryParams
from starlette.requests import Request


@dataclass(frozen=True)
class ExtractedRequest:
    """The inbound request plus what the dispatcher extracted from it.

    Created once per request and discarded when the handler returns. Path
    parameters live here instead of being patched onto the raw request.
    """

    logical_path: str
    method: str
    path_params: Mapping[str, str]
    request: Request

    @property
    def query_params(self) -> QueryParams:
        return self.request.query_params

    @property
    def headers(self) -> Headers:
        return self.request.headers

    def query(self, name: str) -> Optional[str]:
        """First value of query parameter *name*, stripped; ``None`` if absent or blank."""
        value = self.request.query_params.get(name)
        if value is None:
            return None
        return value.strip() or None

    async def json(self) -> Any:
        return await self.request.json()
