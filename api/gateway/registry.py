"""Lazy handler lookup: a handler module is imported the first time its route is hit."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Mapping, Optional

from starlette.responses import Response

from gateway.request import ExtractedRequest

if TYPE_CHECKING:
    from gateway.db import Database

logger = logging.getLogger(__name__)

Handler = Callable[[ExtractedRequest, "Database"], Awaitable[Response]]

HANDLERS_PACKAGE = "gateway.handlers"


class HandlerRegistry:
    """Maps handler ids (``"agenda-range"``) to ``handle`` coroutines.

    ``agenda-range`` resolves to ``gateway.handlers.agenda_range.handle``.
    Preloaded *handlers* take precedence over module lookup.
    """

    def __init__(
        self,
        package: str = HANDLERS_PACKAGE,
        handlers: Optional[Mapping[str, Handler]] = None,
    ) -> None:
        self._package = package
        self._loaded: dict[str, Handler] = dict(handlers or {})

    def module_name(self, handler_id: str) -> str:
        return f"{self._package}.{handler_id.replace('-', '_')}"

    def get(self, handler_id: str) -> Handler:
        handler = self._loaded.get(handler_id)
        if handler is None:
            module = importlib.import_module(self.module_name(handler_id))
            handler = module.handle
            self._loaded[handler_id] = handler
            logger.debug("Loaded handler %s from %s", handler_id, module.__name__)
        return handler

    def is_loaded(self, handler_id: str) -> bool:
        return handler_id in self._loaded
