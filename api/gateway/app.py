"""FastAPI application factory.

The dispatcher is mounted at the root so that every rewrite form of the
endpoint (``/api/agenda``, ``/api/route/agenda``, ``/api/route?path=agenda``)
reaches it with the original URL intact.

Run with ``uvicorn gateway.app:create_app --factory``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from gateway.config import Settings
from gateway.db import Database
from gateway.dispatcher import Dispatcher
from gateway.registry import HandlerRegistry
from gateway.routes import ROUTES

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[HandlerRegistry] = None,
    db: Optional[Database] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    _configure_logging(settings.log_level)
    db = db or Database(settings.pg_dsn)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.open()
        logger.info("Serving %d routes under %s", len(ROUTES.rules), settings.mount)
        yield
        await db.close()

    app = FastAPI(
        title="Agora API",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.db = db
    app.mount("/", Dispatcher(ROUTES, registry or HandlerRegistry(), db, settings.mount))
    return app
