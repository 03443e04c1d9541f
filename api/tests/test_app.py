"""End-to-end tests of the FastAPI app: real route table, real handler modules, no database."""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from gateway.app import create_app
from gateway.config import Settings
from gateway.handlers import agenda_range
from gateway.registry import HandlerRegistry
from gateway.routes import ROUTES


@pytest.fixture
def client():
    app = create_app(Settings(pg_dsn=""))
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


class TestApp:
    def test_options_anywhere(self, client):
        response = client.options("/api/deputies/PA1/votes")
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_unknown_route(self, client):
        response = client.get("/api/bills")
        assert response.status_code == 404
        assert response.json()["message"] == "No route for GET /api/bills"

    def test_validation_runs_before_database(self, client):
        response = client.get("/api/agenda")
        assert response.status_code == 400
        assert response.json()["error"] == "BadRequest"

    def test_unconfigured_database(self, client):
        response = client.get("/api/agenda?date=2024-01-15")

        assert response.status_code == 500
        assert response.json() == {
            "error": "DatabaseError",
            "message": "Failed to fetch sittings",
            "status": 500,
        }
        assert response.headers["Access-Control-Allow-Methods"] == "GET, POST, DELETE, OPTIONS"

    def test_rewritten_url(self, client):
        response = client.get("/api/route?path=circonscriptions/geojson")
        assert response.json()["error"] == "DatabaseError"


class TestRegistry:
    def test_handler_id_maps_to_module(self):
        registry = HandlerRegistry()
        assert registry.module_name("agenda-range") == "gateway.handlers.agenda_range"

    def test_loaded_on_first_use(self):
        registry = HandlerRegistry()
        assert not registry.is_loaded("agenda-range")

        handler = registry.get("agenda-range")

        assert handler is agenda_range.handle
        assert registry.is_loaded("agenda-range")
        assert registry.get("agenda-range") is handler

    def test_preloaded_handlers_take_precedence(self):
        async def fake(request, db):
            return None

        registry = HandlerRegistry(handlers={"agenda": fake})
        assert registry.get("agenda") is fake

    def test_every_route_has_a_handler(self):
        registry = HandlerRegistry()
        for rule in ROUTES.rules:
            assert callable(registry.get(rule.handler_id)), rule.handler_id


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings == Settings(pg_dsn="", mount="/api", log_level="INFO")

    def test_from_env(self):
        settings = Settings.from_env(
            {"AGORA_PG_URI": "postgresql://db/agora", "AGORA_API_MOUNT": "/v1/", "LOG_LEVEL": "debug"}
        )
        assert settings.pg_dsn == "postgresql://db/agora"
        assert settings.mount == "/v1"
        assert settings.log_level == "DEBUG"
