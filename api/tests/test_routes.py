"""Tests for the two-phase RouteTable and the /api route list."""

import pytest

from gateway.routes import ROUTES, NotFound, RouteMatch, RouteTable, route

EXACT_ROUTES = [
    ("GET", "agenda", "agenda"),
    ("GET", "agenda/range", "agenda-range"),
    ("GET", "search", "search"),
    ("GET", "ingestion-status", "ingestion-status"),
    ("GET", "departements", "departements"),
    ("GET", "deputies", "deputies"),
    ("GET", "groups", "groups"),
    ("GET", "scrutins", "scrutins"),
    ("GET", "circonscriptions", "circonscriptions"),
    ("GET", "circonscriptions/geojson", "circonscriptions-geojson"),
    ("POST", "push/register", "push-register"),
    ("DELETE", "push/register", "push-register"),
    ("GET", "cron/notify-scrutins", "cron-notify-scrutins"),
    ("POST", "cron/notify-scrutins", "cron-notify-scrutins"),
]


class TestExactRoutes:
    @pytest.mark.parametrize("method,path,handler_id", EXACT_ROUTES)
    def test_registered_route(self, method, path, handler_id):
        match = ROUTES.match(method, path)
        assert isinstance(match, RouteMatch)
        assert match.handler_id == handler_id
        assert dict(match.path_params) == {}

    def test_method_is_case_insensitive(self):
        assert ROUTES.match("get", "agenda").handler_id == "agenda"

    @pytest.mark.parametrize(
        "method,path",
        [
            ("POST", "agenda"),
            ("GET", "push/register"),
            ("DELETE", "cron/notify-scrutins"),
            ("GET", ""),
            ("GET", "agenda/"),
            ("GET", "unknown"),
        ],
    )
    def test_not_in_table(self, method, path):
        result = ROUTES.match(method, path)
        assert result == NotFound(method=method, path=path)


class TestDynamicRoutes:
    def test_sitting_id_bound(self):
        match = ROUTES.match("GET", "sittings/42")
        assert match.handler_id == "sittings"
        assert dict(match.path_params) == {"id": "42"}

    def test_empty_segment_never_matches(self):
        assert isinstance(ROUTES.match("GET", "sittings/"), NotFound)

    def test_extra_segment_never_matches(self):
        assert isinstance(ROUTES.match("GET", "sittings/42/extra"), NotFound)

    def test_nested_pattern(self):
        match = ROUTES.match("GET", "deputies/PA842279/votes")
        assert match.handler_id == "deputies-votes"
        assert dict(match.path_params) == {"acteurRef": "PA842279"}

    @pytest.mark.parametrize(
        "path,handler_id,params",
        [
            ("scrutins/VTANR5L17V1", "scrutins-id", {"id": "VTANR5L17V1"}),
            ("deputy/PA1", "deputy", {"acteurRef": "PA1"}),
            ("groups/ecologiste", "groups-slug", {"slug": "ecologiste"}),
            ("circonscriptions/7505", "circonscriptions-id", {"id": "7505"}),
        ],
    )
    def test_dynamic_route(self, path, handler_id, params):
        match = ROUTES.match("GET", path)
        assert match.handler_id == handler_id
        assert dict(match.path_params) == params

    def test_path_params_are_read_only(self):
        match = ROUTES.match("GET", "sittings/42")
        with pytest.raises(TypeError):
            match.path_params["id"] = "43"

    def test_wrong_method(self):
        assert isinstance(ROUTES.match("POST", "sittings/42"), NotFound)


class TestPriority:
    def test_exact_rule_beats_dynamic_rule(self):
        # "circonscriptions/:id" would also accept "geojson".
        match = ROUTES.match("GET", "circonscriptions/geojson")
        assert match.handler_id == "circonscriptions-geojson"
        assert dict(match.path_params) == {}

    def test_exact_rules_tried_first_regardless_of_table_order(self):
        table = RouteTable([route("a/:x", "GET", "dynamic"), route("a/b", "GET", "exact")])
        assert table.match("GET", "a/b").handler_id == "exact"
        assert table.match("GET", "a/c").handler_id == "dynamic"

    def test_first_dynamic_rule_wins(self):
        table = RouteTable([route("a/:x", "GET", "first"), route("a/:y", "GET", "second")])
        assert table.match("GET", "a/1").handler_id == "first"

    def test_exact_rules_listed_before_dynamic(self):
        dynamic = [r.is_dynamic for r in ROUTES.rules]
        assert dynamic == sorted(dynamic)
        assert len(ROUTES.rules) == 18


class TestRouteRule:
    def test_param_names_in_pattern_order(self):
        rule = route("x/:a/y/:b", "GET", "h")
        assert rule.param_names == ("a", "b")

    def test_unnamed_param_rejected(self):
        with pytest.raises(ValueError):
            route("x/:", "GET", "h")

    def test_duplicate_param_rejected(self):
        with pytest.raises(ValueError):
            route(":a/:a", "GET", "h")

    def test_methods_normalized(self):
        assert route("x", ["get", "post"], "h").methods == frozenset({"GET", "POST"})
