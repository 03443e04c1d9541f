"""Tests for resolve_logical_path across the rewrite forms of the /api endpoint."""

import pytest

from gateway.paths import resolve_logical_path, strip_mount


class TestForwardedPath:
    def test_query_param_used_verbatim(self):
        assert resolve_logical_path("agenda", "/api/route?path=agenda") == "agenda"

    def test_first_element_of_list(self):
        assert resolve_logical_path(["deputies", "groups"], "/api/route") == "deputies"

    def test_forwarded_path_wins_over_url(self):
        assert resolve_logical_path("groups/rn", "/api/agenda") == "groups/rn"

    def test_empty_forwarded_path_falls_back_to_url(self):
        assert resolve_logical_path("", "/api/agenda") == "agenda"

    def test_list_of_non_strings_falls_back_to_url(self):
        assert resolve_logical_path([1], "/api/agenda") == "agenda"


class TestRawUrl:
    @pytest.mark.parametrize(
        "url",
        ["/api/agenda", "/api/route/agenda", "/api/agenda?date=2024-01-15"],
    )
    def test_rewrite_forms_normalize_identically(self, url):
        assert resolve_logical_path(None, url) == "agenda"

    def test_absolute_url(self):
        url = "https://agora.example.fr/api/sittings/42?x=1"
        assert resolve_logical_path(None, url) == "sittings/42"

    def test_nested_path_kept(self):
        assert resolve_logical_path(None, "/api/deputies/PA1/votes") == "deputies/PA1/votes"

    @pytest.mark.parametrize("url", ["/api", "/api/", "/api/route", "/api?x=1"])
    def test_root(self, url):
        assert resolve_logical_path(None, url) == ""

    def test_path_outside_mount_loses_leading_slash(self):
        assert resolve_logical_path(None, "/agenda") == "agenda"

    def test_missing_url(self):
        assert resolve_logical_path(None, None) == ""

    def test_custom_mount(self):
        assert resolve_logical_path(None, "/v1/route/agenda", mount="/v1") == "agenda"


class TestDecodedPath:
    def test_question_mark_inside_segment_kept(self):
        """A decoded request path is not split on "?"."""
        assert resolve_logical_path(None, None, path="/api/groups/a?b") == "groups/a?b"

    def test_path_wins_over_url(self):
        assert resolve_logical_path(None, "/api/agenda", path="/api/route/sittings") == "sittings"

    def test_forwarded_path_still_wins(self):
        assert resolve_logical_path("agenda", None, path="/api/route") == "agenda"

    @pytest.mark.parametrize("path", ["/api", "/api/", "/api/route"])
    def test_root(self, path):
        assert resolve_logical_path(None, None, path=path) == ""


class TestStripMount:
    def test_endpoint_segment_removed(self):
        assert strip_mount("/api/route/deputies/PA1") == "deputies/PA1"

    def test_custom_mount(self):
        assert strip_mount("/v1/agenda", mount="/v1") == "agenda"
