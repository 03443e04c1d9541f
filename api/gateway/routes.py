"""Declarative route table for the /api dispatcher.

Matching is two-phase: every exact rule is tried (in table order) before any
dynamic rule, and the first match wins. Rule authors keep dynamic patterns
disjoint; nothing here checks for overlaps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

PARAM_PREFIX = ":"


@dataclass(frozen=True)
class RouteRule:
    """One route: ``pattern`` is a literal path or contains ``:name`` segments."""

    pattern: str
    methods: frozenset[str]
    handler_id: str
    segments: tuple[str, ...] = field(init=False, repr=False)
    param_names: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        segments = tuple(self.pattern.split("/")) if self.pattern else ()
        names = tuple(s[len(PARAM_PREFIX) :] for s in segments if s.startswith(PARAM_PREFIX))
        if any(not name for name in names):
            raise ValueError(f"Unnamed path parameter in {self.pattern!r}")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate path parameter in {self.pattern!r}")
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "param_names", names)

    @property
    def is_dynamic(self) -> bool:
        return bool(self.param_names)

    def match_exact(self, method: str, path: str) -> bool:
        return method in self.methods and path == self.pattern

    def match_segments(self, method: str, segments: tuple[str, ...]) -> Optional[dict[str, str]]:
        """Bind ``:name`` segments to *segments*; ``None`` if the rule does not apply."""
        if method not in self.methods or len(segments) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for expected, actual in zip(self.segments, segments):
            if expected.startswith(PARAM_PREFIX):
                if not actual:
                    return None
                params[expected[len(PARAM_PREFIX) :]] = actual
            elif expected != actual:
                return None
        return params


def route(pattern: str, methods: Union[str, Iterable[str]], handler_id: str) -> RouteRule:
    if isinstance(methods, str):
        methods = (methods,)
    return RouteRule(pattern, frozenset(m.upper() for m in methods), handler_id)


@dataclass(frozen=True)
class RouteMatch:
    handler_id: str
    path_params: Mapping[str, str]


@dataclass(frozen=True)
class NotFound:
    """No rule matched; kept for the 404 message."""

    method: str
    path: str


class RouteTable:
    """Ordered, immutable set of :class:`RouteRule`."""

    def __init__(self, rules: Iterable[RouteRule]) -> None:
        rules = tuple(rules)
        self._exact = tuple(r for r in rules if not r.is_dynamic)
        self._dynamic = tuple(r for r in rules if r.is_dynamic)

    @property
    def rules(self) -> tuple[RouteRule, ...]:
        return self._exact + self._dynamic

    def match(self, method: str, path: str) -> Union[RouteMatch, NotFound]:
        method = method.upper()

        for rule in self._exact:
            if rule.match_exact(method, path):
                return RouteMatch(rule.handler_id, MappingProxyType({}))

        segments = tuple(path.split("/")) if path else ()
        for rule in self._dynamic:
            params = rule.match_segments(method, segments)
            if params is not None:
                return RouteMatch(rule.handler_id, MappingProxyType(params))

        return NotFound(method=method, path=path)


ROUTES = RouteTable(
    [
        # Exact path + method
        route("agenda", "GET", "agenda"),
        route("agenda/range", "GET", "agenda-range"),
        route("search", "GET", "search"),
        route("ingestion-status", "GET", "ingestion-status"),
        route("departements", "GET", "departements"),
        route("deputies", "GET", "deputies"),
        route("groups", "GET", "groups"),
        route("scrutins", "GET", "scrutins"),
        route("circonscriptions", "GET", "circonscriptions"),
        route("circonscriptions/geojson", "GET", "circonscriptions-geojson"),
        route("push/register", ("POST", "DELETE"), "push-register"),
        route("cron/notify-scrutins", ("GET", "POST"), "cron-notify-scrutins"),
        # Dynamic segments
        route("sittings/:id", "GET", "sittings"),
        route("scrutins/:id", "GET", "scrutins-id"),
        route("deputy/:acteurRef", "GET", "deputy"),
        route("deputies/:acteurRef/votes", "GET", "deputies-votes"),
        route("groups/:slug", "GET", "groups-slug"),
        route("circonscriptions/:id", "GET", "circonscriptions-id"),
    ]
)
