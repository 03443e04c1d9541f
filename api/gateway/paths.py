"""Logical path extraction for the single /api endpoint.

The hosting rewrite delivers the original path either as a ``path`` query
parameter (``/api/route?path=agenda``) or in the forwarded URL
(``/api/agenda`` or ``/api/route/agenda``). All of them resolve to ``"agenda"``.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union
from urllib.parse import urlsplit

DEFAULT_MOUNT = "/api"
ROUTING_ENDPOINT = "route"

ForwardedPath = Union[str, Sequence[str], None]


def resolve_logical_path(
    forwarded: ForwardedPath,
    raw_url: Optional[str],
    mount: str = DEFAULT_MOUNT,
    endpoint: str = ROUTING_ENDPOINT,
    *,
    path: Optional[str] = None,
) -> str:
    """Return the route-matching path: no mount prefix, no leading slash, ``""`` for root.

    Args:
        forwarded: Value of the ``path`` query parameter, a string or a list of
            strings (first one wins). Used verbatim when present.
        raw_url: Request URL, absolute (``https://host/api/agenda?x=1``) or
            relative (``/api/agenda?x=1``).
        mount: Base path the API is served under.
        endpoint: Name of the rewrite target segment under *mount*.
        path: Decoded request path with the query already split off (ASGI
            ``scope["path"]``). Replaces *raw_url* when given, so a ``?`` that
            arrived percent-encoded stays inside its segment.
    """
    if isinstance(forwarded, str):
        if forwarded:
            return forwarded
    elif forwarded and isinstance(forwarded[0], str):
        return forwarded[0]

    if path is not None:
        return strip_mount(path, mount, endpoint)

    url = raw_url or ""
    pathname = urlsplit(url).path if url.startswith("http") else url.split("?", 1)[0]
    return strip_mount(pathname, mount, endpoint)


def strip_mount(pathname: str, mount: str = DEFAULT_MOUNT, endpoint: str = ROUTING_ENDPOINT) -> str:
    """``/api/route/agenda``, ``/api/agenda`` and ``/agenda`` all become ``agenda``."""
    if pathname in (mount, f"{mount}/"):
        return ""
    if pathname.startswith(f"{mount}/"):
        after_mount = pathname[len(mount) + 1 :]
        if after_mount.startswith(f"{endpoint}/"):
            return after_mount[len(endpoint) + 1 :]
        if after_mount == endpoint:
            return ""
        return after_mount
    if pathname.startswith("/"):
        return pathname[1:]
    return pathname
