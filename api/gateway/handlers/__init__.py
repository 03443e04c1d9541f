"""Route handlers, one module per handler id (``agenda-range`` -> ``agenda_range``).

Each module exposes ``async def handle(request, db) -> Response``. Modules are
imported by :class:`gateway.registry.HandlerRegistry` on first use only.
"""
