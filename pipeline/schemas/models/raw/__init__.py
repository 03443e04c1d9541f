"""Raw source Pydantic models — one module per data source."""

from models.raw.geojson_raw import *  # noqa: F401, F403
