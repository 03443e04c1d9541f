"""Circonscriptions législatives GeoJSON downloader.

Source: data.gouv.fr — Contours géographiques des circonscriptions législatives
(Ministère de l'Intérieur + INSEE, Licence Ouverte 2.0).

One GET, no retry. Non-2xx responses raise :class:`FetchError`; a body that is not
a JSON FeatureCollection raises :class:`GeoJSONParseError`.
"""

from __future__ import annotations

import json
import logging
import os

import httpx
from pydantic import ValidationError

from models.raw.geojson_raw import GeoJSONFeatureCollectionRaw

logger = logging.getLogger(__name__)

# p10 = very simplified contours (~5.4 MB); p20 = simplified (~10 MB)
GEOJSON_P10_URL = (
    "https://static.data.gouv.fr/resources/"
    "contours-geographiques-des-circonscriptions-legislatives/20240613-191520/"
    "circonscriptions-legislatives-p10.geojson"
)

DEFAULT_TIMEOUT = float(os.environ.get("AGORA_HTTP_TIMEOUT", "60"))


class FetchError(Exception):
    """The source answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason_phrase: str, url: str = "") -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.url = url
        super().__init__(f"Failed to fetch GeoJSON: {status_code} {reason_phrase}")


class GeoJSONParseError(ValueError):
    """The source body is not a well-formed GeoJSON FeatureCollection."""


def parse_feature_collection(content: bytes | str) -> GeoJSONFeatureCollectionRaw:
    """Parse a GeoJSON document into raw features, preserving document order."""
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise GeoJSONParseError(f"Invalid JSON in GeoJSON document: {exc}") from exc

    if not isinstance(payload, dict):
        raise GeoJSONParseError(
            f"Expected a GeoJSON object, got {type(payload).__name__}"
        )

    try:
        return GeoJSONFeatureCollectionRaw.model_validate(payload)
    except ValidationError as exc:
        raise GeoJSONParseError(f"Malformed FeatureCollection: {exc}") from exc


def fetch_feature_collection(
    url: str = GEOJSON_P10_URL,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> GeoJSONFeatureCollectionRaw:
    """Download and parse the circonscriptions FeatureCollection.

    Args:
        url: GeoJSON document URL.
        client: Optional pre-configured client (tests inject a mock transport).
        timeout: Request timeout in seconds when no client is given.

    Raises:
        FetchError: non-2xx response.
        GeoJSONParseError: malformed body.
        httpx.RequestError: transport failure.
    """
    logger.info("Fetching circonscriptions from data.gouv.fr (official GeoJSON)...")

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=httpx.Timeout(timeout), follow_redirects=True)

    try:
        response = client.get(url)
    finally:
        if owns_client:
            client.close()

    if not response.is_success:
        raise FetchError(response.status_code, response.reason_phrase, url)

    logger.debug("Downloaded %s (%d bytes)", url, len(response.content))
    collection = parse_feature_collection(response.content)
    logger.info("GeoJSON contains %d features", len(collection.features))
    return collection
