"""CLI entry point: python -m processing [--dry-run]

Ingests the official circonscriptions législatives contours:
  1. Fetch the data.gouv.fr GeoJSON FeatureCollection
  2. Transform features -> canonical districts, collapse duplicate ids
  3. Upsert id, label and geometry into the circonscriptions table

Run this before the deputies ingestion so ``deputies.ref_circonscription``
finds its target rows. Districts absent from the source are never deleted.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

import httpx

from bulk.circonscriptions_downloader import (
    GEOJSON_P10_URL,
    fetch_feature_collection,
)
from models.raw.geojson_raw import GeoJSONFeatureCollectionRaw
from processing.loaders import LoadResult, PostgresLoader, dry_run_report
from processing.transformers import CirconscriptionsTransformer
from processing.validators import CollectionResult, DistrictCollector

logger = logging.getLogger("processing")

TABLE_NAME = "circonscriptions"
CONFLICT_COLUMNS = ["id"]


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m processing",
        description="Agora circonscriptions ingestion — fetch, canonicalise, upsert.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and transform only, print a preview instead of writing.",
    )
    parser.add_argument(
        "--pg-dsn",
        default=os.environ.get("AGORA_PG_URI", ""),
        help="PostgreSQL DSN. Falls back to $AGORA_PG_URI env var.",
    )
    parser.add_argument(
        "--source-url",
        default=os.environ.get("AGORA_CIRCONSCRIPTIONS_URL", GEOJSON_P10_URL),
        help="GeoJSON source URL. Falls back to $AGORA_CIRCONSCRIPTIONS_URL.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def collect_circonscriptions(collection: GeoJSONFeatureCollectionRaw) -> CollectionResult:
    """Transform every feature and collapse them to one district per id."""
    transformed = CirconscriptionsTransformer().transform(collection.features)
    collected = DistrictCollector().collect(transformed.records)

    logger.info(
        "Parsed %d circonscriptions from GeoJSON (%d features)",
        collected.stats.unique_count,
        len(collection.features),
    )
    return collected


def run(
    dry_run: bool,
    pg_dsn: str,
    source_url: str = GEOJSON_P10_URL,
    client: Optional[httpx.Client] = None,
) -> LoadResult:
    """Run one ingestion pass. Fetch and parse errors propagate to the caller."""
    collection = fetch_feature_collection(source_url, client=client)
    districts = collect_circonscriptions(collection).districts

    if dry_run:
        logger.info("Dry run — skipping load phase")
        return dry_run_report(districts)

    with PostgresLoader(pg_dsn) as pg:
        result = pg.upsert_batch(TABLE_NAME, districts, CONFLICT_COLUMNS)

    logger.info("Circonscriptions: %d upserted", result.succeeded)
    if result.errors:
        logger.warning("Circonscriptions: %d failed", result.failed)
    return result


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.dry_run and not args.pg_dsn:
        logger.error("No PG DSN provided — pass --pg-dsn or set AGORA_PG_URI")
        sys.exit(1)

    logger.info("=== Agora ingestion: circonscriptions ===")
    try:
        run(args.dry_run, args.pg_dsn, args.source_url)
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)

    logger.info("Circonscriptions ingestion complete.")


if __name__ == "__main__":
    main()
