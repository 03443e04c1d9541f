"""Agora loaders — persist validated data to PostgreSQL."""

from processing.loaders.postgres_loader import (
    DRY_RUN_PREVIEW,
    LoadError,
    LoadResult,
    PostgresLoader,
    dry_run_report,
)

__all__ = [
    "DRY_RUN_PREVIEW",
    "LoadError",
    "LoadResult",
    "PostgresLoader",
    "dry_run_report",
]
