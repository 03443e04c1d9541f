"""Process-wide API settings, read once from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from gateway.paths import DEFAULT_MOUNT


@dataclass(frozen=True)
class Settings:
    pg_dsn: str = ""
    mount: str = DEFAULT_MOUNT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        mount = env.get("AGORA_API_MOUNT", DEFAULT_MOUNT).rstrip("/") or DEFAULT_MOUNT
        return cls(
            pg_dsn=env.get("AGORA_PG_URI", ""),
            mount=mount,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
