"""Runtime settings for loading and serving the PWLS catalog.

Values come from the environment (optionally seeded from ``.env`` /
``.env.local`` in the project root).  Both the CLI and the web server
read them from here, so a single source of truth decides where the
catalog is loaded from and how it is served.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SOURCE = "https://raw.githubusercontent.com/geosoft-as/pwls/main/json"


# ── .env loader ────────────────────────────────────────────────────

def load_env(root: Path = ROOT) -> None:
    """Copy KEY=VALUE lines from .env files into os.environ.

    Keys already present in the environment are left untouched.
    """
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v


# ── Settings ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    """Where the catalog comes from and how it is served."""

    source: str = DEFAULT_SOURCE
    """Base URL, JSON folder or logs workbook (.xlsx) to load from."""

    properties_workbook: str | None = None
    """Properties workbook, only used together with an .xlsx source."""

    http_timeout_s: float = 30.0
    """Timeout for each HTTP fetch of a JSON document."""

    max_ancestry_depth: int = 64
    """Upper bound for walks up the property hierarchy."""

    host: str = "127.0.0.1"
    port: int = 8081
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None) -> Settings:
        e = os.environ if env is None else env
        defaults = cls()
        return cls(
            source=e.get("PWLS_SOURCE", defaults.source),
            properties_workbook=e.get("PWLS_PROPERTIES_WORKBOOK") or None,
            http_timeout_s=float(e.get("PWLS_HTTP_TIMEOUT", defaults.http_timeout_s)),
            max_ancestry_depth=int(e.get("PWLS_MAX_ANCESTRY", defaults.max_ancestry_depth)),
            host=e.get("PWLS_HOST", defaults.host),
            port=int(e.get("PWLS_PORT", defaults.port)),
            log_level=e.get("PWLS_LOG_LEVEL", defaults.log_level).upper(),
        )


# Module-level defaults
SETTINGS = Settings()
