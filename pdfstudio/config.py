from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_BACKEND_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 120.0
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


@dataclass(frozen=True, slots=True)
class Settings:
    backend_url: str = DEFAULT_BACKEND_URL
    timeout: float | None = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    value = raw.strip().lower()
    if value in {"0", "none", "off"}:
        return None
    timeout = float(value)
    if timeout < 0:
        raise ValueError("PDF_STUDIO_TIMEOUT must not be negative")
    return timeout


def load_settings() -> Settings:
    """Read settings from the environment."""

    backend_url = (os.getenv("PDF_STUDIO_BACKEND_URL") or DEFAULT_BACKEND_URL).strip().rstrip("/")

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = tuple(origin.strip() for origin in origins_env.split(",") if origin.strip())

    return Settings(
        backend_url=backend_url,
        timeout=_parse_timeout(os.getenv("PDF_STUDIO_TIMEOUT")),
        log_level=(os.getenv("PDF_STUDIO_LOG_LEVEL") or "INFO").strip().upper(),
        cors_origins=origins or DEFAULT_CORS_ORIGINS,
    )
