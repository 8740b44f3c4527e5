"""
Upstream service configuration.

Every upstream has a base URL and an API key, read from the environment once
per process. A missing value never stops the app from starting; it only makes
the operations that need it fail with `ConfigurationError`.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from mediadash.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 20.0


def load_env(*, override: bool = False) -> Path | None:
    """Load the first `.env` found (explicit MEDIADASH_ENV_FILE, repo root, then CWD)."""
    repo_root = Path(__file__).resolve().parents[1]
    candidates: list[Path] = []
    explicit = (os.getenv("MEDIADASH_ENV_FILE") or "").strip()
    if explicit:
        candidates.append(Path(explicit))
    candidates += [
        repo_root / ".env",
        Path.cwd() / ".env",
    ]
    for path in candidates:
        if path.is_file():
            load_dotenv(dotenv_path=path, override=override)
            return path
    return None


@dataclass(frozen=True)
class UpstreamConfig:
    service: str
    base_url: str
    api_key: str
    url_env: str
    key_env: str

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def require_base_url(self) -> str:
        if not self.base_url:
            raise ConfigurationError(f"{self.service} configuration missing: {self.url_env}")
        return self.base_url

    def require(self) -> UpstreamConfig:
        self.require_base_url()
        if not self.api_key:
            raise ConfigurationError(f"{self.service} configuration missing: {self.key_env}")
        return self


@dataclass(frozen=True)
class GatewaySettings:
    radarr: UpstreamConfig
    sonarr: UpstreamConfig
    media_server: UpstreamConfig
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def _read_upstream(service: str, url_env: str, key_env: str) -> UpstreamConfig:
    base_url = (os.getenv(url_env) or "").strip().rstrip("/")
    api_key = (os.getenv(key_env) or "").strip()
    return UpstreamConfig(
        service=service,
        base_url=base_url,
        api_key=api_key,
        url_env=url_env,
        key_env=key_env,
    )


def _read_timeout() -> float:
    raw = (os.getenv("GATEWAY_TIMEOUT_SECONDS") or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid GATEWAY_TIMEOUT_SECONDS={raw!r}")
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


def load_settings() -> GatewaySettings:
    return GatewaySettings(
        radarr=_read_upstream("Radarr", "RADARR_URL", "RADARR_API_KEY"),
        sonarr=_read_upstream("Sonarr", "SONARR_URL", "SONARR_API_KEY"),
        media_server=_read_upstream("Media server", "MEDIA_SERVER_URL", "MEDIA_SERVER_API_KEY"),
        timeout_seconds=_read_timeout(),
    )


@lru_cache
def get_settings() -> GatewaySettings:
    load_env()
    return load_settings()
