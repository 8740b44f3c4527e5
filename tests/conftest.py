from __future__ import annotations

import json
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
import requests

from mediadash.config import GatewaySettings, UpstreamConfig

RADARR_BASE = "http://host:42651"
SONARR_BASE = "http://host:8989"
MEDIA_BASE = "http://host:8096/emby"


def _build_response(
    status_code: int = 200,
    payload: Any = None,
    *,
    text: str | None = None,
    reason: str | None = None,
) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason or ("OK" if status_code < 400 else "Error")
    if text is not None:
        body = text.encode("utf-8")
    elif payload is not None:
        body = json.dumps(payload).encode("utf-8")
    else:
        body = b""
    resp._content = body
    resp._content_consumed = True
    resp.encoding = "utf-8"
    resp.url = "http://upstream.test/"
    return resp


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    return _build_response


@pytest.fixture
def fake_session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.request.return_value = _build_response(200, [])
    return session


def upstream(service: str, base_url: str, api_key: str, prefix: str) -> UpstreamConfig:
    return UpstreamConfig(
        service=service,
        base_url=base_url,
        api_key=api_key,
        url_env=f"{prefix}_URL",
        key_env=f"{prefix}_API_KEY",
    )


@pytest.fixture
def settings() -> GatewaySettings:
    return GatewaySettings(
        radarr=upstream("Radarr", RADARR_BASE, "radarr-key", "RADARR"),
        sonarr=upstream("Sonarr", SONARR_BASE, "sonarr-key", "SONARR"),
        media_server=upstream("Media server", MEDIA_BASE, "emby-key", "MEDIA_SERVER"),
        timeout_seconds=5.0,
    )


@pytest.fixture
def unconfigured_settings() -> GatewaySettings:
    return GatewaySettings(
        radarr=upstream("Radarr", "", "", "RADARR"),
        sonarr=upstream("Sonarr", SONARR_BASE, "", "SONARR"),
        media_server=upstream("Media server", "", "", "MEDIA_SERVER"),
        timeout_seconds=5.0,
    )
