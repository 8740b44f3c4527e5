"""
Dependency injection for upstream clients and settings.
"""
from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated

import requests
from fastapi import Depends

from mediadash.config import GatewaySettings, get_settings
from mediadash.integrations.arr.client import RADARR, SONARR, ArrClient
from mediadash.integrations.media_server.client import MediaServerClient


def get_http_session() -> Iterator[requests.Session]:
    """
    One requests session per incoming request, closed once the handler returns.
    """
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()


def get_detached_http_session() -> requests.Session:
    """
    A session that outlives the handler, for work that continues after the
    response starts (streamed bodies, background tasks). The route closes it.
    """
    return requests.Session()


Settings = Annotated[GatewaySettings, Depends(get_settings)]
HttpSession = Annotated[requests.Session, Depends(get_http_session)]
DetachedHttpSession = Annotated[requests.Session, Depends(get_detached_http_session)]


def get_radarr_client(settings: Settings, session: HttpSession) -> ArrClient:
    return ArrClient(RADARR, settings.radarr, session=session, timeout_seconds=settings.timeout_seconds)


def get_sonarr_client(settings: Settings, session: HttpSession) -> ArrClient:
    return ArrClient(SONARR, settings.sonarr, session=session, timeout_seconds=settings.timeout_seconds)


def get_media_server_client(settings: Settings, session: HttpSession) -> MediaServerClient:
    return MediaServerClient(settings.media_server, session=session, timeout_seconds=settings.timeout_seconds)


def get_detached_media_server_client(settings: Settings, session: DetachedHttpSession) -> MediaServerClient:
    return MediaServerClient(settings.media_server, session=session, timeout_seconds=settings.timeout_seconds)


# Type aliases for dependency injection
RadarrClient = Annotated[ArrClient, Depends(get_radarr_client)]
SonarrClient = Annotated[ArrClient, Depends(get_sonarr_client)]
MediaServer = Annotated[MediaServerClient, Depends(get_media_server_client)]
DetachedMediaServer = Annotated[MediaServerClient, Depends(get_detached_media_server_client)]
