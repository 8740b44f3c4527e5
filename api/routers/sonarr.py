"""
Sonarr (series manager) endpoints.
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Query

from api.deps import SonarrClient

router = APIRouter(prefix="/sonarr", tags=["sonarr"])


@router.get("/series")
def list_series(sonarr: SonarrClient) -> Any:
    return sonarr.list_resource("series")


@router.post("/series")
def add_series(sonarr: SonarrClient, series: dict[str, Any] = Body(...)) -> Any:
    return sonarr.add(series)


# Declared before /series/{series_id} so "lookup" is not captured as an id.
@router.get("/series/lookup")
def lookup_series(sonarr: SonarrClient, term: str | None = Query(default=None)) -> Any:
    return sonarr.search(term)


@router.get("/series/{series_id}")
def get_series(sonarr: SonarrClient, series_id: str) -> Any:
    return sonarr.get_resource("series", series_id)


@router.get("/episodes")
def list_episodes(sonarr: SonarrClient, series_id: int | None = Query(default=None, alias="seriesId")) -> Any:
    return sonarr.list_resource("episodes", {"seriesId": series_id})


@router.get("/languageprofile")
def list_language_profiles(sonarr: SonarrClient) -> Any:
    return sonarr.list_resource("language-profiles")


@router.get("/qualityprofile")
def list_quality_profiles(sonarr: SonarrClient) -> Any:
    return sonarr.list_resource("quality-profiles")


@router.get("/rootfolder")
def list_root_folders(sonarr: SonarrClient) -> Any:
    return sonarr.list_resource("root-folders")


@router.get("/diskspace")
def get_diskspace(sonarr: SonarrClient) -> Any:
    return sonarr.list_resource("diskspace")


@router.get("/system/status")
def get_system_status(sonarr: SonarrClient) -> Any:
    return sonarr.list_resource("status")


@router.get("/health")
def get_health(sonarr: SonarrClient) -> Any:
    return sonarr.list_resource("health")


@router.get("/wanted/missing")
def list_missing(
    sonarr: SonarrClient,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, alias="pageSize"),
) -> Any:
    return sonarr.list_resource("missing", {"page": page, "pageSize": page_size})


@router.get("/wanted/cutoff")
def list_cutoff_unmet(
    sonarr: SonarrClient,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, alias="pageSize"),
) -> Any:
    return sonarr.list_resource("cutoff", {"page": page, "pageSize": page_size})


@router.get("/calendar")
def list_calendar(
    sonarr: SonarrClient,
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
) -> Any:
    return sonarr.list_resource("calendar", {"start": start, "end": end})


@router.get("/history")
def list_history(
    sonarr: SonarrClient,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, alias="pageSize"),
) -> Any:
    return sonarr.list_resource("history", {"page": page, "pageSize": page_size})


@router.get("/queue")
def list_queue(sonarr: SonarrClient) -> list[Any]:
    return sonarr.list_queue()


@router.delete("/queue")
def delete_queue_item(
    sonarr: SonarrClient,
    id: str | None = Query(default=None),
    remove_from_client: bool | None = Query(default=None, alias="removeFromClient"),
    blocklist: bool | None = Query(default=None),
) -> dict[str, bool]:
    return sonarr.delete_queue_item(id, remove_from_client=remove_from_client, blocklist=blocklist)
