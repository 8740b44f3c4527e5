"""
Radarr (movie manager) endpoints.
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Query

from api.deps import RadarrClient

router = APIRouter(prefix="/radarr", tags=["radarr"])


@router.get("/movies")
def list_movies(radarr: RadarrClient) -> Any:
    """All movies, with poster/fanart URLs made absolute."""
    return radarr.list_resource("movies")


@router.post("/movies")
def add_movie(radarr: RadarrClient, movie: dict[str, Any] = Body(...)) -> Any:
    """Forward a lookup result (plus quality profile/root folder) to Radarr."""
    return radarr.add(movie)


@router.get("/movies/{movie_id}")
def get_movie(radarr: RadarrClient, movie_id: str) -> Any:
    return radarr.get_resource("movies", movie_id)


@router.get("/search")
def search_movies(radarr: RadarrClient, term: str | None = Query(default=None)) -> Any:
    return radarr.search(term)


@router.get("/qualityprofile")
def list_quality_profiles(radarr: RadarrClient) -> Any:
    return radarr.list_resource("quality-profiles")


@router.get("/rootfolder")
def list_root_folders(radarr: RadarrClient) -> Any:
    return radarr.list_resource("root-folders")


@router.get("/diskspace")
def get_diskspace(radarr: RadarrClient) -> Any:
    return radarr.list_resource("diskspace")


@router.get("/system/status")
def get_system_status(radarr: RadarrClient) -> Any:
    return radarr.list_resource("status")


@router.get("/health")
def get_health(radarr: RadarrClient) -> Any:
    return radarr.list_resource("health")


@router.get("/wanted/missing")
def list_missing(
    radarr: RadarrClient,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, alias="pageSize"),
) -> Any:
    return radarr.list_resource("missing", {"page": page, "pageSize": page_size})


@router.get("/wanted/cutoff")
def list_cutoff_unmet(
    radarr: RadarrClient,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, alias="pageSize"),
) -> Any:
    return radarr.list_resource("cutoff", {"page": page, "pageSize": page_size})


@router.get("/calendar")
def list_calendar(
    radarr: RadarrClient,
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
) -> Any:
    return radarr.list_resource("calendar", {"start": start, "end": end})


@router.get("/history")
def list_history(
    radarr: RadarrClient,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=50, ge=1, alias="pageSize"),
) -> Any:
    return radarr.list_resource("history", {"page": page, "pageSize": page_size})


@router.get("/queue")
def list_queue(radarr: RadarrClient) -> list[Any]:
    """Download queue, always as a plain list."""
    return radarr.list_queue()


@router.delete("/queue")
def delete_queue_item(
    radarr: RadarrClient,
    id: str | None = Query(default=None),
    remove_from_client: bool | None = Query(default=None, alias="removeFromClient"),
    blocklist: bool | None = Query(default=None),
) -> dict[str, bool]:
    return radarr.delete_queue_item(id, remove_from_client=remove_from_client, blocklist=blocklist)
