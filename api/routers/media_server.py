"""
Media server (Emby/Jellyfin) endpoints.

Subtitles are streamed through with the API key injected server-side so the
browser never sees it. Playback reports are fire-and-forget: the route answers
immediately and the upstream POST runs as a background task.

Both routes use a detached client whose session stays open after the handler
returns; it is closed by the background task, or right away on failure.
"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, BackgroundTasks, Body, Query
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from api.deps import DetachedMediaServer, MediaServer
from mediadash.integrations.media_server.client import MediaServerClient, SubtitleStream

router = APIRouter(prefix="/media-server", tags=["media-server"])


def _close_stream(stream: SubtitleStream, media_server: MediaServerClient) -> None:
    try:
        stream.close()
    finally:
        media_server.close()


def _report_and_close(media_server: MediaServerClient, event: str, payload: dict[str, Any]) -> None:
    try:
        media_server.report_playback_quietly(event, payload)
    finally:
        media_server.close()


@router.get("/subtitles")
def stream_subtitles(
    media_server: DetachedMediaServer,
    item_id: str | None = Query(default=None, alias="itemId"),
    media_source_id: str | None = Query(default=None, alias="mediaSourceId"),
    index: str | None = Query(default=None),
    subtitle_format: str = Query(default="vtt", alias="format"),
) -> StreamingResponse:
    try:
        stream = media_server.open_subtitle_stream(item_id, media_source_id, index, subtitle_format)
    except Exception:
        media_server.close()
        raise
    return StreamingResponse(
        stream.iter_chunks(),
        status_code=200,
        media_type=stream.media_type,
        background=BackgroundTask(_close_stream, stream, media_server),
    )


@router.post("/sessions/{event}", status_code=202)
def report_playback(
    media_server: DetachedMediaServer,
    background_tasks: BackgroundTasks,
    event: Literal["start", "progress", "stopped"],
    payload: dict[str, Any] | None = Body(default=None),
) -> dict[str, bool]:
    # Credentials are checked up front; the upstream call itself may still fail quietly.
    try:
        media_server.config.require()
    except Exception:
        media_server.close()
        raise
    background_tasks.add_task(_report_and_close, media_server, event, payload or {})
    return {"accepted": True}


@router.get("/ping")
def ping(media_server: MediaServer) -> dict[str, Any]:
    info = media_server.server_info() or {}
    return {
        "ok": True,
        "server_name": info.get("ServerName") if isinstance(info, dict) else None,
        "version": info.get("Version") if isinstance(info, dict) else None,
    }
