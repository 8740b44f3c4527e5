from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import requests

from mediadash.config import DEFAULT_TIMEOUT_SECONDS, UpstreamConfig
from mediadash.errors import ValidationError
from mediadash.integrations.upstream import forward, open_stream, path_segment

logger = logging.getLogger(__name__)

SUBTITLE_CONTENT_TYPE = "text/vtt;charset=UTF-8"
DEFAULT_SUBTITLE_FORMAT = "vtt"
STREAM_CHUNK_BYTES = 16 * 1024

PLAYBACK_EVENTS: dict[str, str] = {
    "start": "/Sessions/Playing",
    "progress": "/Sessions/Playing/Progress",
    "stopped": "/Sessions/Playing/Stopped",
}


@dataclass
class SubtitleStream:
    """An open upstream subtitle response, relayed chunk by chunk."""

    response: requests.Response
    media_type: str = SUBTITLE_CONTENT_TYPE

    def iter_chunks(self) -> Iterator[bytes]:
        yield from self.response.iter_content(chunk_size=STREAM_CHUNK_BYTES)

    def close(self) -> None:
        self.response.close()


class MediaServerClient:
    """Emby/Jellyfin client for the few calls the dashboard proxies server-side."""

    def __init__(
        self,
        config: UpstreamConfig,
        *,
        session: requests.Session,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.config = config
        self.session = session
        self.timeout_seconds = timeout_seconds

    def open_subtitle_stream(
        self,
        item_id: str | None,
        media_source_id: str | None,
        index: str | int | None,
        subtitle_format: str | None = None,
    ) -> SubtitleStream:
        values = [item_id, media_source_id, index]
        if any(v is None or not str(v).strip() for v in values):
            raise ValidationError("Missing required query parameters: itemId, mediaSourceId, index")
        fmt = (subtitle_format or "").strip() or DEFAULT_SUBTITLE_FORMAT
        path = (
            f"/Videos/{path_segment(item_id)}/{path_segment(media_source_id)}"
            f"/Subtitles/{path_segment(index)}/Stream.{path_segment(fmt)}"
        )
        resp = open_stream(
            self.config,
            path,
            auth="query",
            session=self.session,
            timeout_seconds=self.timeout_seconds,
        )
        return SubtitleStream(response=resp)

    def report_playback(self, event: str, payload: dict[str, Any]) -> None:
        path = PLAYBACK_EVENTS.get(event)
        if path is None:
            raise ValidationError(f"Unknown playback event: {event}")
        forward(
            self.config,
            path,
            method="POST",
            json_body=payload,
            auth="token",
            session=self.session,
            timeout_seconds=self.timeout_seconds,
        )

    def report_playback_quietly(self, event: str, payload: dict[str, Any]) -> None:
        """Background-task variant: failures are logged, never raised."""
        try:
            self.report_playback(event, payload)
        except Exception as e:
            logger.error(f"Failed to report playback {event} to {self.config.service}: {e}")

    def server_info(self) -> Any:
        return forward(
            self.config,
            "/System/Info/Public",
            auth="none",
            session=self.session,
            timeout_seconds=self.timeout_seconds,
        )

    def close(self) -> None:
        self.session.close()
