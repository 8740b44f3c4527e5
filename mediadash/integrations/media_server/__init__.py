"""
Emby/Jellyfin media server integration client.
"""

from mediadash.integrations.media_server.client import (
    PLAYBACK_EVENTS,
    SUBTITLE_CONTENT_TYPE,
    MediaServerClient,
    SubtitleStream,
)

__all__ = [
    "PLAYBACK_EVENTS",
    "SUBTITLE_CONTENT_TYPE",
    "MediaServerClient",
    "SubtitleStream",
]
