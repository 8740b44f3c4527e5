"""
Radarr/Sonarr (v3 API) integration client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediadash.integrations.arr.client import (
        RADARR,
        SONARR,
        ArrClient,
        ArrService,
    )

__all__ = [
    "RADARR",
    "SONARR",
    "ArrClient",
    "ArrService",
]


def __getattr__(name: str):
    if name in __all__:
        from mediadash.integrations.arr import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
