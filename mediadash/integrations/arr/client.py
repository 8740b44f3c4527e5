from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

from mediadash.config import DEFAULT_TIMEOUT_SECONDS, UpstreamConfig
from mediadash.errors import ValidationError
from mediadash.integrations.upstream import forward, path_segment
from mediadash.normalize import normalize_queue, rewrite_payload_images

logger = logging.getLogger(__name__)

ARR_API_ROOT = "/api/v3"

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50

_COMMON_RESOURCES: dict[str, str] = {
    "quality-profiles": "/qualityprofile",
    "diskspace": "/diskspace",
    "status": "/system/status",
    "health": "/health",
    "root-folders": "/rootfolder",
    "missing": "/wanted/missing",
    "cutoff": "/wanted/cutoff",
    "calendar": "/calendar",
    "history": "/history",
}

# Resources whose upstream endpoint is paged.
PAGED_RESOURCES = frozenset({"missing", "cutoff", "history"})


@dataclass(frozen=True)
class ArrService:
    """Static description of one *arr flavour: which resources it exposes and which one is searchable."""

    name: str
    item_resource: str
    resources: Mapping[str, str] = field(default_factory=dict)

    @property
    def item_path(self) -> str:
        return self.resources[self.item_resource]


RADARR = ArrService(
    name="radarr",
    item_resource="movies",
    resources={"movies": "/movie", **_COMMON_RESOURCES},
)

SONARR = ArrService(
    name="sonarr",
    item_resource="series",
    resources={
        "series": "/series",
        "language-profiles": "/languageprofile",
        "episodes": "/episode",
        **_COMMON_RESOURCES,
    },
)


def _require_text(value: Any, message: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(message)
    return text


class ArrClient:
    """
    Forwarding client for a Radarr/Sonarr style v3 API.

    Every method performs exactly one upstream request. Image URLs in returned
    records are made absolute against the configured base URL.
    """

    def __init__(
        self,
        service: ArrService,
        config: UpstreamConfig,
        *,
        session: requests.Session,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.service = service
        self.config = config
        self.session = session
        self.timeout_seconds = timeout_seconds

    def _call(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        return forward(
            self.config,
            path,
            method=method,
            params=params,
            json_body=json_body,
            auth="header",
            api_root=ARR_API_ROOT,
            session=self.session,
            timeout_seconds=self.timeout_seconds,
        )

    def _resource_path(self, resource: str) -> str:
        path = self.service.resources.get(resource)
        if path is None:
            raise ValidationError(f"Unknown {self.service.name} resource: {resource}")
        return path

    def list_resource(self, resource: str, params: Mapping[str, Any] | None = None) -> Any:
        path = self._resource_path(resource)
        query = dict(params or {})
        if resource in PAGED_RESOURCES:
            query["page"] = query.get("page") or DEFAULT_PAGE
            query["pageSize"] = query.get("pageSize") or DEFAULT_PAGE_SIZE
        payload = self._call(path, params=query)
        if isinstance(payload, list):
            logger.info(f"{self.config.service} {resource}: {len(payload)} records received")
        return rewrite_payload_images(payload, self.config.base_url)

    def get_resource(self, resource: str, item_id: Any) -> Any:
        path = self._resource_path(resource)
        item = _require_text(item_id, f"{self.service.name} {resource} id is required")
        payload = self._call(f"{path}/{path_segment(item)}")
        return rewrite_payload_images(payload, self.config.base_url)

    def search(self, term: str | None) -> Any:
        query = _require_text(term, "Search term is required")
        payload = self._call(f"{self.service.item_path}/lookup", params={"term": query})
        return rewrite_payload_images(payload, self.config.base_url)

    def add(self, payload: Any) -> Any:
        if not isinstance(payload, dict):
            raise ValidationError(f"{self.service.name} {self.service.item_resource} payload must be a JSON object")
        logger.info(f"Adding {self.service.item_resource} to {self.config.service}: {payload.get('title')!r}")
        return self._call(self.service.item_path, method="POST", json_body=payload)

    def list_queue(self) -> list[Any]:
        payload = self._call("/queue/details")
        return normalize_queue(payload, service=self.config.service)

    def delete_queue_item(
        self,
        item_id: Any,
        *,
        remove_from_client: bool | None = None,
        blocklist: bool | None = None,
    ) -> dict[str, bool]:
        item = _require_text(item_id, "Queue item ID is required")
        params = {
            "removeFromClient": _flag(remove_from_client),
            "blocklist": _flag(blocklist),
        }
        self._call(f"/queue/{path_segment(item)}", method="DELETE", params=params)
        return {"success": True}


def _flag(value: bool | None) -> str | None:
    if value is None:
        return None
    return "true" if value else "false"
