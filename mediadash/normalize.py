"""
Response-shape normalization for upstream payloads.

Everything here is pure: no I/O, no configuration lookups. Callers pass the
upstream base URL explicitly.
"""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def absolute_url(base_url: str, url: str | None) -> str | None:
    """
    Prefix a relative upstream asset path with `base_url`.

    Already-absolute URLs (any scheme + host) pass through untouched, including
    ones pointing at a different host. Paths are not validated.
    """
    if not url:
        return url
    parts = urlsplit(url)
    if parts.scheme and parts.netloc:
        return url
    base = base_url.rstrip("/")
    if url.startswith("/"):
        return f"{base}{url}"
    return f"{base}/{url}"


def rewrite_images(record: dict[str, Any], base_url: str) -> dict[str, Any]:
    images = record.get("images")
    if not isinstance(images, list):
        return record

    rewritten: list[Any] = []
    for image in images:
        if not isinstance(image, dict):
            rewritten.append(image)
            continue
        url = absolute_url(base_url, image.get("url"))
        rewritten.append(
            {
                **image,
                "url": url,
                "remoteUrl": image.get("remoteUrl") or url,
            }
        )
    return {**record, "images": rewritten}


def rewrite_payload_images(payload: Any, base_url: str) -> Any:
    """
    Apply `rewrite_images` to a list of records, a single record, or the
    `records` list of a paged envelope. Other shapes are returned as-is.
    """
    if isinstance(payload, list):
        return [rewrite_images(item, base_url) if isinstance(item, dict) else item for item in payload]
    if isinstance(payload, dict):
        records = payload.get("records")
        if isinstance(records, list):
            return {**payload, "records": rewrite_payload_images(records, base_url)}
        return rewrite_images(payload, base_url)
    return payload


def normalize_queue(payload: Any, *, service: str = "upstream") -> list[Any]:
    """
    Collapse the queue endpoint's wire shapes into a plain list.

    Accepted shapes: a bare list, `{"records": [...]}` or `{"queue": [...]}`.
    Anything else yields `[]`.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("records", "queue"):
            if key in payload:
                items = payload.get(key)
                if isinstance(items, list):
                    return items
                if items is None:
                    return []
                break
    logger.warning(f"Unexpected queue response structure from {service}: {type(payload).__name__}")
    return []
