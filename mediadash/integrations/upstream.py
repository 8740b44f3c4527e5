"""
Generic request forwarding shared by every upstream client.

One call in, one upstream request out: credentials are injected, the status is
checked, and the body is decoded. Failures are raised as `UpstreamError` (the
upstream rejected the call) or `TransportError` (the call never completed).
No retries.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal
from urllib.parse import quote

import requests

from mediadash.config import DEFAULT_TIMEOUT_SECONDS, UpstreamConfig
from mediadash.errors import TransportError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)

AuthMode = Literal["header", "query", "token", "none"]

_BODY_SNIPPET_CHARS = 400


def _auth(config: UpstreamConfig, auth: AuthMode) -> tuple[dict[str, str], dict[str, str]]:
    headers: dict[str, str] = {"Content-Type": "application/json", "Accept": "application/json"}
    params: dict[str, str] = {}
    if auth == "header":
        headers["X-Api-Key"] = config.api_key
    elif auth == "token":
        headers["X-Emby-Token"] = config.api_key
    elif auth == "query":
        params["api_key"] = config.api_key
    return headers, params


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    return {k: v for k, v in (params or {}).items() if v is not None}


def path_segment(value: Any) -> str:
    """Escape one caller-supplied id for use as a single upstream path segment."""
    text = str(value).strip()
    if text in ("", ".", ".."):
        raise ValidationError(f"Invalid path segment: {text!r}")
    return quote(text, safe="")


def build_url(config: UpstreamConfig, path: str, *, api_root: str = "") -> str:
    return f"{config.require_base_url()}{api_root}{path}"


def _send(
    config: UpstreamConfig,
    path: str,
    *,
    method: str,
    params: Mapping[str, Any] | None,
    json_body: Any,
    auth: AuthMode,
    api_root: str,
    session: requests.Session,
    timeout_seconds: float,
    stream: bool,
) -> requests.Response:
    if auth == "none":
        config.require_base_url()
    else:
        config.require()

    url = build_url(config, path, api_root=api_root)
    headers, auth_params = _auth(config, auth)
    query = {**_clean_params(params), **auth_params}

    logger.debug(f"{config.service} {method} {url}")
    try:
        resp = session.request(
            method,
            url,
            params=query or None,
            json=json_body,
            headers=headers,
            timeout=timeout_seconds,
            stream=stream,
        )
    except requests.Timeout as exc:
        logger.error(f"{config.service} {method} {path} timed out after {timeout_seconds}s")
        raise TransportError(f"Internal error contacting {config.service}: request timed out") from exc
    except requests.RequestException as exc:
        logger.error(f"{config.service} {method} {path} failed: {exc}")
        raise TransportError(f"Internal error contacting {config.service}") from exc

    if not resp.ok:
        body = (resp.text or "").strip()[:_BODY_SNIPPET_CHARS]
        resp.close()
        logger.warning(f"{config.service} {method} {path} rejected with HTTP {resp.status_code}: {body}")
        detail = f": {body}" if body else ""
        raise UpstreamError(
            f"{config.service} API error {resp.status_code} {resp.reason or ''}".rstrip() + detail,
            status_code=resp.status_code,
            body_snippet=body or None,
        )
    return resp


def forward(
    config: UpstreamConfig,
    path: str,
    *,
    method: str = "GET",
    params: Mapping[str, Any] | None = None,
    json_body: Any = None,
    auth: AuthMode = "header",
    api_root: str = "",
    session: requests.Session,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """
    Issue one upstream request and return the decoded JSON body.

    Returns None for a successful response with an empty body.
    """
    resp = _send(
        config,
        path,
        method=method,
        params=params,
        json_body=json_body,
        auth=auth,
        api_root=api_root,
        session=session,
        timeout_seconds=timeout_seconds,
        stream=False,
    )
    if not (resp.content or b"").strip():
        return None
    try:
        return resp.json()
    except ValueError as exc:
        logger.error(f"{config.service} {method} {path} returned non-JSON body: {(resp.text or '')[:200]!r}")
        raise TransportError(f"Internal error contacting {config.service}: malformed response") from exc


def open_stream(
    config: UpstreamConfig,
    path: str,
    *,
    params: Mapping[str, Any] | None = None,
    auth: AuthMode = "query",
    api_root: str = "",
    session: requests.Session,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> requests.Response:
    """
    Open a streaming GET. The caller owns the returned response and must close it.
    """
    return _send(
        config,
        path,
        method="GET",
        params=params,
        json_body=None,
        auth=auth,
        api_root=api_root,
        session=session,
        timeout_seconds=timeout_seconds,
        stream=True,
    )
