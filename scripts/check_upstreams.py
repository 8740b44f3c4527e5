#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable

import requests

from mediadash.config import GatewaySettings, get_settings
from mediadash.errors import GatewayError
from mediadash.integrations.arr.client import RADARR, SONARR, ArrClient
from mediadash.integrations.media_server.client import MediaServerClient

SERVICES = ("radarr", "sonarr", "media_server")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="check_upstreams",
        description="Check that each configured upstream answers its status endpoint.",
    )
    parser.add_argument(
        "--service",
        action="append",
        choices=SERVICES,
        default=[],
        help="Only check this upstream. Repeatable. Defaults to all.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def _checks(settings: GatewaySettings, session: requests.Session) -> dict[str, tuple[Any, Callable[[], Any]]]:
    timeout = settings.timeout_seconds
    radarr = ArrClient(RADARR, settings.radarr, session=session, timeout_seconds=timeout)
    sonarr = ArrClient(SONARR, settings.sonarr, session=session, timeout_seconds=timeout)
    media = MediaServerClient(settings.media_server, session=session, timeout_seconds=timeout)
    return {
        "radarr": (settings.radarr, lambda: radarr.list_resource("status")),
        "sonarr": (settings.sonarr, lambda: sonarr.list_resource("status")),
        "media_server": (settings.media_server, media.server_info),
    }


def _describe(payload: Any) -> str:
    if not isinstance(payload, dict):
        return "ok"
    version = payload.get("version") or payload.get("Version")
    name = payload.get("appName") or payload.get("ServerName")
    return " ".join(str(v) for v in (name, version) if v) or "ok"


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = get_settings()
    selected = args.service or list(SERVICES)
    failed = 0

    with requests.Session() as session:
        checks = _checks(settings, session)
        for name in selected:
            config, check = checks[name]
            if not config.base_url:
                print(f"{name}: skipped (not configured)")
                continue
            try:
                payload = check()
            except GatewayError as exc:
                failed += 1
                print(f"{name}: FAILED status={exc.status_code} error={exc.message}")
                continue
            print(f"{name}: {_describe(payload)}")

    print(f"CHECK summary checked={len(selected)} failed={failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
