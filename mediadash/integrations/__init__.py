"""
Upstream service integrations (Radarr, Sonarr, Emby/Jellyfin).

New upstream clients should live under this namespace so they remain
decoupled from app entrypoints (`api/`) and operator scripts (`scripts/`).
"""
