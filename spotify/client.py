"""Spotify API client for album search."""

from __future__ import annotations

import os
from typing import Any

import requests

from config.settings import SPOTIFY_SEARCH_LIMIT, SPOTIFY_SEARCH_URL, SPOTIFY_TIMEOUT_SECONDS


class EnrichmentError(RuntimeError):
    """Raised for any failure on the Spotify catalog path."""


class SpotifyAlbumSearchClient:
    """Client for searching Spotify albums with a pre-issued bearer token."""

    def __init__(
        self,
        *,
        access_token: str | None = None,
        search_url: str = SPOTIFY_SEARCH_URL,
        timeout_sec: float = SPOTIFY_TIMEOUT_SECONDS,
    ) -> None:
        token = access_token if access_token is not None else os.environ.get("SPOTIFY_ACCESS_TOKEN")
        self.access_token = (token or "").strip() or None
        self.search_url = search_url
        self.timeout_sec = timeout_sec

    def has_credentials(self) -> bool:
        return bool(self.access_token)

    def _request_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self.access_token:
            raise EnrichmentError("Spotify access token is not available")
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.get(url, params=params, headers=headers, timeout=self.timeout_sec)
        except requests.RequestException as exc:
            raise EnrichmentError(f"Spotify request failed: {exc}") from exc
        if response.status_code == 401:
            raise EnrichmentError("Spotify request failed (401: invalid or expired token)")
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise EnrichmentError(f"Spotify request failed (429: rate limited, retry after {retry_after})")
        if response.status_code != 200:
            raise EnrichmentError(f"Spotify request failed ({response.status_code})")
        try:
            payload = response.json()
        except ValueError as exc:
            raise EnrichmentError("Spotify response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise EnrichmentError("Spotify response was not a JSON object")
        return payload

    def search_albums(self, query: str, *, limit: int = SPOTIFY_SEARCH_LIMIT) -> list[dict[str, Any]]:
        """Return raw album items for ``query`` in Spotify's ranking order."""
        if not (query or "").strip():
            raise ValueError("query is required")
        payload = self._request_json(
            self.search_url,
            params={"q": query, "type": "album", "limit": limit},
        )
        items = (payload.get("albums") or {}).get("items") or []
        return [item for item in items if isinstance(item, dict)]
