from __future__ import annotations

from typing import Any

import pytest
import requests

from spotify import client as spotify_client_module
from spotify.client import EnrichmentError, SpotifyAlbumSearchClient


class _FakeResponse:
    def __init__(self, status_code: int, payload: Any = None, headers: dict[str, str] | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}

    def json(self) -> Any:
        return self._payload


def _album(name: str, artists: list[str]) -> dict[str, Any]:
    return {
        "name": name,
        "artists": [{"name": artist} for artist in artists],
        "images": [{"url": f"https://i.scdn.example/{name}.jpg", "width": 640, "height": 640}],
        "popularity": 80,
    }


def test_search_albums_sends_bearer_token_and_album_params(monkeypatch) -> None:
    calls: list[dict[str, Any]] = []

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return _FakeResponse(200, {"albums": {"items": [_album("Abbey Road", ["The Beatles"])]}})

    monkeypatch.setattr(spotify_client_module.requests, "get", fake_get)
    client = SpotifyAlbumSearchClient(access_token="token-123", timeout_sec=5)

    items = client.search_albums("Abbey Road")

    assert [item["name"] for item in items] == ["Abbey Road"]
    assert calls[0]["params"] == {"q": "Abbey Road", "type": "album", "limit": 20}
    assert calls[0]["headers"]["Authorization"] == "Bearer token-123"
    assert calls[0]["timeout"] == 5


def test_search_albums_missing_items_is_empty(monkeypatch) -> None:
    monkeypatch.setattr(
        spotify_client_module.requests,
        "get",
        lambda *args, **kwargs: _FakeResponse(200, {"albums": {"items": []}}),
    )
    assert SpotifyAlbumSearchClient(access_token="t").search_albums("nothing") == []

    monkeypatch.setattr(spotify_client_module.requests, "get", lambda *args, **kwargs: _FakeResponse(200, {}))
    assert SpotifyAlbumSearchClient(access_token="t").search_albums("nothing") == []


def test_missing_token_raises_without_request(monkeypatch) -> None:
    monkeypatch.delenv("SPOTIFY_ACCESS_TOKEN", raising=False)

    def fail_get(*args, **kwargs):
        raise AssertionError("no request expected without a token")

    monkeypatch.setattr(spotify_client_module.requests, "get", fail_get)
    client = SpotifyAlbumSearchClient()

    assert client.has_credentials() is False
    with pytest.raises(EnrichmentError):
        client.search_albums("Abbey Road")


def test_token_falls_back_to_environment(monkeypatch) -> None:
    monkeypatch.setenv("SPOTIFY_ACCESS_TOKEN", " env-token ")
    assert SpotifyAlbumSearchClient().access_token == "env-token"
    assert SpotifyAlbumSearchClient(access_token="").has_credentials() is False


@pytest.mark.parametrize("status_code", [401, 429, 500])
def test_error_statuses_raise_enrichment_error(monkeypatch, status_code: int) -> None:
    monkeypatch.setattr(
        spotify_client_module.requests,
        "get",
        lambda *args, **kwargs: _FakeResponse(status_code, {"error": {}}, headers={"Retry-After": "3"}),
    )
    with pytest.raises(EnrichmentError):
        SpotifyAlbumSearchClient(access_token="t").search_albums("Abbey Road")


def test_transport_error_raises_enrichment_error(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(spotify_client_module.requests, "get", boom)
    with pytest.raises(EnrichmentError):
        SpotifyAlbumSearchClient(access_token="t").search_albums("Abbey Road")
