"""Spotify integration modules."""

from spotify.client import EnrichmentError, SpotifyAlbumSearchClient

__all__ = ["EnrichmentError", "SpotifyAlbumSearchClient"]
