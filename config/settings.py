"""Application settings constants."""

from __future__ import annotations

import os
from dataclasses import dataclass

# Wikipedia search endpoint and identity.
WIKIPEDIA_API_URL = os.getenv("WIKIPEDIA_API_URL", "https://en.wikipedia.org/w/api.php")
WIKIPEDIA_USER_AGENT = os.getenv(
    "WIKIPEDIA_USER_AGENT",
    "vinylcard/0.1 (+https://github.com/vinylcard/vinylcard)",
)
WIKIPEDIA_TIMEOUT_SECONDS = float(os.getenv("WIKIPEDIA_TIMEOUT_SECONDS", "10"))

# Candidate pages requested per search; results are never paginated.
WIKIPEDIA_SEARCH_LIMIT = 10

# Thumbnail width requested alongside the original page image.
WIKIPEDIA_THUMBNAIL_SIZE = 500

# Spotify album search. Token acquisition happens elsewhere; without a
# token the catalog enrichment is skipped.
SPOTIFY_SEARCH_URL = os.getenv("SPOTIFY_SEARCH_URL", "https://api.spotify.com/v1/search")
SPOTIFY_TIMEOUT_SECONDS = float(os.getenv("SPOTIFY_TIMEOUT_SECONDS", "10"))
SPOTIFY_SEARCH_LIMIT = 20

# Upper bound on how long a matched query waits for catalog enrichment.
ENRICHMENT_WAIT_SECONDS = float(os.getenv("ENRICHMENT_WAIT_SECONDS", "3.0"))

FALLBACK_IMAGE_URL = "https://via.placeholder.com/400x300"
NO_ALBUM_FOUND_TEXT = "No album found."


@dataclass(frozen=True)
class Settings:
    wikipedia_api_url: str
    wikipedia_user_agent: str
    wikipedia_timeout_sec: float
    spotify_search_url: str
    spotify_access_token: str | None
    spotify_timeout_sec: float
    enrichment_wait_seconds: float


def load_settings() -> Settings:
    """Build ``Settings`` from the module constants and the current token.

    Only ``SPOTIFY_ACCESS_TOKEN`` is read at call time; every other value was
    read from the environment when this module was imported.
    """
    return Settings(
        wikipedia_api_url=WIKIPEDIA_API_URL,
        wikipedia_user_agent=WIKIPEDIA_USER_AGENT,
        wikipedia_timeout_sec=WIKIPEDIA_TIMEOUT_SECONDS,
        spotify_search_url=SPOTIFY_SEARCH_URL,
        spotify_access_token=(os.environ.get("SPOTIFY_ACCESS_TOKEN") or "").strip() or None,
        spotify_timeout_sec=SPOTIFY_TIMEOUT_SECONDS,
        enrichment_wait_seconds=max(0.0, ENRICHMENT_WAIT_SECONDS),
    )
