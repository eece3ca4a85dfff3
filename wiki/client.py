"""Wikipedia search client returning candidate album pages."""

from __future__ import annotations

import logging
from typing import Any

import requests

from config.settings import (
    WIKIPEDIA_API_URL,
    WIKIPEDIA_SEARCH_LIMIT,
    WIKIPEDIA_THUMBNAIL_SIZE,
    WIKIPEDIA_TIMEOUT_SECONDS,
    WIKIPEDIA_USER_AGENT,
)
from metadata.types import CandidatePage, ImageRef

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when the Wikipedia search request or its payload fails."""


def build_search_params(query: str, *, limit: int = WIKIPEDIA_SEARCH_LIMIT) -> dict[str, Any]:
    return {
        "action": "query",
        "format": "json",
        "generator": "search",
        "gsrsearch": query,
        "gsrlimit": limit,
        "prop": "extracts|pageimages|categories",
        "cllimit": "max",
        "piprop": "thumbnail|original",
        "pithumbsize": WIKIPEDIA_THUMBNAIL_SIZE,
        "pilimit": "max",
        "exintro": 1,
        "explaintext": 1,
        "redirects": 1,
    }


def _parse_image(raw: Any) -> ImageRef | None:
    if not isinstance(raw, dict):
        return None
    source = str(raw.get("source") or "").strip()
    if not source:
        return None
    return ImageRef(url=source, width=raw.get("width"), height=raw.get("height"))


def parse_candidate_pages(payload: Any) -> list[CandidatePage]:
    """Turn a ``generator=search`` response into pages, keeping response order."""
    if not isinstance(payload, dict):
        return []
    query = payload.get("query")
    if not isinstance(query, dict):
        return []
    pages = query.get("pages")
    if not isinstance(pages, dict):
        return []

    candidates: list[CandidatePage] = []
    for raw in pages.values():
        if not isinstance(raw, dict):
            continue
        raw_categories = raw.get("categories")
        if not isinstance(raw_categories, list):
            raw_categories = []
        categories = [
            entry.get("title")
            for entry in raw_categories
            if isinstance(entry, dict) and entry.get("title")
        ]
        candidates.append(
            CandidatePage(
                title=str(raw.get("title") or ""),
                extract=str(raw.get("extract") or ""),
                categories=frozenset(categories),
                thumbnail=_parse_image(raw.get("thumbnail")),
                original=_parse_image(raw.get("original")),
            )
        )
    return candidates


class WikipediaSearchClient:
    """Client issuing one bounded Wikipedia search per query."""

    def __init__(
        self,
        *,
        api_url: str = WIKIPEDIA_API_URL,
        user_agent: str = WIKIPEDIA_USER_AGENT,
        timeout_sec: float = WIKIPEDIA_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url
        self.user_agent = user_agent
        self.timeout_sec = timeout_sec
        self._session = session or requests.Session()

    def search_candidates(self, query: str) -> list[CandidatePage]:
        """Return up to ten candidate pages for ``query`` in source order.

        Raises:
            FetchError: on transport errors, non-200 responses or bodies that
                are not JSON. An empty result set is not an error.
        """
        if not (query or "").strip():
            raise ValueError("query is required")
        try:
            response = self._session.get(
                self.api_url,
                params=build_search_params(query),
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_sec,
            )
        except requests.RequestException as exc:
            logger.info("[WIKIPEDIA] query=%r status=error", query)
            raise FetchError(f"Wikipedia request failed: {exc}") from exc

        status = int(response.status_code)
        logger.info("[WIKIPEDIA] query=%r status=%s", query, status)
        if status != 200:
            raise FetchError(f"Wikipedia request failed ({status})")
        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError("Wikipedia response was not valid JSON") from exc

        try:
            candidates = parse_candidate_pages(payload)
        except (TypeError, ValueError, AttributeError) as exc:
            raise FetchError(f"Wikipedia response could not be parsed: {exc}") from exc
        logger.debug("[WIKIPEDIA] query=%r candidates=%s", query, len(candidates))
        return candidates


__all__ = [
    "FetchError",
    "WikipediaSearchClient",
    "build_search_params",
    "parse_candidate_pages",
]
