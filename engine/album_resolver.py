"""Resolve a free-text album query into a display record.

The Wikipedia search and the Spotify album search run as two independent
tasks. The Wikipedia side is mandatory: its candidates are ranked and the
winner decides whether anything is shown. The Spotify side is best effort:
it is joined with a bounded wait once a match exists and is abandoned when
it is late, fails, or is no longer needed.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from config.settings import Settings, load_settings
from engine.album_scoring import select_best_candidate
from metadata.merge import merge_result, no_album_record
from metadata.providers.base import CandidateSource, EnrichmentProvider
from metadata.providers.spotify import SpotifyAlbumEnricher
from metadata.types import EnrichmentResult, ResultRecord
from spotify.client import SpotifyAlbumSearchClient
from wiki.client import FetchError, WikipediaSearchClient

logger = logging.getLogger(__name__)


class ResolveState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SCORING = "scoring"
    MERGING_WITH_ENRICHMENT = "merging_with_enrichment"
    MERGING_WITHOUT_ENRICHMENT = "merging_without_enrichment"
    DONE = "done"


def _log_state(query: str, state: ResolveState) -> None:
    logger.debug("album_resolve query=%r state=%s", query, state.value)


def _abandon(task: asyncio.Task | None) -> None:
    # Cancels without awaiting; a worker thread still running behind the
    # task finishes on its own and its result is dropped.
    if task is not None and not task.done():
        task.cancel()


class AlbumResolver:
    """Stateless per-call album lookup over a candidate source and an enricher."""

    def __init__(
        self,
        candidate_source: CandidateSource,
        enrichment_provider: EnrichmentProvider | None = None,
        *,
        enrichment_wait_seconds: float = 3.0,
    ) -> None:
        self.candidate_source = candidate_source
        self.enrichment_provider = enrichment_provider
        self.enrichment_wait_seconds = max(0.0, float(enrichment_wait_seconds))

    async def _fetch(self, query: str):
        return await asyncio.to_thread(self.candidate_source.search_candidates, query)

    async def _enrich(self, query: str) -> EnrichmentResult | None:
        try:
            return await asyncio.to_thread(self.enrichment_provider.enrich, query)
        except Exception:
            logger.exception("Enrichment task failed for query=%r", query)
            return None

    async def _join_enrichment(self, query: str, task: asyncio.Task | None) -> EnrichmentResult | None:
        if task is None:
            return None
        done, _ = await asyncio.wait({task}, timeout=self.enrichment_wait_seconds)
        if task not in done:
            logger.info(
                "Enrichment for query=%r not ready after %.1fs; continuing without it",
                query,
                self.enrichment_wait_seconds,
            )
            _abandon(task)
            return None
        if task.cancelled():
            return None
        return task.result()

    async def resolve(self, query: str) -> ResultRecord:
        """Return the display record for ``query``; never raises on lookup failures."""
        if not isinstance(query, str) or not query.strip():
            raise ValueError("query is required")

        _log_state(query, ResolveState.IDLE)
        fetch_task = asyncio.create_task(self._fetch(query))
        enrich_task = (
            asyncio.create_task(self._enrich(query)) if self.enrichment_provider is not None else None
        )
        try:
            _log_state(query, ResolveState.FETCHING)
            try:
                candidates = await fetch_task
            except FetchError as exc:
                logger.warning("Wikipedia search failed for query=%r: %s", query, exc)
                _log_state(query, ResolveState.DONE)
                return no_album_record(query)

            _log_state(query, ResolveState.SCORING)
            best = select_best_candidate(query, candidates)
            if best is None:
                _log_state(query, ResolveState.DONE)
                return no_album_record(query)

            enrichment = await self._join_enrichment(query, enrich_task)
            _log_state(
                query,
                ResolveState.MERGING_WITH_ENRICHMENT
                if enrichment is not None
                else ResolveState.MERGING_WITHOUT_ENRICHMENT,
            )
            record = merge_result(query, best, enrichment)
            _log_state(query, ResolveState.DONE)
            return record
        except asyncio.CancelledError:
            logger.info("album_resolve query=%r abandoned", query)
            raise
        finally:
            _abandon(fetch_task)
            _abandon(enrich_task)


def build_default_resolver(settings: Settings | None = None) -> AlbumResolver:
    """Wire the Wikipedia client and the Spotify enricher from configuration."""
    settings = settings or load_settings()
    wiki_client = WikipediaSearchClient(
        api_url=settings.wikipedia_api_url,
        user_agent=settings.wikipedia_user_agent,
        timeout_sec=settings.wikipedia_timeout_sec,
    )
    spotify_client = SpotifyAlbumSearchClient(
        access_token=settings.spotify_access_token or "",
        search_url=settings.spotify_search_url,
        timeout_sec=settings.spotify_timeout_sec,
    )
    return AlbumResolver(
        wiki_client,
        SpotifyAlbumEnricher(spotify_client),
        enrichment_wait_seconds=settings.enrichment_wait_seconds,
    )


__all__ = ["AlbumResolver", "ResolveState", "build_default_resolver"]
