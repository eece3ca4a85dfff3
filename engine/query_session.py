"""Latest-query-wins wrapper around ``AlbumResolver``."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from engine.album_resolver import AlbumResolver
from metadata.types import ResultRecord

logger = logging.getLogger(__name__)


class LatestQuerySession:
    """Run one lookup at a time and only publish the newest query's result.

    Submitting a new query abandons the previous one. A record is handed to
    ``on_result`` only when its query is still the latest submission, so an
    older lookup finishing late never reaches the caller's display state.
    """

    def __init__(self, resolver: AlbumResolver, on_result: Callable[[ResultRecord], None]) -> None:
        self.resolver = resolver
        self.on_result = on_result
        self._generation = 0
        self._task: asyncio.Task | None = None
        self._query: str | None = None

    @property
    def current_query(self) -> str | None:
        if self._task is None or self._task.done():
            return None
        return self._query

    def submit(self, query: str) -> asyncio.Task:
        """Start resolving ``query``; must be called from a running event loop."""
        if not isinstance(query, str) or not query.strip():
            raise ValueError("query is required")
        self.cancel()
        self._generation += 1
        self._query = query
        self._task = asyncio.create_task(self._run(self._generation, query))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            logger.info("Abandoning query=%r", self._query)
            self._task.cancel()
        self._task = None
        self._query = None

    async def _run(self, generation: int, query: str) -> ResultRecord:
        record = await self.resolver.resolve(query)
        if generation != self._generation:
            logger.info("Dropping stale result for query=%r", query)
            return record
        self.on_result(record)
        return record


__all__ = ["LatestQuerySession"]
