from typing import Protocol

from metadata.types import CandidatePage, EnrichmentResult


class CandidateSource(Protocol):
    def search_candidates(self, query: str) -> list[CandidatePage]:
        raise NotImplementedError


class EnrichmentProvider(Protocol):
    def enrich(self, query: str) -> EnrichmentResult | None:
        raise NotImplementedError
