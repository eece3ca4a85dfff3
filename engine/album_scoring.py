"""Relevance scoring for Wikipedia album candidates.

Each candidate page is scored against the query with a fixed table of
``(name, weight, predicate)`` rules. Every rule that matches contributes its
weight exactly once; the sum is the page's relevance score. The best page is
the first one after a stable descending sort, so equal scores keep the order
in which Wikipedia returned them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from metadata.types import CandidatePage, ScoredCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ScoringContext:
    query: str
    title: str
    extract: str
    categories: frozenset[str]
    has_thumbnail: bool


@dataclass(frozen=True)
class ScoringRule:
    name: str
    weight: int
    predicate: Callable[[_ScoringContext], bool]

    def applies(self, ctx: _ScoringContext) -> bool:
        return bool(self.predicate(ctx))


def _category(fragment: str) -> Callable[[_ScoringContext], bool]:
    return lambda ctx: any(fragment in tag for tag in ctx.categories)


def _extract_contains(fragment: str) -> Callable[[_ScoringContext], bool]:
    return lambda ctx: fragment in ctx.extract


def _extract_opens_with(phrase: str) -> Callable[[_ScoringContext], bool]:
    return lambda ctx: ctx.extract.startswith(f"{ctx.query} {phrase}")


def _title_contains(fragment: str) -> Callable[[_ScoringContext], bool]:
    return lambda ctx: fragment in ctx.title


_CATEGORY_RULES = (
    ScoringRule("category_albums_by", 4000, _category("albums_by")),
    ScoringRule("category_albums", 3000, _category("_albums")),
    ScoringRule("category_album_stubs", 2000, _category("_album_stubs")),
    ScoringRule("category_debut_albums", 2000, _category("debut_albums")),
    ScoringRule("category_eps", 1500, _category("_eps")),
    ScoringRule("category_disambiguation", -5000, _category("disambiguation_pages")),
    ScoringRule("category_musical_groups", -3000, _category("musical_groups")),
    ScoringRule("category_musicians", -3000, _category("musicians")),
)

# Both title rules fire on an exact match.
_TITLE_RULES = (
    ScoringRule("title_starts_with_query", 2000, lambda ctx: ctx.title.startswith(ctx.query)),
    ScoringRule("title_equals_query", 3000, lambda ctx: ctx.title == ctx.query),
)

_EXTRACT_RULES = (
    ScoringRule("extract_studio_album", 1000, _extract_contains("studio album")),
    ScoringRule("extract_released", 800, _extract_contains("released")),
    ScoringRule("extract_recorded", 600, _extract_contains("recorded")),
    ScoringRule("extract_produced_by", 500, _extract_contains("produced by")),
    ScoringRule("extract_track", 400, _extract_contains("track")),
    ScoringRule("extract_songs", 400, _extract_contains("songs")),
    ScoringRule("extract_singles", 300, _extract_contains("singles")),
    ScoringRule("extract_charts", 200, _extract_contains("charts")),
    ScoringRule("extract_label", 200, _extract_contains("label:")),
)

_NEGATIVE_RULES = (
    ScoringRule("extract_is_a_band", -3000, _extract_opens_with("is a band")),
    ScoringRule("extract_is_an_artist", -3000, _extract_opens_with("is an artist")),
    ScoringRule("extract_is_a_singer", -3000, _extract_opens_with("is a singer")),
    ScoringRule("title_discography", -2000, _title_contains("discography")),
    ScoringRule("title_song", -1000, _title_contains("song)")),
    ScoringRule("title_tour", -1000, _title_contains("tour)")),
)

_MEDIA_RULES = (
    ScoringRule("has_thumbnail", 500, lambda ctx: ctx.has_thumbnail),
)

SCORING_RULES: tuple[ScoringRule, ...] = (
    _CATEGORY_RULES + _TITLE_RULES + _EXTRACT_RULES + _NEGATIVE_RULES + _MEDIA_RULES
)


def _context(query: str, page: CandidatePage) -> _ScoringContext:
    return _ScoringContext(
        query=str(query or "").lower(),
        title=page.title.lower(),
        extract=page.extract.lower(),
        categories=page.categories,
        has_thumbnail=page.thumbnail is not None,
    )


def explain_score(query: str, page: CandidatePage) -> list[tuple[str, int]]:
    """Return ``(rule_name, weight)`` for every rule matching ``page``."""
    ctx = _context(query, page)
    return [(rule.name, rule.weight) for rule in SCORING_RULES if rule.applies(ctx)]


def score_candidate(query: str, page: CandidatePage) -> int:
    return sum(weight for _, weight in explain_score(query, page))


def rank_candidates(query: str, pages: Iterable[CandidatePage]) -> list[ScoredCandidate]:
    """Score every page and order them best first."""
    scored: list[ScoredCandidate] = []
    for page in pages:
        matched = explain_score(query, page)
        score = sum(weight for _, weight in matched)
        logger.debug(
            "album_score query=%r title=%r score=%s rules=%s",
            query,
            page.title,
            score,
            ",".join(name for name, _ in matched) or "-",
        )
        scored.append(ScoredCandidate(page=page, relevance_score=score))
    # Stable sort keeps fetch order for identical scores.
    scored.sort(key=lambda item: item.relevance_score, reverse=True)
    return scored


def select_best_candidate(query: str, pages: Iterable[CandidatePage]) -> ScoredCandidate | None:
    """Return the top-ranked page, or ``None`` when nothing qualifies.

    The winner is rejected when it has no extract text or a score of zero or
    less; runners-up are not considered in that case.
    """
    ranked = rank_candidates(query, pages)
    if not ranked:
        logger.info("album_select query=%r result=no_candidates", query)
        return None
    best = ranked[0]
    if not best.extract or best.relevance_score <= 0:
        logger.info(
            "album_select query=%r result=rejected title=%r score=%s",
            query,
            best.title,
            best.relevance_score,
        )
        return None
    logger.info(
        "album_select query=%r result=match title=%r score=%s",
        query,
        best.title,
        best.relevance_score,
    )
    return best


def first_sentence(extract: str) -> str:
    """Return ``extract`` up to and including its first period."""
    text = extract or ""
    idx = text.find(".")
    if idx < 0:
        return text
    return text[: idx + 1]


__all__ = [
    "SCORING_RULES",
    "ScoringRule",
    "explain_score",
    "first_sentence",
    "rank_candidates",
    "score_candidate",
    "select_best_candidate",
]
