"""Structured record types for album lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(frozen=True)
class ImageRef:
    """Image location with optional pixel dimensions."""

    url: str
    width: int | None = None
    height: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "width": self.width, "height": self.height}


def normalize_category(value: Any) -> str:
    """Trim and lower-case a category tag.

    Spelling is otherwise kept as received: ``"Category:1969 albums"`` stays
    distinct from ``"Category:1969_albums"``.
    """
    return str(value or "").strip().lower()


def normalize_categories(values: Iterable[Any] | None) -> frozenset[str]:
    return frozenset(tag for tag in (normalize_category(value) for value in values or ()) if tag)


@dataclass(frozen=True)
class CandidatePage:
    """One Wikipedia search result before ranking."""

    title: str
    extract: str = ""
    categories: frozenset[str] = field(default_factory=frozenset)
    thumbnail: ImageRef | None = None
    original: ImageRef | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str):
            raise TypeError("title must be a string")
        # Callers may hand in any iterable of raw tags; the stored value is
        # always the deduplicated, lower-cased set.
        object.__setattr__(self, "extract", self.extract or "")
        object.__setattr__(self, "categories", normalize_categories(self.categories))


@dataclass(frozen=True)
class ScoredCandidate:
    page: CandidatePage
    relevance_score: int

    @property
    def title(self) -> str:
        return self.page.title

    @property
    def extract(self) -> str:
        return self.page.extract


@dataclass(frozen=True)
class EnrichmentResult:
    """Catalog metadata for the first matching Spotify album."""

    artist_names: tuple[str, ...] = ()
    preview_image: ImageRef | None = None
    album_name: str | None = None
    popularity: int | None = None


@dataclass(frozen=True)
class ResultRecord:
    """Display-ready output of one album lookup."""

    display_text: str
    image_url: str | None
    query: str = ""
    thumbnail: ImageRef | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "displayText": self.display_text,
            "imageUrl": self.image_url,
            "query": self.query,
            "thumbnail": self.thumbnail.to_dict() if self.thumbnail else None,
        }


__all__ = [
    "CandidatePage",
    "EnrichmentResult",
    "ImageRef",
    "ResultRecord",
    "ScoredCandidate",
    "normalize_categories",
    "normalize_category",
]
