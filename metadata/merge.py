"""Merge a ranked Wikipedia page with Spotify enrichment into a display record."""

from __future__ import annotations

import logging

from config.settings import FALLBACK_IMAGE_URL, NO_ALBUM_FOUND_TEXT
from engine.album_scoring import first_sentence
from metadata.types import EnrichmentResult, ImageRef, ResultRecord, ScoredCandidate

_LOG = logging.getLogger(__name__)


def no_album_record(query: str = "") -> ResultRecord:
    return ResultRecord(display_text=NO_ALBUM_FOUND_TEXT, image_url=None, query=query)


def merge_result(
    query: str,
    best: ScoredCandidate | None,
    enrichment: EnrichmentResult | None,
) -> ResultRecord:
    """Build the record for ``query``.

    The Wikipedia page is authoritative for ``image_url`` (original image,
    then thumbnail, then the placeholder). Spotify only contributes the
    artist prefix and the display thumbnail.
    """
    if best is None:
        _LOG.info("result_field_source field=display_text source=no_match")
        return no_album_record(query)

    page = best.page

    def pick(field: str, candidates):
        for source_name, value in candidates:
            if value is not None:
                _LOG.info("result_field_source field=%s source=%s", field, source_name)
                return value
        _LOG.info("result_field_source field=%s source=missing", field)
        return None

    artists_text = ""
    if enrichment is not None:
        artists_text = f"By {', '.join(enrichment.artist_names)}. "
        _LOG.info("result_field_source field=artists source=spotify")
    display_text = artists_text + first_sentence(page.extract)

    image: ImageRef | None = pick(
        "image_url",
        (("wikipedia_original", page.original), ("wikipedia_thumbnail", page.thumbnail)),
    )
    thumbnail: ImageRef | None = pick(
        "thumbnail",
        (
            ("spotify", enrichment.preview_image if enrichment is not None else None),
            ("wikipedia_thumbnail", page.thumbnail),
        ),
    )

    return ResultRecord(
        display_text=display_text,
        image_url=image.url if image is not None else FALLBACK_IMAGE_URL,
        query=query,
        thumbnail=thumbnail,
    )


__all__ = ["merge_result", "no_album_record"]
